"""Resolve raw fields against the dictionary and assign them to sections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fixinspect.parsers.models import RawField, ResolvedField, SectionKind

if TYPE_CHECKING:
    from fixinspect.dictionary.provider import DictionaryProvider

logger = logging.getLogger(__name__)


def resolve_field(raw: RawField, dictionary: DictionaryProvider) -> ResolvedField | None:
    """Resolve a raw tag/value pair to its dictionary definition.

    The value is carried as-is; its declared type is informational and is
    never checked.

    Args:
        raw: Field as tokenized from the message.
        dictionary: Protocol dictionary to look the tag up in.

    Returns:
        The resolved field, or None when the tag is not in the dictionary.
    """
    definition = dictionary.field_by_number(raw.tag)
    if definition is None:
        logger.debug(f"Unknown tag {raw.tag} (value {raw.value!r})")
        return None

    return ResolvedField(
        number=definition.number,
        name=definition.name,
        type=definition.type,
        value=raw.value,
        description=definition.describe(raw.value),
    )


def classify_field(field: ResolvedField, dictionary: DictionaryProvider) -> SectionKind:
    """Decide which section of the message a field belongs to.

    Membership is by field name. A name listed as both header and trailer is
    treated as header; anything in neither list is body.
    """
    if dictionary.is_header_field_name(field.name):
        return SectionKind.HEADER
    if dictionary.is_trailer_field_name(field.name):
        return SectionKind.TRAILER
    return SectionKind.BODY
