"""Decode raw FIX messages into header, body and trailer sections.

The decoder is a single synchronous pass: tokenize the message, resolve each
tag against the protocol dictionary, classify the resolved field and append it
to its section. Nothing is kept between calls and the dictionary is read-only,
so one decoder can be shared by threads.

Example:
    >>> from fixinspect.dictionary import FixDictionary
    >>> from fixinspect.parsers.decoder import FixDecoder
    >>> dictionary = FixDictionary.from_definitions(
    ...     [(8, "BeginString", "STRING"), (35, "MsgType", "STRING"), (10, "CheckSum", "STRING")],
    ...     header_names=["BeginString", "MsgType"],
    ...     trailer_names=["CheckSum"],
    ... )
    >>> message = FixDecoder(dictionary).decode("8=FIX.4.4|35=0|10=000|")
    >>> [f.name for f in message.header]
    ['BeginString', 'MsgType']
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fixinspect.parsers.checksum import verify_checksum
from fixinspect.parsers.exceptions import DictionaryUnavailableError
from fixinspect.parsers.models import DecodedMessage, RawField, ResolvedField, SectionKind
from fixinspect.parsers.resolver import classify_field, resolve_field
from fixinspect.parsers.tokenizer import tokenize, trim_message

if TYPE_CHECKING:
    from fixinspect.config import DecoderConfig
    from fixinspect.dictionary.provider import DictionaryProvider
    from fixinspect.parsers.models import ChecksumResult

logger = logging.getLogger(__name__)


class FixDecoder:
    """Decodes FIX messages against a loaded protocol dictionary.

    Attributes:
        dictionary: The protocol dictionary used for every decode.
        delimiter: Field delimiter, or None to detect it per message.
    """

    def __init__(self, dictionary: DictionaryProvider | None, delimiter: str | None = None) -> None:
        """Initialize the decoder.

        Args:
            dictionary: Loaded protocol dictionary.
            delimiter: Field delimiter. Detected per message when omitted.

        Raises:
            DictionaryUnavailableError: If no dictionary is supplied.
            ValueError: If the delimiter is not a single character other than '='.
        """
        if dictionary is None:
            raise DictionaryUnavailableError("No FIX dictionary loaded")
        if delimiter is not None and (len(delimiter) != 1 or delimiter == "="):
            raise ValueError(
                f"Delimiter must be a single character other than '=', got {delimiter!r}"
            )

        self.dictionary = dictionary
        self.delimiter = delimiter

    @classmethod
    def from_config(cls, config: DecoderConfig) -> FixDecoder:
        """Create a decoder from configuration, loading its dictionary.

        Args:
            config: Decoder configuration.

        Returns:
            A decoder bound to the configured dictionary.

        Raises:
            DictionaryUnavailableError: If the dictionary cannot be loaded.
        """
        from fixinspect.dictionary.loader import get_dictionary

        return cls(get_dictionary(config.dictionary_path), delimiter=config.delimiter)

    def decode(self, raw_message: str) -> DecodedMessage:
        """Decode one FIX message.

        Fields whose tag is not in the dictionary are left out of every
        section and reported in ``unknown_fields``. Repeated tags are kept
        in wire order.

        Args:
            raw_message: Raw FIX message string.

        Returns:
            The decoded message.
        """
        sections: dict[SectionKind, list[ResolvedField]] = {kind: [] for kind in SectionKind}
        unknown: list[RawField] = []

        for raw in tokenize(raw_message, self.delimiter):
            field = resolve_field(raw, self.dictionary)
            if field is None:
                unknown.append(raw)
                continue
            sections[classify_field(field, self.dictionary)].append(field)

        if unknown:
            logger.debug(f"Dropped {len(unknown)} unknown tag(s): {[f.tag for f in unknown]}")

        return DecodedMessage(
            header=tuple(sections[SectionKind.HEADER]),
            body=tuple(sections[SectionKind.BODY]),
            trailer=tuple(sections[SectionKind.TRAILER]),
            raw_text=trim_message(raw_message, self.delimiter),
            unknown_fields=tuple(unknown),
        )

    def verify(self, message: DecodedMessage) -> ChecksumResult:
        """Validate the checksum of a message decoded by this decoder."""
        return verify_checksum(message, self.delimiter)

    def decode_many(self, raw_messages: list[str]) -> list[DecodedMessage]:
        """Decode a batch of messages, skipping blank entries."""
        return [self.decode(raw) for raw in raw_messages if raw.strip()]


def decode_fix_message(
    raw_message: str,
    dictionary: DictionaryProvider | None,
    delimiter: str | None = None,
) -> DecodedMessage:
    """Decode a FIX message into header, body and trailer sections.

    Args:
        raw_message: Raw FIX message string. Can use either SOH (ASCII 01)
            or pipe (|) as field delimiter.
        dictionary: Loaded protocol dictionary.
        delimiter: Field delimiter. Detected from the message when omitted.

    Returns:
        DecodedMessage with the resolved fields.

    Raises:
        DictionaryUnavailableError: If no dictionary is supplied.
    """
    return FixDecoder(dictionary, delimiter).decode(raw_message)
