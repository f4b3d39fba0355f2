"""Pydantic data models for decoded FIX messages.

Raw tag/value pairs produced by the tokenizer, dictionary field definitions,
resolved fields and the assembled header/body/trailer message all live here.
Every model is frozen: once a message is decoded it is never mutated.

Example:
    >>> from fixinspect.parsers.models import ResolvedField
    >>> field = ResolvedField(number=54, name="Side", type="CHAR", value="1", description="BUY")
    >>> field.display_value
    'BUY'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum

from pydantic import BaseModel, Field, field_validator

CHECKSUM_FIELD_NAME = "CheckSum"


class SectionKind(str, Enum):
    """Partition of a FIX message a field belongs to."""

    HEADER = "header"
    BODY = "body"
    TRAILER = "trailer"


class RawField(BaseModel):
    """A tag/value pair exactly as it appeared on the wire."""

    tag: int = Field(..., ge=1, description="FIX tag number")
    value: str = Field(default="", description="Unparsed field value")

    model_config = {"frozen": True}


class FieldDefinition(BaseModel):
    """A field declared by the protocol dictionary.

    Attributes:
        number: Tag number of the field.
        name: Field name, e.g. ``BeginString``.
        type: Declared FIX type, e.g. ``STRING`` or ``CHAR``.
        enum_values: ``(code, description)`` pairs in declaration order. A
            mapping is accepted on construction.
    """

    number: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    type: str = ""
    enum_values: tuple[tuple[str, str], ...] = ()

    model_config = {"frozen": True}

    @field_validator("enum_values", mode="before")
    @classmethod
    def enum_pairs(cls, v: Mapping[str, str] | Iterable[tuple[str, str]] | None) -> tuple:
        """Store enumerated codes as immutable pairs."""
        if v is None:
            return ()
        if isinstance(v, Mapping):
            return tuple(v.items())
        return tuple(v)

    @property
    def enum_codes(self) -> list[str]:
        """Enumerated codes in declaration order."""
        return [code for code, _ in self.enum_values]

    def describe(self, value: str) -> str | None:
        """Return the description for an exact enum code match, if any."""
        for code, description in self.enum_values:
            if code == value:
                return description
        return None


class ResolvedField(BaseModel):
    """A field whose tag was found in the dictionary.

    Attributes:
        number: Tag number.
        name: Field name from the dictionary.
        type: Declared FIX type (informational only, never enforced).
        value: Raw value from the message.
        description: Enum description when ``value`` is a declared code.
    """

    number: int
    name: str
    type: str = ""
    value: str = ""
    description: str | None = None

    model_config = {"frozen": True}

    @property
    def display_value(self) -> str:
        """The enum description when present, otherwise the raw value."""
        return self.description if self.description else self.value


class DecodedMessage(BaseModel):
    """A FIX message split into header, body and trailer.

    Fields keep their wire order inside each section. Tags missing from the
    dictionary are not placed in any section; they are kept separately in
    ``unknown_fields`` so the decoded view can still account for them.

    Attributes:
        header: Fields declared as header fields by the dictionary.
        body: Every other resolved field.
        trailer: Fields declared as trailer fields by the dictionary.
        raw_text: The input with trailing whitespace and control characters removed.
        unknown_fields: Tokenized fields with no dictionary definition.
    """

    header: tuple[ResolvedField, ...] = ()
    body: tuple[ResolvedField, ...] = ()
    trailer: tuple[ResolvedField, ...] = ()
    raw_text: str = ""
    unknown_fields: tuple[RawField, ...] = ()

    model_config = {"frozen": True}

    @property
    def fields(self) -> tuple[ResolvedField, ...]:
        """All resolved fields, header first and trailer last."""
        return (*self.header, *self.body, *self.trailer)

    def section(self, kind: SectionKind) -> tuple[ResolvedField, ...]:
        """Return the fields of one section."""
        if kind is SectionKind.HEADER:
            return self.header
        if kind is SectionKind.TRAILER:
            return self.trailer
        return self.body

    def get(self, name: str) -> ResolvedField | None:
        """Return the first resolved field with the given name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def checksum_field(self) -> ResolvedField | None:
        """The ``CheckSum`` field of the trailer, if decoded."""
        for field in self.trailer:
            if field.name == CHECKSUM_FIELD_NAME:
                return field
        return None


class ChecksumStatus(str, Enum):
    """Outcome of a checksum verification."""

    VALID = "valid"
    MISMATCH = "mismatch"
    MALFORMED = "malformed"
    MISSING = "missing"


class ChecksumResult(BaseModel):
    """Result of recomputing a message checksum.

    Attributes:
        status: Verification outcome.
        computed: Checksum recomputed from the message, when it could be located.
        expected: Checksum declared by the message, when it parsed as an integer.
        message: Human-readable explanation for non-valid outcomes.
    """

    status: ChecksumStatus
    computed: int | None = Field(default=None, ge=0, le=255)
    expected: int | None = None
    message: str | None = None

    model_config = {"frozen": True}

    @property
    def valid(self) -> bool:
        """Whether the declared checksum matches the computed one."""
        return self.status is ChecksumStatus.VALID
