"""FIX message tokenizing, decoding and checksum validation."""

from fixinspect.parsers.checksum import (
    compute_checksum,
    format_checksum,
    validate_checksum,
    verify_checksum,
)
from fixinspect.parsers.decoder import FixDecoder, decode_fix_message
from fixinspect.parsers.exceptions import (
    DictionaryUnavailableError,
    FIXParseError,
    MalformedMessageError,
    MessageFileError,
)
from fixinspect.parsers.models import (
    ChecksumResult,
    ChecksumStatus,
    DecodedMessage,
    FieldDefinition,
    RawField,
    ResolvedField,
    SectionKind,
)
from fixinspect.parsers.reader import read_messages
from fixinspect.parsers.resolver import classify_field, resolve_field
from fixinspect.parsers.tokenizer import PIPE, SOH, detect_delimiter, tokenize

__all__ = [
    "PIPE",
    "SOH",
    "ChecksumResult",
    "ChecksumStatus",
    "DecodedMessage",
    "DictionaryUnavailableError",
    "FIXParseError",
    "FieldDefinition",
    "FixDecoder",
    "MalformedMessageError",
    "MessageFileError",
    "RawField",
    "ResolvedField",
    "SectionKind",
    "classify_field",
    "compute_checksum",
    "decode_fix_message",
    "detect_delimiter",
    "format_checksum",
    "read_messages",
    "resolve_field",
    "tokenize",
    "validate_checksum",
    "verify_checksum",
]
