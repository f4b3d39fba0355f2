"""FIX checksum computation and verification.

The checksum of a FIX message is the sum of every byte up to and including
the delimiter in front of the ``10=`` field, modulo 256. The delimiter always
counts as 1, the value of SOH, so messages written with ``|`` for readability
verify the same as their wire form.

Example:
    >>> from fixinspect.parsers.checksum import validate_checksum
    >>> validate_checksum("8=FIX.4.4|9=5|35=0|10=163|", "163").valid
    True
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fixinspect.parsers.exceptions import MalformedMessageError
from fixinspect.parsers.models import ChecksumResult, ChecksumStatus
from fixinspect.parsers.tokenizer import detect_delimiter, trim_message

if TYPE_CHECKING:
    from fixinspect.parsers.models import DecodedMessage

logger = logging.getLogger(__name__)

TAG_CHECKSUM = 10
DELIMITER_BYTE_VALUE = 1
CHECKSUM_MODULUS = 256


def compute_checksum(text: str, delimiter: str | None = None) -> int:
    """Compute the FIX checksum of a block of text.

    Args:
        text: Message text to sum, normally everything before the checksum field.
        delimiter: Field delimiter. Detected from the text when omitted.

    Returns:
        Checksum in the range 0-255.
    """
    delimiter = delimiter or detect_delimiter(text)
    total = 0
    for char in text:
        if char == delimiter:
            total += DELIMITER_BYTE_VALUE
        else:
            total += sum(char.encode("utf-8"))
    return total % CHECKSUM_MODULUS


def format_checksum(value: int) -> str:
    """Format a checksum the way it is written on the wire, e.g. ``007``."""
    return f"{value % CHECKSUM_MODULUS:03d}"


def checksum_region(raw_message: str, delimiter: str | None = None) -> str:
    """Return the part of a message covered by its checksum.

    Args:
        raw_message: Raw FIX message string.
        delimiter: Field delimiter. Detected from the message when omitted.

    Returns:
        The message up to and including the delimiter before the checksum field.

    Raises:
        MalformedMessageError: If the message does not end with a checksum
            field preceded by a delimiter.
    """
    text = trim_message(raw_message, delimiter)
    delimiter = delimiter or detect_delimiter(text)

    body = text[: -len(delimiter)] if text.endswith(delimiter) else text
    boundary = body.rfind(delimiter)
    if boundary == -1:
        raise MalformedMessageError(
            "Cannot locate the delimiter preceding the checksum field",
            raw_message,
        )

    last_field = body[boundary + len(delimiter) :]
    if not last_field.startswith(f"{TAG_CHECKSUM}="):
        raise MalformedMessageError(
            f"Last field is not the checksum field: {last_field!r}",
            raw_message,
        )

    return body[: boundary + len(delimiter)]


def validate_checksum(
    raw_message: str,
    expected: str | None,
    delimiter: str | None = None,
) -> ChecksumResult:
    """Recompute a message checksum and compare it to the declared value.

    Never raises for a bad message: every problem is reported through the
    returned status.

    Args:
        raw_message: Raw FIX message string.
        expected: Value of the message's CheckSum field, or None if absent.
        delimiter: Field delimiter. Detected from the message when omitted.

    Returns:
        ChecksumResult describing the outcome.
    """
    try:
        region = checksum_region(raw_message, delimiter)
    except MalformedMessageError as e:
        logger.warning(f"Checksum check skipped: {e}")
        return ChecksumResult(status=ChecksumStatus.MALFORMED, message=str(e))

    computed = compute_checksum(region, delimiter or detect_delimiter(raw_message))

    if expected is None:
        return ChecksumResult(
            status=ChecksumStatus.MISSING,
            computed=computed,
            message="Message has no CheckSum field",
        )

    if not (expected.isascii() and expected.isdigit()):
        return ChecksumResult(
            status=ChecksumStatus.MALFORMED,
            computed=computed,
            message=f"CheckSum value is not a number: {expected!r}",
        )

    declared = int(expected)
    if declared != computed:
        logger.warning(
            f"Invalid checksum for message '{trim_message(raw_message, delimiter)}': "
            f"expected {format_checksum(computed)}, found {expected}"
        )
        return ChecksumResult(
            status=ChecksumStatus.MISMATCH,
            computed=computed,
            expected=declared,
            message=f"Checksum mismatch: computed {format_checksum(computed)}, declared {expected}",
        )

    return ChecksumResult(status=ChecksumStatus.VALID, computed=computed, expected=declared)


def verify_checksum(message: DecodedMessage, delimiter: str | None = None) -> ChecksumResult:
    """Validate the checksum of a decoded message against its trailer.

    Args:
        message: Message produced by the decoder.
        delimiter: Field delimiter. Detected from the message when omitted.

    Returns:
        ChecksumResult describing the outcome.
    """
    field = message.checksum_field
    expected = field.value if field is not None else None
    return validate_checksum(message.raw_text, expected, delimiter)
