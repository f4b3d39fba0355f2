"""Split raw FIX text into ordered tag/value pairs.

Tokenizing is lenient: chunks that do not carry a positive decimal tag are
dropped and decoding carries on. Empty chunks are the normal result of a
delimiter-terminated message, and a stray bad chunk should not hide the rest
of a message someone is trying to inspect.

Example:
    >>> from fixinspect.parsers.tokenizer import tokenize
    >>> [(f.tag, f.value) for f in tokenize("8=FIX.4.4||35=D|")]
    [(8, 'FIX.4.4'), (35, 'D')]
"""

from __future__ import annotations

import logging

from fixinspect.parsers.models import RawField

logger = logging.getLogger(__name__)

# SOH delimiter (ASCII 01) and the human-readable substitute
SOH = "\x01"
PIPE = "|"


def detect_delimiter(raw_message: str) -> str:
    """Pick the field delimiter used by a message.

    Args:
        raw_message: Raw FIX message string.

    Returns:
        SOH when the message contains one, otherwise the pipe character.
    """
    return SOH if SOH in raw_message else PIPE


def _is_trailing_noise(char: str, keep: set[str]) -> bool:
    return char not in keep and (char.isspace() or ord(char) < 0x20 or char == "\x7f")


def trim_message(raw_message: str, delimiter: str | None = None) -> str:
    """Remove trailing whitespace and control characters.

    Covers the newline of a log line or the NUL padding of a capture buffer.
    SOH and the given delimiter are never removed.

    Args:
        raw_message: Raw FIX message string.
        delimiter: Field delimiter in use, if known.

    Returns:
        The message without its trailing noise.
    """
    keep = {SOH, delimiter} if delimiter else {SOH}
    end = len(raw_message)
    while end and _is_trailing_noise(raw_message[end - 1], keep):
        end -= 1
    return raw_message[:end]


def parse_chunk(chunk: str) -> RawField | None:
    """Parse a single ``tag=value`` chunk.

    Args:
        chunk: Text between two delimiters.

    Returns:
        The parsed field, or None when the chunk has no usable tag.
    """
    if not chunk:
        return None

    tag_str, sep, value = chunk.partition("=")
    if not sep:
        logger.debug(f"Skipping chunk without '=': {chunk!r}")
        return None

    # int() alone would accept "3_5", " 35" or non-ASCII digits
    if not (tag_str.isascii() and tag_str.isdigit()):
        logger.debug(f"Skipping chunk with non-numeric tag: {chunk!r}")
        return None

    tag = int(tag_str)
    if tag < 1:
        logger.debug(f"Skipping chunk with non-positive tag: {chunk!r}")
        return None

    return RawField(tag=tag, value=value)


def tokenize(raw_message: str, delimiter: str | None = None) -> list[RawField]:
    """Tokenize a FIX message into tag/value pairs in wire order.

    Args:
        raw_message: Raw FIX message string.
        delimiter: Field delimiter. Detected from the message when omitted.

    Returns:
        A new list of raw fields. Duplicate tags are all kept.
    """
    text = trim_message(raw_message, delimiter)
    delimiter = delimiter or detect_delimiter(text)

    fields: list[RawField] = []
    for chunk in text.split(delimiter):
        field = parse_chunk(chunk)
        if field is not None:
            fields.append(field)

    return fields
