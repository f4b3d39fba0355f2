"""Human-readable and JSON renderings of decoded FIX messages.

Example:
    >>> from fixinspect.formatting import format_message
    >>> print(format_message(message))
    FIX message:
    8=FIX.4.4|9=5|35=0|10=163|
    <BLANKLINE>
    Header:
        8         BeginString: FIX.4.4
    ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fixinspect.parsers.checksum import format_checksum
from fixinspect.parsers.models import SectionKind

if TYPE_CHECKING:
    from fixinspect.parsers.models import ChecksumResult, DecodedMessage, ResolvedField

SECTION_TITLES = {
    SectionKind.HEADER: "Header:",
    SectionKind.BODY: "Body:",
    SectionKind.TRAILER: "Trailer:",
}


def format_field(field: ResolvedField) -> str:
    """Format one field as ``number  name: value``.

    The enum description is shown instead of the raw value when there is one.
    """
    return f"{field.number:>5}{field.name:>20}: {field.display_value}"


def format_message(message: DecodedMessage, show_unknown: bool = False) -> str:
    """Render a decoded message section by section.

    Args:
        message: The decoded message.
        show_unknown: Also list tags the dictionary did not know.

    Returns:
        Multi-line text ending with a blank line.
    """
    lines = ["FIX message:", message.raw_text, ""]

    for kind in SectionKind:
        lines.append(SECTION_TITLES[kind])
        for field in message.section(kind):
            lines.append(format_field(field))
        lines.append("")

    if show_unknown and message.unknown_fields:
        lines.append("Unknown:")
        for raw in message.unknown_fields:
            lines.append(f"{raw.tag:>5}{'?':>20}: {raw.value}")
        lines.append("")

    return "\n".join(lines) + "\n"


def format_checksum_result(result: ChecksumResult) -> str:
    """Summarize a checksum verification on one line."""
    if result.valid and result.computed is not None:
        return f"Checksum OK ({format_checksum(result.computed)})"
    return f"Checksum {result.status.value.upper()}: {result.message}"


def message_to_dict(
    message: DecodedMessage,
    checksum: ChecksumResult | None = None,
) -> dict[str, Any]:
    """Convert a decoded message into a JSON-serializable dict.

    Args:
        message: The decoded message.
        checksum: Optional checksum result to embed under ``"checksum"``.

    Returns:
        Dict with ``header``, ``body``, ``trailer``, ``raw_text`` and
        ``unknown_fields`` keys.
    """
    data = message.model_dump(mode="json")
    if checksum is not None:
        data["checksum"] = checksum.model_dump(mode="json")
    return data
