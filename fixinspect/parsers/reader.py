"""Read FIX messages from log-style files, one message per line."""

from __future__ import annotations

import logging
from pathlib import Path

from fixinspect.parsers.exceptions import MessageFileError

logger = logging.getLogger(__name__)


def read_messages(path: Path | str) -> list[str]:
    """Read every non-blank line of a file as a FIX message.

    Args:
        path: File containing one message per line.

    Returns:
        The messages with line endings removed, in file order.

    Raises:
        MessageFileError: If the file cannot be opened or decoded.
    """
    file_path = Path(path)
    try:
        with file_path.open(encoding="utf-8") as fh:
            messages = [line.rstrip("\r\n") for line in fh if line.strip()]
    except (OSError, UnicodeDecodeError) as e:
        raise MessageFileError(file_path, str(e)) from e

    logger.info(f"Read {len(messages)} message(s) from {file_path}")
    return messages
