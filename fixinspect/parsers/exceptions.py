"""Custom exceptions for FIX message decoding."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003


class FIXParseError(Exception):
    """Base exception for FIX decoding errors.

    Raised when a FIX message or its supporting dictionary cannot be processed.
    """

    def __init__(self, message: str, raw_message: str | None = None) -> None:
        """Initialize FIXParseError.

        Args:
            message: Human-readable error description.
            raw_message: The raw FIX message being processed (optional).
        """
        super().__init__(message)
        self.raw_message = raw_message


class DictionaryUnavailableError(FIXParseError):
    """Raised when the FIX protocol dictionary cannot be loaded.

    This is the only failure that aborts a decode; no partial result is returned.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Initialize DictionaryUnavailableError.

        Args:
            message: Human-readable error description.
            path: Location of the dictionary that failed to load (optional).
        """
        super().__init__(message)
        self.path = path


class MalformedMessageError(FIXParseError):
    """Raised when the checksum boundary of a message cannot be located.

    The checksum validator converts this into a ``malformed`` result rather
    than letting it escape.
    """


class MessageFileError(FIXParseError):
    """Raised when a file of FIX messages cannot be read."""

    def __init__(self, path: Path | str, reason: str | None = None) -> None:
        """Initialize MessageFileError.

        Args:
            path: The file that could not be read.
            reason: Underlying cause, typically the OS error text (optional).
        """
        reason_part = f": {reason}" if reason else ""
        super().__init__(f"Failed to open file {path}{reason_part}")
        self.path = path
        self.reason = reason
