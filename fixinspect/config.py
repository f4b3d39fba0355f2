"""Centralized configuration management.

This module provides configuration classes for the application,
loading values from environment variables with sensible defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from fixinspect.dictionary.loader import DEFAULT_DICTIONARY_PATH

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, invalid_vars: list[str] | None = None) -> None:
        super().__init__(message)
        self.invalid_vars = invalid_vars or []


def _parse_delimiter(value: str | None) -> str | None:
    """Translate the FIX_DELIMITER setting into a delimiter character.

    ``SOH`` and ``\\x01`` both name the SOH control character; an empty value
    means the delimiter is detected per message.
    """
    if not value:
        return None
    if value.upper() == "SOH" or value == "\\x01":
        return "\x01"
    return value


@dataclass(frozen=True)
class DecoderConfig:
    """Configuration for the message decoder.

    Attributes:
        dictionary_path: Path to the QuickFIX XML specification.
        delimiter: Field delimiter, or None to detect it per message.
        strict_checksum: Treat checksum failures as errors instead of warnings.
    """

    dictionary_path: Path = DEFAULT_DICTIONARY_PATH
    delimiter: str | None = None
    strict_checksum: bool = False

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If the delimiter is unusable.
        """
        invalid = []
        if self.delimiter is not None and (len(self.delimiter) != 1 or self.delimiter == "="):
            invalid.append("FIX_DELIMITER")

        if invalid:
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(invalid)} "
                "(delimiter must be a single character other than '=')",
                invalid_vars=invalid,
            )


@dataclass
class AppConfig:
    """Main application configuration.

    Attributes:
        decoder: Decoder configuration.
        log_level: Logging level.
        debug: Debug mode flag.
    """

    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls) -> AppConfig:
        """Create configuration from environment variables.

        Returns:
            AppConfig instance populated from environment.
        """
        decoder_config = DecoderConfig(
            dictionary_path=Path(os.getenv("FIX_DICTIONARY_PATH", str(DEFAULT_DICTIONARY_PATH))),
            delimiter=_parse_delimiter(os.getenv("FIX_DELIMITER")),
            strict_checksum=os.getenv("FIX_STRICT_CHECKSUM", "false").lower() == "true",
        )

        return cls(
            decoder=decoder_config,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    def validate(self) -> None:
        """Validate all configuration sections.

        Raises:
            ConfigurationError: If any configuration value is invalid.
        """
        self.decoder.validate()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid LOG_LEVEL: {self.log_level}",
                invalid_vars=["LOG_LEVEL"],
            )


# Global configuration instance (lazy loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the global application configuration.

    Returns:
        AppConfig instance loaded from environment.
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
