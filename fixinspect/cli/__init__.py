"""CLI commands for decoding and checksum verification."""

from fixinspect.cli.checksum_cli import checksum_cli
from fixinspect.cli.decode_cli import decode_cli

__all__ = [
    "checksum_cli",
    "decode_cli",
]
