"""CLI command for decoding FIX messages.

Usage:
    python -m fixinspect.cli decode --message "8=FIX.4.4|9=5|35=0|10=163|"
    python -m fixinspect.cli decode --file samples/fix42_messages.fix
    python -m fixinspect.cli decode --file messages.fix --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from fixinspect.config import ConfigurationError, DecoderConfig, get_config
from fixinspect.formatting import format_checksum_result, format_message, message_to_dict
from fixinspect.parsers.decoder import FixDecoder
from fixinspect.parsers.exceptions import DictionaryUnavailableError, MessageFileError
from fixinspect.parsers.reader import read_messages

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CHECKSUM_FAILED = 2


def add_source_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the message source and decoder options shared by every command."""
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--message",
        "-m",
        help="A single FIX message",
    )
    source.add_argument(
        "--file",
        "-f",
        type=Path,
        help="File with one FIX message per line",
    )

    parser.add_argument(
        "--dictionary",
        "-d",
        type=Path,
        default=None,
        help="QuickFIX XML specification (default: $FIX_DICTIONARY_PATH or spec/FIX44.xml)",
    )
    parser.add_argument(
        "--delimiter",
        default=None,
        help="Field delimiter, e.g. '|' or SOH (default: detect per message)",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    verbosity.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )


def configure_logging(parsed_args: argparse.Namespace, default_level: str = "WARNING") -> None:
    """Configure the root logger from the verbosity flags."""
    if parsed_args.verbose:
        level = logging.DEBUG
    elif parsed_args.quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, default_level, logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(level)


def build_decoder_config(parsed_args: argparse.Namespace) -> DecoderConfig:
    """Merge command-line options over the environment configuration.

    Raises:
        ConfigurationError: If the resulting configuration is invalid.
    """
    base = get_config().decoder
    delimiter = parsed_args.delimiter
    if delimiter is not None and delimiter.upper() == "SOH":
        delimiter = "\x01"

    config = DecoderConfig(
        dictionary_path=parsed_args.dictionary or base.dictionary_path,
        delimiter=delimiter if delimiter is not None else base.delimiter,
        strict_checksum=getattr(parsed_args, "strict", False) or base.strict_checksum,
    )
    config.validate()
    return config


def load_sources(parsed_args: argparse.Namespace) -> list[str]:
    """Return the messages named on the command line.

    Raises:
        MessageFileError: If the message file cannot be read.
    """
    if parsed_args.message is not None:
        return [parsed_args.message]
    return read_messages(parsed_args.file)


def decode_cli(args: list[str] | None = None) -> int:
    """Decode CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        prog="fixinspect decode",
        description="Decode FIX messages into header, body and trailer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m fixinspect.cli decode --message "8=FIX.4.4|9=5|35=0|10=163|"
  python -m fixinspect.cli decode --file messages.fix --check-checksum
  python -m fixinspect.cli decode --file messages.fix --json
""",
    )
    add_source_arguments(parser)
    parser.add_argument(
        "--check-checksum",
        "-c",
        action="store_true",
        help="Also verify each message checksum",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Verify checksums and exit with status 2 when one does not verify",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of the section listing",
    )
    parser.add_argument(
        "--show-unknown",
        action="store_true",
        help="List tags missing from the dictionary",
    )

    parsed_args = parser.parse_args(args)

    try:
        app_config = get_config()
        app_config.validate()
        configure_logging(parsed_args, app_config.log_level)
        config = build_decoder_config(parsed_args)
        decoder = FixDecoder.from_config(config)
        raw_messages = load_sources(parsed_args)
    except (ConfigurationError, DictionaryUnavailableError, MessageFileError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    # --strict implies --check-checksum
    check_checksum = parsed_args.check_checksum or config.strict_checksum
    exit_code = EXIT_OK
    documents = []
    for message in decoder.decode_many(raw_messages):
        checksum = decoder.verify(message) if check_checksum else None
        if checksum is not None and not checksum.valid and config.strict_checksum:
            exit_code = EXIT_CHECKSUM_FAILED

        if parsed_args.json:
            documents.append(message_to_dict(message, checksum))
            continue

        print(format_message(message, show_unknown=parsed_args.show_unknown))
        if checksum is not None:
            print(format_checksum_result(checksum))
            print()

    if parsed_args.json:
        print(json.dumps(documents, indent=2))

    return exit_code


if __name__ == "__main__":
    sys.exit(decode_cli())
