"""CLI command for verifying FIX message checksums.

Usage:
    python -m fixinspect.cli checksum --message "8=FIX.4.4|9=5|35=0|10=163|"
    python -m fixinspect.cli checksum --file messages.fix
"""

from __future__ import annotations

import argparse
import logging
import sys

from fixinspect.cli.decode_cli import (
    EXIT_CHECKSUM_FAILED,
    EXIT_ERROR,
    EXIT_OK,
    add_source_arguments,
    build_decoder_config,
    configure_logging,
    load_sources,
)
from fixinspect.config import ConfigurationError, get_config
from fixinspect.formatting import format_checksum_result
from fixinspect.parsers.decoder import FixDecoder
from fixinspect.parsers.exceptions import DictionaryUnavailableError, MessageFileError

logger = logging.getLogger(__name__)


def checksum_cli(args: list[str] | None = None) -> int:
    """Checksum CLI entry point.

    Prints one line per message and exits with status 2 if any checksum
    does not verify.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        prog="fixinspect checksum",
        description="Verify the checksum of FIX messages",
    )
    add_source_arguments(parser)

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

    failures = 0
    messages = decoder.decode_many(raw_messages)
    for index, message in enumerate(messages, start=1):
        result = decoder.verify(message)
        if not result.valid:
            failures += 1
        print(f"[{index}] {format_checksum_result(result)}")

    if failures:
        print(f"\n{failures} of {len(messages)} message(s) failed checksum verification")
        return EXIT_CHECKSUM_FAILED

    print(f"\nAll {len(messages)} message(s) verified")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(checksum_cli())
