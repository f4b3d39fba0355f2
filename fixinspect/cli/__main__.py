"""CLI entry point for FIX message inspection.

Usage:
    python -m fixinspect.cli decode --message "8=FIX.4.4|9=5|35=0|10=163|"
    python -m fixinspect.cli checksum --file messages.fix
"""

from __future__ import annotations

import sys

from fixinspect.cli.checksum_cli import checksum_cli
from fixinspect.cli.decode_cli import decode_cli


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Routes to decode_cli or checksum_cli based on first argument.

    Returns:
        Exit code.
    """
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        print("Usage: python -m fixinspect.cli [decode|checksum] [options]")
        print("\nAvailable commands:")
        print("  decode    - Decode messages into header, body and trailer")
        print("  checksum  - Verify message checksums")
        print("\nExamples:")
        print('  python -m fixinspect.cli decode --message "8=FIX.4.4|9=5|35=0|10=163|"')
        print("  python -m fixinspect.cli decode --file messages.fix --check-checksum")
        print("  python -m fixinspect.cli checksum --file messages.fix")
        return 0

    command = argv[0]
    remaining_args = argv[1:]

    if command == "decode":
        return decode_cli(remaining_args)
    elif command == "checksum":
        return checksum_cli(remaining_args)
    else:
        print(f"Unknown command: {command}")
        print("Use 'decode' or 'checksum'")
        return 1


if __name__ == "__main__":
    sys.exit(main())
