#!/usr/bin/env python3
"""Basic FIX message decoding example.

This example demonstrates how to:
1. Load a FIX protocol dictionary
2. Decode a message into header, body and trailer
3. Verify the message checksum

Usage:
    python examples/basic_decode.py [path/to/FIX44.xml]
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the parent directory is in the path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fixinspect.dictionary import load_dictionary
from fixinspect.formatting import format_checksum_result, format_message
from fixinspect.parsers import DictionaryUnavailableError, FixDecoder

DEFAULT_SPEC = Path(__file__).resolve().parent.parent / "tests" / "fixtures" / "FIX44.xml"


def main() -> int:
    """Run basic decode example."""
    spec_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SPEC

    # New order single for 7000 MSFT, checksum 092
    fix_message = (
        "8=FIX.4.4|9=148|35=D|34=1080|49=TESTBUY1|52=20180920-18:14:19.508|"
        "56=TESTSELL1|11=636730640278898634|15=USD|21=2|38=7000|40=1|54=1|"
        "55=MSFT|60=20180920-18:14:19.492|10=092|"
    )

    print("=" * 70)
    print(" BASIC FIX DECODE EXAMPLE ".center(70))
    print("=" * 70)

    print(f"\n[1] Loading dictionary from {spec_path}...")
    try:
        dictionary = load_dictionary(spec_path)
    except DictionaryUnavailableError as e:
        print(f"\n    ERROR: {e}")
        return 1
    print(f"    {dictionary!r}")

    print("\n[2] Decoding message...\n")
    decoder = FixDecoder(dictionary)
    message = decoder.decode(fix_message)
    print(format_message(message))

    print("[3] Verifying checksum...")
    print(f"    {format_checksum_result(decoder.verify(message))}")

    corrupted = decoder.decode(fix_message.replace("MSFT", "MSFX"))
    print(f"    Corrupted copy: {format_checksum_result(decoder.verify(corrupted))}")

    print("\n" + "=" * 70)
    print(" EXAMPLE COMPLETE ".center(70))
    print("=" * 70)

    return 0


if __name__ == "__main__":
    sys.exit(main())
