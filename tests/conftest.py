"""Shared fixtures for the fixinspect test suite."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from fixinspect.config import reset_config
from fixinspect.dictionary import FixDictionary, clear_dictionary_cache, load_dictionary
from fixinspect.parsers import FixDecoder

FIXTURES_DIR = Path(__file__).parent / "fixtures"
FIX44_PATH = FIXTURES_DIR / "FIX44.xml"

# New order single with a correct checksum (092)
NEW_ORDER_MESSAGE = (
    "8=FIX.4.4|9=148|35=D|34=1080|49=TESTBUY1|52=20180920-18:14:19.508|"
    "56=TESTSELL1|11=636730640278898634|15=USD|21=2|38=7000|40=1|54=1|"
    "55=MSFT|60=20180920-18:14:19.492|10=092|"
)

# Heartbeat with a correct checksum (163)
HEARTBEAT_MESSAGE = "8=FIX.4.4|9=5|35=0|10=163|"


@pytest.fixture(autouse=True)
def _reset_globals() -> Iterator[None]:
    """Start every test with no cached configuration or dictionaries."""
    reset_config()
    clear_dictionary_cache()
    yield
    reset_config()
    clear_dictionary_cache()


@pytest.fixture
def fix44_dictionary() -> FixDictionary:
    """Return the FIX 4.4 fixture dictionary."""
    return load_dictionary(FIX44_PATH)


@pytest.fixture
def minimal_dictionary() -> FixDictionary:
    """Return a four-field dictionary built in code."""
    return FixDictionary.from_definitions(
        [
            (8, "BeginString", "STRING"),
            (9, "BodyLength", "LENGTH"),
            (35, "MsgType", "STRING", {"0": "HEARTBEAT", "D": "ORDER_SINGLE"}),
            (10, "CheckSum", "STRING"),
        ],
        header_names=["BeginString", "BodyLength", "MsgType"],
        trailer_names=["CheckSum"],
        version="FIX.4.4",
    )


@pytest.fixture
def decoder(fix44_dictionary: FixDictionary) -> FixDecoder:
    """Return a decoder bound to the FIX 4.4 fixture dictionary."""
    return FixDecoder(fix44_dictionary)
