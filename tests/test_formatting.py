"""Tests for rendering decoded messages."""

import json

from fixinspect.formatting import (
    format_checksum_result,
    format_field,
    format_message,
    message_to_dict,
)
from fixinspect.parsers import ChecksumResult, ChecksumStatus, FixDecoder, ResolvedField

from tests.conftest import HEARTBEAT_MESSAGE, NEW_ORDER_MESSAGE


class TestFormatField:
    """Tests for format_field."""

    def test_raw_value(self) -> None:
        field = ResolvedField(number=8, name="BeginString", type="STRING", value="FIX.4.4")
        assert format_field(field) == "    8         BeginString: FIX.4.4"

    def test_description_replaces_value(self) -> None:
        field = ResolvedField(number=54, name="Side", type="CHAR", value="1", description="BUY")
        assert format_field(field) == "   54                Side: BUY"


class TestFormatMessage:
    """Tests for format_message."""

    def test_heartbeat_layout(self, decoder: FixDecoder) -> None:
        output = format_message(decoder.decode(HEARTBEAT_MESSAGE))

        assert output.splitlines() == [
            "FIX message:",
            HEARTBEAT_MESSAGE,
            "",
            "Header:",
            "    8         BeginString: FIX.4.4",
            "    9          BodyLength: 5",
            "   35             MsgType: HEARTBEAT",
            "",
            "Body:",
            "",
            "Trailer:",
            "   10            CheckSum: 163",
            "",
        ]

    def test_unknown_fields_hidden_by_default(self, decoder: FixDecoder) -> None:
        message = decoder.decode("8=FIX.4.4|9999=X|10=000|")

        assert "Unknown:" not in format_message(message)
        assert " 9999                   ?: X" in format_message(message, show_unknown=True)


class TestFormatChecksumResult:
    """Tests for format_checksum_result."""

    def test_valid(self) -> None:
        result = ChecksumResult(status=ChecksumStatus.VALID, computed=92, expected=92)
        assert format_checksum_result(result) == "Checksum OK (092)"

    def test_mismatch(self) -> None:
        result = ChecksumResult(
            status=ChecksumStatus.MISMATCH,
            computed=163,
            expected=161,
            message="Checksum mismatch: computed 163, declared 161",
        )
        assert format_checksum_result(result) == "Checksum MISMATCH: Checksum mismatch: computed 163, declared 161"


class TestMessageToDict:
    """Tests for message_to_dict."""

    def test_json_serializable(self, decoder: FixDecoder) -> None:
        message = decoder.decode(NEW_ORDER_MESSAGE)
        data = message_to_dict(message, decoder.verify(message))

        encoded = json.loads(json.dumps(data))
        assert encoded["raw_text"] == NEW_ORDER_MESSAGE
        assert encoded["header"][0] == {
            "number": 8,
            "name": "BeginString",
            "type": "STRING",
            "value": "FIX.4.4",
            "description": None,
        }
        assert encoded["checksum"]["status"] == "valid"
        assert [f["name"] for f in encoded["trailer"]] == ["CheckSum"]

    def test_without_checksum(self, decoder: FixDecoder) -> None:
        data = message_to_dict(decoder.decode(HEARTBEAT_MESSAGE))
        assert "checksum" not in data
        assert data["unknown_fields"] == []
