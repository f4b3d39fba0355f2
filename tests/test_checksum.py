"""Tests for FIX checksum computation and verification."""

import logging

import pytest

from fixinspect.parsers import (
    ChecksumStatus,
    FixDecoder,
    compute_checksum,
    format_checksum,
    validate_checksum,
    verify_checksum,
)
from fixinspect.parsers.checksum import checksum_region
from fixinspect.parsers.exceptions import MalformedMessageError

from tests.conftest import HEARTBEAT_MESSAGE, NEW_ORDER_MESSAGE


class TestComputeChecksum:
    """Tests for compute_checksum."""

    def test_empty_text(self) -> None:
        assert compute_checksum("") == 0

    def test_plain_characters(self) -> None:
        """Test that characters contribute their byte value."""
        assert compute_checksum("A") == 65
        assert compute_checksum("AB") == 131

    def test_pipe_counts_as_soh(self) -> None:
        """Test that a visible delimiter counts as 1, like SOH."""
        assert compute_checksum("A|", delimiter="|") == 66
        assert compute_checksum("A\x01") == 66
        assert compute_checksum("8=FIX.4.4|9=5|35=0|") == compute_checksum("8=FIX.4.4\x019=5\x0135=0\x01")

    def test_wraps_modulo_256(self) -> None:
        """Test that the sum is reduced modulo 256."""
        assert compute_checksum("z" * 10) == 196

    def test_known_messages(self) -> None:
        """Test checksums of known-good messages."""
        assert compute_checksum("8=FIX.4.4|9=5|35=0|") == 163
        assert compute_checksum("8=FIX.4.2|9=5|35=0|") == 161


class TestFormatChecksum:
    """Tests for format_checksum."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "000"), (7, "007"), (92, "092"), (255, "255")],
    )
    def test_zero_padded(self, value: int, expected: str) -> None:
        assert format_checksum(value) == expected


class TestChecksumRegion:
    """Tests for locating the bytes covered by the checksum."""

    def test_region_ends_with_delimiter(self) -> None:
        assert checksum_region(HEARTBEAT_MESSAGE) == "8=FIX.4.4|9=5|35=0|"

    def test_region_without_trailing_delimiter(self) -> None:
        assert checksum_region("8=FIX.4.4|9=5|35=0|10=163") == "8=FIX.4.4|9=5|35=0|"

    def test_region_ignores_trailing_whitespace(self) -> None:
        assert checksum_region(HEARTBEAT_MESSAGE + "  \n") == "8=FIX.4.4|9=5|35=0|"

    @pytest.mark.parametrize("message", ["10=092|", "10=092", "", "8=FIX.4.4|9=5|35=0|"])
    def test_unlocatable_boundary_raises(self, message: str) -> None:
        """Test that messages without a delimited checksum field are malformed."""
        with pytest.raises(MalformedMessageError):
            checksum_region(message)


class TestValidateChecksum:
    """Tests for validate_checksum."""

    def test_valid_message(self) -> None:
        """Test that a correct checksum verifies."""
        result = validate_checksum(NEW_ORDER_MESSAGE, "092")

        assert result.valid is True
        assert result.status is ChecksumStatus.VALID
        assert result.computed == 92
        assert result.expected == 92

    def test_valid_message_with_trailing_whitespace(self) -> None:
        """Test that trailing whitespace is not summed."""
        result = validate_checksum(NEW_ORDER_MESSAGE + " \r\n", "092")
        assert result.valid is True

    def test_valid_message_with_soh(self) -> None:
        """Test that the wire form verifies like the pipe form."""
        result = validate_checksum(NEW_ORDER_MESSAGE.replace("|", "\x01"), "092")
        assert result.valid is True

    def test_comparison_is_numeric(self) -> None:
        """Test that an unpadded declared value still matches."""
        assert validate_checksum(NEW_ORDER_MESSAGE, "92").valid is True

    def test_mismatch(self) -> None:
        """Test that a wrong declared checksum is reported, not raised."""
        result = validate_checksum("8=FIX.4.4|9=5|35=0|10=161|", "161")

        assert result.valid is False
        assert result.status is ChecksumStatus.MISMATCH
        assert result.computed == 163
        assert result.expected == 161
        assert "163" in (result.message or "")

    def test_mismatch_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="fixinspect.parsers.checksum"):
            validate_checksum("8=FIX.4.4|9=5|35=0|10=161|", "161")
        assert "Invalid checksum" in caplog.text

    def test_any_byte_mutation_fails(self) -> None:
        """Test that changing any byte before the checksum breaks verification."""
        region_length = len(checksum_region(NEW_ORDER_MESSAGE))
        for index in range(region_length):
            mutated = (
                NEW_ORDER_MESSAGE[:index]
                + chr(ord(NEW_ORDER_MESSAGE[index]) ^ 1)
                + NEW_ORDER_MESSAGE[index + 1 :]
            )
            result = validate_checksum(mutated, "092")
            assert result.valid is False, f"mutation at {index} still verified"

    def test_too_few_delimiters_is_malformed(self) -> None:
        """Test that a message without a checksum boundary fails gracefully."""
        result = validate_checksum("10=092|", "092")

        assert result.valid is False
        assert result.status is ChecksumStatus.MALFORMED
        assert result.computed is None

    def test_non_numeric_expected_is_malformed(self) -> None:
        result = validate_checksum("8=FIX.4.4|9=5|35=0|10=abc|", "abc")

        assert result.status is ChecksumStatus.MALFORMED
        assert result.computed == 163

    @pytest.mark.parametrize("expected", ["1_63", "١٦٣", " 163"])
    def test_loosely_numeric_expected_is_malformed(self, expected: str) -> None:
        result = validate_checksum(HEARTBEAT_MESSAGE, expected)
        assert result.status is ChecksumStatus.MALFORMED

    def test_trailing_nul_padding_ignored(self) -> None:
        """Test that control bytes after the checksum field do not hide it."""
        result = validate_checksum(NEW_ORDER_MESSAGE + "\x00\x00", "092")
        assert result.valid is True

    def test_missing_expected(self) -> None:
        result = validate_checksum(HEARTBEAT_MESSAGE, None)

        assert result.status is ChecksumStatus.MISSING
        assert result.computed == 163
        assert result.valid is False


class TestVerifyChecksum:
    """Tests for verifying a decoded message."""

    def test_decoded_message_verifies(self, decoder: FixDecoder) -> None:
        message = decoder.decode(NEW_ORDER_MESSAGE)
        assert verify_checksum(message).valid is True
        assert decoder.verify(message).valid is True

    def test_corrupted_message_fails(self, decoder: FixDecoder) -> None:
        message = decoder.decode(NEW_ORDER_MESSAGE.replace("MSFT", "MSFX"))
        result = decoder.verify(message)

        assert result.status is ChecksumStatus.MISMATCH
        assert result.computed == 96

    def test_verification_does_not_block_decoding(self, decoder: FixDecoder) -> None:
        """Test that a failed checksum still leaves a fully decoded message."""
        message = decoder.decode("8=FIX.4.4|9=5|35=0|10=161|")

        assert decoder.verify(message).valid is False
        assert [f.name for f in message.header] == ["BeginString", "BodyLength", "MsgType"]
        assert message.checksum_field is not None
        assert message.checksum_field.value == "161"
