"""
Tests for size conversion utilities — used for the --min filter and all size output.
"""
import pytest
from dupedetector.utils.convert_utils import ConvertUtils


class TestHumanToBytes:
    """Test conversion from human-readable sizes (e.g., "500k") to bytes."""

    def test_bytes_without_suffix(self):
        """Plain numbers should be interpreted as bytes."""
        assert ConvertUtils.human_to_bytes("0") == 0
        assert ConvertUtils.human_to_bytes("1") == 1
        assert ConvertUtils.human_to_bytes("500000") == 500000

    def test_bytes_with_b_suffix(self):
        assert ConvertUtils.human_to_bytes("0B") == 0
        assert ConvertUtils.human_to_bytes("1024b") == 1024

    def test_decimal_units_are_powers_of_1000(self):
        assert ConvertUtils.human_to_bytes("1k") == 1000
        assert ConvertUtils.human_to_bytes("1kB") == 1000
        assert ConvertUtils.human_to_bytes("2M") == 2_000_000
        assert ConvertUtils.human_to_bytes("1G") == 1_000_000_000

    def test_binary_units_are_powers_of_1024(self):
        assert ConvertUtils.human_to_bytes("1ki") == 1024
        assert ConvertUtils.human_to_bytes("1KiB") == 1024
        assert ConvertUtils.human_to_bytes("1.5Mi") == 1536 * 1024
        assert ConvertUtils.human_to_bytes("1Gi") == 1024 ** 3

    def test_fractions(self):
        assert ConvertUtils.human_to_bytes("1.5k") == 1500
        assert ConvertUtils.human_to_bytes(".5m") == 500_000

    def test_fractional_bytes_round_up(self):
        """A minimum of 0.5 bytes must still exclude empty files."""
        assert ConvertUtils.human_to_bytes("0.5") == 1
        assert ConvertUtils.human_to_bytes("1.2") == 2

    def test_case_insensitivity(self):
        assert ConvertUtils.human_to_bytes("1K") == ConvertUtils.human_to_bytes("1k")
        assert ConvertUtils.human_to_bytes("1MIB") == ConvertUtils.human_to_bytes("1mib")

    def test_surrounding_whitespace_is_ignored(self):
        assert ConvertUtils.human_to_bytes("  10k ") == 10_000

    @pytest.mark.parametrize("bad", ["", "abc", "10 k", "-5", "1kk", "1.5.5", "k", "5T"])
    def test_invalid_formats(self, bad):
        with pytest.raises(ValueError, match="Invalid size format"):
            ConvertUtils.human_to_bytes(bad)

    def test_is_valid_size_format(self):
        assert ConvertUtils.is_valid_size_format("10Mi")
        assert not ConvertUtils.is_valid_size_format("ten")


class TestBytesToHuman:
    """Test short human-readable output used in result headers and the summary."""

    def test_bytes(self):
        assert ConvertUtils.bytes_to_human(0) == "0 B"
        assert ConvertUtils.bytes_to_human(999) == "999 B"

    def test_kilobytes(self):
        assert ConvertUtils.bytes_to_human(1000) == "1 kB"
        assert ConvertUtils.bytes_to_human(1499) == "1 kB"

    def test_rounds_half_up(self):
        assert ConvertUtils.bytes_to_human(1500) == "2 kB"
        assert ConvertUtils.bytes_to_human(2_500_000) == "3 MB"

    def test_larger_units(self):
        assert ConvertUtils.bytes_to_human(4_000_000) == "4 MB"
        assert ConvertUtils.bytes_to_human(12_000_000_000) == "12 GB"

    def test_negative_is_clamped(self):
        assert ConvertUtils.bytes_to_human(-1) == "0 B"
