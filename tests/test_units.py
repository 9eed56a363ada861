"""Tests for amount conversions."""

from decimal import Decimal, InvalidOperation

import pytest

from relaybridge.units import format_units, from_smallest_unit, to_smallest_unit


class TestToSmallestUnit:
    """Tests for human -> smallest unit conversion."""

    def test_whole_amount(self):
        assert to_smallest_unit("1", 6) == 1_000_000

    def test_fractional_amount(self):
        assert to_smallest_unit("0.2", 6) == 200_000
        assert to_smallest_unit("1.5", 18) == 1_500_000_000_000_000_000

    def test_truncates_extra_precision(self):
        """Test digits beyond the token's decimals are dropped, not rounded."""
        assert to_smallest_unit("1.0000019", 6) == 1_000_001

    def test_accepts_decimal_and_int(self):
        assert to_smallest_unit(Decimal("2.5"), 2) == 250
        assert to_smallest_unit(3, 0) == 3

    def test_large_amount_keeps_precision(self):
        """Test amounts beyond 28 significant digits are exact."""
        assert to_smallest_unit("123456789012345678901.123456789012345678", 18) == (
            123456789012345678901123456789012345678
        )

    @pytest.mark.parametrize("amount", ["", "abc", "-1", "NaN", "Infinity"])
    def test_rejects_invalid(self, amount):
        with pytest.raises(ValueError):
            to_smallest_unit(amount, 6)

    def test_invalid_keeps_decimal_cause(self):
        with pytest.raises(ValueError) as exc_info:
            to_smallest_unit("abc", 6)

        assert isinstance(exc_info.value.__cause__, InvalidOperation)


class TestFormatUnits:
    """Tests for smallest unit -> human conversion."""

    def test_format(self):
        assert format_units(1_700_000, 6) == "1.7"
        assert format_units(1, 6) == "0.000001"
        assert format_units(0, 18) == "0"
        assert format_units(10**20, 18) == "100"

    def test_from_smallest_unit(self):
        assert from_smallest_unit(1_500_000, 6) == Decimal("1.5")

    def test_uint256_max(self):
        """Test the largest token balance formats without rounding."""
        raw = 2**256 - 1
        assert format_units(raw, 0) == str(raw)

    def test_round_trip(self):
        """Test human -> smallest -> human reproduces the amount."""
        for amount, decimals in [("1.7", 6), ("0.000001", 6), ("42", 18), ("0.123456789", 9)]:
            assert format_units(to_smallest_unit(amount, decimals), decimals) == amount

    def test_round_trip_truncates(self):
        """Test precision beyond decimals is lost on the way down."""
        assert format_units(to_smallest_unit("0.1234567", 6), 6) == "0.123456"
