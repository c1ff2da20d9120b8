"""Unit tests for immo_edl.core.money."""

from decimal import Decimal

import pytest

from immo_edl.core.exceptions import InvalidDeductionLineError, ValidationError
from immo_edl.core.money import parse_money, round2, to_money


class TestRounding:
    """Half-up rounding to the cent."""

    @pytest.mark.parametrize("value,expected", [
        ("12.345", Decimal("12.35")),
        ("12.344", Decimal("12.34")),
        (0.1, Decimal("0.10")),
        (7, Decimal("7.00")),
    ])
    def test_round2(self, value, expected):
        assert round2(value) == expected

    def test_float_goes_through_str(self):
        assert to_money(0.1) == Decimal("0.1")


class TestParseMoney:
    """Typed rejection of unusable amounts."""

    @pytest.mark.parametrize("value", ["abc", "", None, "NaN", "Infinity", float("nan"), float("-inf"), True])
    def test_rejected(self, value):
        with pytest.raises(ValidationError) as exc:
            parse_money("amount", value)
        assert exc.value.field == "amount"

    def test_custom_error_type(self):
        with pytest.raises(InvalidDeductionLineError):
            parse_money("amount", "NaN", error=InvalidDeductionLineError)

    def test_accepted_values_not_rounded(self):
        assert parse_money("amount", "10.005") == Decimal("10.005")
        assert parse_money("amount", -3) == Decimal("-3")
