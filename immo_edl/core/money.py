"""Currency helpers.

Amounts are Decimal euros quantised to the cent with half-up rounding.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from immo_edl.core.exceptions import ValidationError

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_money(value: Number) -> Decimal:
    """Convert a number to Decimal without rounding.

    Floats go through ``str`` so that 0.1 stays 0.1.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value: Number) -> Decimal:
    """Round to 2 decimals, half-up (12.345 -> 12.35)."""
    return to_money(value).quantize(CENT, rounding=ROUND_HALF_UP)


def parse_money(field: str, value: Number, error: type[ValidationError] = ValidationError) -> Decimal:
    """Convert user input to a finite Decimal, raising ``error`` otherwise.

    Accepts the same inputs as to_money; rejects non-numeric strings, None,
    NaN and infinities.
    """
    if isinstance(value, bool):
        raise error(field, value, "must be a number")
    try:
        amount = to_money(value)
    except (ArithmeticError, TypeError, ValueError):
        raise error(field, value, "must be a number") from None
    if not amount.is_finite():
        raise error(field, value, "must be a finite number")
    return amount
