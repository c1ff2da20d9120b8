"""Pure calculators: rating scale, vétusté, comparison and deposit rules.

Nothing in this package logs or performs I/O.
"""

from .comparator import compare
from .deposit import DepositCheck, amount_to_return, max_deposit_amount, validate_deposit_amount
from .rating import RatingInfo, SeverityBand, describe, severity_band, validate_rating
from .vetuste import (
    DEFAULT_CURVES,
    DEFAULT_WEAR_TABLE,
    VetusteResult,
    WearRule,
    WearTable,
    compute_vetuste,
    WearTableRegistry,
    default_registry,
    months_between,
)

__all__ = [
    "compare",
    "describe",
    "severity_band",
    "validate_rating",
    "RatingInfo",
    "SeverityBand",
    "compute_vetuste",
    "months_between",
    "default_registry",
    "WearTableRegistry",
    "VetusteResult",
    "WearRule",
    "WearTable",
    "DEFAULT_CURVES",
    "DEFAULT_WEAR_TABLE",
    "DepositCheck",
    "amount_to_return",
    "max_deposit_amount",
    "validate_deposit_amount",
]
