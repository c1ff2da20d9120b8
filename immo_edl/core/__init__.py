"""Core exceptions, settings, logging and reference data."""

from .exceptions import (
    ConfigurationError,
    FrozenRecordError,
    ImmoEdlError,
    ImmutableLineError,
    InvalidDeductionLineError,
    InvalidRatingError,
    InvalidTransitionError,
    MismatchedLeaseError,
    MissingDepositAmountError,
    PrematureValidationError,
    RecordNotFoundError,
    ValidationError,
)
from .money import ZERO, parse_money, round2, to_money

__all__ = [
    "round2",
    "to_money",
    "parse_money",
    "ZERO",
    # Exceptions
    "ImmoEdlError",
    "ValidationError",
    "InvalidRatingError",
    "InvalidDeductionLineError",
    "MismatchedLeaseError",
    "MissingDepositAmountError",
    "FrozenRecordError",
    "InvalidTransitionError",
    "PrematureValidationError",
    "ImmutableLineError",
    "RecordNotFoundError",
    "ConfigurationError",
]
