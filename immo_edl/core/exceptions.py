"""Custom exceptions for immo_edl.

Domain-specific exception types so callers can tell each rejection apart.
"""

from __future__ import annotations

from typing import Any


class ImmoEdlError(Exception):
    """Base exception for all immo_edl errors."""
    pass


# --- Input Errors ---

class ValidationError(ImmoEdlError, ValueError):
    """Malformed input (rating, repair cost, ledger line...)."""

    def __init__(self, field: str, value: Any, reason: str = ""):
        self.field = field
        self.value = value
        self.reason = reason
        msg = f"Invalid value for '{field}': {value!r}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class InvalidRatingError(ValidationError):
    """Rating outside the 1-5 scale."""

    def __init__(self, value: Any):
        super().__init__("rating", value, "expected an integer between 1 and 5")


class InvalidDeductionLineError(ValidationError):
    """Manual deduction line with an empty description or a non-positive amount."""
    pass


# --- Comparison Errors ---

class MismatchedLeaseError(ImmoEdlError):
    """Snapshots belong to different leases or have the wrong types."""
    pass


class MissingDepositAmountError(ImmoEdlError):
    """The lease has no recorded deposit amount (unknown, not zero)."""

    code = "missing_deposit_amount"

    def __init__(self, lease_id: str | None = None):
        self.lease_id = lease_id
        msg = "Deposit amount is not recorded on the lease"
        if lease_id:
            msg += f" '{lease_id}'"
        super().__init__(msg)


# --- Lifecycle Errors ---

class FrozenRecordError(ImmoEdlError):
    """Mutation attempted on a signed snapshot or a validated ledger."""
    pass


class InvalidTransitionError(ImmoEdlError):
    """Status transition not allowed from the current state."""

    def __init__(self, current: str, target: str, reason: str = ""):
        self.current = current
        self.target = target
        msg = f"Cannot move from '{current}' to '{target}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PrematureValidationError(ImmoEdlError):
    """Ledger validated before the exit snapshot is signed."""
    pass


class ImmutableLineError(ImmoEdlError):
    """Auto-derived ledger line handled as if it were manual."""
    pass


# --- Persistence / Configuration Errors ---

class RecordNotFoundError(ImmoEdlError):
    """Requested inventory, lease or ledger line does not exist."""

    def __init__(self, kind: str, record_id: Any):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} '{record_id}' not found")


class ConfigurationError(ImmoEdlError):
    """Error in application configuration (e.g. unknown wear table version)."""
    pass
