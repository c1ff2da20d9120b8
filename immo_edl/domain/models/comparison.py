"""Comparison result models.

Output of the entry/exit comparator. Derived data: it is recomputed from the
two snapshots and never edited; the deduction ledger is the editable copy.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from immo_edl.core.exceptions import MissingDepositAmountError
from immo_edl.domain.models.inventory import ElementCategory, MatchKey, MeterChannel


class ElementStatus(str, Enum):
    UNCHANGED = "unchanged"
    DEGRADED = "degraded"
    IMPROVED = "improved"
    NEW = "new"
    MISSING = "missing"


class Difference(BaseModel):
    """A financial deduction line for one degraded element."""

    room: str
    element: str
    element_type: str
    category: ElementCategory
    entry_rating: Optional[int] = None
    exit_rating: int
    rating_delta: Optional[int] = None
    is_degradation: bool = True
    repair_cost: Decimal
    age_months: int
    vetuste_rate: Decimal = Field(..., description="Landlord-borne share in %")
    tenant_share: Decimal
    landlord_share: Decimal
    entry_notes: str = ""
    exit_notes: str = ""

    model_config = {
        "frozen": True,
    }


class ElementComparison(BaseModel):
    """Display-level comparison of one element (no financial effect)."""

    element_type: str
    element_name: str
    status: ElementStatus
    entry_rating: Optional[int] = None
    exit_rating: Optional[int] = None
    rating_delta: Optional[int] = None
    is_degradation: bool = False
    generates_deduction: bool = False

    model_config = {
        "frozen": True,
    }


class RoomComparison(BaseModel):
    room_type: str
    room_name: str
    matched: bool
    elements: tuple[ElementComparison, ...] = Field(default_factory=tuple)

    model_config = {
        "frozen": True,
    }

    @property
    def key(self) -> MatchKey:
        return MatchKey(self.room_type, self.room_name)


class KeyDifference(BaseModel):
    """Informational key count delta (exit - entry). Never priced."""

    key_type: str
    entry_quantity: int
    exit_quantity: int

    model_config = {
        "frozen": True,
    }

    @computed_field
    @property
    def diff(self) -> int:
        return self.exit_quantity - self.entry_quantity


class MeterConsumption(BaseModel):
    """Informational meter consumption (exit - entry). Never priced."""

    channel: MeterChannel
    entry_value: int
    exit_value: int

    model_config = {
        "frozen": True,
    }

    @computed_field
    @property
    def consumption(self) -> int:
        return self.exit_value - self.entry_value


class ComparisonWarning(BaseModel):
    code: str
    message: str
    room: Optional[str] = None
    element: Optional[str] = None

    model_config = {
        "frozen": True,
    }


class ComparisonResult(BaseModel):
    """Entry/exit comparison with deductions and deposit balance."""

    entry_inventory_id: str
    exit_inventory_id: str
    lease_id: str
    wear_table_version: str

    differences: tuple[Difference, ...] = Field(default_factory=tuple)
    rooms: tuple[RoomComparison, ...] = Field(default_factory=tuple)
    unmatched_exit_rooms: tuple[MatchKey, ...] = Field(default_factory=tuple)
    keys: tuple[KeyDifference, ...] = Field(default_factory=tuple)
    meters: tuple[MeterConsumption, ...] = Field(default_factory=tuple)

    total_deductions: Decimal = Field(..., ge=0)
    deposit_amount: Optional[Decimal] = Field(None, description="None when unknown on the lease")
    amount_to_return: Optional[Decimal] = Field(None, ge=0)

    warnings: tuple[ComparisonWarning, ...] = Field(default_factory=tuple)

    model_config = {
        "frozen": True,
    }

    @computed_field
    @property
    def deposit_known(self) -> bool:
        return self.deposit_amount is not None

    def has_warning(self, code: str) -> bool:
        return any(w.code == code for w in self.warnings)

    def require_deposit_amount(self) -> Decimal:
        """Return the deposit, raising if the lease does not record one."""
        if self.deposit_amount is None:
            raise MissingDepositAmountError(self.lease_id)
        return self.deposit_amount
