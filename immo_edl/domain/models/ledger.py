"""Deposit deduction ledger models.

The ledger is the human-reviewed projection of a comparison: one line per
computed difference, plus lines added by the reviewer (cleaning, lost keys...).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from immo_edl.core.money import ZERO, round2


class LedgerStatus(str, Enum):
    DRAFT = "draft"
    VALIDATED = "validated"


class DeductionLine(BaseModel):
    """One deduction, auto-derived from a difference or added manually."""

    line_id: str
    description: str = ""
    amount: Decimal = Field(..., ge=0)
    is_manual: bool = False

    # Auto lines only
    room: Optional[str] = None
    element: Optional[str] = None
    entry_rating: Optional[int] = None
    exit_rating: Optional[int] = None
    repair_cost: Optional[Decimal] = None
    vetuste_rate: Optional[Decimal] = None
    computed_amount: Optional[Decimal] = Field(None, description="Tenant share from the comparison")

    model_config = {
        "frozen": True,
    }

    @computed_field
    @property
    def is_overridden(self) -> bool:
        return not self.is_manual and self.computed_amount is not None and self.amount != self.computed_amount


class DeductionLedger(BaseModel):
    """Deduction record of an exit inventory."""

    exit_inventory_id: str
    lines: tuple[DeductionLine, ...] = Field(default_factory=tuple)
    deposit_amount: Optional[Decimal] = None
    status: LedgerStatus = LedgerStatus.DRAFT
    calculated_at: Optional[datetime] = None
    manual_sequence: int = Field(default=0, ge=0, description="Last manual line number issued")

    model_config = {
        "frozen": True,
    }

    @computed_field
    @property
    def total(self) -> Decimal:
        return round2(sum((line.amount for line in self.lines), ZERO))

    @computed_field
    @property
    def amount_to_return(self) -> Optional[Decimal]:
        if self.deposit_amount is None:
            return None
        return max(ZERO, round2(self.deposit_amount - self.total))

    @property
    def is_validated(self) -> bool:
        return self.status == LedgerStatus.VALIDATED

    @property
    def auto_lines(self) -> tuple[DeductionLine, ...]:
        return tuple(line for line in self.lines if not line.is_manual)

    @property
    def manual_lines(self) -> tuple[DeductionLine, ...]:
        return tuple(line for line in self.lines if line.is_manual)
