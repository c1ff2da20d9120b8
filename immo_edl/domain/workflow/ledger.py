"""Deduction ledger editing and validation.

The comparison result stays the audit trail; the ledger is the copy a
reviewer adjusts. Every operation returns a new ledger.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from immo_edl.core.exceptions import (
    FrozenRecordError,
    ImmutableLineError,
    InvalidDeductionLineError,
    MismatchedLeaseError,
    PrematureValidationError,
    RecordNotFoundError,
    ValidationError,
)
from immo_edl.core.money import Number, parse_money, round2
from immo_edl.domain.models.comparison import ComparisonResult
from immo_edl.domain.models.inventory import InventorySnapshot
from immo_edl.domain.models.ledger import DeductionLedger, DeductionLine, LedgerStatus


def _ensure_editable(ledger: DeductionLedger) -> None:
    if ledger.is_validated:
        raise FrozenRecordError(
            f"Deductions of inventory '{ledger.exit_inventory_id}' are validated; "
            "recompute and validate a new ledger instead"
        )


def initialize_from_comparison(comparison: ComparisonResult) -> DeductionLedger:
    """One auto line per difference, amount = tenant share."""
    lines = tuple(
        DeductionLine(
            line_id=f"auto-{i + 1}",
            description=f"{diff.room} - {diff.element}",
            amount=diff.tenant_share,
            room=diff.room,
            element=diff.element,
            entry_rating=diff.entry_rating,
            exit_rating=diff.exit_rating,
            repair_cost=diff.repair_cost,
            vetuste_rate=diff.vetuste_rate,
            computed_amount=diff.tenant_share,
        )
        for i, diff in enumerate(comparison.differences)
    )
    return DeductionLedger(
        exit_inventory_id=comparison.exit_inventory_id,
        lines=lines,
        deposit_amount=comparison.deposit_amount,
    )


def override_line_amount(ledger: DeductionLedger, line_index: int, new_amount: Number) -> DeductionLedger:
    """Replace the amount of one line.

    Auto lines accept 0 (waived); manual lines must stay > 0.
    """
    _ensure_editable(ledger)
    if not 0 <= line_index < len(ledger.lines):
        raise RecordNotFoundError("deduction line", line_index)

    amount = round2(parse_money("amount", new_amount))
    line = ledger.lines[line_index]
    if amount < 0:
        raise ValidationError("amount", new_amount, "must be >= 0")
    if line.is_manual and amount == 0:
        raise InvalidDeductionLineError("amount", new_amount, "manual lines must be > 0, remove the line instead")

    lines = list(ledger.lines)
    lines[line_index] = line.model_copy(update={"amount": amount})
    return ledger.model_copy(update={"lines": tuple(lines)})


def add_manual_line(ledger: DeductionLedger, description: str, amount: Number) -> DeductionLedger:
    _ensure_editable(ledger)
    if not description or not description.strip():
        raise InvalidDeductionLineError("description", description, "must not be empty")
    value = parse_money("amount", amount, error=InvalidDeductionLineError)
    if value <= 0:
        raise InvalidDeductionLineError("amount", amount, "must be > 0")

    sequence = ledger.manual_sequence + 1
    line = DeductionLine(
        line_id=f"manual-{sequence}",
        description=description.strip(),
        amount=round2(value),
        is_manual=True,
    )
    return ledger.model_copy(update={"lines": ledger.lines + (line,), "manual_sequence": sequence})


def remove_manual_line(ledger: DeductionLedger, line_id: str) -> DeductionLedger:
    _ensure_editable(ledger)
    line = next((item for item in ledger.lines if item.line_id == line_id), None)
    if line is None:
        raise RecordNotFoundError("deduction line", line_id)
    if not line.is_manual:
        raise ImmutableLineError(
            f"Line '{line_id}' is computed from the comparison; override its amount instead"
        )
    return ledger.model_copy(update={"lines": tuple(item for item in ledger.lines if item.line_id != line_id)})


def reset_to_computed(ledger: DeductionLedger, comparison: ComparisonResult) -> DeductionLedger:
    """Drop overrides and manual lines."""
    _ensure_editable(ledger)
    if comparison.exit_inventory_id != ledger.exit_inventory_id:
        raise MismatchedLeaseError(
            f"Comparison of '{comparison.exit_inventory_id}' cannot reset ledger of '{ledger.exit_inventory_id}'"
        )
    return initialize_from_comparison(comparison)


def total(ledger: DeductionLedger) -> Decimal:
    return ledger.total


def validate(
    ledger: DeductionLedger,
    exit_snapshot: InventorySnapshot,
    now: Optional[datetime] = None,
) -> DeductionLedger:
    """Make the ledger the authoritative deduction record of the lease.

    Raises:
        MismatchedLeaseError: the snapshot is not the ledger's exit inventory
        PrematureValidationError: the exit inventory is not signed yet
        FrozenRecordError: the ledger is already validated
    """
    _ensure_editable(ledger)
    if exit_snapshot.id != ledger.exit_inventory_id:
        raise MismatchedLeaseError(
            f"Ledger of '{ledger.exit_inventory_id}' cannot be validated against inventory '{exit_snapshot.id}'"
        )
    if not exit_snapshot.is_signed:
        raise PrematureValidationError(
            f"Inventory '{exit_snapshot.id}' is '{exit_snapshot.status.value}'; both parties must sign first"
        )
    return ledger.model_copy(update={
        "status": LedgerStatus.VALIDATED,
        "calculated_at": now or datetime.now().astimezone(),
    })
