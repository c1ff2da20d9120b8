"""Security deposit (dépôt de garantie) rules."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from immo_edl.core.exceptions import ValidationError
from immo_edl.core.inventory_constants import LEASE_LEGAL_RULES
from immo_edl.core.money import ZERO, Number, parse_money, round2
from immo_edl.domain.models.inventory import LeaseType


class DepositCheck(BaseModel):
    valid: bool
    max_amount: Optional[Decimal] = None
    current_amount: Optional[Decimal] = None
    message: str = ""

    model_config = {
        "frozen": True,
    }


def max_deposit_amount(lease_type: LeaseType, rent_amount: Number) -> Decimal:
    """Legal cap: N months of rent excluding charges, 0 for a bail mobilité."""
    rules = LEASE_LEGAL_RULES[LeaseType(lease_type).value]
    return round2(parse_money("rent_amount", rent_amount) * rules["max_deposit_months"])


def validate_deposit_amount(
    lease_type: LeaseType,
    rent_amount: Number,
    deposit_amount: Optional[Number],
) -> DepositCheck:
    """Check a deposit against the legal cap of the lease type.

    No deposit (None or 0) is always valid.
    """
    if deposit_amount is None:
        return DepositCheck(valid=True)
    deposit = parse_money("deposit_amount", deposit_amount)
    if deposit <= 0:
        return DepositCheck(valid=True)

    rules = LEASE_LEGAL_RULES[LeaseType(lease_type).value]
    cap = max_deposit_amount(lease_type, rent_amount)

    if rules["max_deposit_months"] == 0:
        return DepositCheck(
            valid=False,
            max_amount=ZERO,
            current_amount=deposit,
            message=f"Le {rules['label'].lower()} n'autorise pas de dépôt de garantie.",
        )

    if deposit > cap:
        return DepositCheck(
            valid=False,
            max_amount=cap,
            current_amount=deposit,
            message=(
                f"Le dépôt de garantie ne peut excéder {rules['max_deposit_months']} mois de loyer "
                f"hors charges. Maximum autorisé : {cap} €. Montant saisi : {round2(deposit)} €."
            ),
        )

    return DepositCheck(valid=True, max_amount=cap, current_amount=deposit)


def amount_to_return(deposit_amount: Number, total_deductions: Number) -> Decimal:
    """Deposit minus deductions, never below zero.

    A deficit beyond the deposit is claimed separately and is not netted here.
    """
    deposit = parse_money("deposit_amount", deposit_amount)
    deductions = parse_money("total_deductions", total_deductions)
    if deposit < 0:
        raise ValidationError("deposit_amount", deposit_amount, "must be >= 0")
    if deductions < 0:
        raise ValidationError("total_deductions", total_deductions, "must be >= 0")
    return max(ZERO, round2(deposit - deductions))
