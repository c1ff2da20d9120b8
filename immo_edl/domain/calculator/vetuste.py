"""Vétusté (wear-and-tear) calculator.

Splits a repair cost between landlord and tenant according to the age of the
installation. The wear table is injected so that an amended grid can be
loaded as a new version without touching the calculation.

Two curves are built in:

* ``linear``: the rate grows from 0 % at installation to 100 % at the end
  of the expected lifetime.
* ``franchise``: professional grid curve. No wear during the franchise
  period, then linear growth up to ``100 - residual`` at the end of the
  lifetime.

Whatever the curve, an element at or past its expected lifetime is fully
depreciated: the landlord bears the whole cost.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Mapping, Optional

from pydantic import BaseModel, Field, model_validator

from immo_edl.core.exceptions import ConfigurationError, ValidationError
from immo_edl.core.inventory_constants import CATEGORY_LIFETIME_MONTHS, MATERIAL_WEAR_GRID
from immo_edl.core.money import HUNDRED, ZERO, Number, parse_money, round2
from immo_edl.domain.models.inventory import ElementCategory

RATE_QUANTUM = Decimal("0.01")


class WearRule(BaseModel):
    """Depreciation rule of a category or material."""

    expected_lifetime_months: int = Field(..., gt=0)
    curve: str = Field(default="linear", description="Name of the curve in the curve table")
    franchise_months: int = Field(default=0, ge=0, description="Initial period without wear")
    residual_pct: Decimal = Field(default=ZERO, ge=0, lt=100, description="Tenant share kept until end of life")

    model_config = {
        "frozen": True,
    }

    @model_validator(mode="after")
    def check_franchise(self) -> WearRule:
        if self.franchise_months >= self.expected_lifetime_months:
            raise ValueError("franchise period must be shorter than the expected lifetime")
        return self


class WearTable(BaseModel):
    """Versioned vétusté grid: category defaults plus material overrides."""

    version: str = Field(..., min_length=1)
    categories: dict[ElementCategory, WearRule]
    materials: dict[str, WearRule] = Field(default_factory=dict)

    model_config = {
        "frozen": True,
    }

    def rule_for(self, category: ElementCategory, material: Optional[str] = None) -> WearRule:
        """Material rule when the grid has one, category rule otherwise."""
        if material and material in self.materials:
            return self.materials[material]
        try:
            return self.categories[ElementCategory(category)]
        except (KeyError, ValueError):
            raise ConfigurationError(
                f"Wear table '{self.version}' has no rule for category '{category}'"
            ) from None


class VetusteResult(BaseModel):
    age_months: int
    expected_lifetime_months: int
    curve: str
    vetuste_rate: Decimal = Field(..., description="Landlord-borne share in % (0-100)")
    tenant_share: Decimal
    landlord_share: Decimal

    model_config = {
        "frozen": True,
    }


WearCurve = Callable[[int, WearRule], Decimal]


def linear_curve(age_months: int, rule: WearRule) -> Decimal:
    return Decimal(age_months) * HUNDRED / Decimal(rule.expected_lifetime_months)


def franchise_curve(age_months: int, rule: WearRule) -> Decimal:
    if age_months <= rule.franchise_months:
        return ZERO
    ceiling = HUNDRED - rule.residual_pct
    depreciable = Decimal(rule.expected_lifetime_months - rule.franchise_months)
    return min(ceiling, ceiling * Decimal(age_months - rule.franchise_months) / depreciable)


DEFAULT_CURVES: dict[str, WearCurve] = {
    "linear": linear_curve,
    "franchise": franchise_curve,
}


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``, floored at 0.

    A month counts once the same day-of-month is reached
    (2020-01-15 -> 2020-03-14 is 1 month).
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return max(0, months)


def compute_vetuste(
    category: ElementCategory,
    installation_date: Optional[date],
    as_of: date,
    repair_cost: Number,
    *,
    table: Optional[WearTable] = None,
    material: Optional[str] = None,
    is_degradation: bool = True,
    curves: Optional[Mapping[str, WearCurve]] = None,
) -> VetusteResult:
    """Compute the vétusté rate and the tenant share of a repair.

    An unknown installation date counts as age 0 (no wear): the tenant
    bears the full cost until the landlord documents the installation.

    Args:
        category: Element category
        installation_date: Installation or last renewal date, None if unknown
        as_of: Reference date (exit inventory date)
        repair_cost: Repair or replacement cost in €
        table: Wear table, defaults to DEFAULT_WEAR_TABLE
        material: Material id, used when the table has a material rule
        is_degradation: Only flagged degradations are charged
        curves: Curve function table, defaults to DEFAULT_CURVES

    Returns:
        VetusteResult with rate (%), tenant share and landlord share in €

    Raises:
        ValidationError: negative, non-numeric or non-finite repair cost
        ConfigurationError: no rule or unknown curve in the table
    """
    cost = parse_money("repair_cost", repair_cost)
    if cost < 0:
        raise ValidationError("repair_cost", repair_cost, "must be >= 0")

    wear_table = table or DEFAULT_WEAR_TABLE
    rule = wear_table.rule_for(category, material)
    curve_table = curves if curves is not None else DEFAULT_CURVES
    curve = curve_table.get(rule.curve)
    if curve is None:
        raise ConfigurationError(f"Unknown wear curve '{rule.curve}' in table '{wear_table.version}'")

    age = months_between(installation_date, as_of) if installation_date else 0

    if age >= rule.expected_lifetime_months:
        rate = HUNDRED
    else:
        rate = min(HUNDRED, max(ZERO, curve(age, rule)))
    rate = rate.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)

    if cost == 0 or not is_degradation:
        tenant_share = ZERO
        landlord_share = ZERO
    else:
        tenant_share = round2(cost * (HUNDRED - rate) / HUNDRED)
        landlord_share = round2(cost - tenant_share)

    return VetusteResult(
        age_months=age,
        expected_lifetime_months=rule.expected_lifetime_months,
        curve=rule.curve,
        vetuste_rate=rate,
        tenant_share=tenant_share,
        landlord_share=landlord_share,
    )


# =====================================================
# WEAR TABLE REGISTRY
# =====================================================

def build_default_wear_table(version: str = "grille-2016-v1") -> WearTable:
    """Grid built from the reference constants."""
    categories = {
        ElementCategory(name): WearRule(expected_lifetime_months=months)
        for name, months in CATEGORY_LIFETIME_MONTHS.items()
    }
    materials = {
        material: WearRule(
            expected_lifetime_months=entry["lifespan"] * 12,
            curve="franchise",
            franchise_months=entry["franchise"] * 12,
            residual_pct=Decimal(entry["residual"]),
        )
        for material, entry in MATERIAL_WEAR_GRID.items()
    }
    return WearTable(version=version, categories=categories, materials=materials)


DEFAULT_WEAR_TABLE = build_default_wear_table()


class WearTableRegistry:
    """Grid versions available to a service, keyed by version id."""

    def __init__(self, *tables: WearTable):
        self._tables: dict[str, WearTable] = {}
        for table in tables:
            self.register(table)

    def register(self, table: WearTable, replace: bool = False) -> None:
        if table.version in self._tables and not replace:
            raise ConfigurationError(f"Wear table '{table.version}' is already registered")
        self._tables[table.version] = table

    def get(self, version: str) -> WearTable:
        try:
            return self._tables[version]
        except KeyError:
            raise ConfigurationError(
                f"Unknown wear table version '{version}' (available: {self.versions})"
            ) from None

    @property
    def versions(self) -> list[str]:
        return sorted(self._tables)

    def __contains__(self, version: str) -> bool:
        return version in self._tables


def default_registry() -> WearTableRegistry:
    """New registry holding the built-in grid only."""
    return WearTableRegistry(DEFAULT_WEAR_TABLE)
