"""Unit tests for immo_edl.domain.calculator.vetuste."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from immo_edl.core.exceptions import ConfigurationError, ValidationError
from immo_edl.domain.calculator.vetuste import (
    DEFAULT_WEAR_TABLE,
    WearRule,
    WearTable,
    compute_vetuste,
    WearTableRegistry,
    default_registry,
    months_between,
)
from immo_edl.domain.models.inventory import ElementCategory

AS_OF = date(2024, 6, 30)
FLOOR_TABLE = WearTable(
    version="test-floor",
    categories={ElementCategory.FLOORING: WearRule(expected_lifetime_months=120)},
)


class TestMonthsBetween:
    """Tests for months_between."""

    def test_whole_years(self):
        assert months_between(date(2019, 6, 30), date(2024, 6, 30)) == 60

    def test_incomplete_month_not_counted(self):
        assert months_between(date(2024, 1, 15), date(2024, 3, 14)) == 1

    def test_same_day(self):
        assert months_between(date(2024, 1, 15), date(2024, 1, 15)) == 0

    def test_future_installation_floored_at_zero(self):
        assert months_between(date(2025, 1, 1), date(2024, 1, 1)) == 0


class TestLinearCurve:
    """Linear depreciation on category rules."""

    def test_half_life(self):
        """Parquet installed 60 months before exit, 120 months lifetime."""
        result = compute_vetuste(ElementCategory.FLOORING, date(2019, 6, 30), AS_OF, 1000, table=FLOOR_TABLE)
        assert result.age_months == 60
        assert result.vetuste_rate == Decimal("50")
        assert result.tenant_share == Decimal("500.00")
        assert result.landlord_share == Decimal("500.00")

    def test_unknown_installation_date_means_no_wear(self):
        result = compute_vetuste(ElementCategory.FLOORING, None, AS_OF, 1000, table=FLOOR_TABLE)
        assert result.age_months == 0
        assert result.vetuste_rate == 0
        assert result.tenant_share == Decimal("1000.00")

    def test_fully_depreciated_at_lifetime(self):
        result = compute_vetuste(ElementCategory.FLOORING, date(2014, 6, 30), AS_OF, 1000, table=FLOOR_TABLE)
        assert result.vetuste_rate == 100
        assert result.tenant_share == 0
        assert result.landlord_share == Decimal("1000.00")

    def test_past_lifetime_still_capped(self):
        result = compute_vetuste(ElementCategory.FLOORING, date(1990, 1, 1), AS_OF, 5000, table=FLOOR_TABLE)
        assert result.vetuste_rate == 100
        assert result.tenant_share == 0

    def test_half_up_rounding(self):
        """1 month of 120 is 0.8333 %: rate 0.83, share 99.17 % of 10.01."""
        result = compute_vetuste(ElementCategory.FLOORING, date(2024, 5, 30), AS_OF, Decimal("10.01"), table=FLOOR_TABLE)
        assert result.vetuste_rate == Decimal("0.83")
        # 10.01 * 0.9917 = 9.926917
        assert result.tenant_share == Decimal("9.93")
        assert result.landlord_share == Decimal("0.08")

    def test_float_cost_accepted(self):
        result = compute_vetuste(ElementCategory.FLOORING, None, AS_OF, 99.99, table=FLOOR_TABLE)
        assert result.tenant_share == Decimal("99.99")


class TestNoFinancialEffect:
    """Rate reported but nothing charged."""

    def test_zero_cost(self):
        result = compute_vetuste(ElementCategory.FLOORING, date(2019, 6, 30), AS_OF, 0, table=FLOOR_TABLE)
        assert result.vetuste_rate == 50
        assert result.tenant_share == 0

    def test_not_a_degradation(self):
        result = compute_vetuste(
            ElementCategory.FLOORING, date(2019, 6, 30), AS_OF, 1000, table=FLOOR_TABLE, is_degradation=False
        )
        assert result.vetuste_rate == 50
        assert result.tenant_share == 0
        assert result.landlord_share == 0

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            compute_vetuste(ElementCategory.FLOORING, None, AS_OF, -1, table=FLOOR_TABLE)

    @pytest.mark.parametrize("cost", ["NaN", "Infinity", "abc", None])
    def test_unusable_cost_rejected(self, cost):
        with pytest.raises(ValidationError):
            compute_vetuste(ElementCategory.FLOORING, None, AS_OF, cost, table=FLOOR_TABLE)


class TestFranchiseCurve:
    """Material rules from the professional grid."""

    def test_within_franchise(self):
        """Painting (7 years, 1 year franchise) is not worn after 10 months."""
        result = compute_vetuste(
            ElementCategory.WALLS, date(2023, 8, 30), AS_OF, 700, material="peinture"
        )
        assert result.curve == "franchise"
        assert result.vetuste_rate == 0
        assert result.tenant_share == Decimal("700.00")

    def test_after_franchise(self):
        """Painting aged 4 years: (48 - 12) / (84 - 12) = 50 %."""
        result = compute_vetuste(
            ElementCategory.WALLS, date(2020, 6, 30), AS_OF, 700, material="peinture"
        )
        assert result.vetuste_rate == 50
        assert result.tenant_share == Decimal("350.00")

    def test_residual_caps_rate_before_end_of_life(self):
        """Solid parquet keeps a 15 % residual until its 25th year."""
        result = compute_vetuste(
            ElementCategory.FLOORING, date(2000, 7, 30), AS_OF, 1000, material="parquet_massif"
        )
        assert result.age_months == 287
        assert result.vetuste_rate <= 85

    def test_end_of_life_fully_depreciated(self):
        result = compute_vetuste(
            ElementCategory.FLOORING, date(1999, 6, 30), AS_OF, 1000, material="parquet_massif"
        )
        assert result.vetuste_rate == 100
        assert result.tenant_share == 0

    def test_unknown_material_falls_back_to_category(self):
        result = compute_vetuste(
            ElementCategory.FLOORING, date(2019, 6, 30), AS_OF, 1000, material="bamboo"
        )
        assert result.curve == "linear"
        assert result.expected_lifetime_months == 120


class TestWearTables:
    """Injected tables and curves."""

    def test_default_table_covers_every_category(self):
        for category in ElementCategory:
            assert DEFAULT_WEAR_TABLE.rule_for(category).expected_lifetime_months > 0

    def test_missing_category_rule(self):
        with pytest.raises(ConfigurationError):
            compute_vetuste(ElementCategory.HEATING, None, AS_OF, 100, table=FLOOR_TABLE)

    def test_custom_curve_function(self):
        """A category can use any registered curve."""
        table = WearTable(
            version="test-step",
            categories={ElementCategory.FLOORING: WearRule(expected_lifetime_months=120, curve="step")},
        )
        curves = {"step": lambda age, rule: Decimal(0) if age < 60 else Decimal(80)}
        young = compute_vetuste(ElementCategory.FLOORING, date(2020, 6, 30), AS_OF, 100, table=table, curves=curves)
        old = compute_vetuste(ElementCategory.FLOORING, date(2019, 6, 30), AS_OF, 100, table=table, curves=curves)
        assert young.tenant_share == Decimal("100.00")
        assert old.tenant_share == Decimal("20.00")

    def test_unknown_curve(self):
        table = WearTable(
            version="test-unknown",
            categories={ElementCategory.FLOORING: WearRule(expected_lifetime_months=120, curve="log")},
        )
        with pytest.raises(ConfigurationError):
            compute_vetuste(ElementCategory.FLOORING, None, AS_OF, 100, table=table)

    def test_rule_rejects_franchise_longer_than_life(self):
        with pytest.raises(PydanticValidationError):
            WearRule(expected_lifetime_months=12, curve="franchise", franchise_months=12)

    def test_registry(self):
        registry = default_registry()
        table = FLOOR_TABLE.model_copy(update={"version": "test-registry"})
        registry.register(table)
        assert registry.get("test-registry") is table
        assert registry.versions == ["grille-2016-v1", "test-registry"]
        with pytest.raises(ConfigurationError):
            registry.register(table)

    def test_replace_version(self):
        registry = WearTableRegistry(FLOOR_TABLE)
        replacement = FLOOR_TABLE.model_copy(update={"categories": {}})
        registry.register(replacement, replace=True)
        assert registry.get("test-floor") is replacement

    def test_registries_are_independent(self):
        first, second = default_registry(), default_registry()
        first.register(FLOOR_TABLE)
        assert "test-floor" in first
        assert "test-floor" not in second
        assert DEFAULT_WEAR_TABLE.version in second

    def test_unknown_version(self):
        with pytest.raises(ConfigurationError):
            default_registry().get("grille-1900")
