"""
Unit Tests for Commission Calculator

Tests verify commission figures, salesperson overrides and the
not-applicable outcomes.
"""

import logging

import pytest
from decimal import Decimal
from commission_engine.calculators.commission import CommissionCalculator
from commission_engine.models import NotApplicableReason, RateConfig, STATUS_SUCCESS
from commission_engine.registry import RateRegistry, default_registry


class TestStandardCalculation:
    """Test calculations without a salesperson."""

    @pytest.fixture
    def calculator(self):
        return CommissionCalculator(default_registry())

    def test_uses_insurer_first_year_rate(self, calculator):
        """SPVIE: 100 x 0.30 x 0.875 = 26.25/month, 315.00/year."""
        result = calculator.calculate("SPVIE", 100)

        assert result is not None
        assert result.effective_rate == Decimal("0.30")
        assert result.first_year_commission == Decimal("315")

    def test_recurring_commission(self, calculator):
        """SPVIE: 100 x 0.15 x 0.875 = 13.125/month, 157.50/year."""
        result = calculator.calculate("SPVIE", 100)

        assert result.recurring_commission == Decimal("157.5")

    def test_monthly_commission_formula(self, calculator):
        monthly = calculator.monthly_commission(Decimal("100"), Decimal("0.30"))

        assert monthly == Decimal("26.25")

    def test_result_echoes_inputs(self, calculator):
        result = calculator.calculate("april", 250.5)

        assert result.insurer == "april"
        assert result.monthly_premium == Decimal("250.5")
        assert result.salesperson is None
        assert result.status == STATUS_SUCCESS
        assert result.project_id == 0
        assert result.created_at

    def test_string_premium_accepted(self, calculator):
        result = calculator.calculate("SPVIE", "100")

        assert result.first_year_commission == Decimal("315")

    def test_figures_are_deterministic(self, calculator):
        first = calculator.calculate("NÉOLIANE", 180, "KHRIBI Mariem")
        second = calculator.calculate("NÉOLIANE", 180, "KHRIBI Mariem")

        assert first.first_year_commission == second.first_year_commission
        assert first.recurring_commission == second.recurring_commission
        assert first.effective_rate == second.effective_rate

    def test_ids_are_unique(self, calculator):
        ids = {calculator.calculate("SPVIE", 100).id for _ in range(50)}

        assert len(ids) == 50
        assert all(i.startswith("calc_") for i in ids)


class TestSalespersonOverride:
    """Test that a supplied salesperson replaces the first-year rate."""

    @pytest.fixture
    def calculator(self):
        return CommissionCalculator(default_registry())

    def test_registered_salesperson_rate_used(self, calculator):
        """100 x 0.306 x 0.875 = 26.775/month, 321.30/year."""
        result = calculator.calculate("SPVIE", 100, salesperson="SNOUSSI ZOUH")

        assert result.effective_rate == Decimal("0.306")
        assert result.first_year_commission == Decimal("321.3")
        assert result.salesperson == "SNOUSSI ZOUH"

    def test_unregistered_salesperson_falls_back_to_default(self, calculator):
        """An unknown salesperson still overrides the insurer rate, with 0.03."""
        result = calculator.calculate("SPVIE", 100, salesperson="Nobody")

        assert result.effective_rate == Decimal("0.03")
        assert result.first_year_commission == Decimal("31.5")

    def test_recurring_rate_unaffected_by_salesperson(self, calculator):
        result = calculator.calculate("SPVIE", 100, salesperson="HADIR SFAR")

        assert result.recurring_commission == Decimal("157.5")

    def test_empty_salesperson_uses_insurer_rate(self, calculator):
        result = calculator.calculate("SPVIE", 100, salesperson="")

        assert result.effective_rate == Decimal("0.30")


class TestNotApplicable:
    """Test the inputs that produce no calculation."""

    @pytest.fixture
    def calculator(self):
        return CommissionCalculator(default_registry())

    def test_zero_premium(self, calculator):
        assert calculator.calculate("SPVIE", 0) is None
        assert calculator.evaluate("SPVIE", 0).reason == NotApplicableReason.INVALID_INPUT

    def test_negative_premium(self, calculator):
        assert calculator.evaluate("SPVIE", -10).reason == NotApplicableReason.INVALID_INPUT

    def test_empty_insurer(self, calculator):
        assert calculator.calculate("", 100) is None
        assert calculator.evaluate("", 100).reason == NotApplicableReason.INVALID_INPUT

    def test_unknown_insurer(self, calculator):
        assert calculator.calculate("UNKNOWN_CO", 100) is None
        assert calculator.evaluate("UNKNOWN_CO", 100).reason == NotApplicableReason.UNKNOWN_INSURER

    def test_malformed_premium_is_internal_error(self, calculator, caplog):
        """Faults are logged and reported as not-applicable, never raised."""
        with caplog.at_level(logging.ERROR):
            outcome = calculator.evaluate("SPVIE", "not a number")

        assert outcome.calculation is None
        assert outcome.reason == NotApplicableReason.INTERNAL_ERROR
        assert "Commission calculation error" in caplog.text

    def test_nan_premium_is_internal_error(self, calculator):
        assert calculator.evaluate("SPVIE", float("nan")).reason == NotApplicableReason.INTERNAL_ERROR

    def test_non_string_insurer_is_internal_error(self, calculator):
        assert calculator.calculate(42, 100) is None

    def test_success_outcome_has_no_reason(self, calculator):
        outcome = calculator.evaluate("SPVIE", 100)

        assert outcome.is_success
        assert outcome.reason is None


class TestPremiumBounds:
    """Test optional per-insurer premium bounds."""

    @pytest.fixture
    def calculator(self):
        registry = RateRegistry(configs=(
            RateConfig(
                insurer_id="bounded",
                insurer_name="BOUNDED",
                first_year_rate=Decimal("0.20"),
                recurring_rate=Decimal("0.10"),
                minimum_premium=Decimal("20"),
                maximum_premium=Decimal("500"),
            ),
        ))
        return CommissionCalculator(registry)

    def test_premium_within_bounds(self, calculator):
        assert calculator.calculate("BOUNDED", 20) is not None
        assert calculator.calculate("BOUNDED", 500) is not None

    def test_premium_below_minimum(self, calculator):
        assert calculator.evaluate("BOUNDED", 19.99).reason == NotApplicableReason.PREMIUM_OUT_OF_RANGE

    def test_premium_above_maximum(self, calculator):
        assert calculator.evaluate("BOUNDED", 500.01).reason == NotApplicableReason.PREMIUM_OUT_OF_RANGE
