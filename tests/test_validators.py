"""Tests for premium validation and request validation."""

import pytest
from decimal import Decimal
from commission_engine.validators import RequestValidator, is_valid_premium


class TestIsValidPremium:
    """Test the premium bounds predicate."""

    def test_upper_bound_inclusive(self):
        assert is_valid_premium(10000) is True

    def test_above_upper_bound(self):
        assert is_valid_premium(10000.01) is False

    def test_zero_rejected(self):
        assert is_valid_premium(0) is False

    def test_negative_rejected(self):
        assert is_valid_premium(-5) is False

    def test_small_positive_accepted(self):
        assert is_valid_premium(0.01) is True
        assert is_valid_premium(Decimal("42.50")) is True

    def test_garbage_never_raises(self):
        assert is_valid_premium("abc") is False
        assert is_valid_premium(None) is False
        assert is_valid_premium(float("nan")) is False
        assert is_valid_premium(True) is False


class TestRequestValidator:
    """Test /calculate and /stats payload validation."""

    @pytest.fixture
    def validator(self):
        return RequestValidator()

    def test_valid_calculation_request(self, validator):
        validator.validate_calculation_request(
            {"insurer": "SPVIE", "monthly_premium": 100, "salesperson": "SNOUSSI ZOUH"}
        )

    def test_missing_insurer(self, validator):
        with pytest.raises(ValueError, match="insurer is required"):
            validator.validate_calculation_request({"monthly_premium": 100})

    def test_blank_insurer(self, validator):
        with pytest.raises(ValueError, match="insurer is required"):
            validator.validate_calculation_request({"insurer": "  ", "monthly_premium": 100})

    def test_missing_premium(self, validator):
        with pytest.raises(ValueError, match="monthly_premium is required"):
            validator.validate_calculation_request({"insurer": "SPVIE"})

    def test_premium_out_of_range(self, validator):
        with pytest.raises(ValueError, match="at most 10000"):
            validator.validate_calculation_request({"insurer": "SPVIE", "monthly_premium": 20000})

    def test_premium_wrong_type(self, validator):
        with pytest.raises(ValueError, match="must be a number"):
            validator.validate_calculation_request({"insurer": "SPVIE", "monthly_premium": [100]})

    def test_salesperson_wrong_type(self, validator):
        with pytest.raises(ValueError, match="salesperson must be a string"):
            validator.validate_calculation_request(
                {"insurer": "SPVIE", "monthly_premium": 100, "salesperson": 7}
            )

    def test_body_must_be_object(self, validator):
        with pytest.raises(ValueError, match="JSON object"):
            validator.validate_calculation_request(["SPVIE", 100])

    def test_stats_requires_list(self, validator):
        with pytest.raises(ValueError, match="must be a list"):
            validator.validate_stats_request({"calculations": "nope"})

    def test_stats_items_must_be_objects(self, validator):
        with pytest.raises(ValueError, match="Calculation 1"):
            validator.validate_stats_request({"calculations": [{}, 5]})
