"""
Commission Calculator

Projects first-year and recurring commission for a single sale.
"""

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from ..models import (
    CalculationOutcome,
    CommissionCalculation,
    NotApplicableReason,
    STATUS_SUCCESS,
    to_decimal,
)
from ..registry import RateRegistry

logger = logging.getLogger(__name__)


def generate_calculation_id() -> str:
    return f"calc_{uuid.uuid4().hex}"


class CommissionCalculator:
    """Calculates commissions against an injected rate registry."""

    # Fixed adjustment applied to premium x rate before annualizing
    DISCOUNT_FACTOR = Decimal("0.875")
    MONTHS_PER_YEAR = 12

    def __init__(self, registry: RateRegistry):
        self.registry = registry

    def calculate(
        self,
        insurer: str,
        monthly_premium,
        salesperson: str | None = None,
    ) -> CommissionCalculation | None:
        """
        Calculate commission for a sale.

        Returns None whenever no commission can be computed: bad input,
        unknown insurer, or an internal fault. Use `evaluate` to see why.
        """
        return self.evaluate(insurer, monthly_premium, salesperson).calculation

    def evaluate(
        self,
        insurer: str,
        monthly_premium,
        salesperson: str | None = None,
    ) -> CalculationOutcome:
        """
        Calculate commission and report the outcome as a tagged result.

        Rules:
        - Supplying a salesperson replaces the insurer's first-year rate with
          the salesperson's rate (or the registry default when they have none)
        - Recurring rate always comes from the insurer config
        - Monthly commission = premium x rate x 0.875, annualized x 12
        """
        try:
            if not insurer:
                logger.debug("Commission not applicable: empty insurer")
                return CalculationOutcome.not_applicable(NotApplicableReason.INVALID_INPUT)

            premium = to_decimal(monthly_premium)
            if premium <= 0:
                logger.debug(f"Commission not applicable: non-positive premium {premium}")
                return CalculationOutcome.not_applicable(NotApplicableReason.INVALID_INPUT)

            config = self.registry.lookup_insurer_config(insurer)
            if config is None:
                logger.info(f"Commission not applicable: no active config for insurer {insurer!r}")
                return CalculationOutcome.not_applicable(NotApplicableReason.UNKNOWN_INSURER)

            if not config.accepts_premium(premium):
                logger.info(f"Commission not applicable: premium {premium} outside {config.insurer_id} bounds")
                return CalculationOutcome.not_applicable(NotApplicableReason.PREMIUM_OUT_OF_RANGE)

            if salesperson:
                first_year_rate = self.registry.lookup_salesperson_rate(salesperson)
            else:
                first_year_rate = config.first_year_rate
            recurring_rate = config.recurring_rate

            calculation = CommissionCalculation(
                id=generate_calculation_id(),
                insurer=insurer,
                monthly_premium=premium,
                first_year_commission=self._annualize(premium, first_year_rate),
                recurring_commission=self._annualize(premium, recurring_rate),
                effective_rate=first_year_rate,
                created_at=datetime.now(timezone.utc).isoformat(),
                salesperson=salesperson,
                status=STATUS_SUCCESS,
            )
            return CalculationOutcome.success(calculation)

        except Exception as e:
            logger.error(f"Commission calculation error: {str(e)}", exc_info=True)
            return CalculationOutcome.not_applicable(NotApplicableReason.INTERNAL_ERROR)

    def monthly_commission(self, premium: Decimal, rate: Decimal) -> Decimal:
        return premium * rate * self.DISCOUNT_FACTOR

    def _annualize(self, premium: Decimal, rate: Decimal) -> Decimal:
        return self.monthly_commission(premium, rate) * self.MONTHS_PER_YEAR
