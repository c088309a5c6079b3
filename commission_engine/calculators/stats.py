"""
Statistics Aggregator

Reduces collections of commission calculations into summary statistics.
Every call builds a fresh result; inputs are never modified.
"""

from collections import defaultdict
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from ..models import (
    CommissionCalculation,
    CommissionStats,
    GlobalStats,
    GroupSummary,
    STATUS_SUCCESS,
    UNASSIGNED_SALESPERSON,
)

MONTHS_PER_YEAR = 12


class StatsAggregator:
    """Builds global totals and per-group breakdowns."""

    def aggregate(self, calculations: Iterable[CommissionCalculation]) -> GlobalStats:
        """
        Sum first-year and recurring commissions.

        average_per_contract is total first-year / count, or 0 when empty.
        """
        total_first_year = Decimal("0")
        total_recurring = Decimal("0")
        count = 0

        for calc in calculations:
            total_first_year += calc.first_year_commission
            total_recurring += calc.recurring_commission
            count += 1

        average = total_first_year / count if count > 0 else Decimal("0")

        return GlobalStats(
            total_first_year=total_first_year,
            total_recurring=total_recurring,
            average_per_contract=average,
            count=count,
        )

    def breakdown(self, calculations: Iterable[CommissionCalculation]) -> CommissionStats:
        """Group commissions by insurer and by salesperson."""
        calculations = list(calculations)
        total = len(calculations)

        by_insurer = defaultdict(list)
        by_salesperson = defaultdict(list)
        for calc in calculations:
            by_insurer[calc.insurer].append(calc)
            by_salesperson[calc.salesperson or UNASSIGNED_SALESPERSON].append(calc)

        totals = self.aggregate(calculations)
        successes = sum(1 for calc in calculations if calc.status == STATUS_SUCCESS)
        success_rate = Decimal(successes) * 100 / total if total > 0 else Decimal("0")

        return CommissionStats(
            total_monthly_commission=totals.total_first_year / MONTHS_PER_YEAR,
            total_annual_commission=totals.total_first_year,
            total_recurring_commission=totals.total_recurring,
            by_insurer={name: self._summarize(group, with_premiums=True) for name, group in by_insurer.items()},
            by_salesperson={name: self._summarize(group) for name, group in by_salesperson.items()},
            success_rate=success_rate,
            total_contracts=total,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )

    def _summarize(self, group: list[CommissionCalculation], with_premiums: bool = False) -> GroupSummary:
        annual = sum((calc.first_year_commission for calc in group), Decimal("0"))
        rates = sum((calc.effective_rate for calc in group), Decimal("0"))
        count = len(group)

        monthly_premium = None
        annual_premium = None
        if with_premiums:
            monthly_premium = sum((calc.monthly_premium for calc in group), Decimal("0"))
            annual_premium = monthly_premium * MONTHS_PER_YEAR

        return GroupSummary(
            monthly_commission=annual / MONTHS_PER_YEAR,
            annual_commission=annual,
            contract_count=count,
            average_rate=rates / count,
            total_monthly_premium=monthly_premium,
            total_annual_premium=annual_premium,
        )
