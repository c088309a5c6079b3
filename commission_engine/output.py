"""
Output Builder

Turns engine results into plain dictionaries for API responses.
"""

from decimal import ROUND_HALF_UP, Decimal

from .models import (
    CommissionCalculation,
    CommissionStats,
    GlobalStats,
    GroupSummary,
    RateConfig,
    to_decimal,
)

# fr-FR grouping uses a narrow no-break space; the currency sign follows a no-break space
THOUSANDS_SEPARATOR = "\u202f"
CURRENCY_SUFFIX = "\u00a0€"


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return float(to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_currency(amount) -> str:
    """Format an amount in euros the French way, e.g. 1 234,56 €."""
    value = to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.2f}".replace(",", THOUSANDS_SEPARATOR).replace(".", ",")
    return f"{sign}{digits}{CURRENCY_SUFFIX}"


def _pct(rate: Decimal) -> str:
    return f"{float(rate) * 100:.2f}%"


class OutputBuilder:
    """Builds response sections from engine results."""

    def config(self, config: RateConfig) -> dict:
        return {
            "insurer_id": config.insurer_id,
            "insurer_name": config.insurer_name,
            "first_year_rate": float(config.first_year_rate),
            "recurring_rate": float(config.recurring_rate),
            "active": config.active,
            "created_at": config.created_at,
            "minimum_premium": to_money(config.minimum_premium) if config.minimum_premium is not None else None,
            "maximum_premium": to_money(config.maximum_premium) if config.maximum_premium is not None else None,
        }

    def calculation(self, calc: CommissionCalculation) -> dict:
        """Serialize a calculation record with a human readable breakdown."""
        first_year = to_money(calc.first_year_commission)
        recurring = to_money(calc.recurring_commission)
        rate_source = f"salesperson rate for {calc.salesperson}" if calc.salesperson else "insurer first-year rate"

        return {
            "id": calc.id,
            "project_id": calc.project_id,
            "insurer": calc.insurer,
            "salesperson": calc.salesperson,
            "monthly_premium": to_money(calc.monthly_premium),
            "first_year_commission": first_year,
            "recurring_commission": recurring,
            "effective_rate": float(calc.effective_rate),
            "created_at": calc.created_at,
            "status": calc.status,
            "message": calc.message,
            "formatted": {
                "monthly_premium": format_currency(calc.monthly_premium),
                "first_year_commission": format_currency(calc.first_year_commission),
                "recurring_commission": format_currency(calc.recurring_commission),
            },
            "description": (
                f"{format_currency(calc.monthly_premium)} × {_pct(calc.effective_rate)} ({rate_source}) "
                f"× 0.875 × 12 = {format_currency(calc.first_year_commission)}"
            ),
        }

    def global_stats(self, stats: GlobalStats) -> dict:
        return {
            "total_first_year": to_money(stats.total_first_year),
            "total_recurring": to_money(stats.total_recurring),
            "average_per_contract": to_money(stats.average_per_contract),
            "count": stats.count,
        }

    def breakdown(self, stats: CommissionStats) -> dict:
        return {
            "total_monthly_commission": to_money(stats.total_monthly_commission),
            "total_annual_commission": to_money(stats.total_annual_commission),
            "total_recurring_commission": to_money(stats.total_recurring_commission),
            "by_insurer": {name: self._group(group) for name, group in stats.by_insurer.items()},
            "by_salesperson": {name: self._group(group) for name, group in stats.by_salesperson.items()},
            "success_rate": round(float(stats.success_rate), 2),
            "total_contracts": stats.total_contracts,
            "updated_at": stats.updated_at,
        }

    def _group(self, group: GroupSummary) -> dict:
        output = {
            "monthly_commission": to_money(group.monthly_commission),
            "annual_commission": to_money(group.annual_commission),
            "contract_count": group.contract_count,
            "average_rate": round(float(group.average_rate), 4),
        }
        if group.total_monthly_premium is not None:
            output["total_monthly_premium"] = to_money(group.total_monthly_premium)
            output["total_annual_premium"] = to_money(group.total_annual_premium)
        return output
