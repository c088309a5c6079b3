"""
Commission Service - Main Orchestrator

Wires the rate registry, calculators and output builder together, and
offers dict-in / dict-out methods for the API entry points.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from .calculators import CommissionCalculator, StatsAggregator
from .models import (
    CalculationOutcome,
    CommissionCalculation,
    CommissionStats,
    GlobalStats,
    NotApplicableReason,
    RateConfig,
)
from .output import OutputBuilder
from .registry import RateRegistry, default_registry
from .validators import RequestValidator

logger = logging.getLogger(__name__)


class CommissionNotApplicable(Exception):
    """Raised by the dict API when no commission can be computed."""

    def __init__(self, reason: NotApplicableReason):
        super().__init__(f"Commission not applicable: {reason.value}")
        self.reason = reason


class CommissionService:
    """
    Main entry point to the commission engine.

    The registry is injected; when omitted the compiled-in tables are used.
    """

    def __init__(self, registry: Optional[RateRegistry] = None):
        self.registry = registry if registry is not None else default_registry()
        self.validator = RequestValidator()
        self.calculator = CommissionCalculator(self.registry)
        self.aggregator = StatsAggregator()
        self.output_builder = OutputBuilder()

    # -------------------------------------------------------------------------
    # Engine API
    # -------------------------------------------------------------------------

    def calculate(self, insurer: str, monthly_premium, salesperson: Optional[str] = None) -> Optional[CommissionCalculation]:
        return self.calculator.calculate(insurer, monthly_premium, salesperson)

    def evaluate(self, insurer: str, monthly_premium, salesperson: Optional[str] = None) -> CalculationOutcome:
        return self.calculator.evaluate(insurer, monthly_premium, salesperson)

    def aggregate(self, calculations: Iterable[CommissionCalculation]) -> GlobalStats:
        return self.aggregator.aggregate(calculations)

    def breakdown(self, calculations: Iterable[CommissionCalculation]) -> CommissionStats:
        return self.aggregator.breakdown(calculations)

    def list_active_configs(self) -> list[RateConfig]:
        return self.registry.list_active_configs()

    # -------------------------------------------------------------------------
    # Dict API
    # -------------------------------------------------------------------------

    def calculate_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate a raw request and calculate commission.

        Raises ValueError for malformed requests and CommissionNotApplicable
        when the engine cannot compute a commission.
        """
        self.validator.validate_calculation_request(data)

        outcome = self.evaluate(data["insurer"], data["monthly_premium"], data.get("salesperson"))
        if not outcome.is_success:
            raise CommissionNotApplicable(outcome.reason)

        return self.output_builder.calculation(outcome.calculation)

    def stats_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Aggregate stored calculation records supplied as dicts."""
        self.validator.validate_stats_request(data)

        calculations = [CommissionCalculation.from_dict(c) for c in data["calculations"]]
        logger.info(f"Aggregating {len(calculations)} calculations")

        return {
            "global": self.output_builder.global_stats(self.aggregate(calculations)),
            "breakdown": self.output_builder.breakdown(self.breakdown(calculations)),
        }

    def configs_to_dict(self) -> Dict[str, Any]:
        return {"configs": [self.output_builder.config(c) for c in self.list_active_configs()]}
