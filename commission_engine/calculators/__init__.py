"""
Calculators Package

Provides the calculation components of the commission engine.
"""

from .commission import CommissionCalculator
from .stats import StatsAggregator

__all__ = [
    "CommissionCalculator",
    "StatsAggregator",
]
