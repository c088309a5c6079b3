"""
COMMISSION ENGINE
Insurance brokerage commission projections
"""

from .models import CommissionCalculation, GlobalStats, NotApplicableReason, RateConfig
from .registry import RateRegistry, default_registry, load_registry
from .service import CommissionNotApplicable, CommissionService

__all__ = [
    'CommissionService',
    'CommissionNotApplicable',
    'CommissionCalculation',
    'GlobalStats',
    'NotApplicableReason',
    'RateConfig',
    'RateRegistry',
    'default_registry',
    'load_registry',
]
