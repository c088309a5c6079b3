"""
Domain Models for the Commission Engine

These dataclasses provide type-safe representations of rate configurations,
calculation records and the statistics derived from them.
All monetary values and rates use Decimal for precision.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum

# =============================================================================
# STATUS / REASON CONSTANTS
# =============================================================================

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"
STATUS_PENDING = "pending"

VALID_STATUSES = (STATUS_SUCCESS, STATUS_ERROR, STATUS_PENDING)

UNASSIGNED_SALESPERSON = "unassigned"


def to_decimal(value) -> Decimal:
    """Convert a raw number (int, float, str or Decimal) to Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got: {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Expected a number, got: {value!r}")


class NotApplicableReason(Enum):
    """Why a calculation produced no record."""

    INVALID_INPUT = "invalid_input"
    UNKNOWN_INSURER = "unknown_insurer"
    PREMIUM_OUT_OF_RANGE = "premium_out_of_range"
    INTERNAL_ERROR = "internal_error"


# =============================================================================
# CONFIGURATION MODELS
# =============================================================================


@dataclass(frozen=True)
class RateConfig:
    """Commission rates for one insurer."""

    insurer_id: str
    insurer_name: str
    first_year_rate: Decimal
    recurring_rate: Decimal
    active: bool = True
    created_at: str = ""
    minimum_premium: Decimal | None = None  # None = no lower bound
    maximum_premium: Decimal | None = None  # None = no upper bound

    def __post_init__(self):
        if not isinstance(self.active, bool):
            raise ValueError(f"active must be true or false for {self.insurer_id}, got: {self.active!r}")
        for name in ("first_year_rate", "recurring_rate", "minimum_premium", "maximum_premium"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, to_decimal(value))

    def accepts_premium(self, monthly_premium: Decimal) -> bool:
        if self.minimum_premium is not None and monthly_premium < self.minimum_premium:
            return False
        if self.maximum_premium is not None and monthly_premium > self.maximum_premium:
            return False
        return True

    @classmethod
    def from_dict(cls, data: dict) -> "RateConfig":
        return cls(
            insurer_id=data["insurer_id"],
            insurer_name=data["insurer_name"],
            first_year_rate=data["first_year_rate"],
            recurring_rate=data["recurring_rate"],
            active=data.get("active", True),
            created_at=data.get("created_at", ""),
            minimum_premium=data.get("minimum_premium"),
            maximum_premium=data.get("maximum_premium"),
        )


# =============================================================================
# CALCULATION MODELS
# =============================================================================


@dataclass(frozen=True)
class CommissionCalculation:
    """A single projected commission for one sale.

    Both commission figures are annualized (monthly commission x 12).
    """

    id: str
    insurer: str
    monthly_premium: Decimal
    first_year_commission: Decimal
    recurring_commission: Decimal
    effective_rate: Decimal
    created_at: str
    salesperson: str | None = None
    project_id: int = 0
    status: str = STATUS_SUCCESS
    message: str | None = None

    def __post_init__(self):
        for name in ("monthly_premium", "first_year_commission", "recurring_commission", "effective_rate"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @classmethod
    def from_dict(cls, data: dict) -> "CommissionCalculation":
        status = data.get("status", STATUS_SUCCESS)
        if status not in VALID_STATUSES:
            raise ValueError(f"Invalid status: {status}. Must be one of {', '.join(VALID_STATUSES)}")
        return cls(
            id=str(data["id"]),
            insurer=data["insurer"],
            monthly_premium=data["monthly_premium"],
            first_year_commission=data["first_year_commission"],
            recurring_commission=data["recurring_commission"],
            effective_rate=data["effective_rate"],
            created_at=data.get("created_at", ""),
            salesperson=data.get("salesperson"),
            project_id=int(data.get("project_id", 0)),
            status=status,
            message=data.get("message"),
        )


@dataclass(frozen=True)
class CalculationOutcome:
    """
    Tagged result of a calculation attempt.

    Exactly one of `calculation` and `reason` is set.
    """

    calculation: CommissionCalculation | None = None
    reason: NotApplicableReason | None = None

    @property
    def is_success(self) -> bool:
        return self.calculation is not None

    @classmethod
    def success(cls, calculation: CommissionCalculation) -> "CalculationOutcome":
        return cls(calculation=calculation)

    @classmethod
    def not_applicable(cls, reason: NotApplicableReason) -> "CalculationOutcome":
        return cls(reason=reason)


# =============================================================================
# STATISTICS MODELS
# =============================================================================


@dataclass(frozen=True)
class GlobalStats:
    """Totals over a collection of calculations."""

    total_first_year: Decimal = Decimal("0")
    total_recurring: Decimal = Decimal("0")
    average_per_contract: Decimal = Decimal("0")
    count: int = 0


@dataclass(frozen=True)
class GroupSummary:
    """Commission totals for one insurer or one salesperson."""

    monthly_commission: Decimal = Decimal("0")
    annual_commission: Decimal = Decimal("0")
    contract_count: int = 0
    average_rate: Decimal = Decimal("0")
    # Insurer groups only
    total_monthly_premium: Decimal | None = None
    total_annual_premium: Decimal | None = None


@dataclass(frozen=True)
class CommissionStats:
    """Breakdown of a collection of calculations by insurer and salesperson."""

    total_monthly_commission: Decimal = Decimal("0")
    total_annual_commission: Decimal = Decimal("0")
    total_recurring_commission: Decimal = Decimal("0")
    by_insurer: dict[str, GroupSummary] = field(default_factory=dict)
    by_salesperson: dict[str, GroupSummary] = field(default_factory=dict)
    success_rate: Decimal = Decimal("0")
    total_contracts: int = 0
    updated_at: str = ""
