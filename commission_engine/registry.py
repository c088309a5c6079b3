"""
Rate Registry

Immutable lookup tables for insurer commission rates and salesperson
override rates. A registry is built once and handed to the calculator.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from .models import RateConfig, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_SALESPERSON_RATE = Decimal("0.03")


def _validate_rate(label: str, rate: Decimal) -> None:
    if not (0 <= rate <= 1):
        raise ValueError(f"{label} must be between 0 and 1, got: {rate}")


@dataclass(frozen=True)
class RateRegistry:
    """
    Ordered insurer configs plus salesperson overrides.

    Configs are an ordered tuple rather than a map: when two active configs
    share a name, the first one registered wins.
    """

    configs: tuple[RateConfig, ...]
    salesperson_rates: Mapping[str, Decimal] = field(default_factory=dict)
    default_salesperson_rate: Decimal = DEFAULT_SALESPERSON_RATE

    def __post_init__(self):
        seen_ids = set()
        for config in self.configs:
            if config.insurer_id in seen_ids:
                raise ValueError(f"Duplicate insurer_id: {config.insurer_id}")
            seen_ids.add(config.insurer_id)
            _validate_rate(f"{config.insurer_id} first_year_rate", config.first_year_rate)
            _validate_rate(f"{config.insurer_id} recurring_rate", config.recurring_rate)

        rates = {name: to_decimal(rate) for name, rate in self.salesperson_rates.items()}
        for name, rate in rates.items():
            _validate_rate(f"Salesperson rate for {name}", rate)
        default_rate = to_decimal(self.default_salesperson_rate)
        _validate_rate("default_salesperson_rate", default_rate)

        object.__setattr__(self, "configs", tuple(self.configs))
        object.__setattr__(self, "salesperson_rates", MappingProxyType(rates))
        object.__setattr__(self, "default_salesperson_rate", default_rate)

    def lookup_insurer_config(self, name: str) -> RateConfig | None:
        """Find the first active config whose name matches, ignoring case."""
        wanted = name.lower()
        for config in self.configs:
            if config.active and config.insurer_name.lower() == wanted:
                return config
        return None

    def list_active_configs(self) -> list[RateConfig]:
        return list(self.iter_active_configs())

    def iter_active_configs(self) -> Iterator[RateConfig]:
        return (config for config in self.configs if config.active)

    def lookup_salesperson_rate(self, name: str) -> Decimal:
        """Exact, case-sensitive match; unknown names get the default rate."""
        return self.salesperson_rates.get(name, self.default_salesperson_rate)

    @classmethod
    def from_dict(cls, data: dict) -> "RateRegistry":
        configs = tuple(RateConfig.from_dict(c) for c in data.get("configs", []))
        return cls(
            configs=configs,
            salesperson_rates=data.get("salesperson_rates", {}),
            default_salesperson_rate=data.get("default_salesperson_rate", DEFAULT_SALESPERSON_RATE),
        )


# =============================================================================
# COMPILED-IN TABLES
# =============================================================================

_REGISTERED_AT = datetime.now(timezone.utc).isoformat()

DEFAULT_RATE_CONFIGS = (
    RateConfig(
        insurer_id="spvie",
        insurer_name="SPVIE",
        first_year_rate=Decimal("0.30"),
        recurring_rate=Decimal("0.15"),
        created_at=_REGISTERED_AT,
    ),
    RateConfig(
        insurer_id="april",
        insurer_name="APRIL",
        first_year_rate=Decimal("0.28"),
        recurring_rate=Decimal("0.14"),
        created_at=_REGISTERED_AT,
    ),
    RateConfig(
        insurer_id="neoliane",
        insurer_name="NÉOLIANE",
        first_year_rate=Decimal("0.32"),
        recurring_rate=Decimal("0.16"),
        created_at=_REGISTERED_AT,
    ),
)

DEFAULT_SALESPERSON_RATES = {
    "SNOUSSI ZOUH": Decimal("0.306"),
    "Radhia MAATOUG": Decimal("0.274"),
    "Qualite premunia": Decimal("0.263"),
    "KHRIBI Mariem": Decimal("0.279"),
    "HADIR SFAR": Decimal("0.332"),
    "Gestion PREM": Decimal("0.287"),
    "DAHMANI Mouna": Decimal("0.269"),
    "CHAOUABI CH": Decimal("0.300"),
}


def default_registry() -> RateRegistry:
    """Registry holding the compiled-in insurer and salesperson tables."""
    return RateRegistry(
        configs=DEFAULT_RATE_CONFIGS,
        salesperson_rates=DEFAULT_SALESPERSON_RATES,
    )


def load_registry(path: str | Path) -> RateRegistry:
    """
    Build a registry from a JSON rate file.

    Expected shape:
        {"configs": [...], "salesperson_rates": {...}, "default_salesperson_rate": 0.03}
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    registry = RateRegistry.from_dict(data)
    logger.info(
        f"Loaded rate registry from {path}: {len(registry.configs)} configs, "
        f"{len(registry.salesperson_rates)} salesperson overrides"
    )
    return registry
