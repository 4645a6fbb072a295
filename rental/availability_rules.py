"""Availability rule snapshot for a single vehicle."""

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class QuantityPeriod:
    """How many units of a vehicle exist during an inclusive date range."""

    start_date: Optional[date]
    end_date: Optional[date]
    quantity: int = 0

    @property
    def is_complete(self) -> bool:
        """Periods missing either date are skipped by the engine."""
        return self.start_date is not None and self.end_date is not None


@dataclass(frozen=True)
class VehicleAvailabilityRules:
    """Blocked dates, weekly closures and quantity caps for one vehicle."""

    blocked_dates: FrozenSet[date] = field(default_factory=frozenset)
    weekly_closures: FrozenSet[int] = field(default_factory=frozenset)  # 0 = Sunday
    quantity_periods: Tuple[QuantityPeriod, ...] = ()
    maintenance_notes: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.blocked_dates or self.weekly_closures or self.quantity_periods)
