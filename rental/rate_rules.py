"""Rate rule snapshot: base daily rate plus seasonal overrides."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from .dates import recurring_window_contains


@dataclass(frozen=True)
class SeasonalRate:
    """A date-range-scoped override of the daily price."""

    name: str
    start_date: Optional[date]
    end_date: Optional[date]
    rate: Decimal
    priority: int = 0
    recurring: bool = False

    def applies_to(self, day: date) -> bool:
        """
        Check whether this rule covers a day.

        Rules missing either date never match. Recurring rules compare
        month/day against the year of ``day``; others use literal dates.
        """
        if self.start_date is None or self.end_date is None:
            return False
        if self.recurring:
            return recurring_window_contains(self.start_date, self.end_date, day)
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class VehicleRateRules:
    """Pricing inputs for one vehicle."""

    base_daily_rate: Decimal = Decimal("0")
    seasonal_rates: Tuple[SeasonalRate, ...] = ()

    def by_priority(self) -> Tuple[SeasonalRate, ...]:
        """Seasonal rates, highest priority first. Ties keep list order."""
        return tuple(sorted(self.seasonal_rates, key=lambda r: r.priority, reverse=True))
