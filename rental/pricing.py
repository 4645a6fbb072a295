"""Price a rental from a base daily rate and seasonal overrides."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from .dates import DateLike, ensure_range, iter_days
from .rate_rules import VehicleRateRules


@dataclass
class DayRate:
    """The rate charged for one day and the season that supplied it."""

    day: date
    rate: Decimal
    season: Optional[str] = None


def price_breakdown(rates: VehicleRateRules, start_date: DateLike, end_date: DateLike) -> List[DayRate]:
    """
    Per-day rates for an inclusive range.

    - No positive base rate: every day is priced at 0 and seasons are ignored.
    - Otherwise each day takes the rate of the highest-priority seasonal rule
      covering it (earlier list entry wins on equal priority), falling back
      to the base rate.
    """
    start, end = ensure_range(start_date, end_date)
    base = Decimal(rates.base_daily_rate)

    if base <= 0:
        return [DayRate(day=day, rate=Decimal("0")) for day in iter_days(start, end)]

    ordered = rates.by_priority()
    result = []
    for day in iter_days(start, end):
        day_rate = DayRate(day=day, rate=base)
        for seasonal in ordered:
            if seasonal.applies_to(day):
                day_rate = DayRate(day=day, rate=Decimal(seasonal.rate), season=seasonal.name)
                break
        result.append(day_rate)
    return result


def calculate_price(rates: VehicleRateRules, start_date: DateLike, end_date: DateLike) -> Decimal:
    """Total price for an inclusive date range."""
    start, end = ensure_range(start_date, end_date)
    if Decimal(rates.base_daily_rate) <= 0:
        return Decimal("0")
    return sum((d.rate for d in price_breakdown(rates, start, end)), Decimal("0"))
