"""Decide whether a vehicle can be booked for a date range."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .availability_rules import QuantityPeriod, VehicleAvailabilityRules
from .booking import BookingOverlapIndex
from .dates import DateLike, dates_overlap, ensure_range, iter_days, sunday_weekday

logger = logging.getLogger(__name__)


class Unavailability(Enum):
    """Why a range was rejected. Lower value = checked first."""

    BLOCKED_DATE = 1
    WEEKLY_CLOSURE = 2
    QUANTITY_EXHAUSTED = 3


@dataclass
class Conflict:
    """The first rule that rejected a requested range."""

    reason: Unavailability
    day: Optional[date] = None
    period: Optional[QuantityPeriod] = None
    booked: Optional[int] = None

    @property
    def message(self) -> str:
        if self.reason == Unavailability.BLOCKED_DATE:
            return f"{self.day.isoformat()} is blocked"
        if self.reason == Unavailability.WEEKLY_CLOSURE:
            return f"closed on {self.day.strftime('%A')}s ({self.day.isoformat()})"
        return (
            f"{self.booked} booked against {self.period.quantity} available"
            f" ({self.period.start_date.isoformat()} to {self.period.end_date.isoformat()})"
        )


def find_conflict(
    rules: VehicleAvailabilityRules,
    bookings: BookingOverlapIndex,
    vehicle_id: str,
    start_date: DateLike,
    end_date: DateLike,
) -> Optional[Conflict]:
    """
    Return the first reason a range cannot be booked, or None.

    Logic:
    - Every day in the range is checked against blocked dates, then
      weekly closures (0 = Sunday). First hit wins.
    - Every quantity period overlapping the whole range is checked once:
      booked units overlapping the range >= period quantity rejects.
      A quantity of 0 always rejects.

    Blocked/closure checks are per day while quantity checks are per range,
    so a booking anywhere in the requested range counts against every
    overlapping period, even one covering a different part of it.
    """
    start, end = ensure_range(start_date, end_date)

    for day in iter_days(start, end):
        if day in rules.blocked_dates:
            return Conflict(reason=Unavailability.BLOCKED_DATE, day=day)
        if sunday_weekday(day) in rules.weekly_closures:
            return Conflict(reason=Unavailability.WEEKLY_CLOSURE, day=day)

    booked = None
    for period in rules.quantity_periods:
        if not period.is_complete:
            continue
        if not dates_overlap(start, end, period.start_date, period.end_date):
            continue
        # Same range for every period, so look it up once
        if booked is None:
            booked = bookings.booked_quantity(vehicle_id, start, end)
        if booked >= period.quantity:
            logger.debug(
                "vehicle %s: %d booked >= %d in period %s..%s",
                vehicle_id, booked, period.quantity, period.start_date, period.end_date,
            )
            return Conflict(
                reason=Unavailability.QUANTITY_EXHAUSTED, period=period, booked=booked
            )

    return None


def is_available(
    rules: VehicleAvailabilityRules,
    bookings: BookingOverlapIndex,
    vehicle_id: str,
    start_date: DateLike,
    end_date: DateLike,
) -> bool:
    """True when no blocked date, weekly closure or quantity cap rejects the range."""
    return find_conflict(rules, bookings, vehicle_id, start_date, end_date) is None
