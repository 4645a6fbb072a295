"""Per-vehicle rental settings: allowed rental length, late returns and deposit."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from .dates import rental_days

logger = logging.getLogger(__name__)

DEFAULT_MIN_DAYS = 1
DEFAULT_MAX_DAYS = 30
DEFAULT_EXTRA_DAY_HOUR = 14


class VehicleSettings:
    """Booking constraints that sit alongside availability and pricing."""

    def __init__(
            self,
            min_days: Optional[int] = None,
            max_days: Optional[int] = None,
            security_deposit: Optional[Decimal] = None,
            cancellation_policy: Optional[str] = None,
            extra_day_hour: Optional[int] = None,
    ):
        self.min_days = max(1, min_days or DEFAULT_MIN_DAYS)
        self.max_days = max(1, max_days or DEFAULT_MAX_DAYS)
        self.security_deposit = Decimal(security_deposit or 0)
        self.cancellation_policy = cancellation_policy or ""

        if extra_day_hour is None:
            extra_day_hour = DEFAULT_EXTRA_DAY_HOUR
        self.extra_day_hour = min(23, max(0, extra_day_hour))

        if self.min_days > self.max_days:
            logger.warning(
                "min_days %d is greater than max_days %d; no rental length will pass",
                self.min_days, self.max_days,
            )


def check_rental_length(settings: VehicleSettings, start: date, end: date) -> Optional[str]:
    """Return a message if the rental is shorter or longer than allowed."""
    days = rental_days(start, end)
    if days < settings.min_days:
        return f"Minimum rental is {settings.min_days} days ({days} requested)"
    if days > settings.max_days:
        return f"Maximum rental is {settings.max_days} days ({days} requested)"
    return None


def is_late_return(settings: VehicleSettings, return_hour: Optional[int]) -> bool:
    """Returning after the extra-day hour (24h clock) costs one more day."""
    if return_hour is None:
        return False
    if not 0 <= return_hour <= 23:
        raise ValueError(f"Return hour must be 0-23 (got {return_hour})")
    return return_hour > settings.extra_day_hour
