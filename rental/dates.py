"""Calendar helpers shared by the availability and pricing engines.

All ranges in this package are inclusive on both ends and carry no time
component.
"""

import re
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Tuple, Union

from dateutil.relativedelta import relativedelta

from .errors import InvalidRangeError

DateLike = Union[date, str]

# fromisoformat also takes basic, week and ordinal forms on newer Pythons
ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date(value: DateLike) -> date:
    """
    Parse an ISO ``YYYY-MM-DD`` string, or pass a date through.

    Datetimes are truncated to their calendar date so they compare equal
    to the dates held in rule sets.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not ISO_DATE.fullmatch(text):
        raise InvalidRangeError(f"Invalid date '{value}' (expected YYYY-MM-DD)")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidRangeError(f"Invalid date '{value}' (expected YYYY-MM-DD)") from None


def ensure_range(start: DateLike, end: DateLike) -> Tuple[date, date]:
    """Parse both endpoints and reject inverted ranges."""
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date > end_date:
        raise InvalidRangeError(
            f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )
    return start_date, end_date


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def rental_days(start: date, end: date) -> int:
    """Number of days in an inclusive range."""
    return (end - start).days + 1


def dates_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    """Inclusive interval intersection: touching endpoints overlap."""
    return start1 <= end2 and end1 >= start2


def sunday_weekday(day: date) -> int:
    """Weekday number with 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def anchor_to_year(day: date, year: int) -> date:
    """Keep month/day, replace year. Feb 29 clamps to Feb 28 in non-leap years."""
    return day + relativedelta(year=year)


def recurring_window_contains(start: date, end: date, day: date) -> bool:
    """
    Check a yearly recurring window against a day.

    The window is re-anchored to the year of ``day``. If the anchored end falls
    before the anchored start, the window spans New Year and covers both the
    tail of the previous year's window (up to the anchored end) and the head
    of this year's window (from the anchored start).
    """
    season_start = anchor_to_year(start, day.year)
    season_end = anchor_to_year(end, day.year)
    if season_end < season_start:
        return day >= season_start or day <= season_end
    return season_start <= day <= season_end


def format_rental_period(start: date, end: date) -> str:
    """Human-readable period, e.g. '2024-06-10 to 2024-06-12 (3 days)'."""
    days = rental_days(start, end)
    unit = "day" if days == 1 else "days"
    return f"{start.isoformat()} to {end.isoformat()} ({days} {unit})"


def optional_date(value: Optional[DateLike]) -> Optional[date]:
    """Parse a date, returning None for empty or unparsable values."""
    if value is None or value == "":
        return None
    try:
        return parse_date(value)
    except InvalidRangeError:
        return None
