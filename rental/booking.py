"""Existing bookings and the overlap index used by the availability engine."""

from datetime import date
from typing import Iterable, List, Optional

from .dates import dates_overlap


class BookingRecord:
    """One line item of a confirmed or held order."""

    def __init__(
            self,
            vehicle_id: str,
            start_date: Optional[date],
            end_date: Optional[date],
            quantity: int = 1,
            order_id: Optional[str] = None,
    ):
        self.vehicle_id = vehicle_id
        self.start_date = start_date
        self.end_date = end_date
        self.quantity = quantity
        self.order_id = order_id

    def overlaps(self, start: date, end: date) -> bool:
        """Records missing a date never overlap anything."""
        if self.start_date is None or self.end_date is None:
            return False
        return dates_overlap(start, end, self.start_date, self.end_date)

    def __repr__(self):
        return (
            f"<BookingRecord {self.vehicle_id} {self.start_date}..{self.end_date}"
            f" x{self.quantity}>"
        )


class BookingOverlapIndex:
    """Answers how many units of a vehicle are already booked in a range."""

    def __init__(self, records: Optional[Iterable[BookingRecord]] = None):
        self._records = tuple(records or ())

    def __len__(self):
        return len(self._records)

    def overlapping(self, vehicle_id: str, start: date, end: date) -> List[BookingRecord]:
        """Records for a vehicle whose range overlaps [start, end]."""
        return [
            r for r in self._records
            if r.vehicle_id == vehicle_id and r.overlaps(start, end)
        ]

    def booked_quantity(self, vehicle_id: str, start: date, end: date) -> int:
        """Sum of quantities over overlapping records for a vehicle."""
        return sum(r.quantity for r in self.overlapping(vehicle_id, start, end))
