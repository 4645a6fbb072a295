"""Outward availability and price queries over a fleet store."""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Protocol

from .availability import find_conflict
from .availability_rules import VehicleAvailabilityRules
from .booking import BookingOverlapIndex, BookingRecord
from .dates import DateLike, ensure_range
from .pricing import calculate_price
from .rate_rules import VehicleRateRules

logger = logging.getLogger(__name__)


class RuleStore(Protocol):
    """The read contracts the engine consumes from its environment."""

    def fetch_availability_rules(self, vehicle_id: str) -> VehicleAvailabilityRules: ...

    def fetch_rate_rules(self, vehicle_id: str) -> VehicleRateRules: ...

    def fetch_bookings_overlapping(
        self, vehicle_id: str, start_date: DateLike, end_date: DateLike
    ) -> List[BookingRecord]: ...


class RentalService:
    """
    Answer availability and price queries for vehicles in a store.

    Construct once with a store and reuse; the service holds no per-request
    state. Each call reads a fresh snapshot from the store.

    Usage:
        service = RentalService(load_fleet("fleet/demo.yaml"))
        service.check_availability("fiat-500", "2024-06-10", "2024-06-12")
        # {'available': True}
        service.quote_price("fiat-500", "2024-06-10", "2024-06-12")
        # {'total': Decimal('225')}

    Availability is checked against a snapshot of bookings. Nothing here
    holds the slot between a check and a booking; callers that need at most
    one booking per slot must serialize check-and-book themselves.
    """

    def __init__(self, store: RuleStore):
        self.store = store

    def check_availability(self, vehicle_id: str, start_date: DateLike, end_date: DateLike) -> Dict[str, Any]:
        start, end = ensure_range(start_date, end_date)
        rules = self.store.fetch_availability_rules(vehicle_id)
        bookings = BookingOverlapIndex(
            self.store.fetch_bookings_overlapping(vehicle_id, start, end)
        )
        conflict = find_conflict(rules, bookings, vehicle_id, start, end)
        if conflict is not None:
            logger.info(
                "vehicle %s unavailable %s..%s: %s", vehicle_id, start, end, conflict.message
            )
        return {"available": conflict is None}

    def quote_price(self, vehicle_id: str, start_date: DateLike, end_date: DateLike) -> Dict[str, Decimal]:
        start, end = ensure_range(start_date, end_date)
        total = calculate_price(self.store.fetch_rate_rules(vehicle_id), start, end)
        logger.debug("vehicle %s priced %s..%s at %s", vehicle_id, start, end, total)
        return {"total": total}
