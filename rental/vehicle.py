"""Vehicle class - the aggregate of details, rules and settings for one vehicle."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from .availability import Conflict, find_conflict
from .availability_rules import VehicleAvailabilityRules
from .booking import BookingOverlapIndex
from .dates import DateLike, ensure_range, rental_days
from .extras import LATE_RETURN, ExtraCharge, InsuranceOption, ServiceExtra, price_extras
from .pricing import DayRate, calculate_price, price_breakdown
from .rate_rules import VehicleRateRules
from .settings import VehicleSettings, check_rental_length, is_late_return

VEHICLE_TYPE_LABELS = {
    "car": "Car",
    "scooter": "Scooter",
    "van": "Van",
    "suv": "SUV",
    "truck": "Truck",
}

FUEL_TYPE_LABELS = {
    "gasoline": "Gasoline",
    "diesel": "Diesel",
    "electric": "Electric",
    "hybrid": "Hybrid",
    "lpg": "LPG",
}

TRANSMISSION_LABELS = {
    "manual": "Manual",
    "automatic": "Automatic",
    "semi-auto": "Semi-Automatic",
}


@dataclass
class Quote:
    """Availability, price and deposit for a requested rental."""

    vehicle_id: str
    start_date: date
    end_date: date
    days: int
    available: bool
    total: Decimal
    security_deposit: Decimal = Decimal("0")
    conflict: Optional[Conflict] = None
    length_problem: Optional[str] = None
    extras: List[ExtraCharge] = field(default_factory=list)

    @property
    def bookable(self) -> bool:
        return self.available and self.length_problem is None

    @property
    def extras_total(self) -> Decimal:
        return sum((e.amount for e in self.extras), Decimal("0"))

    @property
    def grand_total(self) -> Decimal:
        """Rental price plus extras. The deposit is held separately."""
        return self.total + self.extras_total


class Vehicle:
    """A rentable listing with its own rule sets."""

    def __init__(
        self,
        vehicle_id: str,
        name: str,
        availability: Optional[VehicleAvailabilityRules] = None,
        rates: Optional[VehicleRateRules] = None,
        settings: Optional[VehicleSettings] = None,
        vehicle_type: Optional[str] = None,
        seats: Optional[int] = None,
        fuel_type: Optional[str] = None,
        transmission: Optional[str] = None,
        services: Sequence[ServiceExtra] = (),
        insurance: Sequence[InsuranceOption] = (),
    ):
        self.vehicle_id = vehicle_id
        self.name = name
        self.availability = availability or VehicleAvailabilityRules()
        self.rates = rates or VehicleRateRules()
        self.settings = settings or VehicleSettings()
        self.vehicle_type = vehicle_type
        self.seats = seats
        self.fuel_type = fuel_type
        self.transmission = transmission
        self.services = tuple(services)
        self.insurance = tuple(insurance)

    @property
    def type_label(self) -> str:
        return VEHICLE_TYPE_LABELS.get(self.vehicle_type, self.vehicle_type or "")

    @property
    def fuel_label(self) -> str:
        return FUEL_TYPE_LABELS.get(self.fuel_type, self.fuel_type or "")

    @property
    def transmission_label(self) -> str:
        return TRANSMISSION_LABELS.get(self.transmission, self.transmission or "")

    def find_conflict(
        self, bookings: BookingOverlapIndex, start: DateLike, end: DateLike
    ) -> Optional[Conflict]:
        return find_conflict(self.availability, bookings, self.vehicle_id, start, end)

    def is_available(self, bookings: BookingOverlapIndex, start: DateLike, end: DateLike) -> bool:
        return self.find_conflict(bookings, start, end) is None

    def calculate_price(self, start: DateLike, end: DateLike) -> Decimal:
        return calculate_price(self.rates, start, end)

    def price_breakdown(self, start: DateLike, end: DateLike) -> List[DayRate]:
        return price_breakdown(self.rates, start, end)

    def late_return_fee(self, end: date) -> Decimal:
        """One more day, priced at the rate of the day after the rental ends."""
        extra_day = end + timedelta(days=1)
        return price_breakdown(self.rates, extra_day, extra_day)[0].rate

    def quote(
        self,
        bookings: BookingOverlapIndex,
        start: DateLike,
        end: DateLike,
        extras: Iterable[str] = (),
        return_hour: Optional[int] = None,
    ) -> Quote:
        """
        Combine availability, price, rental-length settings and extras.

        The length check is reported separately and does not affect
        ``available``. ``extras`` names enabled services or insurance
        options. A ``return_hour`` after the vehicle's extra-day hour adds
        a late-return charge and counts one more day for daily extras.
        ``total`` stays the plain rental price; see ``grand_total``.
        """
        start_date, end_date = ensure_range(start, end)
        conflict = self.find_conflict(bookings, start_date, end_date)
        days = rental_days(start_date, end_date)
        total = self.calculate_price(start_date, end_date)

        charges = []
        charged_days = days
        charged_total = total
        if is_late_return(self.settings, return_hour):
            fee = self.late_return_fee(end_date)
            charges.append(ExtraCharge(name="Late return", kind=LATE_RETURN, amount=fee))
            charged_days += 1
            charged_total += fee

        charges.extend(
            price_extras(
                self.vehicle_id, self.services, self.insurance, extras, charged_days, charged_total
            )
        )

        return Quote(
            vehicle_id=self.vehicle_id,
            start_date=start_date,
            end_date=end_date,
            days=days,
            available=conflict is None,
            total=total,
            security_deposit=self.settings.security_deposit,
            conflict=conflict,
            length_problem=check_rental_length(self.settings, start_date, end_date),
            extras=charges,
        )
