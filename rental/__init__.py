"""
Rental vehicle availability and pricing.

This package provides the rules engine behind a rental catalogue:
- VehicleAvailabilityRules / QuantityPeriod: blocked dates, weekly closures, unit caps
- VehicleRateRules / SeasonalRate: base daily rate and prioritized seasonal overrides
- BookingRecord / BookingOverlapIndex: existing bookings and overlap sums
- is_available / find_conflict: can a range be booked?
- calculate_price / price_breakdown: what does it cost?
- ServiceExtra / InsuranceOption: optional add-ons priced flat, per day or by percentage
- Vehicle / Quote: per-vehicle aggregate combining the above with settings
- FleetStore / load_fleet: YAML-backed data source
- RentalService: availability and price queries over a store
"""

from .errors import (
    RentalError,
    InvalidRangeError,
    UnknownVehicleError,
    UnknownExtraError,
    FleetFileError,
)
from .dates import (
    parse_date,
    ensure_range,
    iter_days,
    rental_days,
    dates_overlap,
    sunday_weekday,
    format_rental_period,
)
from .availability_rules import QuantityPeriod, VehicleAvailabilityRules
from .rate_rules import SeasonalRate, VehicleRateRules
from .booking import BookingRecord, BookingOverlapIndex
from .availability import Unavailability, Conflict, find_conflict, is_available
from .pricing import DayRate, calculate_price, price_breakdown
from .settings import VehicleSettings, check_rental_length, is_late_return
from .extras import ServiceExtra, InsuranceOption, ExtraCharge, price_extras
from .vehicle import Vehicle, Quote
from .loader import FleetStore, load_fleet, save_booking
from .service import RentalService

__all__ = [
    "RentalError",
    "InvalidRangeError",
    "UnknownVehicleError",
    "UnknownExtraError",
    "FleetFileError",
    "parse_date",
    "ensure_range",
    "iter_days",
    "rental_days",
    "dates_overlap",
    "sunday_weekday",
    "format_rental_period",
    "QuantityPeriod",
    "VehicleAvailabilityRules",
    "SeasonalRate",
    "VehicleRateRules",
    "BookingRecord",
    "BookingOverlapIndex",
    "Unavailability",
    "Conflict",
    "find_conflict",
    "is_available",
    "DayRate",
    "calculate_price",
    "price_breakdown",
    "VehicleSettings",
    "check_rental_length",
    "is_late_return",
    "ServiceExtra",
    "InsuranceOption",
    "ExtraCharge",
    "price_extras",
    "Vehicle",
    "Quote",
    "FleetStore",
    "load_fleet",
    "save_booking",
    "RentalService",
]
