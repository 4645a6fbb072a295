"""YAML fleet store: loads vehicles and bookings, appends new bookings."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from .availability_rules import QuantityPeriod, VehicleAvailabilityRules
from .booking import BookingOverlapIndex, BookingRecord
from .dates import DateLike, ensure_range, optional_date
from .errors import FleetFileError, UnknownVehicleError
from .extras import DAILY, FLAT, InsuranceOption, ServiceExtra
from .rate_rules import SeasonalRate, VehicleRateRules
from .settings import VehicleSettings
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

TRUE_FLAGS = {"yes", "true", "1", "on"}


# =============================================================================
# Value coercion
# =============================================================================


def _decimal(value: Any) -> Decimal:
    """Coerce a YAML number or string to Decimal; blanks and junk become 0."""
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        logger.warning("Ignoring non-numeric amount %r", value)
        return Decimal("0")


def _int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer value %r", value)
        return default


def _flag(value: Any) -> bool:
    """Accept true/yes/1/on in any of YAML's spellings."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_FLAGS


def _date(value: Any, context: str) -> Optional[date]:
    parsed = optional_date(value)
    if parsed is None and value not in (None, ""):
        logger.warning("Ignoring unparsable date %r in %s", value, context)
    return parsed


# =============================================================================
# Normalization
# =============================================================================


def normalize_blocked_dates(raw: Any) -> frozenset:
    """List of dates (or a mapping keyed by date) to a unique set."""
    if isinstance(raw, dict):
        raw = [key for key, enabled in raw.items() if _flag(enabled)]
    if not isinstance(raw, list):
        return frozenset()
    dates = (_date(value, "blockedDates") for value in raw)
    return frozenset(d for d in dates if d is not None)


def normalize_weekly_closures(raw: Any) -> frozenset:
    """List of weekday numbers (or {day: flag} mapping) to a set of 0..6."""
    if isinstance(raw, dict):
        raw = [key for key, enabled in raw.items() if _flag(enabled)]
    if not isinstance(raw, list):
        return frozenset()
    closures = set()
    for value in raw:
        day = _int(value, default=None)
        if day is None or not 0 <= day <= 6:
            logger.warning("Ignoring weekly closure %r (expected 0-6, 0 = Sunday)", value)
            continue
        closures.add(day)
    return frozenset(closures)


def normalize_quantity_period(dct: Dict[str, Any]) -> QuantityPeriod:
    return QuantityPeriod(
        start_date=_date(dct.get("startDate"), "quantityPeriods"),
        end_date=_date(dct.get("endDate"), "quantityPeriods"),
        quantity=max(0, _int(dct.get("quantity"))),
    )


def normalize_seasonal_rate(dct: Dict[str, Any]) -> SeasonalRate:
    return SeasonalRate(
        name=str(dct.get("name") or ""),
        start_date=_date(dct.get("startDate"), "seasonalRates"),
        end_date=_date(dct.get("endDate"), "seasonalRates"),
        rate=_decimal(dct.get("rate")),
        priority=_int(dct.get("priority")),
        recurring=_flag(dct.get("recurring")),
    )


def _entries(raw: Any) -> List[Dict[str, Any]]:
    """Keep only mapping entries of a YAML list."""
    if not isinstance(raw, list):
        return []
    return [entry for entry in raw if isinstance(entry, dict)]


def normalize_service(dct: Dict[str, Any]) -> ServiceExtra:
    return ServiceExtra(
        name=str(dct.get("name") or ""),
        price=_decimal(dct.get("price")),
        price_type=str(dct.get("priceType") or FLAT),
        description=str(dct.get("description") or ""),
    )


def normalize_insurance(dct: Dict[str, Any]) -> InsuranceOption:
    return InsuranceOption(
        name=str(dct.get("name") or ""),
        cost=_decimal(dct.get("cost")),
        cost_type=str(dct.get("costType") or DAILY),
        deductible=_decimal(dct.get("deductible")),
        description=str(dct.get("description") or ""),
    )


def _enabled(raw: Any, section: str) -> List[Dict[str, Any]]:
    """Entries switched on with ``enabled``; anything else is not offered."""
    entries = _entries(raw)
    enabled = [entry for entry in entries if _flag(entry.get("enabled"))]
    if len(enabled) < len(entries):
        logger.debug("Skipping %d disabled %s", len(entries) - len(enabled), section)
    return enabled


# =============================================================================
# Parsing
# =============================================================================


def _parse_availability(dct: Dict[str, Any]) -> VehicleAvailabilityRules:
    return VehicleAvailabilityRules(
        blocked_dates=normalize_blocked_dates(dct.get("blockedDates")),
        weekly_closures=normalize_weekly_closures(dct.get("weeklyClosures")),
        quantity_periods=tuple(
            normalize_quantity_period(p) for p in _entries(dct.get("quantityPeriods"))
        ),
        maintenance_notes=str(dct.get("maintenanceNotes") or ""),
    )


def _parse_rates(dct: Dict[str, Any]) -> VehicleRateRules:
    return VehicleRateRules(
        base_daily_rate=max(Decimal("0"), _decimal(dct.get("baseDailyRate"))),
        seasonal_rates=tuple(
            normalize_seasonal_rate(r) for r in _entries(dct.get("seasonalRates"))
        ),
    )


def _parse_settings(dct: Dict[str, Any]) -> VehicleSettings:
    return VehicleSettings(
        min_days=_int(dct.get("minDays"), default=None),
        max_days=_int(dct.get("maxDays"), default=None),
        security_deposit=_decimal(dct.get("securityDeposit")),
        cancellation_policy=dct.get("cancellationPolicy"),
        extra_day_hour=_int(dct.get("extraDayHour"), default=None),
    )


def _parse_vehicle(dct: Dict[str, Any]) -> Vehicle:
    if dct.get("id") is None:
        raise FleetFileError(f"Vehicle entry without an id: {dct!r}")
    vehicle_id = str(dct["id"])
    details = dct.get("details") or {}
    return Vehicle(
        vehicle_id=vehicle_id,
        name=str(dct.get("name") or vehicle_id),
        availability=_parse_availability(dct.get("availability") or {}),
        rates=_parse_rates(dct.get("rates") or {}),
        settings=_parse_settings(dct.get("settings") or {}),
        vehicle_type=details.get("vehicleType"),
        seats=_int(details.get("seats"), default=None),
        fuel_type=details.get("fuelType"),
        transmission=details.get("transmission"),
        services=[normalize_service(s) for s in _enabled(dct.get("services"), "services")],
        insurance=[normalize_insurance(i) for i in _enabled(dct.get("insurance"), "insurance options")],
    )


def _parse_booking(dct: Dict[str, Any]) -> BookingRecord:
    return BookingRecord(
        vehicle_id=str(dct.get("vehicleId")),
        start_date=_date(dct.get("startDate"), "bookings"),
        end_date=_date(dct.get("endDate"), "bookings"),
        quantity=max(0, _int(dct.get("quantity"), default=1)),
        order_id=dct.get("orderId"),
    )


def _booking_to_dict(record: BookingRecord) -> Dict[str, Any]:
    """Serialize a BookingRecord to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "vehicleId": record.vehicle_id,
        "startDate": record.start_date.isoformat(),
        "endDate": record.end_date.isoformat(),
        "quantity": record.quantity,
    }
    if record.order_id is not None:
        d["orderId"] = record.order_id
    return d


# =============================================================================
# Store
# =============================================================================


class FleetStore:
    """Read-only snapshot of a fleet: the data source the engine consults."""

    def __init__(self, vehicles: Iterable[Vehicle], bookings: Optional[Iterable[BookingRecord]] = None):
        self._vehicles: Dict[str, Vehicle] = {}
        for vehicle in vehicles:
            if vehicle.vehicle_id in self._vehicles:
                logger.warning("Duplicate vehicle id %r; keeping the last one", vehicle.vehicle_id)
            self._vehicles[vehicle.vehicle_id] = vehicle
        self._bookings = BookingOverlapIndex(bookings)

    def vehicle_ids(self) -> List[str]:
        return list(self._vehicles)

    def fetch_vehicle(self, vehicle_id: str) -> Vehicle:
        try:
            return self._vehicles[vehicle_id]
        except KeyError:
            raise UnknownVehicleError(vehicle_id)

    def fetch_availability_rules(self, vehicle_id: str) -> VehicleAvailabilityRules:
        return self.fetch_vehicle(vehicle_id).availability

    def fetch_rate_rules(self, vehicle_id: str) -> VehicleRateRules:
        return self.fetch_vehicle(vehicle_id).rates

    def fetch_bookings_overlapping(
        self, vehicle_id: str, start_date: DateLike, end_date: DateLike
    ) -> List[BookingRecord]:
        start, end = ensure_range(start_date, end_date)
        return self._bookings.overlapping(vehicle_id, start, end)


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FleetFileError(f"{filename}: expected a mapping at the top level")
    return data


def load_fleet(filename: Union[str, Path]) -> FleetStore:
    """Load a fleet (vehicles and bookings) from a YAML file."""
    data = _load_raw(filename)
    if "vehicles" not in data:
        raise FleetFileError(f"{filename}: missing 'vehicles' section")

    vehicles = [_parse_vehicle(v) for v in _entries(data.get("vehicles"))]
    bookings = [_parse_booking(b) for b in _entries(data.get("bookings"))]
    logger.debug("Loaded %d vehicles and %d bookings from %s", len(vehicles), len(bookings), filename)
    return FleetStore(vehicles, bookings)


def save_booking(filename: Union[str, Path], record: BookingRecord) -> None:
    """
    Append a booking to a fleet YAML file.

    Loads the raw YAML, appends the booking to the bookings list,
    and writes back to the file. There is no locking: concurrent writers
    can lose updates or double-book a vehicle.
    """
    data = _load_raw(filename)

    if data.get("bookings") is None:
        data["bookings"] = []

    data["bookings"].append(_booking_to_dict(record))

    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )
