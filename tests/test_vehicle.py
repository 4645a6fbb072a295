#!/usr/bin/env python3
"""Tests for the Vehicle aggregate and quotes."""

import pytest
from datetime import date
from decimal import Decimal

from rental import (
    BookingOverlapIndex,
    BookingRecord,
    InsuranceOption,
    InvalidRangeError,
    QuantityPeriod,
    SeasonalRate,
    ServiceExtra,
    UnknownExtraError,
    Unavailability,
    Vehicle,
    VehicleAvailabilityRules,
    VehicleRateRules,
    VehicleSettings,
)


@pytest.fixture
def fiat():
    return Vehicle(
        vehicle_id="fiat-500",
        name="Fiat 500",
        availability=VehicleAvailabilityRules(
            blocked_dates=frozenset({date(2024, 7, 4)}),
            quantity_periods=(QuantityPeriod(date(2024, 6, 1), date(2024, 6, 10), 1),),
        ),
        rates=VehicleRateRules(
            base_daily_rate=Decimal("50"),
            seasonal_rates=(
                SeasonalRate("Summer", date(2024, 6, 1), date(2024, 8, 31), Decimal("75")),
            ),
        ),
        settings=VehicleSettings(max_days=7, security_deposit=Decimal("300")),
        vehicle_type="car",
        seats=4,
        fuel_type="lpg",
        transmission="semi-auto",
    )


class TestVehicleDefaults:
    """A vehicle built with only an ID and name."""

    def test_empty_rules(self):
        vehicle = Vehicle("bare", "Bare")
        assert vehicle.availability.is_empty
        assert vehicle.rates.base_daily_rate == Decimal("0")
        assert vehicle.settings.max_days == 30

    def test_always_available_and_free(self):
        vehicle = Vehicle("bare", "Bare")
        assert vehicle.is_available(BookingOverlapIndex(), "2024-01-01", "2024-01-31")
        assert vehicle.calculate_price("2024-01-01", "2024-01-31") == Decimal("0")


class TestVehicleLabels:
    """Human-readable labels for details."""

    def test_known_labels(self, fiat):
        assert fiat.type_label == "Car"
        assert fiat.fuel_label == "LPG"
        assert fiat.transmission_label == "Semi-Automatic"

    def test_unknown_label_passes_through(self):
        vehicle = Vehicle("x", "X", vehicle_type="tractor")
        assert vehicle.type_label == "tractor"
        assert vehicle.fuel_label == ""


class TestVehicleQuote:
    """Tests for Vehicle.quote."""

    def test_available_quote(self, fiat):
        quote = fiat.quote(BookingOverlapIndex(), "2024-07-10", "2024-07-12")
        assert quote.available
        assert quote.bookable
        assert quote.days == 3
        assert quote.total == Decimal("225")
        assert quote.security_deposit == Decimal("300")
        assert quote.conflict is None
        assert quote.length_problem is None

    def test_blocked_quote_still_priced(self, fiat):
        quote = fiat.quote(BookingOverlapIndex(), "2024-07-03", "2024-07-05")
        assert not quote.available
        assert quote.conflict.reason == Unavailability.BLOCKED_DATE
        assert quote.total == Decimal("225")

    def test_quantity_exhausted(self, fiat):
        bookings = BookingOverlapIndex([
            BookingRecord("fiat-500", date(2024, 6, 3), date(2024, 6, 4)),
        ])
        quote = fiat.quote(bookings, "2024-06-04", "2024-06-05")
        assert quote.conflict.reason == Unavailability.QUANTITY_EXHAUSTED

    def test_too_long_is_reported_separately(self, fiat):
        quote = fiat.quote(BookingOverlapIndex(), "2024-08-01", "2024-08-10")
        assert quote.available
        assert not quote.bookable
        assert quote.length_problem == "Maximum rental is 7 days (10 requested)"

    def test_invalid_range(self, fiat):
        with pytest.raises(InvalidRangeError):
            fiat.quote(BookingOverlapIndex(), "2024-08-10", "2024-08-01")

    def test_breakdown_matches_total(self, fiat):
        days = fiat.price_breakdown("2024-05-30", "2024-06-02")
        assert sum(d.rate for d in days) == fiat.calculate_price("2024-05-30", "2024-06-02")


class TestQuoteExtras:
    """Services, insurance and late returns on top of the rental price."""

    @pytest.fixture
    def equipped(self, fiat):
        fiat.services = (
            ServiceExtra("Child seat", Decimal("5"), "daily"),
            ServiceExtra("Airport delivery", Decimal("40"), "flat"),
        )
        fiat.insurance = (InsuranceOption("Full cover", Decimal("10"), "percentage"),)
        return fiat

    def test_no_extras(self, equipped):
        quote = equipped.quote(BookingOverlapIndex(), "2024-07-10", "2024-07-12")
        assert quote.extras == []
        assert quote.grand_total == quote.total == Decimal("225")

    def test_extras_added_to_grand_total(self, equipped):
        quote = equipped.quote(
            BookingOverlapIndex(), "2024-07-10", "2024-07-12",
            extras=["Child seat", "Airport delivery", "Full cover"],
        )
        assert [e.amount for e in quote.extras] == [Decimal("15"), Decimal("40"), Decimal("22.50")]
        assert quote.total == Decimal("225")
        assert quote.extras_total == Decimal("77.50")
        assert quote.grand_total == Decimal("302.50")

    def test_extras_leave_calculate_price_alone(self, equipped):
        equipped.quote(BookingOverlapIndex(), "2024-07-10", "2024-07-12", extras=["Child seat"])
        assert equipped.calculate_price("2024-07-10", "2024-07-12") == Decimal("225")

    def test_unknown_extra(self, equipped):
        with pytest.raises(UnknownExtraError):
            equipped.quote(BookingOverlapIndex(), "2024-07-10", "2024-07-12", extras=["Roof box"])

    def test_return_before_extra_day_hour(self, equipped):
        quote = equipped.quote(BookingOverlapIndex(), "2024-07-10", "2024-07-12", return_hour=10)
        assert quote.extras == []

    def test_late_return_charges_following_day(self, equipped):
        quote = equipped.quote(
            BookingOverlapIndex(), "2024-08-30", "2024-08-31",
            extras=["Child seat"], return_hour=18,
        )
        late, seat = quote.extras
        assert late.kind == "late return"
        # 2024-09-01 falls outside Summer, so the base rate applies
        assert late.amount == Decimal("50")
        assert seat.amount == Decimal("15")
        assert quote.days == 2
        assert quote.total == Decimal("150")
        assert quote.grand_total == Decimal("215")

    def test_late_return_raises_percentage_base(self, equipped):
        quote = equipped.quote(
            BookingOverlapIndex(), "2024-07-10", "2024-07-10",
            extras=["Full cover"], return_hour=20,
        )
        assert [e.amount for e in quote.extras] == [Decimal("75"), Decimal("15.00")]
