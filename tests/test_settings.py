#!/usr/bin/env python3
"""Tests for VehicleSettings and rental-length checks."""

from datetime import date
from decimal import Decimal

import pytest

from rental import VehicleSettings, check_rental_length, is_late_return


class TestVehicleSettings:
    """Tests for defaults and clamping."""

    def test_defaults(self):
        settings = VehicleSettings()
        assert settings.min_days == 1
        assert settings.max_days == 30
        assert settings.security_deposit == Decimal("0")
        assert settings.cancellation_policy == ""

    def test_explicit_values(self):
        settings = VehicleSettings(min_days=3, max_days=14, security_deposit=Decimal("250"))
        assert settings.min_days == 3
        assert settings.max_days == 14
        assert settings.security_deposit == Decimal("250")

    def test_non_positive_limits_clamp_to_one(self):
        settings = VehicleSettings(min_days=-2, max_days=-1)
        assert settings.min_days == 1
        assert settings.max_days == 1

    def test_min_above_max_warns(self, caplog):
        settings = VehicleSettings(min_days=10, max_days=5)
        assert settings.min_days == 10
        assert settings.max_days == 5
        assert "min_days 10 is greater than max_days 5" in caplog.text

    def test_consistent_limits_do_not_warn(self, caplog):
        VehicleSettings(min_days=5, max_days=5)
        assert caplog.text == ""

    def test_extra_day_hour_defaults_to_two_pm(self):
        assert VehicleSettings().extra_day_hour == 14

    def test_extra_day_hour_midnight_kept(self):
        assert VehicleSettings(extra_day_hour=0).extra_day_hour == 0

    def test_extra_day_hour_clamped(self):
        assert VehicleSettings(extra_day_hour=30).extra_day_hour == 23
        assert VehicleSettings(extra_day_hour=-4).extra_day_hour == 0


class TestCheckRentalLength:
    """Tests for check_rental_length."""

    def test_within_limits(self):
        settings = VehicleSettings(min_days=2, max_days=5)
        assert check_rental_length(settings, date(2024, 6, 1), date(2024, 6, 2)) is None
        assert check_rental_length(settings, date(2024, 6, 1), date(2024, 6, 5)) is None

    def test_too_short(self):
        settings = VehicleSettings(min_days=3)
        message = check_rental_length(settings, date(2024, 6, 1), date(2024, 6, 2))
        assert message == "Minimum rental is 3 days (2 requested)"

    def test_too_long(self):
        message = check_rental_length(VehicleSettings(), date(2024, 6, 1), date(2024, 7, 1))
        assert message == "Maximum rental is 30 days (31 requested)"


class TestIsLateReturn:
    """Tests for is_late_return."""

    def test_no_return_hour(self):
        assert not is_late_return(VehicleSettings(), None)

    def test_at_extra_day_hour_is_on_time(self):
        assert not is_late_return(VehicleSettings(extra_day_hour=14), 14)

    def test_after_extra_day_hour_is_late(self):
        assert is_late_return(VehicleSettings(extra_day_hour=14), 15)

    def test_invalid_hour(self):
        with pytest.raises(ValueError):
            is_late_return(VehicleSettings(), 24)
