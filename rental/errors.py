"""Exceptions raised by the rental engine and its fleet store."""


class RentalError(Exception):
    """Base class for rental engine errors."""


class InvalidRangeError(RentalError, ValueError):
    """A date range is inverted or one of its dates is not a calendar date."""


class UnknownVehicleError(RentalError, LookupError):
    """No rule set exists for the requested vehicle ID."""

    def __init__(self, vehicle_id: str):
        super().__init__(f"Unknown vehicle '{vehicle_id}'")
        self.vehicle_id = vehicle_id


class FleetFileError(RentalError):
    """A fleet YAML file does not have the expected top-level shape."""


class UnknownExtraError(RentalError, LookupError):
    """A requested service or insurance option is not offered (or not enabled)."""

    def __init__(self, vehicle_id: str, name: str):
        super().__init__(f"Vehicle '{vehicle_id}' has no extra named '{name}'")
        self.vehicle_id = vehicle_id
        self.name = name
