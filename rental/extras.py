"""Optional services and insurance charged on top of the rental price."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Sequence

from .errors import UnknownExtraError

FLAT = "flat"
DAILY = "daily"
PERCENTAGE = "percentage"

SERVICE = "service"
INSURANCE = "insurance"
LATE_RETURN = "late return"

CENT = Decimal("0.01")


@dataclass(frozen=True)
class ServiceExtra:
    """An add-on such as a child seat or GPS, priced flat or per day."""

    name: str
    price: Decimal = Decimal("0")
    price_type: str = FLAT
    description: str = ""

    def cost(self, days: int) -> Decimal:
        if self.price_type == DAILY:
            return self.price * days
        return self.price


@dataclass(frozen=True)
class InsuranceOption:
    """
    A cover option. ``cost_type`` is one of:
    - daily: cost per rental day (the default)
    - flat: cost once per rental
    - percentage: cost percent of the rental price, rounded to cents
    """

    name: str
    cost: Decimal = Decimal("0")
    cost_type: str = DAILY
    deductible: Decimal = Decimal("0")
    description: str = ""

    def charge(self, days: int, rental_total: Decimal) -> Decimal:
        if self.cost_type == FLAT:
            return self.cost
        if self.cost_type == PERCENTAGE:
            return (rental_total * self.cost / Decimal("100")).quantize(CENT, rounding=ROUND_HALF_UP)
        return self.cost * days


@dataclass
class ExtraCharge:
    """One priced line added to a quote."""

    name: str
    kind: str
    amount: Decimal


def price_extras(
    vehicle_id: str,
    services: Sequence[ServiceExtra],
    insurance: Sequence[InsuranceOption],
    chosen: Iterable[str],
    days: int,
    rental_total: Decimal,
) -> List[ExtraCharge]:
    """
    Price the chosen extras by name, in the order chosen.

    Services are matched before insurance options of the same name.
    Repeated names are charged once. Names not on offer raise
    UnknownExtraError.
    """
    services_by_name = {s.name: s for s in services}
    insurance_by_name = {i.name: i for i in insurance}

    charges = []
    seen = set()
    for name in chosen:
        if name in seen:
            continue
        seen.add(name)
        if name in services_by_name:
            amount = services_by_name[name].cost(days)
            charges.append(ExtraCharge(name=name, kind=SERVICE, amount=amount))
        elif name in insurance_by_name:
            amount = insurance_by_name[name].charge(days, rental_total)
            charges.append(ExtraCharge(name=name, kind=INSURANCE, amount=amount))
        else:
            raise UnknownExtraError(vehicle_id, name)
    return charges
