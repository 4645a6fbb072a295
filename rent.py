#!/usr/bin/env python3
"""
Unified CLI for rental vehicle availability and pricing.

Commands:
  vehicles   - List vehicles in the fleet
  available  - Check whether a vehicle can be booked for a date range
  price      - Price a rental (optionally day by day)
  quote      - Availability, price, extras, deposit and length limits together
  extras     - List the services and insurance a vehicle offers
  bookings   - List existing bookings for a vehicle
  book       - Record a new booking if the range is available
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from rental import (
    BookingOverlapIndex,
    BookingRecord,
    DayRate,
    Quote,
    RentalError,
    RentalService,
    Vehicle,
    ensure_range,
    format_rental_period,
    load_fleet,
    save_booking,
)
from rental.config import Config, setup_logging

logger = logging.getLogger("rental.cli")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_money(amount: Optional[Decimal]) -> str:
    """Format an amount for display."""
    return f"${amount:,.2f}" if amount is not None else "-"


def format_closures(closures) -> str:
    """Format weekly closure numbers (0 = Sunday) as day abbreviations."""
    names = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    if not closures:
        return "-"
    return ", ".join(names[d] for d in sorted(closures))


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Vehicles command
# =============================================================================


def make_vehicle_table(vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert vehicles to table rows."""
    rows = []
    for v in vehicles:
        rows.append(
            [
                v.vehicle_id,
                v.name,
                v.type_label or "-",
                str(v.seats) if v.seats is not None else "-",
                format_money(v.rates.base_daily_rate),
                str(len(v.rates.seasonal_rates)),
                format_closures(v.availability.weekly_closures),
                truncate(v.availability.maintenance_notes),
            ]
        )
    return rows


def cmd_vehicles(args):
    """List vehicles in the fleet."""
    store = load_fleet(args.fleet)
    vehicles = [store.fetch_vehicle(vid) for vid in sorted(store.vehicle_ids())]

    print(f"Fleet: {args.fleet}")
    print(f"Vehicles: {len(vehicles)}")
    print()

    if not vehicles:
        print("No vehicles found.")
        return 0

    headers = ["ID", "Name", "Type", "Seats", "Daily", "Seasons", "Closed", "Notes"]
    print(tabulate(make_vehicle_table(vehicles), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Available / price / quote commands
# =============================================================================


def cmd_available(args):
    """Check whether a vehicle can be booked for a date range."""
    store = load_fleet(args.fleet)
    service = RentalService(store)
    start, end = ensure_range(args.start, args.end)

    result = service.check_availability(args.vehicle_id, start, end)
    period = format_rental_period(start, end)
    if result["available"]:
        print(f"{args.vehicle_id}: AVAILABLE {period}")
    else:
        vehicle = store.fetch_vehicle(args.vehicle_id)
        bookings = BookingOverlapIndex(store.fetch_bookings_overlapping(args.vehicle_id, start, end))
        conflict = vehicle.find_conflict(bookings, start, end)
        print(f"{args.vehicle_id}: NOT AVAILABLE {period}")
        print(f"  Reason: {conflict.message}")
    return 0


def make_breakdown_table(days: List[DayRate]) -> List[List[str]]:
    """Convert per-day rates to table rows."""
    return [
        [d.day.isoformat(), d.day.strftime("%a"), d.season or "base", format_money(d.rate)]
        for d in days
    ]


def cmd_price(args):
    """Price a rental."""
    store = load_fleet(args.fleet)
    start, end = ensure_range(args.start, args.end)
    total = RentalService(store).quote_price(args.vehicle_id, start, end)["total"]

    print(f"{args.vehicle_id}: {format_rental_period(start, end)}")
    if args.breakdown:
        vehicle = store.fetch_vehicle(args.vehicle_id)
        print()
        print(
            tabulate(
                make_breakdown_table(vehicle.price_breakdown(start, end)),
                headers=["Date", "Day", "Season", "Rate"],
                tablefmt="simple",
            )
        )
        print()
    print(f"Total: {format_money(total)}")
    return 0


def print_quote(quote: Quote, vehicle: Vehicle) -> None:
    print(f"Vehicle: {vehicle.name} ({vehicle.vehicle_id})")
    print(f"Period:  {format_rental_period(quote.start_date, quote.end_date)}")
    if quote.available:
        print("Status:  AVAILABLE")
    else:
        print(f"Status:  NOT AVAILABLE ({quote.conflict.message})")
    if quote.length_problem:
        print(f"Length:  {quote.length_problem}")
    print(f"Total:   {format_money(quote.total)}")
    if quote.extras:
        for charge in quote.extras:
            print(f"  + {charge.name} ({charge.kind}): {format_money(charge.amount)}")
        print(f"Grand:   {format_money(quote.grand_total)}")
    if quote.security_deposit:
        print(f"Deposit: {format_money(quote.security_deposit)}")


def quote_from_args(args, store, vehicle: Vehicle) -> Quote:
    start, end = ensure_range(args.start, args.end)
    bookings = BookingOverlapIndex(store.fetch_bookings_overlapping(vehicle.vehicle_id, start, end))
    return vehicle.quote(
        bookings, start, end, extras=args.extra or (), return_hour=args.return_hour
    )


def cmd_quote(args):
    """Availability, price, extras, deposit and length limits together."""
    store = load_fleet(args.fleet)
    vehicle = store.fetch_vehicle(args.vehicle_id)

    print_quote(quote_from_args(args, store, vehicle), vehicle)
    return 0


def make_extras_table(vehicle: Vehicle) -> List[List[str]]:
    """Convert a vehicle's enabled services and insurance options to table rows."""
    rows = []
    for s in vehicle.services:
        rows.append([s.name, "service", format_money(s.price), s.price_type, "-", truncate(s.description)])
    for i in vehicle.insurance:
        cost = f"{i.cost}%" if i.cost_type == "percentage" else format_money(i.cost)
        rows.append([i.name, "insurance", cost, i.cost_type, format_money(i.deductible), truncate(i.description)])
    return rows


def cmd_extras(args):
    """List the services and insurance options a vehicle offers."""
    store = load_fleet(args.fleet)
    vehicle = store.fetch_vehicle(args.vehicle_id)

    print(f"Vehicle: {vehicle.name} ({vehicle.vehicle_id})")
    print(f"Extra day charged for returns after {vehicle.settings.extra_day_hour}:00")
    print()

    rows = make_extras_table(vehicle)
    if not rows:
        print("No extras offered.")
        return 0

    headers = ["Name", "Kind", "Price", "Basis", "Deductible", "Description"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Bookings commands
# =============================================================================


def make_booking_table(records: List[BookingRecord]) -> List[List[str]]:
    """Convert booking records to table rows."""
    rows = []
    for r in records:
        rows.append(
            [
                r.start_date.isoformat() if r.start_date else "-",
                r.end_date.isoformat() if r.end_date else "-",
                str(r.quantity),
                r.order_id or "-",
            ]
        )
    return rows


def cmd_bookings(args):
    """List existing bookings for a vehicle."""
    store = load_fleet(args.fleet)
    vehicle = store.fetch_vehicle(args.vehicle_id)
    start, end = ensure_range(args.start or "0001-01-01", args.end or "9999-12-31")

    records = sorted(
        store.fetch_bookings_overlapping(vehicle.vehicle_id, start, end),
        key=lambda r: r.start_date,
    )

    print(f"Vehicle: {vehicle.name} ({vehicle.vehicle_id})")
    if args.start or args.end:
        print(f"Showing: {start.isoformat()} to {end.isoformat()}")
    print(f"Bookings: {len(records)} ({sum(r.quantity for r in records)} units)")
    print()

    if not records:
        print("No bookings found.")
        return 0

    headers = ["Start", "End", "Qty", "Order"]
    print(tabulate(make_booking_table(records), headers=headers, tablefmt="simple"))
    return 0


def cmd_book(args):
    """Record a new booking if the range is available."""
    if args.quantity < 1:
        print(f"Error: quantity must be at least 1 (got {args.quantity})")
        return 1

    store = load_fleet(args.fleet)
    vehicle = store.fetch_vehicle(args.vehicle_id)
    quote = quote_from_args(args, store, vehicle)

    print_quote(quote, vehicle)
    print()

    if not quote.available:
        print("Error: vehicle is not available for this period")
        return 1
    if quote.length_problem:
        print(f"Error: {quote.length_problem}")
        return 1

    record = BookingRecord(
        vehicle_id=vehicle.vehicle_id,
        start_date=quote.start_date,
        end_date=quote.end_date,
        quantity=args.quantity,
        order_id=args.order,
    )

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    # Check and write are not atomic; see RentalService
    save_booking(args.fleet, record)
    logger.info("booked %r", record)
    print("Booking saved.")
    return 0


# =============================================================================
# Main
# =============================================================================


def add_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("vehicle_id", type=str, help="Vehicle ID (see 'vehicles')")
    parser.add_argument("start", type=str, help="First rental day (YYYY-MM-DD)")
    parser.add_argument("end", type=str, help="Last rental day, inclusive (YYYY-MM-DD)")


def add_extra_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--extra",
        action="append",
        metavar="NAME",
        help="Add a service or insurance option by name (repeatable, see 'extras')",
    )
    parser.add_argument(
        "--return-hour",
        type=int,
        choices=range(24),
        metavar="HOUR",
        help="Return hour, 0-23; returns after the vehicle's extra-day hour cost one more day",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rental vehicle availability and pricing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles
  %(prog)s -f fleet/demo.yaml available fiat-500 2024-07-03 2024-07-05
  %(prog)s price fiat-500 2024-06-10 2024-06-12 --breakdown
  %(prog)s quote vw-transporter 2024-12-22 2025-01-03
  %(prog)s quote fiat-500 2024-07-10 2024-07-12 --extra "Child seat" --return-hour 16
  %(prog)s extras fiat-500
  %(prog)s bookings fiat-500 --start 2024-06-01
  %(prog)s book fiat-500 2024-07-10 2024-07-12 --order 1042 --dry-run
""",
    )
    parser.add_argument(
        "-f",
        "--fleet",
        type=Path,
        default=Path(Config.FLEET_FILE),
        help="Path to fleet YAML file (default: $RENTAL_FLEET_FILE or fleet/demo.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log diagnostics at DEBUG level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("vehicles", help="List vehicles in the fleet")

    available_parser = subparsers.add_parser(
        "available", help="Check whether a vehicle can be booked for a date range"
    )
    add_range_arguments(available_parser)

    price_parser = subparsers.add_parser("price", help="Price a rental")
    add_range_arguments(price_parser)
    price_parser.add_argument(
        "--breakdown",
        action="store_true",
        help="Show the rate charged for each day",
    )

    quote_parser = subparsers.add_parser(
        "quote", help="Availability, price, extras, deposit and length limits together"
    )
    add_range_arguments(quote_parser)
    add_extra_arguments(quote_parser)

    extras_parser = subparsers.add_parser(
        "extras", help="List the services and insurance a vehicle offers"
    )
    extras_parser.add_argument("vehicle_id", type=str, help="Vehicle ID")

    bookings_parser = subparsers.add_parser("bookings", help="List bookings for a vehicle")
    bookings_parser.add_argument("vehicle_id", type=str, help="Vehicle ID")
    bookings_parser.add_argument(
        "--start", type=str, help="Only bookings overlapping from this date (YYYY-MM-DD)"
    )
    bookings_parser.add_argument(
        "--end", type=str, help="Only bookings overlapping up to this date (YYYY-MM-DD)"
    )

    book_parser = subparsers.add_parser("book", help="Record a new booking")
    add_range_arguments(book_parser)
    add_extra_arguments(book_parser)
    book_parser.add_argument(
        "--quantity",
        type=int,
        default=1,
        help="Units to book (default: 1)",
    )
    book_parser.add_argument("--order", type=str, help="Order reference")
    book_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be booked without saving",
    )
    return parser


COMMANDS = {
    "vehicles": cmd_vehicles,
    "available": cmd_available,
    "price": cmd_price,
    "quote": cmd_quote,
    "extras": cmd_extras,
    "bookings": cmd_bookings,
    "book": cmd_book,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    # Validate fleet file exists
    if not args.fleet.exists():
        print(f"Error: File not found: {args.fleet}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except RentalError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
