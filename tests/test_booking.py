#!/usr/bin/env python3
"""Tests for BookingRecord and BookingOverlapIndex."""

from datetime import date

from rental import BookingOverlapIndex, BookingRecord


class TestBookingRecord:
    """Tests for BookingRecord."""

    def test_create_with_defaults(self):
        record = BookingRecord("van-1", date(2024, 6, 1), date(2024, 6, 3))
        assert record.vehicle_id == "van-1"
        assert record.quantity == 1
        assert record.order_id is None

    def test_overlaps_inclusive(self):
        record = BookingRecord("van-1", date(2024, 6, 1), date(2024, 6, 3))
        assert record.overlaps(date(2024, 6, 3), date(2024, 6, 5))
        assert not record.overlaps(date(2024, 6, 4), date(2024, 6, 5))

    def test_missing_dates_never_overlap(self):
        record = BookingRecord("van-1", None, date(2024, 6, 3))
        assert not record.overlaps(date(2024, 1, 1), date(2024, 12, 31))


class TestBookingOverlapIndex:
    """Tests for booked_quantity and overlapping."""

    def test_empty_index(self):
        index = BookingOverlapIndex()
        assert len(index) == 0
        assert index.booked_quantity("van-1", date(2024, 6, 1), date(2024, 6, 30)) == 0

    def test_sums_overlapping_quantities(self):
        index = BookingOverlapIndex([
            BookingRecord("van-1", date(2024, 6, 1), date(2024, 6, 5), quantity=2),
            BookingRecord("van-1", date(2024, 6, 5), date(2024, 6, 8), quantity=1),
            BookingRecord("van-1", date(2024, 6, 20), date(2024, 6, 22), quantity=4),
        ])
        assert index.booked_quantity("van-1", date(2024, 6, 5), date(2024, 6, 6)) == 3
        assert index.booked_quantity("van-1", date(2024, 6, 1), date(2024, 6, 30)) == 7

    def test_filters_by_vehicle(self):
        index = BookingOverlapIndex([
            BookingRecord("van-1", date(2024, 6, 1), date(2024, 6, 5)),
            BookingRecord("car-9", date(2024, 6, 1), date(2024, 6, 5), quantity=3),
        ])
        assert index.booked_quantity("van-1", date(2024, 6, 2), date(2024, 6, 2)) == 1
        assert index.booked_quantity("car-9", date(2024, 6, 2), date(2024, 6, 2)) == 3

    def test_overlapping_returns_records(self):
        late = BookingRecord("van-1", date(2024, 6, 10), date(2024, 6, 12), order_id="77")
        index = BookingOverlapIndex([
            BookingRecord("van-1", date(2024, 6, 1), date(2024, 6, 3)),
            late,
        ])
        assert index.overlapping("van-1", date(2024, 6, 12), date(2024, 6, 14)) == [late]

    def test_accepts_generator(self):
        records = (BookingRecord("van-1", date(2024, 6, d), date(2024, 6, d)) for d in (1, 2, 3))
        index = BookingOverlapIndex(records)
        assert len(index) == 3
        assert index.booked_quantity("van-1", date(2024, 6, 1), date(2024, 6, 3)) == 3
