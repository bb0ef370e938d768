"""Tests for booking normalization and the import summary."""

from datetime import date

import pytest

from booking_core.models import RawBooking
from booking_core.normalizer import (
    REASON_BAD_TIME,
    REASON_UNKNOWN_TOUR,
    normalize_bookings,
    partition_bookings,
)
from booking_core.summary import build_import_result
from booking_core.synthesizer import synthesize_shifts
from booking_core.taxonomy import load_taxonomy

DAY = date(2025, 9, 20)


@pytest.fixture(scope="module")
def taxonomy():
    return load_taxonomy()


class TestNormalize:
    def test_default_date_applied(self, taxonomy):
        [booking] = normalize_bookings([RawBooking("9:15 AM", "Tree Tops Zipline Tour", 2)], taxonomy, DAY)
        assert booking.date == DAY
        assert booking.time == "9:15am"
        assert booking.minutes == 555
        assert booking.tour_type == "Tree Tops Zipline Tour"

    def test_record_date_wins(self, taxonomy):
        raw = RawBooking("9:15am", "Tree Tops Zipline Tour", 2, date=date(2025, 9, 1))
        [booking] = normalize_bookings([raw], taxonomy, DAY)
        assert booking.date == date(2025, 9, 1)

    def test_missing_date_raises(self, taxonomy):
        with pytest.raises(ValueError):
            normalize_bookings([RawBooking("9:15am", "Tree Tops Zipline Tour", 2)], taxonomy)

    def test_unknown_kept(self, taxonomy):
        [booking] = normalize_bookings([RawBooking("11:00am", "Sunset Kayak Tour", 3)], taxonomy, DAY)
        assert booking.tour_type == "Unknown"
        assert booking.is_known is False

    def test_partition_reasons(self, taxonomy):
        bookings = normalize_bookings(
            [
                RawBooking("9:15am", "Tree Tops Zipline Tour", 2),
                RawBooking("11:00am", "Sunset Kayak Tour", 3),
                RawBooking("after lunch", "Forest Flight Zipline Tour", 1),
            ],
            taxonomy,
            DAY,
        )
        schedulable, unmatched = partition_bookings(bookings)
        assert [b.product for b in schedulable] == ["Tree Tops Zipline Tour"]
        assert [u["reason"] for u in unmatched] == [REASON_UNKNOWN_TOUR, REASON_BAD_TIME]
        assert unmatched[0]["product"] == "Sunset Kayak Tour"


class TestImportResult:
    def _result(self, taxonomy, rows):
        bookings = normalize_bookings([RawBooking(*row) for row in rows], taxonomy, DAY)
        schedulable, unmatched = partition_bookings(bookings)
        shifts = synthesize_shifts(schedulable, taxonomy)
        return build_import_result(bookings, shifts, source="csv", unmatched=unmatched)

    def test_unknown_counted_but_not_scheduled(self, taxonomy):
        result = self._result(
            taxonomy,
            [("9:15am", "Tree Tops Zipline Tour", 2), ("11:00am", "Sunset Kayak Tour", 3)],
        )
        assert result.total_bookings == 2
        assert result.total_guests == 5
        assert result.total_shifts == 1
        assert result.total_tours == 1
        assert all(t.tour_type != "Unknown" for s in result.shift_candidates for t in s.tours)
        assert result.by_tour_type["Unknown"] == {"count": 1, "guests": 3}

    def test_only_unknown(self, taxonomy):
        result = self._result(taxonomy, [("11:00am", "Sunset Kayak Tour", 3)])
        assert result.total_shifts == 0
        assert result.total_bookings == 1
        assert len(result.unmatched) == 1

    def test_empty_run(self):
        result = build_import_result([], [], source="ics")
        assert result.total_bookings == 0
        assert result.date_range == {"from": None, "to": None}
        assert result.import_id.startswith("ics-")
        assert result.generated_at.endswith("Z")

    def test_to_dict_field_names(self, taxonomy):
        result = self._result(taxonomy, [("9:15am", "Tree Tops Zipline Tour", 2)])
        data = result.to_dict()
        for key in ("shiftCandidates", "totalBookings", "totalTours", "totalGuests", "dateRange", "generatedAt"):
            assert key in data
        assert data["dateRange"] == {"from": "2025-09-20", "to": "2025-09-20"}
        assert data["totalShifts"] == 1
