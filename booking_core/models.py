"""Records produced and consumed by the booking import engine.

Field names on the Python side are snake_case; ``to_dict()`` emits the
camelCase keys used by the hand-off document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

UNKNOWN_TOUR_TYPE = "Unknown"


@dataclass(frozen=True)
class TourTypeConfig:
    name: str
    course: str
    roles: tuple[str, ...]
    duration_hours: float
    max_tours_per_shift: int
    is_night_tour: bool = False
    color: str = "#9e9e9e"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "course": self.course,
            "roles": list(self.roles),
            "durationHoursPerTour": self.duration_hours,
            "maxToursPerGuidePerShift": self.max_tours_per_shift,
            "isNightTour": self.is_night_tour,
            "colorHint": self.color,
        }


@dataclass(frozen=True)
class RawBooking:
    """One accepted record as emitted by a source parser."""

    time: str
    product: str
    guest_count: int
    customer_name: str | None = None
    date: date | None = None
    raw_source: str = ""


@dataclass(frozen=True)
class Booking:
    date: date
    time: str
    tour_type: str
    guest_count: int
    product: str
    minutes: int | None
    customer_name: str | None = None
    raw_source: str = ""

    @property
    def is_known(self) -> bool:
        return self.tour_type != UNKNOWN_TOUR_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "time": self.time,
            "tourType": self.tour_type,
            "guestCount": self.guest_count,
            "product": self.product,
            "customerName": self.customer_name,
        }


@dataclass(frozen=True)
class TourSlot:
    time: str
    tour_type: str
    guest_count: int
    product: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "tourType": self.tour_type,
            "guestCount": self.guest_count,
            "product": self.product,
        }


@dataclass(frozen=True)
class ShiftCandidate:
    id: str
    name: str
    course: str
    date: date
    tours: tuple[TourSlot, ...]
    start_time: str
    end_time: str
    arrival_time: str
    tour_count: int
    total_guests: int
    required_roles: tuple[str, ...]
    duration_hours: float
    color: str = "#9e9e9e"
    is_night_tour: bool = False
    notes: str = ""
    # Filled in by the scheduling surface after hand-off.
    assigned_staff: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "course": self.course,
            "date": self.date.isoformat(),
            "tours": [t.to_dict() for t in self.tours],
            "startTime": self.start_time,
            "endTime": self.end_time,
            "arrivalTime": self.arrival_time,
            "tourCount": self.tour_count,
            "totalGuests": self.total_guests,
            "requiredRoles": list(self.required_roles),
            "durationHours": self.duration_hours,
            "color": self.color,
            "isNightTour": self.is_night_tour,
            "notes": self.notes,
            "assignedStaff": dict(self.assigned_staff),
        }


@dataclass(frozen=True)
class SlotDemand:
    """Per (time slot, tour type) staffing demand used by the CSV import."""

    time_slot: str
    tour_type: str
    shift_template: dict[str, Any]
    tour_count: int
    total_guests: int
    required_staff: int
    tours_per_guide: int
    duration_hours: float
    roles: tuple[str, ...]
    date: date
    bookings: tuple[Booking, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "timeSlot": self.time_slot,
            "tourType": self.tour_type,
            "shiftTemplate": dict(self.shift_template),
            "tourCount": self.tour_count,
            "totalGuests": self.total_guests,
            "requiredStaff": self.required_staff,
            "toursPerGuide": self.tours_per_guide,
            "durationHours": self.duration_hours,
            "roles": list(self.roles),
            "date": self.date.isoformat(),
            "bookings": [b.to_dict() for b in self.bookings],
        }


@dataclass(frozen=True)
class ImportResult:
    import_id: str
    source: str
    generated_at: str
    shift_candidates: tuple[ShiftCandidate, ...]
    total_bookings: int
    total_tours: int
    total_guests: int
    date_range: dict[str, str | None]
    by_tour_type: dict[str, dict[str, int]] = field(default_factory=dict)
    unmatched: tuple[dict[str, Any], ...] = ()
    skipped_events: int = 0
    slot_demands: tuple[SlotDemand, ...] = ()

    @property
    def total_shifts(self) -> int:
        return len(self.shift_candidates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "importId": self.import_id,
            "source": self.source,
            "generatedAt": self.generated_at,
            "shiftCandidates": [s.to_dict() for s in self.shift_candidates],
            "slotDemands": [s.to_dict() for s in self.slot_demands],
            "totalBookings": self.total_bookings,
            "totalShifts": self.total_shifts,
            "totalTours": self.total_tours,
            "totalGuests": self.total_guests,
            "dateRange": dict(self.date_range),
            "byTourType": {k: dict(v) for k, v in self.by_tour_type.items()},
            "unmatched": [dict(u) for u in self.unmatched],
            "skippedEvents": self.skipped_events,
        }
