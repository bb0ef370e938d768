"""Aggregate one import run into an ImportResult."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from .models import Booking, ImportResult, ShiftCandidate, SlotDemand

UTC = timezone.utc


def now_utc_iso() -> str:
    return datetime.now(UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def new_import_id(source: str) -> str:
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return f"{source}-{stamp}-{uuid4().hex[:8]}"


def date_range(bookings: Iterable[Booking]) -> dict[str, str | None]:
    dates = sorted({b.date for b in bookings})
    if not dates:
        return {"from": None, "to": None}
    return {"from": dates[0].isoformat(), "to": dates[-1].isoformat()}


def tour_type_counts(bookings: Iterable[Booking]) -> dict[str, dict[str, int]]:
    counts: dict[str, dict[str, int]] = {}
    for booking in bookings:
        item = counts.setdefault(booking.tour_type, {"count": 0, "guests": 0})
        item["count"] += 1
        item["guests"] += booking.guest_count
    return dict(sorted(counts.items()))


def build_import_result(
    bookings: Sequence[Booking],
    shifts: Sequence[ShiftCandidate],
    *,
    source: str,
    unmatched: Sequence[dict[str, Any]] = (),
    skipped_events: int = 0,
    slot_demands: Sequence[SlotDemand] = (),
    import_id: str | None = None,
    generated_at: str | None = None,
) -> ImportResult:
    """Totals cover every accepted booking; unmatched ones stay listed separately."""
    return ImportResult(
        import_id=import_id or new_import_id(source),
        source=source,
        generated_at=generated_at or now_utc_iso(),
        shift_candidates=tuple(shifts),
        total_bookings=len(bookings),
        total_tours=sum(s.tour_count for s in shifts),
        total_guests=sum(b.guest_count for b in bookings),
        date_range=date_range(bookings),
        by_tour_type=tour_type_counts(bookings),
        unmatched=tuple(unmatched),
        skipped_events=skipped_events,
        slot_demands=tuple(slot_demands),
    )
