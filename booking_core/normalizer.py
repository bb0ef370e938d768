"""Attach canonical tour types and dates to parser output."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from .models import Booking, RawBooking
from .taxonomy import TourTaxonomy
from .time_utils import canonical_time_label, parse_time_label

logger = logging.getLogger(__name__)

REASON_UNKNOWN_TOUR = "unknown_tour_type"
REASON_BAD_TIME = "unparseable_time"


def normalize_booking(raw: RawBooking, taxonomy: TourTaxonomy, default_date: date | None = None) -> Booking:
    booking_date = raw.date or default_date
    if booking_date is None:
        raise ValueError(f"booking has no date and no default date was given: {raw.raw_source or raw.product!r}")
    return Booking(
        date=booking_date,
        time=canonical_time_label(raw.time),
        tour_type=taxonomy.classify(raw.product),
        guest_count=raw.guest_count,
        product=raw.product,
        minutes=parse_time_label(raw.time),
        customer_name=raw.customer_name,
        raw_source=raw.raw_source,
    )


def normalize_bookings(
    raw_bookings: Iterable[RawBooking],
    taxonomy: TourTaxonomy,
    default_date: date | None = None,
) -> list[Booking]:
    """Classify every parser record. Unknown tour types are kept for the summary."""
    return [normalize_booking(raw, taxonomy, default_date) for raw in raw_bookings]


def partition_bookings(bookings: Iterable[Booking]) -> tuple[list[Booking], list[dict[str, Any]]]:
    """Split bookings into those usable for shifts and unmatched summary rows."""
    schedulable: list[Booking] = []
    unmatched: list[dict[str, Any]] = []
    for booking in bookings:
        reason = None
        if not booking.is_known:
            reason = REASON_UNKNOWN_TOUR
        elif booking.minutes is None:
            reason = REASON_BAD_TIME
        if reason is None:
            schedulable.append(booking)
            continue
        logger.info("not scheduling %r at %s: %s", booking.product, booking.time, reason)
        unmatched.append(
            {
                "product": booking.product,
                "time": booking.time,
                "date": booking.date.isoformat(),
                "guestCount": booking.guest_count,
                "reason": reason,
            }
        )
    return schedulable, unmatched
