"""Group bookings by date and course and cut them into guiding shifts."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date
from typing import Any
from uuid import uuid4

from .models import Booking, ShiftCandidate, SlotDemand, TourSlot
from .roles import DEFAULT_GUIDE_ROLES, match_shift_template, required_roles_for_shift
from .taxonomy import TourTaxonomy
from .time_utils import arrival_time

logger = logging.getLogger(__name__)

MIN_GAP_MINUTES = 180
ARRIVAL_LEAD_MINUTES = 15
GUIDES_PER_TOUR = 2


def new_shift_id() -> str:
    return f"imported_{uuid4().hex[:12]}"


def group_by_date_and_course(
    bookings: Iterable[Booking],
    taxonomy: TourTaxonomy,
) -> dict[tuple[date, str], list[Booking]]:
    """Bucket known bookings by (date, course), each bucket sorted by time of day.

    Buckets come back in (date, course) order; ties in time keep input order.
    """
    buckets: dict[tuple[date, str], list[Booking]] = defaultdict(list)
    for booking in bookings:
        cfg = taxonomy.get(booking.tour_type)
        if cfg is None or booking.minutes is None:
            continue
        buckets[(booking.date, cfg.course)].append(booking)
    return {key: sorted(buckets[key], key=lambda b: b.minutes) for key in sorted(buckets)}


def partition_tours(
    tours: Sequence[Booking],
    *,
    max_tours: int = 3,
    min_gap: int = MIN_GAP_MINUTES,
) -> list[list[Booking]]:
    """Greedy single pass over time-sorted tours of one course on one date.

    A tour joins the open shift when the shift is empty, or when it starts at
    least ``min_gap`` minutes after the last tour added and the shift is not
    full. Otherwise the open shift is closed and the tour starts a new one.
    """
    shifts: list[list[Booking]] = []
    current: list[Booking] = []
    last_minutes: int | None = None

    for tour in tours:
        fits = not current or (
            last_minutes is not None
            and tour.minutes - last_minutes >= min_gap
            and len(current) < max_tours
        )
        if fits:
            current.append(tour)
        else:
            shifts.append(current)
            current = [tour]
        last_minutes = tour.minutes

        if len(current) >= max_tours:
            shifts.append(current)
            current = []
            last_minutes = None

    if current:
        shifts.append(current)
    return shifts


def build_shift(
    tours: Sequence[Booking],
    course: str,
    taxonomy: TourTaxonomy,
    *,
    shift_id: str,
) -> ShiftCandidate:
    first, last = tours[0], tours[-1]
    cfg = taxonomy.get(first.tour_type)
    per_tour = cfg.duration_hours if cfg else 2.5
    roles = cfg.roles if cfg else DEFAULT_GUIDE_ROLES
    count = len(tours)
    return ShiftCandidate(
        id=shift_id,
        name=f"{course} Guiding",
        course=course,
        date=first.date,
        tours=tuple(
            TourSlot(time=t.time, tour_type=t.tour_type, guest_count=t.guest_count, product=t.product)
            for t in tours
        ),
        start_time=first.time,
        end_time=last.time,
        arrival_time=arrival_time(first.time, ARRIVAL_LEAD_MINUTES),
        tour_count=count,
        total_guests=sum(t.guest_count for t in tours),
        required_roles=tuple(required_roles_for_shift(count, roles)),
        duration_hours=per_tour * count,
        color=cfg.color if cfg else "#2196f3",
        is_night_tour=cfg.is_night_tour if cfg else False,
        notes=f"Imported booking data - {count} tours",
    )


def synthesize_shifts(
    bookings: Iterable[Booking],
    taxonomy: TourTaxonomy,
    *,
    min_gap: int = MIN_GAP_MINUTES,
    id_factory: Callable[[], str] | None = None,
) -> list[ShiftCandidate]:
    """Derive guiding shift candidates from normalized bookings.

    Unknown tour types and unparseable times are ignored here; callers
    report them through the import summary.
    """
    make_id = id_factory or new_shift_id
    shifts: list[ShiftCandidate] = []
    for (day, course), tours in group_by_date_and_course(bookings, taxonomy).items():
        max_tours = min(taxonomy.get(t.tour_type).max_tours_per_shift for t in tours)
        groups = partition_tours(tours, max_tours=max_tours, min_gap=min_gap)
        for group in groups:
            shifts.append(build_shift(group, course, taxonomy, shift_id=make_id()))
        logger.debug("%s %s: %d tours -> %d shifts", day.isoformat(), course, len(tours), len(groups))
    return shifts


def aggregate_slot_demand(
    bookings: Iterable[Booking],
    taxonomy: TourTaxonomy,
    shift_templates: Sequence[Mapping[str, Any]],
) -> list[SlotDemand]:
    """Count tours per (date, time slot, tour type) and size guide demand.

    Each booking is one tour; two guides per tour. Groups are kept only when
    the tour type is known and a shift template name contains it. No spacing
    rule applies.
    """
    groups: dict[tuple[date, str, str], list[Booking]] = {}
    for booking in bookings:
        groups.setdefault((booking.date, booking.time, booking.tour_type), []).append(booking)

    demands: list[SlotDemand] = []
    for (day, time_slot, tour_type), members in groups.items():
        cfg = taxonomy.get(tour_type)
        if cfg is None:
            continue
        template = match_shift_template(tour_type, shift_templates)
        if template is None:
            logger.info("no shift template matches %s at %s", tour_type, time_slot)
            continue
        tour_count = len(members)
        required_staff = tour_count * GUIDES_PER_TOUR
        demands.append(
            SlotDemand(
                time_slot=time_slot,
                tour_type=tour_type,
                shift_template=dict(template),
                tour_count=tour_count,
                total_guests=sum(b.guest_count for b in members),
                required_staff=required_staff,
                tours_per_guide=math.ceil(tour_count / math.ceil(required_staff / GUIDES_PER_TOUR)),
                duration_hours=cfg.duration_hours,
                roles=cfg.roles,
                date=day,
                bookings=tuple(members),
            )
        )
    return demands
