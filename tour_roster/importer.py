from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Any

from booking_core.errors import FormatError
from booking_core.io import parse_csv_bookings, parse_ics_bookings
from booking_core.models import ImportResult
from booking_core.normalizer import normalize_bookings, partition_bookings
from booking_core.summary import build_import_result
from booking_core.synthesizer import aggregate_slot_demand, synthesize_shifts
from booking_core.taxonomy import TourTaxonomy

from .feed_client import FeedClient

logger = logging.getLogger(__name__)

ImportListener = Callable[[ImportResult], None]

SOURCE_CSV = "csv"
SOURCE_ICS = "ics"


@dataclass(frozen=True)
class ImportOutcome:
    ok: bool
    result: ImportResult | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok and self.result is not None:
            return {"ok": True, "result": self.result.to_dict()}
        return {"ok": False, "error": self.error}


def _deliver(result: ImportResult, on_import: ImportListener | None) -> None:
    logger.info(
        "%s import %s: %d shifts from %d bookings (%d guests, %d unmatched)",
        result.source,
        result.import_id,
        result.total_shifts,
        result.total_bookings,
        result.total_guests,
        len(result.unmatched),
    )
    if on_import is not None:
        on_import(result)


def import_ics_text(
    text: str,
    *,
    taxonomy: TourTaxonomy,
    tz: tzinfo,
    on_import: ImportListener | None = None,
) -> ImportOutcome:
    parsed = parse_ics_bookings(text, tz)
    bookings = normalize_bookings(parsed.bookings, taxonomy)
    schedulable, unmatched = partition_bookings(bookings)
    shifts = synthesize_shifts(schedulable, taxonomy)
    result = build_import_result(
        bookings,
        shifts,
        source=SOURCE_ICS,
        unmatched=unmatched,
        skipped_events=parsed.skipped_events,
    )
    _deliver(result, on_import)
    return ImportOutcome(ok=True, result=result)


async def import_ics_feed(
    url: str,
    *,
    client: FeedClient,
    taxonomy: TourTaxonomy,
    tz: tzinfo,
    on_import: ImportListener | None = None,
) -> ImportOutcome:
    """Fetch a calendar feed and derive shifts from it.

    FetchError propagates to the caller; nothing is parsed in that case.
    """
    text = await client.fetch(url)
    return import_ics_text(text, taxonomy=taxonomy, tz=tz, on_import=on_import)


def import_csv_text(
    text: str,
    target_date: date,
    *,
    taxonomy: TourTaxonomy,
    shift_templates: Sequence[Mapping[str, Any]] | None = None,
    on_import: ImportListener | None = None,
) -> ImportOutcome:
    """Derive shifts from a booking export for one schedule date.

    A header without the required columns is reported as a failed outcome.
    Slot demand is only computed when shift templates are supplied.
    """
    try:
        raw = parse_csv_bookings(text)
    except FormatError as exc:
        logger.warning("CSV import rejected: %s", exc)
        return ImportOutcome(ok=False, error=str(exc))

    bookings = normalize_bookings(raw, taxonomy, default_date=target_date)
    schedulable, unmatched = partition_bookings(bookings)
    shifts = synthesize_shifts(schedulable, taxonomy)
    demands = aggregate_slot_demand(bookings, taxonomy, shift_templates) if shift_templates else []
    result = build_import_result(
        bookings,
        shifts,
        source=SOURCE_CSV,
        unmatched=unmatched,
        slot_demands=demands,
    )
    _deliver(result, on_import)
    return ImportOutcome(ok=True, result=result)
