"""Parse an iCalendar booking feed into raw booking records.

Only SUMMARY, DTSTART, DTEND and DESCRIPTION are read; this is a line
scanner, not a full RFC 5545 parser.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import tzinfo

from booking_core.errors import FormatError
from booking_core.models import RawBooking
from booking_core.time_utils import format_time_label, parse_ics_datetime

logger = logging.getLogger(__name__)

OVERNIGHT_PRODUCT = "Treehouse Adventures"
ZIPLINE_MARKER = "Zipline Tour"
TREEHOUSE_OPTIONS = "Treehouse Options"

# Summary fragment -> canonical name for Treehouse Options bookings
TREEHOUSE_VARIANTS = (
    ("Tree Tops", "Tree Tops Zipline Tour - Treehouse Options"),
    ("Forest Flight", "Forest Flight Zipline Tour - Treehouse Options"),
)

PROPERTIES = {"SUMMARY": "summary", "DTSTART": "dtstart", "DTEND": "dtend", "DESCRIPTION": "description"}
REQUIRED_PROPERTIES = ("summary", "dtstart", "description")

_PROPERTY_LINE = re.compile(r"^[A-Z][A-Z0-9-]*[;:]")
_GUEST_RE = re.compile(r"(\d+)\s*x\s*Guest\(\s*s\s*\)")
_LINE_BREAKS = re.compile(r"\\[nN]|\r\n|\r|\n")


@dataclass
class IcsParseResult:
    bookings: list[RawBooking] = field(default_factory=list)
    skipped_events: int = 0
    excluded_events: int = 0


def unfold_lines(text: str) -> list[str]:
    """Join folded content lines back onto the property they belong to.

    RFC folding (leading space or tab) is joined without a separator. Stray
    lines that do not look like a property are treated as a wrapped value and
    joined with a newline.
    """
    lines: list[str] = []
    for raw in (text or "").splitlines():
        if raw[:1] in (" ", "\t") and lines:
            lines[-1] += raw[1:]
        elif lines and raw.strip() and not _PROPERTY_LINE.match(raw.strip()):
            lines[-1] += "\n" + raw.strip()
        else:
            lines.append(raw.strip())
    return lines


def extract_guest_count(description: str | None) -> int:
    """Sum every ``<n>x Guest(s)`` in a description, tolerating wrapped lines."""
    if not description:
        return 0
    normalized = _LINE_BREAKS.sub(" ", description)
    return sum(int(m) for m in _GUEST_RE.findall(normalized))


def is_overnight_stay(summary: str) -> bool:
    return OVERNIGHT_PRODUCT in summary and ZIPLINE_MARKER not in summary


def reclassify_summary(summary: str) -> str:
    if TREEHOUSE_OPTIONS not in summary:
        return summary
    for fragment, canonical in TREEHOUSE_VARIANTS:
        if fragment in summary:
            return canonical
    return summary


def parse_events(text: str) -> list[dict[str, str]]:
    """Collect the properties of every VEVENT block, in feed order.

    Properties of nested components (VALARM and the like) are skipped.
    """
    events: list[dict[str, str]] = []
    current: dict[str, str] | None = None
    depth = 0
    for line in unfold_lines(text):
        upper = line.upper()
        if upper == "BEGIN:VEVENT":
            current = {}
            depth = 0
        elif upper == "END:VEVENT":
            if current is not None:
                events.append(current)
            current = None
        elif current is None:
            continue
        elif upper.startswith("BEGIN:"):
            depth += 1
        elif upper.startswith("END:"):
            depth = max(depth - 1, 0)
        elif depth == 0 and ":" in line:
            name_part, value = line.split(":", 1)
            name = name_part.split(";", 1)[0].upper()
            key = PROPERTIES.get(name)
            if key and key not in current:
                current[key] = value
    return events


def event_to_booking(event: dict[str, str], tz: tzinfo) -> RawBooking | None:
    """Turn one event into a booking, or None when it is filtered out.

    Raises FormatError when required properties are missing or DTSTART
    cannot be read.
    """
    missing = [k for k in REQUIRED_PROPERTIES if not event.get(k)]
    if missing:
        raise FormatError(f"event missing {', '.join(missing)}")

    summary = event["summary"].strip()
    if is_overnight_stay(summary):
        logger.debug("excluding overnight stay: %s", summary)
        return None

    guest_count = extract_guest_count(event["description"])
    if guest_count == 0:
        logger.debug("excluding event without confirmed guests: %s", summary)
        return None

    local = parse_ics_datetime(event["dtstart"], tz)
    return RawBooking(
        time=format_time_label(local.hour * 60 + local.minute),
        product=reclassify_summary(summary),
        guest_count=guest_count,
        date=local.date(),
        raw_source=summary,
    )


def parse_ics_bookings(text: str, tz: tzinfo) -> IcsParseResult:
    """Read feed text -> confirmed-guest bookings in event order.

    Incomplete events are skipped and counted rather than failing the feed.
    """
    result = IcsParseResult()
    for event in parse_events(text):
        try:
            booking = event_to_booking(event, tz)
        except FormatError as exc:
            result.skipped_events += 1
            logger.warning("skipping incomplete event %r: %s", event.get("summary", ""), exc)
            continue
        if booking is None:
            result.excluded_events += 1
            continue
        result.bookings.append(booking)

    logger.info(
        "parsed %d bookings from ICS feed (%d excluded, %d skipped)",
        len(result.bookings),
        result.excluded_events,
        result.skipped_events,
    )
    return result
