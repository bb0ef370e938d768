"""Shared time utilities for booking labels and feed timestamps."""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo

from .errors import FormatError

DAY_MINUTES = 24 * 60
NOON = 12 * 60

_LABEL_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([ap])\.?\s*m?\.?\s*$", re.IGNORECASE)
_HHMM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")


def parse_time_label(value: str | None) -> int | None:
    """Parse a wall-clock label into minutes after midnight.

    Accepts 12-hour labels (``9:15am``, ``12 PM``) and 24-hour ``HH:MM``.
    """
    if not value:
        return None
    text = str(value)
    match = _LABEL_RE.match(text)
    if match:
        h = int(match.group(1))
        m = int(match.group(2) or 0)
        if h < 1 or h > 12 or m > 59:
            return None
        period = match.group(3).lower()
        if h == 12:
            h = 0
        minutes = h * 60 + m
        if period == "p":
            minutes += NOON
        return minutes

    match = _HHMM_RE.match(text)
    if match:
        h = int(match.group(1))
        m = int(match.group(2))
        if h > 23 or m > 59:
            return None
        return h * 60 + m
    return None


def format_time_label(minutes: int) -> str:
    """Format minutes after midnight as ``h:mmam`` / ``h:mmpm``."""
    minutes %= DAY_MINUTES
    hours, mins = divmod(minutes, 60)
    period = "pm" if hours >= 12 else "am"
    display = hours % 12 or 12
    return f"{display}:{mins:02d}{period}"


def canonical_time_label(value: str | None) -> str:
    """Return the ``h:mmam`` form of a label, or the stripped input if unparseable."""
    minutes = parse_time_label(value)
    if minutes is None:
        return str(value or "").strip()
    return format_time_label(minutes)


def arrival_time(label: str, lead_minutes: int = 15) -> str:
    minutes = parse_time_label(label)
    if minutes is None:
        raise ValueError(f"unparseable time label: {label!r}")
    return format_time_label(minutes - lead_minutes)


def minutes_apart(first: str, second: str) -> int | None:
    a = parse_time_label(first)
    b = parse_time_label(second)
    if a is None or b is None:
        return None
    return abs(b - a)


def parse_ics_datetime(value: str, tz: tzinfo) -> datetime:
    """Parse an iCalendar ``YYYYMMDDThhmm[ss][Z]`` value into local wall-clock time.

    A trailing ``Z`` marks a UTC instant, which is converted to ``tz``.
    Values without it are treated as floating local times.
    """
    raw = (value or "").strip()
    if len(raw) < 13 or raw[8] not in ("T", "t"):
        raise FormatError(f"malformed DTSTART value: {value!r}")
    try:
        year = int(raw[0:4])
        month = int(raw[4:6])
        day = int(raw[6:8])
        hour = int(raw[9:11])
        minute = int(raw[11:13])
        parsed = datetime(year, month, day, hour, minute)
    except ValueError as exc:
        raise FormatError(f"malformed DTSTART value: {value!r}") from exc

    if raw.upper().endswith("Z"):
        return parsed.replace(tzinfo=timezone.utc).astimezone(tz)
    return parsed.replace(tzinfo=tz)
