"""Column constants, header resolution, and type coercion for booking exports."""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Booking export columns (logical name -> header fragment)
# ---------------------------------------------------------------------------

TIME_COL = "time"
PRODUCT_COL = "product"
GUESTS_COL = "guests"
CUSTOMER_COL = "customer"

REQUIRED_COLUMNS = {
    TIME_COL: "start time",
    PRODUCT_COL: "product name",
    GUESTS_COL: "# guests",
}

OPTIONAL_COLUMNS = {
    CUSTOMER_COL: "name",
}

# Display labels for error messages
COLUMN_LABELS = {
    TIME_COL: "Start Time",
    PRODUCT_COL: "Product Name",
    GUESTS_COL: "# Guests",
    CUSTOMER_COL: "Name",
}

# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def clean_field(value: str | None) -> str:
    """Drop double quotes and surrounding whitespace from a raw field."""
    if value is None:
        return ""
    return str(value).replace('"', "").strip()


def split_line(line: str, delimiter: str = ",") -> list[str]:
    """Split a delimited line. Commas inside quoted fields are not supported."""
    return [clean_field(v) for v in line.split(delimiter)]


def resolve_columns(headers: list[str]) -> dict[str, int]:
    """Map logical column names to header indexes by case-insensitive substring.

    Required columns are resolved first. The optional customer column skips
    headers already claimed, so ``Product Name`` is never read as the
    customer's name. Unresolved columns are absent from the result.
    """
    lowered = [h.lower() for h in headers]
    resolved: dict[str, int] = {}
    for logical, fragment in REQUIRED_COLUMNS.items():
        for idx, header in enumerate(lowered):
            if fragment in header:
                resolved[logical] = idx
                break

    claimed = set(resolved.values())
    for logical, fragment in OPTIONAL_COLUMNS.items():
        for idx, header in enumerate(lowered):
            if idx not in claimed and fragment in header:
                resolved[logical] = idx
                break
    return resolved


def missing_required(resolved: dict[str, int]) -> list[str]:
    return [COLUMN_LABELS[c] for c in REQUIRED_COLUMNS if c not in resolved]


# ---------------------------------------------------------------------------
# Type coercion
# ---------------------------------------------------------------------------

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def to_int(value: str | None, default: int = 0) -> int:
    """Read the leading integer of a field. Empty or non-numeric -> default."""
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def to_optional_str(value: str | None) -> str | None:
    text = clean_field(value)
    return text or None
