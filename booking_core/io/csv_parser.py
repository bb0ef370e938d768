"""Parse a tour-operator booking export (CSV) into raw booking records."""

from __future__ import annotations

import logging

from booking_core.errors import FormatError
from booking_core.models import RawBooking

from .schemas import (
    CUSTOMER_COL,
    GUESTS_COL,
    PRODUCT_COL,
    TIME_COL,
    missing_required,
    resolve_columns,
    split_line,
    to_int,
    to_optional_str,
)

logger = logging.getLogger(__name__)


def parse_csv_bookings(text: str) -> list[RawBooking]:
    """Read CSV text (first line = header) -> accepted raw bookings in line order.

    Raises FormatError when the header lacks a start time, product name or
    guest count column. Rows without a time or product, or with a guest count
    that is zero or not a number, are dropped.
    """
    lines = (text or "").lstrip("\ufeff").splitlines()
    if not lines or not lines[0].strip():
        raise FormatError('CSV file must contain "Start Time", "Product Name", and "# Guests" columns')

    headers = split_line(lines[0])
    columns = resolve_columns(headers)
    missing = missing_required(columns)
    if missing:
        raise FormatError(
            'CSV file must contain "Start Time", "Product Name", and "# Guests" columns '
            f"(missing: {', '.join(missing)})"
        )

    bookings: list[RawBooking] = []
    dropped = 0
    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue
        fields = split_line(line)
        time = _field(fields, columns[TIME_COL])
        product = _field(fields, columns[PRODUCT_COL])
        guest_count = to_int(_field(fields, columns[GUESTS_COL]))
        customer = None
        if CUSTOMER_COL in columns:
            customer = to_optional_str(_field(fields, columns[CUSTOMER_COL]))

        if not time or not product or guest_count <= 0:
            dropped += 1
            continue
        bookings.append(
            RawBooking(
                time=time,
                product=product,
                guest_count=guest_count,
                customer_name=customer,
                raw_source=line,
            )
        )

    logger.info("parsed %d bookings from CSV (%d rows dropped)", len(bookings), dropped)
    return bookings


def _field(fields: list[str], index: int) -> str:
    if index < len(fields):
        return fields[index]
    return ""
