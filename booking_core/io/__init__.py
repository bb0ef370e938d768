"""Input/output layer for booking imports.

Public API:
    parse_csv_bookings(text)        -- booking export CSV -> raw bookings
    parse_ics_bookings(text, tz)    -- iCalendar feed -> raw bookings + skip counts
    write_import_result(result, d)  -- write the import.json hand-off document
"""

from .csv_parser import parse_csv_bookings
from .ics_parser import IcsParseResult, extract_guest_count, parse_ics_bookings
from .writer import handoff_payload, write_import_result

__all__ = [
    "IcsParseResult",
    "extract_guest_count",
    "handoff_payload",
    "parse_csv_bookings",
    "parse_ics_bookings",
    "write_import_result",
]
