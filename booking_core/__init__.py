"""Booking-to-shift derivation engine shared by the import surfaces."""

from .errors import BookingImportError, FetchError, FormatError
from .models import Booking, ImportResult, RawBooking, ShiftCandidate, SlotDemand, TourSlot, TourTypeConfig
from .normalizer import normalize_bookings, partition_bookings
from .roles import required_roles_for_shift
from .summary import build_import_result
from .synthesizer import aggregate_slot_demand, partition_tours, synthesize_shifts
from .taxonomy import TourTaxonomy, load_taxonomy
from .time_utils import arrival_time, format_time_label, parse_time_label

# io module re-exports
from .io import parse_csv_bookings, parse_ics_bookings, write_import_result

__all__ = [
    "Booking",
    "BookingImportError",
    "FetchError",
    "FormatError",
    "ImportResult",
    "RawBooking",
    "ShiftCandidate",
    "SlotDemand",
    "TourSlot",
    "TourTaxonomy",
    "TourTypeConfig",
    "aggregate_slot_demand",
    "arrival_time",
    "build_import_result",
    "format_time_label",
    "load_taxonomy",
    "normalize_bookings",
    "parse_csv_bookings",
    "parse_ics_bookings",
    "parse_time_label",
    "partition_bookings",
    "partition_tours",
    "required_roles_for_shift",
    "synthesize_shifts",
    "write_import_result",
]
