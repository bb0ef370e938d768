"""Error types raised by the booking import engine."""

from __future__ import annotations


class BookingImportError(Exception):
    """Base class for failures while turning booking data into shifts."""


class FormatError(BookingImportError, ValueError):
    """Required columns or event properties are missing or malformed."""


class FetchError(BookingImportError):
    """Retrieving a booking feed failed or returned a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
