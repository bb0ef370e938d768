"""Tests for wall-clock label and feed timestamp helpers."""

from datetime import timedelta, timezone

import pytest

from booking_core.errors import FormatError
from booking_core.time_utils import (
    arrival_time,
    canonical_time_label,
    format_time_label,
    minutes_apart,
    parse_ics_datetime,
    parse_time_label,
)


class TestParseTimeLabel:
    @pytest.mark.parametrize(
        "label,minutes",
        [
            ("12:00am", 0),
            ("12:30am", 30),
            ("9:15am", 555),
            ("12:00pm", 720),
            ("12:45pm", 765),
            ("3:00pm", 900),
            ("11:59pm", 1439),
            ("9:15 AM", 555),
            ("7 pm", 1140),
            ("14:30", 870),
            ("09:05", 545),
        ],
    )
    def test_valid(self, label, minutes):
        assert parse_time_label(label) == minutes

    @pytest.mark.parametrize("label", ["", None, "noon", "13:00pm", "9:75am", "25:00"])
    def test_invalid(self, label):
        assert parse_time_label(label) is None


class TestFormatting:
    def test_format_time_label(self):
        assert format_time_label(0) == "12:00am"
        assert format_time_label(555) == "9:15am"
        assert format_time_label(720) == "12:00pm"
        assert format_time_label(1439) == "11:59pm"

    def test_format_wraps_negative(self):
        assert format_time_label(-5) == "11:55pm"

    def test_canonical_label(self):
        assert canonical_time_label("9:15 AM") == "9:15am"
        assert canonical_time_label(" soon ") == "soon"


class TestArrivalTime:
    def test_fifteen_minutes_before(self):
        assert arrival_time("9:15am") == "9:00am"

    def test_rolls_back_over_noon(self):
        assert arrival_time("12:10pm") == "11:55am"

    def test_rolls_back_over_midnight(self):
        assert arrival_time("12:05am") == "11:50pm"

    def test_unparseable_raises(self):
        with pytest.raises(ValueError):
            arrival_time("whenever")


class TestMinutesApart:
    def test_gap(self):
        assert minutes_apart("9:15am", "12:15pm") == 180
        assert minutes_apart("3:00pm", "9:15am") == 345

    def test_unparseable(self):
        assert minutes_apart("9:15am", "later") is None


class TestParseIcsDatetime:
    def test_utc_instant_converted(self):
        local = parse_ics_datetime("20250917T170000Z", timezone(timedelta(hours=-4)))
        assert (local.year, local.month, local.day, local.hour, local.minute) == (2025, 9, 17, 13, 0)

    def test_floating_time_kept(self):
        local = parse_ics_datetime("20250917T093000", timezone(timedelta(hours=-4)))
        assert (local.hour, local.minute) == (9, 30)

    @pytest.mark.parametrize("value", ["", "20250917", "2025-09-17T10:00", "20251317T100000Z"])
    def test_malformed(self, value):
        with pytest.raises(FormatError):
            parse_ics_datetime(value, timezone.utc)
