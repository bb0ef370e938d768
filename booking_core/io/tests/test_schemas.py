"""Tests for io.schemas helpers."""

from booking_core.io.schemas import (
    CUSTOMER_COL,
    GUESTS_COL,
    PRODUCT_COL,
    TIME_COL,
    clean_field,
    missing_required,
    resolve_columns,
    split_line,
    to_int,
    to_optional_str,
)


class TestFieldHelpers:
    def test_clean_field_strips_quotes_and_space(self):
        assert clean_field('  "Tree Tops"  ') == "Tree Tops"

    def test_clean_field_none(self):
        assert clean_field(None) == ""

    def test_split_line(self):
        assert split_line('"a", b ,"c"') == ["a", "b", "c"]

    def test_to_optional_str(self):
        assert to_optional_str('""') is None
        assert to_optional_str(" Ana ") == "Ana"


class TestResolveColumns:
    def test_resolves_all(self):
        cols = resolve_columns(["Name", "Product Name", "Start Time", "# Guests"])
        assert cols == {TIME_COL: 2, PRODUCT_COL: 1, GUESTS_COL: 3, CUSTOMER_COL: 0}

    def test_customer_skips_claimed_headers(self):
        cols = resolve_columns(["Product Name", "Start Time", "# Guests", "Lead Name"])
        assert cols[CUSTOMER_COL] == 3

    def test_missing_required_labels(self):
        cols = resolve_columns(["Start Time", "Name"])
        assert missing_required(cols) == ["Product Name", "# Guests"]


class TestTypeCoercion:
    def test_to_int(self):
        assert to_int("5") == 5
        assert to_int(" 12 guests") == 12
        assert to_int("") == 0
        assert to_int(None) == 0

    def test_to_int_non_numeric(self):
        assert to_int("many") == 0
        assert to_int("many", default=-1) == -1
