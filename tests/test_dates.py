"""Tests for date parsing and display helpers."""

from datetime import date, datetime

import pytest

from family_timeline.utils.dates import (
    add_years,
    format_display_date,
    is_blank,
    parse_date,
    try_parse_date,
)


class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1932-06-09", date(1932, 6, 9)),
            ("2025-05-15T10:30:00", date(2025, 5, 15)),
            ("2025-05-15T10:30:00Z", date(2025, 5, 15)),
            ("6/9/1932", date(1932, 6, 9)),
            ("9 JUN 1932", date(1932, 6, 9)),
            ("June 9, 1932", date(1932, 6, 9)),
            ("  1932-06-09  ", date(1932, 6, 9)),
        ],
    )
    def test_formats(self, value, expected):
        assert parse_date(value) == expected

    def test_date_and_datetime(self):
        assert parse_date(date(2000, 1, 2)) == date(2000, 1, 2)
        assert parse_date(datetime(2000, 1, 2, 13, 45)) == date(2000, 1, 2)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_is_none(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", ["1932", "2023-02-30", "13/1/2000", "someday", "9 Foo 1932"])
    def test_malformed_raises(self, value):
        with pytest.raises(ValueError):
            parse_date(value)

    def test_try_parse_swallows_malformed(self):
        assert try_parse_date("someday") is None
        assert try_parse_date("2000-01-02") == date(2000, 1, 2)


class TestHelpers:
    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank(" ")
        assert not is_blank("x")
        assert not is_blank(date(2000, 1, 1))

    def test_add_years(self):
        assert add_years(date(1990, 6, 15), 7) == date(1997, 6, 15)

    def test_add_years_leap_day(self):
        assert add_years(date(1992, 2, 29), 7) == date(1999, 3, 1)
        assert add_years(date(1992, 2, 29), 8) == date(2000, 2, 29)


class TestFormatDisplayDate:
    def test_us_style(self):
        assert format_display_date("2025-05-15") == "5/15/2025"

    def test_iso_style(self):
        assert format_display_date("5/15/2025", "iso") == "2025-05-15"

    def test_blank(self):
        assert format_display_date(None) is None

    def test_unparseable_text_kept(self):
        assert format_display_date("circa 1900") == "circa 1900"
