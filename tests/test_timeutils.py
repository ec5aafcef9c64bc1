"""
Tests for time and calendar helpers.
"""

from datetime import date

import pytest

from autoscheduler.timeutils import (
    SENTINEL_DATE,
    add_days,
    format_date,
    next_weekday,
    parse_date,
    to_minutes,
    to_time_string,
)


class TestToMinutes:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("09:30", 570),
            ("9:05", 545),
            ("00:00", 0),
            ("17:00", 1020),
            ("09:30:00", 570),
            (" 08 : 15 ", 495),
        ],
    )
    def test_valid_times(self, value, expected):
        assert to_minutes(value) == expected

    @pytest.mark.parametrize("value", ["", "bad", "0930", None])
    def test_malformed_times_read_as_midnight(self, value):
        assert to_minutes(value) == 0

    def test_unparseable_field_counts_as_zero(self):
        """Only the broken field is lost."""
        assert to_minutes("ab:30") == 30
        assert to_minutes("10:xx") == 600

    @pytest.mark.parametrize("value", ["1_0:00", "\u0661\u0660:00", "0x9:00"])
    def test_only_plain_ascii_digits_accepted(self, value):
        assert to_minutes(value) == 0


class TestToTimeString:
    def test_zero_padded(self):
        assert to_time_string(0) == "00:00"
        assert to_time_string(545) == "09:05"
        assert to_time_string(1020) == "17:00"

    def test_inverse_of_to_minutes(self):
        assert to_minutes(to_time_string(754)) == 754


class TestDates:
    def test_parse_valid_date(self):
        assert parse_date("2025-06-23") == date(2025, 6, 23)

    @pytest.mark.parametrize(
        "value",
        [None, "", "23/06/2025", "2025-06-23T10:00:00", "2025-7-1", "2025-02-30"],
    )
    def test_parse_invalid_date_returns_sentinel(self, value):
        assert parse_date(value) == SENTINEL_DATE

    def test_sentinel_precedes_real_dates(self):
        assert SENTINEL_DATE < date(1970, 1, 1)

    def test_add_days_crosses_month(self):
        assert add_days("2025-06-30", 1) == date(2025, 7, 1)
        assert add_days(date(2025, 6, 23), -1) == date(2025, 6, 22)

    def test_next_weekday_keeps_weekdays(self):
        assert next_weekday("2025-06-25") == date(2025, 6, 25)

    @pytest.mark.parametrize("value", ["2025-06-28", "2025-06-29"])
    def test_next_weekday_skips_weekend(self, value):
        assert next_weekday(value) == date(2025, 6, 30)

    def test_next_weekday_of_garbage_is_sentinel(self):
        assert next_weekday("not-a-date") == SENTINEL_DATE

    def test_format_date(self):
        assert format_date(date(2025, 6, 3)) == "2025-06-03"
        assert format_date(SENTINEL_DATE) == "0001-01-01"
