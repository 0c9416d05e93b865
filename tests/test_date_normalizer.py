from __future__ import annotations

from datetime import date, datetime

import pytest

from trade_ledger_engine.date_normalizer import (
    CalendarDay,
    Unparsed,
    month_key,
    parse_calendar_day,
    parse_instant,
    to_calendar_day,
    to_instant,
)


class TestParseCalendarDay:
    def test_date_with_time_suffix(self):
        assert parse_calendar_day("01/02/2024 10:00:00") == CalendarDay("2024-02-01")

    def test_date_only(self):
        assert parse_calendar_day("15/03/2023") == CalendarDay("2023-03-15")

    def test_single_digit_parts_are_padded(self):
        assert parse_calendar_day("1/2/2024") == CalendarDay("2024-02-01")

    def test_surrounding_whitespace(self):
        assert parse_calendar_day("  05/06/2024   08:00:00 ") == CalendarDay("2024-06-05")

    @pytest.mark.parametrize(
        "value",
        ["2024-01-01", "01/2024", "01/02/03/2024", "aa/bb/cccc", "31/02/2024", "01/13/2024", "01/01/24"],
    )
    def test_unrecognized_shapes_are_unparsed(self, value):
        assert parse_calendar_day(value) == Unparsed(value)

    def test_blank_and_none(self):
        assert parse_calendar_day("") == Unparsed("")
        assert parse_calendar_day(None) == Unparsed("")

    def test_numeric_cell_is_unparsed(self):
        assert parse_calendar_day(45292) == Unparsed("45292")

    def test_datetime_values(self):
        assert parse_calendar_day(datetime(2024, 3, 5, 14, 0)) == CalendarDay("2024-03-05")
        assert parse_calendar_day(date(2024, 3, 5)) == CalendarDay("2024-03-05")

    def test_month_property(self):
        assert CalendarDay("2024-01-15").month == "2024-01"


class TestToCalendarDay:
    def test_reorders_to_iso(self):
        assert to_calendar_day("02/01/2024 09:00:00") == "2024-01-02"

    def test_returns_original_text_when_unrecognized(self):
        assert to_calendar_day("2024-01-01") == "2024-01-01"
        assert to_calendar_day("not a date") == "not a date"

    def test_stable(self):
        assert to_calendar_day("07/07/2024 23:59:59") == to_calendar_day("07/07/2024 23:59:59")


class TestParseInstant:
    def test_full_timestamp(self):
        assert parse_instant("02/01/2024 09:30:15") == datetime(2024, 1, 2, 9, 30, 15)

    def test_missing_time_defaults_to_midnight(self):
        assert parse_instant("02/01/2024") == datetime(2024, 1, 2, 0, 0, 0)

    def test_fractional_seconds_are_dropped(self):
        assert parse_instant("01/01/2024 10:00:00.000") == datetime(2024, 1, 1, 10, 0, 0)

    def test_hours_and_minutes_only(self):
        assert parse_instant("02/01/2024 9:30") == datetime(2024, 1, 2, 9, 30)

    @pytest.mark.parametrize("value", ["02/01/2024 25:00:00", "02/01/2024 noon", "garbage", "", None])
    def test_unparseable(self, value):
        assert parse_instant(value) is None

    def test_orders_same_day_by_time(self):
        early = parse_instant("01/01/2024 09:00:00")
        late = parse_instant("01/01/2024 18:00:00")
        assert early < late

    def test_alias(self):
        assert to_instant is parse_instant


def test_month_key():
    assert month_key("2024-01-15") == "2024-01"
