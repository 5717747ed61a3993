from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.timekeeper.timekeeper.common.datetime_utils import (
    arabic_long_date,
    calculate_worked_hours,
    clock_to_timestamp,
    format_clock,
    month_days,
    month_label,
    overtime_hours,
    parse_timestamp,
    shift_date,
    time_fraction,
    to_iso_timestamp,
)
from src.timekeeper.timekeeper.core.exceptions import ValidationError


def test_worked_hours_two_decimals():
    assert calculate_worked_hours("2024-01-01T09:00:00Z", "2024-01-01T17:30:00Z") == "8.50"


def test_worked_hours_missing_side_is_zero():
    assert calculate_worked_hours(None, "2024-01-01T17:30:00Z") == "0.00"
    assert calculate_worked_hours("2024-01-01T09:00:00Z", None) == "0.00"
    assert calculate_worked_hours("", "") == "0.00"


def test_worked_hours_truncates_partial_minutes():
    assert calculate_worked_hours("2024-01-01T09:00:00Z", "2024-01-01T09:01:59Z") == "0.02"


def test_worked_hours_negative_when_check_out_precedes_check_in():
    assert calculate_worked_hours("2024-01-01T17:00:00Z", "2024-01-01T09:00:00Z") == "-8.00"


def test_time_fraction_of_afternoon_check_in():
    assert time_fraction("2024-03-01T13:30:00Z", timezone.utc) == pytest.approx(0.5625)


def test_time_fraction_empty_is_none():
    assert time_fraction(None) is None
    assert time_fraction("not a date") is None


def test_overtime_only_beyond_eight_hours():
    assert overtime_hours("9.25") == 1.25
    assert overtime_hours("8.00") is None
    assert overtime_hours("0.00") is None


def test_format_clock():
    assert format_clock("2024-03-01T13:05:00Z", timezone.utc) == "1:05 PM"
    assert format_clock("2024-03-01T00:30:00Z", timezone.utc) == "12:30 AM"
    assert format_clock(None) == "--:--"


def test_iso_timestamp_matches_browser_format():
    value = datetime(2024, 3, 1, 9, 5, 7, 123456, tzinfo=timezone.utc)
    assert to_iso_timestamp(value) == "2024-03-01T09:05:07.123Z"
    assert parse_timestamp("2024-03-01T09:05:07.123Z") == datetime(2024, 3, 1, 9, 5, 7, 123000, tzinfo=timezone.utc)


def test_clock_entry_becomes_timestamp_on_selected_date():
    assert clock_to_timestamp("2024-03-01", "08:15", timezone.utc) == "2024-03-01T08:15:00.000Z"


@pytest.mark.parametrize("clock", ["", "8", "25:00", "aa:bb"])
def test_clock_entry_rejects_garbage(clock):
    with pytest.raises(ValidationError):
        clock_to_timestamp("2024-03-01", clock, timezone.utc)


def test_shift_date_crosses_month_boundary():
    assert shift_date("2024-02-29", 1) == "2024-03-01"
    assert shift_date("2024-03-01", -1) == "2024-02-29"


def test_month_helpers():
    days = month_days(date(2024, 2, 10))
    assert len(days) == 29
    assert days[0] == date(2024, 2, 1)
    assert month_label(date(2024, 3, 15)) == "March 2024"


def test_arabic_long_date():
    # 2026-02-05 is a Thursday
    assert arabic_long_date(date(2026, 2, 5)) == "الخميس 5 فبراير 2026"
