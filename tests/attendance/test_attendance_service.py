from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.timekeeper.timekeeper.attendance.model import AttendanceRecord
from src.timekeeper.timekeeper.attendance.service import AttendanceService
from src.timekeeper.timekeeper.core.enums import AttendanceField, AttendanceFilter, LeaveStatus
from src.timekeeper.timekeeper.core.exceptions import ValidationError

DAY = "2024-03-01"


@pytest.fixture
def svc(state):
    return AttendanceService(state, tz=timezone.utc)


def _record(svc, name, day=DAY):
    return next(r for r in svc.records_for(day) if r.name == name)


def test_check_in_materializes_day_and_stamps_time(svc, state, fixed_now):
    svc.check_in("Ahmed", DAY, now=fixed_now)

    stored = state.history[DAY]
    assert [r.name for r in stored] == ["Ahmed", "Mona", "Sara"]
    assert stored[0].check_in == "2024-03-01T09:00:00.000Z"


def test_check_in_clears_status(svc, fixed_now):
    svc.set_status("Ahmed", DAY, LeaveStatus.VACATION.value)
    record = svc.check_in("Ahmed", DAY, now=fixed_now)

    assert record.status is None
    assert record.check_in is not None


def test_setting_status_clears_times(svc, fixed_now):
    svc.check_in("Mona", DAY, now=fixed_now)
    svc.check_out("Mona", DAY, now=datetime(2024, 3, 1, 17, 0, tzinfo=timezone.utc))

    record = svc.set_status("Mona", DAY, "مأمورية")

    assert (record.check_in, record.check_out, record.status) == (None, None, "مأمورية")


def test_clear_status_keeps_record_empty(svc):
    svc.set_status("Mona", DAY, LeaveStatus.SICK.value)
    record = svc.clear_status("Mona", DAY)

    assert record == AttendanceRecord(name="Mona", department="Finance", job="Accountant")


def test_check_out_requires_check_in(svc, state):
    with pytest.raises(ValidationError):
        svc.check_out("Sara", DAY)

    assert DAY not in state.history


def test_cancel_check_out(svc, fixed_now):
    svc.check_in("Sara", DAY, now=fixed_now)
    svc.check_out("Sara", DAY, now=fixed_now)

    record = svc.cancel_check_out("Sara", DAY)

    assert record.check_out is None
    assert record.check_in is not None


def test_unknown_employee_is_rejected(svc, state):
    with pytest.raises(ValidationError):
        svc.check_in("Nobody", DAY)
    assert state.history == {}


def test_blank_status_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.set_status("Ahmed", DAY, "  ")


def test_edit_time_uses_selected_date(svc):
    record = svc.edit_time("Ahmed", DAY, AttendanceField.CHECK_IN, "07:45")

    assert record.check_in == "2024-03-01T07:45:00.000Z"
    assert svc.to_ui(record)["checkInLabel"] == "7:45 AM"


def test_batch_check_in_only_selected(svc, state, fixed_now):
    changed = svc.batch_check_in(["Ahmed", "Sara", "Nobody"], DAY, now=fixed_now)

    assert changed == 2
    stamped = {r.name for r in state.history[DAY] if r.check_in}
    assert stamped == {"Ahmed", "Sara"}


def test_batch_status(svc, state):
    svc.batch_update(["Mona"], DAY, AttendanceField.STATUS, LeaveStatus.ABSENT.value)

    assert _record(svc, "Mona").status == "غياب"


def test_batch_with_empty_selection_does_nothing(svc, state):
    assert svc.batch_check_in([], DAY) == 0
    assert state.history == {}


def test_reset_day(svc, state, fixed_now):
    svc.check_in("Ahmed", DAY, now=fixed_now)

    svc.reset_day(DAY)

    assert all(r.check_in is None and r.status is None for r in state.history[DAY])
    assert len(state.history[DAY]) == 3


def test_filters_and_search(svc, fixed_now):
    svc.check_in("Ahmed", DAY, now=fixed_now)
    svc.check_in("Mona", DAY, now=fixed_now)
    svc.check_out("Mona", DAY, now=fixed_now)
    svc.set_status("Sara", DAY, LeaveStatus.TIME_SHEET.value)
    records = svc.records_for(DAY)

    def names(**kwargs):
        return [r.name for r in svc.filter_records(records, **kwargs)]

    assert names(mode=AttendanceFilter.ALL) == ["Ahmed", "Mona", "Sara"]
    assert names(mode=AttendanceFilter.NOT_CHECKED_OUT) == ["Ahmed"]
    assert names(mode=AttendanceFilter.COMPLETED) == ["Mona"]
    assert names(mode=AttendanceFilter.TIME_SHEET) == ["Sara"]
    assert names(mode=AttendanceFilter.NOT_CHECKED_IN) == []
    assert names(search="mo") == ["Mona"]
    assert names(department="Finance") == ["Mona"]


def test_stats(svc, fixed_now):
    svc.check_in("Ahmed", DAY, now=fixed_now)
    svc.check_in("Mona", DAY, now=fixed_now)
    svc.check_out("Mona", DAY, now=fixed_now)

    stats = svc.stats_for(DAY)

    assert (stats.total, stats.present, stats.completed, stats.remaining) == (3, 2, 1, 1)


def test_ui_payload_has_worked_hours(svc, fixed_now):
    svc.check_in("Ahmed", DAY, now=fixed_now)
    record = svc.check_out("Ahmed", DAY, now=datetime(2024, 3, 1, 17, 30, tzinfo=timezone.utc))

    ui = svc.to_ui(record)

    assert ui["workedHours"] == "8.50"
    assert ui["checkOutLabel"] == "5:30 PM"


@pytest.mark.parametrize("bad", ["2024-13-45", "2024-3-1", "yesterday", ""])
def test_malformed_date_is_rejected_without_touching_history(svc, state, fixed_now, bad):
    with pytest.raises(ValidationError):
        svc.check_in("Ahmed", bad, now=fixed_now)
    with pytest.raises(ValidationError):
        svc.batch_check_in(["Ahmed"], bad, now=fixed_now)
    with pytest.raises(ValidationError):
        svc.reset_day(bad)
    with pytest.raises(ValidationError):
        svc.records_for(bad)

    assert state.history == {}
