from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import calculate_worked_hours, clock_to_timestamp, format_clock, now_utc, to_iso_timestamp
from ..common.validators import require_iso_date
from ..core.enums import AttendanceField, AttendanceFilter, LeaveStatus
from ..core.exceptions import ValidationError
from ..roster.model import Employee
from ..session.state import AttendanceState
from .model import AttendanceRecord, History
from .reconciler import materialize_day, reconcile

logger = logging.getLogger(__name__)

RecordUpdate = Callable[[AttendanceRecord], AttendanceRecord]


@dataclass(frozen=True)
class DailyStats:
    total: int
    present: int
    completed: int
    remaining: int


class AttendanceService:
    """Use case: view and edit the attendance of one date."""

    def __init__(self, state: AttendanceState, *, tz: Optional[tzinfo] = None):
        self._state = state
        self._tz = tz

    # ---- views -------------------------------------------------------

    def records_for(self, work_date: str) -> list[AttendanceRecord]:
        work_date = require_iso_date(work_date)
        employees, history = self._state.snapshot()
        return reconcile(employees, history, work_date)

    def filter_records(
        self,
        records: Iterable[AttendanceRecord],
        *,
        mode: AttendanceFilter = AttendanceFilter.ALL,
        search: str = "",
        department: Optional[str] = None,
    ) -> list[AttendanceRecord]:
        needle = (search or "").lower()
        return [
            r
            for r in records
            if needle in r.name.lower()
            and _matches_filter(r, mode)
            and (not department or department == AttendanceFilter.ALL.value or r.department == department)
        ]

    def stats_for(self, work_date: str) -> DailyStats:
        records = self.records_for(work_date)
        return DailyStats(
            total=len(self._state.employees),
            present=sum(1 for r in records if r.check_in),
            completed=sum(1 for r in records if r.check_out),
            remaining=sum(1 for r in records if not r.check_in),
        )

    def to_ui(self, r: AttendanceRecord) -> dict:
        data = r.to_dict()
        data.update(
            {
                "status": r.status,
                "checkInLabel": format_clock(r.check_in, self._tz),
                "checkOutLabel": format_clock(r.check_out, self._tz),
                "workedHours": calculate_worked_hours(r.check_in, r.check_out),
            }
        )
        return data

    # ---- single-employee actions --------------------------------------

    def check_in(self, name: str, work_date: str, *, now: datetime | None = None) -> AttendanceRecord:
        stamp = to_iso_timestamp(now or now_utc())
        return self._update_one(work_date, name, lambda r: r.with_check_in(stamp))

    def check_out(self, name: str, work_date: str, *, now: datetime | None = None) -> AttendanceRecord:
        stamp = to_iso_timestamp(now or now_utc())

        def update(r: AttendanceRecord) -> AttendanceRecord:
            if not r.check_in:
                raise ValidationError(f"{r.name} has not checked in on {work_date}")
            return r.with_check_out(stamp)

        return self._update_one(work_date, name, update)

    def cancel_check_out(self, name: str, work_date: str) -> AttendanceRecord:
        return self._update_one(work_date, name, lambda r: r.with_check_out(None))

    def set_status(self, name: str, work_date: str, status: str) -> AttendanceRecord:
        status = _require_status(status)
        return self._update_one(work_date, name, lambda r: r.with_status(status))

    def clear_status(self, name: str, work_date: str) -> AttendanceRecord:
        return self._update_one(work_date, name, lambda r: r.with_status(None))

    def edit_time(self, name: str, work_date: str, field: AttendanceField, clock: str) -> AttendanceRecord:
        """Set check-in/out from an ``HH:mm`` entry on ``work_date``."""
        work_date = require_iso_date(work_date)
        stamp = clock_to_timestamp(work_date, clock, self._tz)
        if field == AttendanceField.CHECK_IN:
            return self._update_one(work_date, name, lambda r: r.with_check_in(stamp))
        if field == AttendanceField.CHECK_OUT:
            return self._update_one(work_date, name, lambda r: r.with_check_out(stamp))
        raise ValidationError(f"Cannot edit time of field {field.value!r}")

    # ---- batch actions -----------------------------------------------

    def batch_update(self, names: Iterable[str], work_date: str, field: AttendanceField, value: Optional[str]) -> int:
        """Apply one field update to every selected employee; unknown names are skipped."""
        work_date = require_iso_date(work_date)
        selected = set(names)
        if not selected:
            return 0

        if field == AttendanceField.STATUS:
            status = _require_status(value or "")
            update: RecordUpdate = lambda r: r.with_status(status)
        elif field == AttendanceField.CHECK_IN:
            update = lambda r: r.with_check_in(value)
        else:
            update = lambda r: r.with_check_out(value)

        changed = 0

        def apply(employees: list[Employee], history: History):
            nonlocal changed
            records = materialize_day(employees, history, work_date)
            out = []
            for r in records:
                if r.name in selected:
                    r = update(r)
                    changed += 1
                out.append(r)
            return employees, {**history, work_date: out}

        self._state.mutate(apply)
        logger.info("Batch %s on %s for %d employee(s)", field.value, work_date, changed)
        return changed

    def batch_check_in(self, names: Iterable[str], work_date: str, *, now: datetime | None = None) -> int:
        return self.batch_update(names, work_date, AttendanceField.CHECK_IN, to_iso_timestamp(now or now_utc()))

    def batch_check_out(self, names: Iterable[str], work_date: str, *, now: datetime | None = None) -> int:
        return self.batch_update(names, work_date, AttendanceField.CHECK_OUT, to_iso_timestamp(now or now_utc()))

    def reset_day(self, work_date: str) -> None:
        """Replace the day with one empty record per roster employee."""
        work_date = require_iso_date(work_date)

        def apply(employees: list[Employee], history: History):
            return employees, {**history, work_date: [AttendanceRecord.empty_for(e) for e in employees]}

        self._state.mutate(apply)
        logger.info("Reset attendance for %s", work_date)

    # ---- internals ---------------------------------------------------

    def _update_one(self, work_date: str, name: str, update: RecordUpdate) -> AttendanceRecord:
        work_date = require_iso_date(work_date)
        result: list[AttendanceRecord] = []

        def apply(employees: list[Employee], history: History):
            if not any(e.name == name for e in employees):
                raise ValidationError(f"Employee {name!r} not found")

            records = materialize_day(employees, history, work_date)
            i = next(i for i, r in enumerate(records) if r.name == name)
            records[i] = update(records[i])
            result.append(records[i])
            return employees, {**history, work_date: records}

        self._state.mutate(apply)
        return result[0]


def _require_status(value: str) -> str:
    status = (value or "").strip()
    if not status:
        raise ValidationError("Status is required")
    return status


def _matches_filter(r: AttendanceRecord, mode: AttendanceFilter) -> bool:
    if mode == AttendanceFilter.NOT_CHECKED_IN:
        return not r.check_in and not r.status
    if mode == AttendanceFilter.NOT_CHECKED_OUT:
        return bool(r.check_in) and not r.check_out
    if mode == AttendanceFilter.COMPLETED:
        return bool(r.check_in) and bool(r.check_out)
    if mode == AttendanceFilter.ON_LEAVE:
        return r.status in (LeaveStatus.VACATION.value, LeaveStatus.SICK.value)
    if mode == AttendanceFilter.ABSENT:
        return r.status == LeaveStatus.ABSENT.value
    if mode == AttendanceFilter.TIME_SHEET:
        return r.status == LeaveStatus.TIME_SHEET.value
    return True
