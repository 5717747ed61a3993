from __future__ import annotations

from typing import Sequence

from ..roster.model import Employee
from .model import AttendanceRecord, History


def reconcile(roster: Sequence[Employee], history: History, work_date: str) -> list[AttendanceRecord]:
    """Effective attendance list for ``work_date``.

    Stored records keep their order and attendance fields but take department/job
    from the roster; roster employees without a record get an empty one appended;
    records whose name is no longer on the roster are dropped. Stored history is
    never modified.
    """
    records = list(history.get(work_date) or [])
    index = {r.name: i for i, r in reversed(list(enumerate(records)))}

    for emp in roster:
        if not emp.name:
            continue
        i = index.get(emp.name)
        if i is None:
            index[emp.name] = len(records)
            records.append(AttendanceRecord.empty_for(emp))
        else:
            records[i] = records[i].with_employee(emp)

    names = {emp.name for emp in roster}
    return [r for r in records if r.name in names]


def materialize_day(roster: Sequence[Employee], history: History, work_date: str) -> list[AttendanceRecord]:
    """Day list to store before the first edit of a date.

    Unlike :func:`reconcile` this keeps records of removed employees, so editing
    a day never deletes stored history.
    """
    records = list(history.get(work_date) or [])
    present = {r.name for r in records}
    for emp in roster:
        if emp.name and emp.name not in present:
            records.append(AttendanceRecord.empty_for(emp))
            present.add(emp.name)
    return records
