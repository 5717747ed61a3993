from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional

from ..roster.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day.

    ``status`` and ``check_in`` are exclusive: the ``with_*`` updaters keep that
    invariant so callers never build partial records by hand.
    """

    name: str
    department: str
    job: str
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def empty_for(cls, employee: Employee) -> "AttendanceRecord":
        return cls(name=employee.name, department=employee.department, job=employee.job)

    def with_check_in(self, timestamp: Optional[str]) -> "AttendanceRecord":
        return replace(self, check_in=timestamp, status=None)

    def with_check_out(self, timestamp: Optional[str]) -> "AttendanceRecord":
        return replace(self, check_out=timestamp)

    def with_status(self, status: Optional[str]) -> "AttendanceRecord":
        if status is None:
            return replace(self, status=None)
        return replace(self, status=status, check_in=None, check_out=None)

    def with_employee(self, employee: Employee) -> "AttendanceRecord":
        """Copy descriptive fields from the roster, keeping the attendance fields."""
        return replace(self, name=employee.name, department=employee.department, job=employee.job)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "department": self.department,
            "job": self.job,
            "checkIn": self.check_in,
            "checkOut": self.check_out,
        }
        if self.status is not None:
            data["status"] = self.status
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        return cls(
            name=str(data.get("name") or ""),
            department=str(data.get("department") or ""),
            job=str(data.get("job") or ""),
            check_in=data.get("checkIn") or None,
            check_out=data.get("checkOut") or None,
            status=data.get("status") or None,
        )


# ISO date (yyyy-MM-dd) -> that day's records. A missing key means "never materialized".
History = Dict[str, List[AttendanceRecord]]


def history_to_dict(history: History) -> dict[str, list[dict[str, Any]]]:
    return {day: [r.to_dict() for r in records] for day, records in history.items()}


def history_from_dict(data: Mapping[str, Any]) -> History:
    return {
        str(day): [AttendanceRecord.from_dict(r) for r in (records or []) if isinstance(r, Mapping)]
        for day, records in data.items()
    }
