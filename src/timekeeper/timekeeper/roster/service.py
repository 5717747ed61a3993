from __future__ import annotations

import logging
from typing import Optional

from ..attendance.model import History
from ..common.validators import require_non_empty, require_unique
from ..core.constants import DEFAULT_DEPARTMENT
from ..core.exceptions import ValidationError
from ..session.state import AttendanceState
from .model import Employee

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: manage the employee roster (add / edit / remove)."""

    def __init__(self, state: AttendanceState):
        self._state = state

    def list_employees(self) -> list[Employee]:
        return self._state.employees

    def get(self, name: str) -> Optional[Employee]:
        return next((e for e in self._state.employees if e.name == name), None)

    def departments(self) -> list[str]:
        return sorted({e.department for e in self._state.employees})

    def add_employee(self, *, name: str, job: str = "", department: str = DEFAULT_DEPARTMENT) -> Employee:
        name = require_non_empty(name, "Name")
        employee = Employee(name=name, job=(job or "").strip(), department=department or DEFAULT_DEPARTMENT)

        def apply(employees: list[Employee], history: History):
            require_unique(name, (e.name for e in employees), "Name")
            return employees + [employee], history

        self._state.mutate(apply)
        logger.info("Added employee %s (%s)", employee.name, employee.department)
        return employee

    def edit_employee(self, old_name: str, *, name: str, job: str = "", department: str = "") -> Employee:
        """Update a roster entry and carry the new name/job/department into every
        stored history record of that employee. Check times and statuses are kept."""
        name = require_non_empty(name, "Name")
        updated = Employee(name=name, job=(job or "").strip(), department=department or DEFAULT_DEPARTMENT)

        def apply(employees: list[Employee], history: History):
            if not any(e.name == old_name for e in employees):
                raise ValidationError(f"Employee {old_name!r} not found")
            if name != old_name:
                require_unique(name, (e.name for e in employees), "Name")

            employees = [updated if e.name == old_name else e for e in employees]
            history = {
                day: [r.with_employee(updated) if r.name == old_name else r for r in records]
                for day, records in history.items()
            }
            return employees, history

        self._state.mutate(apply)
        if name != old_name:
            logger.info("Renamed employee %s -> %s", old_name, name)
        return updated

    def remove_employee(self, name: str) -> None:
        """Drop from the roster; stored history records are left as they are."""

        def apply(employees: list[Employee], history: History):
            if not any(e.name == name for e in employees):
                raise ValidationError(f"Employee {name!r} not found")
            return [e for e in employees if e.name != name], history

        self._state.mutate(apply)
        logger.info("Removed employee %s", name)
