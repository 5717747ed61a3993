from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..core.constants import DEFAULT_DEPARTMENT


@dataclass(frozen=True)
class Employee:
    """Domain entity: roster employee. The name is the identity key."""

    name: str
    job: str = ""
    department: str = DEFAULT_DEPARTMENT

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "job": self.job, "department": self.department}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Employee":
        return cls(
            name=str(data.get("name") or ""),
            job=str(data.get("job") or ""),
            department=str(data.get("department") or ""),
        )
