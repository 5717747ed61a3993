from __future__ import annotations

import json
from typing import Optional, Sequence

from ..attendance.model import History
from ..roster.model import Employee


def stable_fingerprint(employees: Optional[Sequence[Employee]], history: Optional[History]) -> str:
    """Serialization of roster + history with date keys sorted.

    Only used for equality: two states with the same fingerprint are the same
    data, whatever order the history dates were inserted in.
    """
    emps = [e.to_dict() for e in employees] if employees is not None else None
    hist = {day: [r.to_dict() for r in history[day]] for day in sorted(history)} if history is not None else None
    return json.dumps({"emps": emps, "hist": hist}, ensure_ascii=False, separators=(",", ":"))
