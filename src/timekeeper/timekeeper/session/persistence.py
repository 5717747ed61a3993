from __future__ import annotations

import json
import logging
from typing import Callable, Optional

from ..attendance.model import History, history_from_dict, history_to_dict
from ..core.constants import EMPLOYEES_STORAGE_KEY, HISTORY_STORAGE_KEY
from ..roster.model import Employee
from ..storage.key_value import KeyValueStorage
from .state import AttendanceState, StateChange

logger = logging.getLogger(__name__)


class LocalPersistence:
    """Mirror the session state into local key-value storage.

    Read once at startup as the seed; written after every committed change.
    """

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    def load_employees(self) -> Optional[list[Employee]]:
        data = self._load_json(EMPLOYEES_STORAGE_KEY)
        if not isinstance(data, list):
            return None
        return [Employee.from_dict(e) for e in data if isinstance(e, dict)]

    def load_history(self) -> Optional[History]:
        data = self._load_json(HISTORY_STORAGE_KEY)
        if not isinstance(data, dict):
            return None
        return history_from_dict(data)

    def save(self, state: AttendanceState) -> None:
        employees, history = state.snapshot()
        self._storage.set(
            EMPLOYEES_STORAGE_KEY,
            json.dumps([e.to_dict() for e in employees], ensure_ascii=False),
        )
        self._storage.set(HISTORY_STORAGE_KEY, json.dumps(history_to_dict(history), ensure_ascii=False))

    def attach(self, state: AttendanceState) -> Callable[[], None]:
        def on_change(change: StateChange) -> None:
            self.save(state)

        return state.subscribe(on_change)

    def _load_json(self, key: str):
        raw = self._storage.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable local storage entry %s", key)
            return None
