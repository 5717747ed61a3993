from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from ..attendance.model import History
from ..roster.model import Employee


@dataclass(frozen=True)
class StateChange:
    """Published after every committed change; ``origin`` tells who made it."""

    origin: str


Listener = Callable[[StateChange], None]
Mutator = Callable[[List[Employee], History], Tuple[List[Employee], History]]


class AttendanceState:
    """Roster + history owned by the running session.

    Records are immutable and history lists are replaced, never edited in place,
    so the snapshots handed out by the properties stay valid after later commits.
    """

    def __init__(self, employees: Iterable[Employee] = (), history: Optional[History] = None):
        self._employees: list[Employee] = list(employees)
        self._history: History = dict(history or {})
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    @property
    def employees(self) -> list[Employee]:
        with self._lock:
            return list(self._employees)

    @property
    def history(self) -> History:
        with self._lock:
            return dict(self._history)

    def snapshot(self) -> tuple[list[Employee], History]:
        with self._lock:
            return list(self._employees), dict(self._history)

    def mutate(self, fn: Mutator, *, origin: str = "local") -> None:
        """Apply ``fn`` atomically; ``fn`` may raise to abort without any change."""
        with self._lock:
            employees, history = fn(list(self._employees), dict(self._history))
            self._employees = list(employees)
            self._history = dict(history)
            self._notify(StateChange(origin=origin))

    def replace(
        self,
        *,
        employees: Optional[Iterable[Employee]] = None,
        history: Optional[History] = None,
        origin: str,
    ) -> None:
        with self._lock:
            if employees is not None:
                self._employees = list(employees)
            if history is not None:
                self._history = dict(history)
            self._notify(StateChange(origin=origin))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: StateChange) -> None:
        for listener in list(self._listeners):
            listener(change)
