from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Protocol, Union

from ..attendance.model import history_from_dict, history_to_dict
from ..common.datetime_utils import now_utc, to_iso_timestamp
from ..core.constants import DEFAULT_DEBOUNCE_SECONDS, DEFAULT_DOCUMENT_KEY
from ..core.enums import SyncPhase
from ..core.exceptions import SyncError
from ..roster.model import Employee
from ..session.state import AttendanceState, StateChange
from .document_store import Document, DocumentStore
from .fingerprint import stable_fingerprint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalMutation:
    origin: str = "local"


@dataclass(frozen=True)
class RemoteSnapshot:
    document: Optional[Document]


@dataclass(frozen=True)
class _WriteDue:
    generation: int


@dataclass(frozen=True)
class _Stop:
    pass


SyncEvent = Union[LocalMutation, RemoteSnapshot, _WriteDue, _Stop]


class DebounceTimer(Protocol):
    """Single cancellable, re-armable timer."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        raise NotImplementedError

    def cancel(self) -> None:
        raise NotImplementedError


class ThreadingDebounceTimer(DebounceTimer):
    def __init__(self):
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(delay, callback)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class SyncEngine:
    """Two-way sync between the session state and one shared remote document.

    Inbound snapshots and local mutations are queued as events and handled one
    at a time. A stable fingerprint of roster + history gates both directions:
    snapshots equal to the last known fingerprint are echoes and are dropped;
    local states equal to it are not written. Outbound writes are debounced
    (trailing edge, one pending write at most) and the whole document is
    replaced on every write, so concurrent sessions resolve as last writer wins.

    With ``threaded=False`` no worker is started and callers drain the queue
    with :meth:`process_pending`.
    """

    def __init__(
        self,
        state: AttendanceState,
        store: DocumentStore,
        *,
        document_key: str = DEFAULT_DOCUMENT_KEY,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        timer: Optional[DebounceTimer] = None,
        clock: Callable[[], datetime] = now_utc,
        threaded: bool = True,
    ):
        self._state = state
        self._store = store
        self._key = document_key
        self._debounce = float(debounce_seconds)
        self._timer = timer or ThreadingDebounceTimer()
        self._clock = clock
        self._threaded = threaded

        self._events: "queue.Queue[SyncEvent]" = queue.Queue()
        self._lock = threading.RLock()
        self._worker: Optional[threading.Thread] = None
        self._unsubscribe_remote: Optional[Callable[[], None]] = None
        self._unsubscribe_state: Optional[Callable[[], None]] = None

        self._phase = SyncPhase.UNLOADED
        self._last_known: Optional[str] = None
        self._generation = 0
        self._is_syncing = False

        self.replacements = 0
        self.write_attempts = 0

    # ---------- status ----------
    @property
    def phase(self) -> SyncPhase:
        return self._phase

    @property
    def is_syncing(self) -> bool:
        return self._is_syncing

    @property
    def last_known_fingerprint(self) -> Optional[str]:
        return self._last_known

    def status(self) -> dict[str, Any]:
        return {
            "phase": self._phase.value,
            "isSyncing": self._is_syncing,
            "documentKey": self._key,
            "replacements": self.replacements,
            "writeAttempts": self.write_attempts,
        }

    # ---------- lifecycle ----------
    def start(self) -> None:
        """Connect, subscribe and start reacting to local changes.

        A store that cannot be reached leaves the session running local-only.
        """
        self._is_syncing = True
        if self._threaded and self._worker is None:
            self._worker = threading.Thread(target=self._run, name="sync-engine", daemon=True)
            self._worker.start()

        self._unsubscribe_state = self._state.subscribe(self._on_state_change)
        try:
            self._store.connect()
            self._unsubscribe_remote = self._store.subscribe(
                self._key, self._on_remote_change, self._on_remote_error
            )
        except SyncError as e:
            logger.error("Remote document unavailable, continuing local-only: %s", e)
            self._is_syncing = False
        logger.info("Sync engine started for document %s", self._key)

    def stop(self) -> None:
        self._timer.cancel()
        if self._unsubscribe_state is not None:
            self._unsubscribe_state()
            self._unsubscribe_state = None
        if self._unsubscribe_remote is not None:
            self._unsubscribe_remote()
            self._unsubscribe_remote = None
        if self._worker is not None:
            self._events.put(_Stop())
            self._worker.join(timeout=5)
            self._worker = None
        self._store.disconnect()
        logger.info("Sync engine stopped")

    def resync(self) -> None:
        """Forget what we know about the remote and reload it now."""
        with self._lock:
            self._timer.cancel()
            self._generation += 1
            self._last_known = None
            self._phase = SyncPhase.UNLOADED
            self._is_syncing = True
        try:
            document = self._store.read(self._key)
        except SyncError as e:
            logger.error("Forced refresh failed: %s", e)
            with self._lock:
                self._is_syncing = False
            raise
        self.handle(RemoteSnapshot(document))

    # ---------- event intake ----------
    def submit(self, event: SyncEvent) -> None:
        self._events.put(event)

    def process_pending(self) -> int:
        """Handle every queued event on the calling thread; returns how many."""
        handled = 0
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return handled
            if not isinstance(event, _Stop):
                self.handle(event)
                handled += 1

    def _run(self) -> None:
        while True:
            event = self._events.get()
            if isinstance(event, _Stop):
                return
            try:
                self.handle(event)
            except Exception:
                logger.exception("Sync event %r failed", event)

    def _on_state_change(self, change: StateChange) -> None:
        self.submit(LocalMutation(origin=change.origin))

    def _on_remote_change(self, document: Optional[Document]) -> None:
        self.submit(RemoteSnapshot(document))

    def _on_remote_error(self, error: Exception) -> None:
        logger.error("Remote subscription error: %s", error)
        with self._lock:
            self._is_syncing = False
            self._last_known = None

    # ---------- state machine ----------
    def handle(self, event: SyncEvent) -> None:
        with self._lock:
            if isinstance(event, RemoteSnapshot):
                self._handle_snapshot(event.document)
            elif isinstance(event, LocalMutation):
                self._handle_local_change()
            elif isinstance(event, _WriteDue):
                if event.generation == self._generation:
                    self._write()

    def _handle_snapshot(self, document: Optional[Document]) -> None:
        first_load = self._phase is SyncPhase.UNLOADED

        employees, history = _parse_document(document or {})
        if employees is not None or history is not None:
            fingerprint = stable_fingerprint(employees, history)
            if fingerprint != self._last_known:
                self._last_known = fingerprint
                self._state.replace(employees=employees, history=history, origin="remote")
                self.replacements += 1
                logger.info("Applied remote document %s", self._key)
            else:
                logger.debug("Ignoring echo of our own write to %s", self._key)

        self._phase = SyncPhase.LOADED
        self._is_syncing = False
        if first_load:
            self._handle_local_change()

    def _handle_local_change(self) -> None:
        self._timer.cancel()
        self._generation += 1
        if self._phase is not SyncPhase.LOADED:
            return

        employees, history = self._state.snapshot()
        if stable_fingerprint(employees, history) == self._last_known:
            return

        generation = self._generation
        logger.debug("Local change, saving %s in %.1fs", self._key, self._debounce)
        self._timer.schedule(self._debounce, lambda: self.submit(_WriteDue(generation)))

    def _write(self) -> None:
        employees, history = self._state.snapshot()
        self._last_known = stable_fingerprint(employees, history)
        self._is_syncing = True
        self.write_attempts += 1
        try:
            self._store.write(
                self._key,
                {
                    "employees": [e.to_dict() for e in employees],
                    "history": history_to_dict(history),
                    "lastUpdated": to_iso_timestamp(self._clock()),
                },
            )
            logger.info("Saved document %s", self._key)
        except SyncError as e:
            logger.error("Saving document %s failed: %s", self._key, e)
            self._last_known = None
        finally:
            self._is_syncing = False


def _parse_document(document: Document):
    raw_employees = document.get("employees")
    raw_history = document.get("history")
    employees = (
        [Employee.from_dict(e) for e in raw_employees if isinstance(e, dict)]
        if isinstance(raw_employees, list)
        else None
    )
    history = history_from_dict(raw_history) if isinstance(raw_history, dict) else None
    return employees, history
