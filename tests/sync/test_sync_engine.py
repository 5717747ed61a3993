from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.timekeeper.timekeeper.attendance.model import AttendanceRecord
from src.timekeeper.timekeeper.core.enums import SyncPhase
from src.timekeeper.timekeeper.core.exceptions import SyncError
from src.timekeeper.timekeeper.roster.model import Employee
from src.timekeeper.timekeeper.roster.service import RosterService
from src.timekeeper.timekeeper.session.state import AttendanceState
from src.timekeeper.timekeeper.sync.document_store import InMemoryDocumentStore
from src.timekeeper.timekeeper.sync.engine import LocalMutation, RemoteSnapshot, SyncEngine

KEY = "master"


class ManualTimer:
    def __init__(self):
        self.callback = None
        self.scheduled = 0

    def schedule(self, delay, callback):
        self.callback = callback
        self.scheduled += 1

    def cancel(self):
        self.callback = None

    def fire(self):
        callback, self.callback = self.callback, None
        if callback is not None:
            callback()


class FailingStore(InMemoryDocumentStore):
    def write(self, key, document):
        raise SyncError("network down")


def _engine(state, store, timer):
    return SyncEngine(
        state,
        store,
        document_key=KEY,
        timer=timer,
        threaded=False,
        clock=lambda: datetime(2024, 3, 1, tzinfo=timezone.utc),
    )


def _doc(names, history=None):
    return {
        "employees": [{"name": n, "job": "", "department": "IT"} for n in names],
        "history": history or {},
    }


def test_rapid_mutations_produce_one_write(state):
    store, timer = InMemoryDocumentStore(), ManualTimer()
    engine = _engine(state, store, timer)
    engine.start()
    engine.process_pending()
    roster = RosterService(state)

    for i in range(5):
        roster.add_employee(name=f"New {i}")
    engine.process_pending()
    timer.fire()
    engine.process_pending()

    assert engine.write_attempts == 1
    assert len(store.writes) == 1
    written = store.writes[0][1]
    assert [e["name"] for e in written["employees"]][-1] == "New 4"
    assert written["lastUpdated"] == "2024-03-01T00:00:00.000Z"


def test_own_write_echo_is_not_applied(state):
    store, timer = InMemoryDocumentStore(), ManualTimer()
    engine = _engine(state, store, timer)
    engine.start()
    engine.process_pending()
    timer.fire()
    engine.process_pending()

    assert engine.write_attempts == 1
    assert engine.replacements == 0
    assert timer.callback is None


def test_duplicate_snapshot_replaces_state_once(state):
    engine = _engine(state, InMemoryDocumentStore(), ManualTimer())
    doc = _doc(["X", "Y"])

    engine.handle(RemoteSnapshot(doc))
    engine.handle(RemoteSnapshot(doc))

    assert engine.replacements == 1
    assert [e.name for e in state.employees] == ["X", "Y"]


def test_existing_remote_document_wins_on_load_without_write_back(state):
    store = InMemoryDocumentStore({KEY: _doc(["Remote"])})
    timer = ManualTimer()
    engine = _engine(state, store, timer)

    engine.start()
    engine.process_pending()

    assert engine.phase is SyncPhase.LOADED
    assert [e.name for e in state.employees] == ["Remote"]
    assert timer.callback is None
    assert store.writes == []


def test_empty_remote_is_seeded_from_local(state):
    store, timer = InMemoryDocumentStore(), ManualTimer()
    engine = _engine(state, store, timer)
    engine.start()
    engine.process_pending()

    assert timer.callback is not None
    timer.fire()
    engine.process_pending()

    assert [e["name"] for e in store.read(KEY)["employees"]] == ["Ahmed", "Mona", "Sara"]


def test_no_write_before_first_snapshot(state):
    timer = ManualTimer()
    engine = _engine(state, InMemoryDocumentStore(), timer)

    engine.handle(LocalMutation())

    assert engine.phase is SyncPhase.UNLOADED
    assert timer.scheduled == 0


def test_failed_write_resets_fingerprint_for_retry(state):
    timer = ManualTimer()
    engine = _engine(state, FailingStore(), timer)
    engine.start()
    engine.process_pending()

    timer.fire()
    engine.process_pending()

    assert engine.write_attempts == 1
    assert engine.last_known_fingerprint is None
    assert engine.is_syncing is False

    RosterService(state).add_employee(name="Retry")
    engine.process_pending()
    assert timer.callback is not None


def test_partial_document_keeps_missing_part(state):
    state.replace(history={"2024-03-01": [AttendanceRecord(name="Mona", department="Finance", job="")]}, origin="test")
    engine = _engine(state, InMemoryDocumentStore(), ManualTimer())

    engine.handle(RemoteSnapshot({"employees": [{"name": "Z", "job": "", "department": "IT"}]}))

    assert [e.name for e in state.employees] == ["Z"]
    assert list(state.history) == ["2024-03-01"]


def test_two_sessions_converge_through_shared_store():
    store = InMemoryDocumentStore()
    a_state = AttendanceState([Employee(name="A")], {})
    b_state = AttendanceState([Employee(name="B")], {})
    a_timer, b_timer = ManualTimer(), ManualTimer()
    a = _engine(a_state, store, a_timer)
    b = _engine(b_state, store, b_timer)

    a.start()
    a.process_pending()
    a_timer.fire()
    a.process_pending()

    b.start()
    b.process_pending()

    assert [e.name for e in b_state.employees] == ["A"]
    assert b_timer.callback is None

    RosterService(b_state).add_employee(name="C")
    b.process_pending()
    b_timer.fire()
    b.process_pending()
    a.process_pending()

    assert [e.name for e in a_state.employees] == ["A", "C"]
    assert a_timer.callback is None


def test_resync_reloads_remote(state):
    store = InMemoryDocumentStore({KEY: _doc(["Remote"])})
    engine = _engine(state, store, ManualTimer())
    engine.handle(RemoteSnapshot(store.read(KEY)))
    state.replace(employees=[Employee(name="Local edit")], origin="local")

    engine.resync()

    assert [e.name for e in state.employees] == ["Remote"]
    assert engine.phase is SyncPhase.LOADED
    assert engine.replacements == 2


def test_stop_unsubscribes(state):
    store = InMemoryDocumentStore()
    engine = _engine(state, store, ManualTimer())
    engine.start()
    engine.process_pending()
    engine.stop()

    store.write(KEY, _doc(["Late"]))

    assert engine.process_pending() == 0
    assert store.connected is False


def test_unreachable_store_leaves_session_local_only(state):
    class DownStore(InMemoryDocumentStore):
        def connect(self):
            raise SyncError("refused")

    engine = _engine(state, DownStore(), ManualTimer())
    engine.start()

    assert engine.is_syncing is False
    assert engine.phase is SyncPhase.UNLOADED


@pytest.mark.parametrize("document", [None, {}])
def test_absent_or_empty_document_only_marks_loaded(state, document):
    engine = _engine(state, InMemoryDocumentStore(), ManualTimer())

    engine.handle(RemoteSnapshot(document))

    assert engine.phase is SyncPhase.LOADED
    assert [e.name for e in state.employees] == ["Ahmed", "Mona", "Sara"]
