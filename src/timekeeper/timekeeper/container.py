from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Optional

from .attendance.service import AttendanceService
from .backup.service import BackupService
from .common.datetime_utils import resolve_timezone
from .core.constants import DEFAULT_DEBOUNCE_SECONDS, DEFAULT_DOCUMENT_KEY, DEFAULT_POLL_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .roster.defaults import DEFAULT_EMPLOYEES
from .roster.service import RosterService
from .session.persistence import LocalPersistence
from .session.state import AttendanceState
from .storage.key_value import InMemoryKeyValueStorage, JsonFileStorage, KeyValueStorage
from .sync.document_store import DocumentStore, InMemoryDocumentStore
from .sync.engine import DebounceTimer, SyncEngine
from .sync.mysql_document_store import MySQLDocumentStore


@dataclass(frozen=True)
class Container:
    tz: Optional[tzinfo]

    storage: KeyValueStorage
    store: DocumentStore
    state: AttendanceState
    persistence: LocalPersistence
    sync_engine: SyncEngine

    roster_service: RosterService
    attendance_service: AttendanceService
    report_service: ReportService
    backup_service: BackupService


def build_container(
    *,
    settings: Any,
    store: Optional[DocumentStore] = None,
    storage: Optional[KeyValueStorage] = None,
    timer: Optional[DebounceTimer] = None,
    threaded_sync: bool = True,
) -> Container:
    """Wire the session from a settings module (or any object with the same attributes).

    ``store``/``storage``/``timer`` override what the settings would build.
    """
    tz = resolve_timezone(getattr(settings, "TIMEZONE", ""))

    if storage is None:
        directory = getattr(settings, "LOCAL_STORAGE_DIR", "")
        storage = JsonFileStorage(directory) if directory else InMemoryKeyValueStorage()
    if store is None:
        store = _build_store(settings)

    persistence = LocalPersistence(storage)
    employees = persistence.load_employees()
    history = persistence.load_history()
    state = AttendanceState(
        employees if employees is not None else DEFAULT_EMPLOYEES,
        history if history is not None else {},
    )
    persistence.attach(state)

    sync_engine = SyncEngine(
        state,
        store,
        document_key=getattr(settings, "DOCUMENT_KEY", DEFAULT_DOCUMENT_KEY),
        debounce_seconds=float(getattr(settings, "SYNC_DEBOUNCE_SECONDS", DEFAULT_DEBOUNCE_SECONDS)),
        timer=timer,
        threaded=threaded_sync,
    )

    return Container(
        tz=tz,
        storage=storage,
        store=store,
        state=state,
        persistence=persistence,
        sync_engine=sync_engine,
        roster_service=RosterService(state),
        attendance_service=AttendanceService(state, tz=tz),
        report_service=ReportService(state, template_path=getattr(settings, "TEMPLATE_PATH", "") or None, tz=tz),
        backup_service=BackupService(state, tz=tz),
    )


def _build_store(settings: Any) -> DocumentStore:
    kind = str(getattr(settings, "DOCUMENT_STORE", "memory")).lower()
    if kind == "memory":
        return InMemoryDocumentStore()
    if kind == "mysql":
        conn = DatabaseConnection(DBConfig.from_mapping(getattr(settings, "DB_CONFIG", {})))
        return MySQLDocumentStore(conn, poll_seconds=float(getattr(settings, "SYNC_POLL_SECONDS", DEFAULT_POLL_SECONDS)))
    raise ValueError(f"Unknown DOCUMENT_STORE {kind!r}")
