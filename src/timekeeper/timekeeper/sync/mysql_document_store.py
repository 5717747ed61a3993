from __future__ import annotations

import json
import logging
import threading
from typing import Callable, Optional

from ..core.exceptions import SyncError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .document_store import ChangeHandler, Document, DocumentStore, ErrorHandler

logger = logging.getLogger(__name__)


class MySQLDocumentStore(DocumentStore):
    """Documents kept as JSON rows of the ``documents`` table.

    Every write bumps ``version``; subscriptions poll that column on a daemon
    thread and deliver the body whenever it moves.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, poll_seconds: float = 2.0):
        self._conn_factory = conn_factory
        self._poll_seconds = float(poll_seconds)
        self._stops: list[threading.Event] = []
        self._lock = threading.Lock()

    def connect(self) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("SELECT COUNT(*) AS n FROM documents")
            fetchone(cur)

    def disconnect(self) -> None:
        with self._lock:
            stops, self._stops = self._stops, []
        for stop in stops:
            stop.set()

    def read(self, key: str) -> Optional[Document]:
        row = self._read_row(key)
        return self._decode(key, row["body"]) if row else None

    def write(self, key: str, document: Document) -> None:
        body = json.dumps(document, ensure_ascii=False)
        with db_cursor(self._conn_factory, write=True) as cur:
            cur.execute(
                """
                INSERT INTO documents (doc_key, body, version)
                VALUES (%s, %s, 1)
                ON DUPLICATE KEY UPDATE body=VALUES(body), version=version+1
                """,
                (key, body),
            )

    def subscribe(
        self,
        key: str,
        on_change: ChangeHandler,
        on_error: Optional[ErrorHandler] = None,
    ) -> Callable[[], None]:
        stop = threading.Event()
        with self._lock:
            self._stops.append(stop)

        thread = threading.Thread(
            target=self._poll,
            args=(key, on_change, on_error, stop),
            name=f"document-poll-{key}",
            daemon=True,
        )
        thread.start()

        def unsubscribe() -> None:
            stop.set()

        return unsubscribe

    def _poll(self, key: str, on_change: ChangeHandler, on_error: Optional[ErrorHandler], stop: threading.Event) -> None:
        seen: object = object()
        while not stop.is_set():
            try:
                row = self._read_row(key)
                version = row["version"] if row else None
                if version != seen:
                    seen = version
                    on_change(self._decode(key, row["body"]) if row else None)
            except SyncError as e:
                logger.error("Polling document %s failed: %s", key, e)
                if on_error:
                    on_error(e)
            stop.wait(self._poll_seconds)

    def _read_row(self, key: str):
        with db_cursor(self._conn_factory) as cur:
            cur.execute("SELECT body, version FROM documents WHERE doc_key=%s", (key,))
            return fetchone(cur)

    @staticmethod
    def _decode(key: str, body: str) -> Document:
        try:
            doc = json.loads(body)
        except ValueError as e:
            raise SyncError(f"Document {key!r} is not valid JSON") from e
        if not isinstance(doc, dict):
            raise SyncError(f"Document {key!r} is not a JSON object")
        return doc
