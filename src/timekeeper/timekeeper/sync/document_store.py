from __future__ import annotations

import copy
import threading
from typing import Any, Callable, Dict, Optional, Protocol

Document = Dict[str, Any]
ChangeHandler = Callable[[Optional[Document]], None]
ErrorHandler = Callable[[Exception], None]


class DocumentStore(Protocol):
    """Remote whole-document store shared by every session.

    ``subscribe`` delivers the current document (None when absent) once, then
    again after every change, until the returned callable is invoked.
    Implementations raise :class:`~timekeeper.core.exceptions.SyncError`.
    """

    def connect(self) -> None:
        raise NotImplementedError

    def disconnect(self) -> None:
        raise NotImplementedError

    def read(self, key: str) -> Optional[Document]:
        raise NotImplementedError

    def write(self, key: str, document: Document) -> None:
        raise NotImplementedError

    def subscribe(
        self,
        key: str,
        on_change: ChangeHandler,
        on_error: Optional[ErrorHandler] = None,
    ) -> Callable[[], None]:
        raise NotImplementedError


class InMemoryDocumentStore(DocumentStore):
    """Process-local store; subscribers are notified synchronously on write."""

    def __init__(self, documents: Optional[Dict[str, Document]] = None):
        self._docs: Dict[str, Document] = {k: copy.deepcopy(v) for k, v in (documents or {}).items()}
        self._subs: Dict[str, list[ChangeHandler]] = {}
        self._lock = threading.RLock()
        self.connected = False
        self.writes: list[tuple[str, Document]] = []

    def connect(self) -> None:
        self.connected = True

    def disconnect(self) -> None:
        with self._lock:
            self._subs.clear()
        self.connected = False

    def read(self, key: str) -> Optional[Document]:
        with self._lock:
            doc = self._docs.get(key)
            return copy.deepcopy(doc) if doc is not None else None

    def write(self, key: str, document: Document) -> None:
        with self._lock:
            self._docs[key] = copy.deepcopy(document)
            self.writes.append((key, copy.deepcopy(document)))
            handlers = list(self._subs.get(key, []))
        for handler in handlers:
            handler(self.read(key))

    def subscribe(
        self,
        key: str,
        on_change: ChangeHandler,
        on_error: Optional[ErrorHandler] = None,
    ) -> Callable[[], None]:
        with self._lock:
            self._subs.setdefault(key, []).append(on_change)
        on_change(self.read(key))

        def unsubscribe() -> None:
            with self._lock:
                handlers = self._subs.get(key, [])
                if on_change in handlers:
                    handlers.remove(on_change)

        return unsubscribe
