from __future__ import annotations

import threading

import mysql.connector
import pytest

from src.timekeeper.timekeeper.core.exceptions import SyncError
from src.timekeeper.timekeeper.sync.mysql_document_store import MySQLDocumentStore


class FakeCursor:
    def __init__(self, db):
        self._db = db
        self._result = None

    def execute(self, sql, params=()):
        sql = " ".join(sql.split())
        if sql.startswith("SELECT COUNT(*)"):
            self._result = {"n": len(self._db.rows)}
        elif sql.startswith("SELECT body, version"):
            row = self._db.rows.get(params[0])
            self._result = dict(row) if row else None
        elif sql.startswith("INSERT INTO documents"):
            key, body = params
            row = self._db.rows.get(key)
            version = row["version"] + 1 if row else 1
            self._db.pending[key] = {"body": body, "version": version}
        else:
            raise AssertionError(sql)

    def fetchone(self):
        return self._result

    def close(self):
        pass


class FakeConn:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        self._db.rows.update(self._db.pending)
        self._db.pending.clear()

    def rollback(self):
        self._db.pending.clear()

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self):
        self.rows = {}
        self.pending = {}
        self.down = False

    def connect(self):
        if self.down:
            raise mysql.connector.Error("Can't connect to MySQL server")
        return FakeConn(self)


def test_write_then_read_bumps_version():
    db = FakeConnFactory()
    store = MySQLDocumentStore(db)

    store.write("master", {"employees": [{"name": "أحمد"}]})
    store.write("master", {"employees": []})

    assert store.read("master") == {"employees": []}
    assert db.rows["master"]["version"] == 2
    assert store.read("other") is None


def test_driver_errors_become_sync_errors():
    db = FakeConnFactory()
    db.down = True
    store = MySQLDocumentStore(db)

    with pytest.raises(SyncError):
        store.connect()
    with pytest.raises(SyncError):
        store.write("master", {})


def test_corrupt_body_is_sync_error():
    db = FakeConnFactory()
    db.rows["master"] = {"body": "{oops", "version": 1}

    with pytest.raises(SyncError):
        MySQLDocumentStore(db).read("master")


def test_subscription_polls_for_new_versions():
    db = FakeConnFactory()
    store = MySQLDocumentStore(db, poll_seconds=0.01)
    seen = []
    got_update = threading.Event()

    def on_change(doc):
        seen.append(doc)
        if doc is not None:
            got_update.set()

    unsubscribe = store.subscribe("master", on_change)
    store.write("master", {"employees": [{"name": "A"}]})

    assert got_update.wait(timeout=2)
    unsubscribe()
    store.disconnect()
    assert seen[-1] == {"employees": [{"name": "A"}]}
