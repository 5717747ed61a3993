from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Optional

import mysql.connector

from ..core.exceptions import SyncError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, write: bool = False):
    """Short-lived connection + dict cursor.

    Driver errors surface as :class:`SyncError` so callers only deal with the
    domain taxonomy; writes are committed on success and rolled back otherwise.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise SyncError(f"Cannot connect to document database: {e}") from e

    try:
        cur = conn.cursor(dictionary=True)
        try:
            yield cur
            if write:
                conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        if write:
            conn.rollback()
        raise SyncError(f"Document database error: {e}") from e
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None
