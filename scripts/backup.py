"""Dump the shared attendance document to a backup JSON file.

The file has the same shape as the in-app backup export, so it can be restored
through the import endpoint.
"""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timekeeper.timekeeper.common.datetime_utils import now_utc, to_iso_timestamp
from src.timekeeper.timekeeper.core.constants import BACKUP_VERSION
from src.timekeeper.timekeeper.core.exceptions import SyncError
from src.timekeeper.timekeeper.database.connection import DBConfig, DatabaseConnection
from src.timekeeper.timekeeper.sync.mysql_document_store import MySQLDocumentStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    doc_key = getattr(settings, "DOCUMENT_KEY", "master")
    store = MySQLDocumentStore(DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG)))

    try:
        document = store.read(doc_key)
    except SyncError as e:
        raise SystemExit(f"Cannot read document {doc_key!r}: {e}")
    if document is None:
        raise SystemExit(f"Document {doc_key!r} does not exist, nothing to back up.")

    now = now_utc()
    payload = {
        "employees": document.get("employees") or [],
        "history": document.get("history") or {},
        "version": BACKUP_VERSION,
        "exportDate": to_iso_timestamp(now),
    }

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"TimeKeeper_Backup_{now.strftime('%Y%m%d_%H%M%S')}.json"
    out_file.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
