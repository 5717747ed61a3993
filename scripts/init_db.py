"""Create the document table and check that the app can reach it.

Safe to re-run: the schema only uses CREATE ... IF NOT EXISTS. Seeding the
roster document is left to ``seed_db.py``.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timekeeper.timekeeper.core.exceptions import SyncError
from src.timekeeper.timekeeper.database.bootstrap import apply_schema, list_tables
from src.timekeeper.timekeeper.database.connection import DBConfig, DatabaseConnection
from src.timekeeper.timekeeper.sync.mysql_document_store import MySQLDocumentStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_mapping(settings.DB_CONFIG)
    doc_key = getattr(settings, "DOCUMENT_KEY", "master")
    target = f"{db_config.user}@{db_config.host}:{db_config.port}/{db_config.database}"

    apply_schema(settings.DB_CONFIG, schema_path=REPO_ROOT / "database" / "schema.sql")
    if "documents" not in list_tables(settings.DB_CONFIG):
        raise SystemExit(f"Schema applied but table 'documents' is missing -> {target}")

    store = MySQLDocumentStore(DatabaseConnection(db_config))
    try:
        store.connect()
        document = store.read(doc_key)
    except SyncError as e:
        raise SystemExit(f"Table 'documents' is not usable -> {target}: {e}")

    if document is None:
        print(f"OK: Schema ready -> {target}; document {doc_key!r} not seeded yet (run scripts/seed_db.py)")
    else:
        print(
            f"OK: Schema ready -> {target}; document {doc_key!r} holds "
            f"{len(document.get('employees') or [])} employees, {len(document.get('history') or {})} days"
        )


if __name__ == "__main__":
    main()
