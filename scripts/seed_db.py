from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timekeeper.timekeeper.common.datetime_utils import now_utc, to_iso_timestamp
from src.timekeeper.timekeeper.database.bootstrap import ensure_document
from src.timekeeper.timekeeper.roster.defaults import DEFAULT_EMPLOYEES


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    doc_key = getattr(settings, "DOCUMENT_KEY", "master")

    document = {
        "employees": [e.to_dict() for e in DEFAULT_EMPLOYEES],
        "history": {},
        "lastUpdated": to_iso_timestamp(now_utc()),
    }
    created = ensure_document(db_config, doc_key=doc_key, document=document)

    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    if created:
        print(f"OK: Seeded document {doc_key!r} with {len(DEFAULT_EMPLOYEES)} employees -> {target}")
    else:
        print(f"OK: Document {doc_key!r} already exists, left unchanged -> {target}")


if __name__ == "__main__":
    main()
