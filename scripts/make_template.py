from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timekeeper.timekeeper.reports.layout import build_starter_template


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    target = Path(getattr(settings, "TEMPLATE_PATH", "") or "static/Daily Attendance 2.xlsx")

    # never replace a branded template someone already dropped in
    if target.exists():
        print(f"OK: Template already present, left unchanged -> {target}")
        return

    target.parent.mkdir(parents=True, exist_ok=True)
    build_starter_template(os.getenv("COMPANY_NAME", "TimeKeeper")).save(target)
    print(f"OK: Wrote starter report template -> {target}")


if __name__ == "__main__":
    main()
