"""Example: drive the service layer directly, without Flask."""

import importlib

from config import get_settings_module

from src.timekeeper.timekeeper.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings, threaded_sync=False)

    today = "2024-03-01"
    first = container.roster_service.list_employees()[0]
    container.attendance_service.check_in(first.name, today)
    for record in container.attendance_service.records_for(today)[:5]:
        print(container.attendance_service.to_ui(record))
    print(container.attendance_service.stats_for(today))


if __name__ == "__main__":
    main()
