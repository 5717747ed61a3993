from __future__ import annotations

import importlib
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .backup.controller import register as register_backup
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .reports.controller import register as register_reports
from .roster.controller import register as register_roster
from .sync.controller import register as register_sync

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(app: Flask, *, level: str = "INFO", log_file: str = "") -> None:
    level_no = logging.getLevelName(str(level).upper())
    if not isinstance(level_no, int):
        level_no = logging.INFO

    package_logger = logging.getLogger(__name__.rsplit(".", 1)[0])
    package_logger.setLevel(level_no)
    app.logger.setLevel(level_no)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=10485760, backupCount=5)
        file_handler.setLevel(level_no)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        app.logger.addHandler(file_handler)
        package_logger.addHandler(file_handler)


def create_app(container: Optional[Container] = None, *, start_sync: bool = True) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(
        app,
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        log_file=getattr(settings, "LOG_FILE", ""),
    )

    db_config = getattr(settings, "DB_CONFIG", {})
    if container is None:
        if getattr(settings, "AUTO_INIT_DB", False) and getattr(settings, "DOCUMENT_STORE", "") == "mysql":
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            app.logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(settings=settings)

    app.logger.info(
        "TimeKeeper starting: settings=%s store=%s document=%s",
        settings_module,
        type(container.store).__name__,
        getattr(settings, "DOCUMENT_KEY", "master"),
    )

    if not container.report_service.template_available():
        app.logger.warning(
            "Report template %r not found: daily and history exports will fail until one is provided "
            "(scripts/make_template.py writes a starter template)",
            getattr(settings, "TEMPLATE_PATH", ""),
        )

    register_error_handlers(app)
    register_attendance(app, container)
    register_roster(app, container)
    register_reports(app, container)
    register_backup(app, container)
    register_sync(app, container)

    app.extensions["timekeeper"] = container
    if start_sync:
        container.sync_engine.start()

    return app


def run() -> None:
    app = create_app()
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])
