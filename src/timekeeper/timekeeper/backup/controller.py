from __future__ import annotations

from io import BytesIO

from flask import Flask, request, send_file

from ..common.http import ok
from ..core.exceptions import BackupImportError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.backup_service

    @app.route("/api/backup", methods=["GET"], endpoint="backup_export")
    def backup_export():
        backup = service.export_backup()
        return send_file(
            BytesIO(backup.content),
            mimetype=backup.mimetype,
            as_attachment=True,
            download_name=backup.filename,
        )

    @app.route("/api/backup", methods=["POST"], endpoint="backup_import")
    def backup_import():
        confirmed = request.args.get("confirm", "").lower() in {"1", "true", "yes"}
        upload = request.files.get("file")
        if upload is not None:
            raw = upload.read()
        else:
            raw = request.get_data()
        if not raw:
            raise BackupImportError("No backup file provided")

        employees, days = service.import_backup(raw, confirmed=confirmed)
        return ok(employees=employees, days=days)
