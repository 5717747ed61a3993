from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import BackupImportError, ExportError, SyncError, ValidationError


def ok(**payload: Any):
    return jsonify({"success": True, **payload})


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    @app.errorhandler(BackupImportError)
    def _bad_request(e):
        app.logger.warning("Rejected %s %s: %s", request.method, request.path, e)
        return fail(str(e), 400)

    @app.errorhandler(ExportError)
    def _export_failed(e):
        app.logger.error("Export failed: %s", e)
        return fail(str(e), 500)

    @app.errorhandler(SyncError)
    def _sync_failed(e):
        app.logger.error("Sync failed: %s", e)
        return fail(str(e), 503)

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Internal server error", 500)
