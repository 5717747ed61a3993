from __future__ import annotations

from flask import Flask

from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    engine = container.sync_engine

    @app.route("/api/sync", methods=["GET"], endpoint="sync_status")
    def sync_status():
        return ok(**engine.status())

    @app.route("/api/sync/refresh", methods=["POST"], endpoint="sync_refresh")
    def sync_refresh():
        engine.resync()
        return ok(**engine.status())
