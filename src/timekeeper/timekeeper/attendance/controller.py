from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import shift_date, today_str
from ..common.http import json_body, ok
from ..common.validators import require_iso_date, require_keys
from ..core.enums import AttendanceField, AttendanceFilter, LeaveStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _date(value) -> str:
        return require_iso_date(str(value)) if value else today_str(container.tz)

    def _field(value) -> AttendanceField:
        try:
            return AttendanceField(value)
        except ValueError as e:
            raise ValidationError(f"Unknown field {value!r}") from e

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_view")
    def attendance_view():
        work_date = _date(request.args.get("date"))
        try:
            mode = AttendanceFilter(request.args.get("filter", AttendanceFilter.ALL.value))
        except ValueError as e:
            raise ValidationError(f"Unknown filter {request.args.get('filter')!r}") from e

        records = service.filter_records(
            service.records_for(work_date),
            mode=mode,
            search=request.args.get("search", ""),
            department=request.args.get("department") or None,
        )
        stats = service.stats_for(work_date)
        return ok(
            date=work_date,
            previousDate=shift_date(work_date, -1),
            nextDate=shift_date(work_date, 1),
            records=[service.to_ui(r) for r in records],
            stats={
                "total": stats.total,
                "present": stats.present,
                "completed": stats.completed,
                "remaining": stats.remaining,
            },
            departments=container.roster_service.departments(),
            statuses=[s.value for s in LeaveStatus],
        )

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    def attendance_check_in():
        data = require_keys(json_body(), ["name"])
        record = service.check_in(data["name"], _date(data.get("date")))
        return ok(record=service.to_ui(record))

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    def attendance_check_out():
        data = require_keys(json_body(), ["name"])
        record = service.check_out(data["name"], _date(data.get("date")))
        return ok(record=service.to_ui(record))

    @app.route("/api/attendance/cancel-check-out", methods=["POST"], endpoint="attendance_cancel_check_out")
    def attendance_cancel_check_out():
        data = require_keys(json_body(), ["name"])
        record = service.cancel_check_out(data["name"], _date(data.get("date")))
        return ok(record=service.to_ui(record))

    @app.route("/api/attendance/status", methods=["POST", "DELETE"], endpoint="attendance_status")
    def attendance_status():
        data = require_keys(json_body(), ["name"])
        work_date = _date(data.get("date"))
        if request.method == "DELETE":
            record = service.clear_status(data["name"], work_date)
        else:
            record = service.set_status(data["name"], work_date, str(data.get("status") or ""))
        return ok(record=service.to_ui(record))

    @app.route("/api/attendance/time", methods=["POST"], endpoint="attendance_edit_time")
    def attendance_edit_time():
        data = require_keys(json_body(), ["name", "field", "time"])
        record = service.edit_time(data["name"], _date(data.get("date")), _field(data["field"]), str(data["time"]))
        return ok(record=service.to_ui(record))

    @app.route("/api/attendance/batch", methods=["POST"], endpoint="attendance_batch")
    def attendance_batch():
        data = require_keys(json_body(), ["names", "action"])
        names = data["names"]
        if not isinstance(names, list):
            raise ValidationError("names must be a list")
        work_date = _date(data.get("date"))

        action = data["action"]
        if action == "check-in":
            changed = service.batch_check_in(names, work_date)
        elif action == "check-out":
            changed = service.batch_check_out(names, work_date)
        elif action == "status":
            changed = service.batch_update(names, work_date, AttendanceField.STATUS, str(data.get("status") or ""))
        else:
            raise ValidationError(f"Unknown batch action {action!r}")
        return ok(updated=changed)

    @app.route("/api/attendance/reset", methods=["POST"], endpoint="attendance_reset")
    def attendance_reset():
        work_date = _date(json_body().get("date"))
        service.reset_day(work_date)
        return ok(date=work_date)
