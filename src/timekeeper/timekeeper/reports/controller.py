from __future__ import annotations

from io import BytesIO

from flask import Flask, request, send_file

from ..common.datetime_utils import today_str
from ..common.http import json_body
from ..core.enums import AttendanceFilter
from ..core.exceptions import ValidationError
from ..container import Container
from .service import ReportFile


def _download(report: ReportFile):
    return send_file(
        BytesIO(report.content),
        mimetype=report.mimetype,
        as_attachment=True,
        download_name=report.filename,
    )


def register(app: Flask, container: Container) -> None:
    reports = container.report_service
    attendance = container.attendance_service

    @app.route("/api/reports/daily", methods=["GET"], endpoint="report_daily")
    def report_daily():
        work_date = request.args.get("date") or today_str(container.tz)
        records = attendance.records_for(work_date)
        if request.args.get("filter") or request.args.get("search") or request.args.get("department"):
            try:
                mode = AttendanceFilter(request.args.get("filter", AttendanceFilter.ALL.value))
            except ValueError as e:
                raise ValidationError(f"Unknown filter {request.args.get('filter')!r}") from e
            records = attendance.filter_records(
                records,
                mode=mode,
                search=request.args.get("search", ""),
                department=request.args.get("department") or None,
            )
        return _download(reports.build_daily(work_date, records))

    @app.route("/api/reports/history", methods=["GET"], endpoint="report_history")
    def report_history():
        return _download(reports.build_history())

    @app.route("/api/reports/monthly", methods=["POST"], endpoint="report_monthly")
    def report_monthly():
        data = json_body()
        names = data.get("names")
        if names is None:
            selected = container.roster_service.list_employees()
        elif isinstance(names, list):
            found = (container.roster_service.get(str(n)) for n in names)
            selected = [e for e in found if e is not None]
        else:
            raise ValidationError("names must be a list")
        return _download(reports.build_monthly(selected, data.get("date") or None))
