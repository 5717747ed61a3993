from __future__ import annotations

from datetime import date, time, timezone
from io import BytesIO

import pytest
from openpyxl import Workbook, load_workbook

from src.timekeeper.timekeeper.attendance.model import AttendanceRecord
from src.timekeeper.timekeeper.core.exceptions import ExportError
from src.timekeeper.timekeeper.reports.layout import build_starter_template, write_attendance_sheet
from src.timekeeper.timekeeper.reports.service import ReportService

DAY = "2024-03-01"


def _open(report):
    return load_workbook(BytesIO(report.content)).worksheets[0]


def _records():
    return [
        AttendanceRecord(
            name="Ahmed",
            department="Construction",
            job="",
            check_in="2024-03-01T09:00:00.000Z",
            check_out="2024-03-01T18:15:00.000Z",
        ),
        AttendanceRecord(name="Karim", department="Construction", job="Foreman", status="إجازة"),
    ]


def test_one_department_two_employees_layout(state, template_path):
    svc = ReportService(state, template_path=template_path, tz=timezone.utc)

    report = svc.build_daily(DAY, _records())
    ws = _open(report)

    assert report.filename == "Daily_Attendance_2024-03-01.xlsx"
    # header band
    assert ws["A7"].value == "Construction"
    assert "A7:H7" in {str(r) for r in ws.merged_cells.ranges}
    assert ws["A7"].fill.fgColor.rgb == "FF102542"
    # two data rows
    assert [ws.cell(row=r, column=2).value for r in (8, 9)] == ["Ahmed", "Karim"]
    assert [ws.cell(row=r, column=1).value for r in (8, 9)] == [1, 2]
    # total row
    assert ws["B10"].value == "إجمالي القسم:"
    assert ws["C10"].value == 2
    assert ws["A10"].fill.fgColor.rgb == "FFE0E0E0"
    assert ws["A11"].value is None


def test_time_and_overtime_cells(state, template_path):
    ws = _open(ReportService(state, template_path=template_path, tz=timezone.utc).build_daily(DAY, _records()))

    assert ws["C8"].value == "Site Engineer"
    # time-formatted cells read back as times of day
    assert ws["D8"].value == time(9, 0)
    assert ws["D8"].number_format == "h:mm AM/PM"
    assert ws["E8"].value == time(18, 15)
    assert ws["F8"].value == pytest.approx(1.25)
    assert ws["F8"].number_format == "0.00"
    assert ws["F8"].font.color.rgb == "FFD90429"


def test_time_cells_hold_day_fractions():
    ws = Workbook().active

    write_attendance_sheet(ws, _records(), date(2024, 3, 1), tz=timezone.utc)

    assert ws["D8"].value == pytest.approx(0.375)
    assert ws["E8"].value == pytest.approx(18.25 / 24)
    assert ws["F8"].value == pytest.approx(1.25)


def test_status_row_replaces_times(state, template_path):
    ws = _open(ReportService(state, template_path=template_path, tz=timezone.utc).build_daily(DAY, _records()))

    assert ws["D9"].value == "إجازة"
    assert ws["D9"].fill.fgColor.rgb == "FFFEF3C7"
    assert ws["D9"].font.color.rgb == "FFD97706"
    assert ws["E9"].value is None
    assert ws["F9"].value is None
    assert ws["C9"].value == "Foreman"


def test_no_overtime_at_eight_hours(state, template_path):
    records = [
        AttendanceRecord(
            name="Ahmed",
            department="Construction",
            job="",
            check_in="2024-03-01T08:00:00.000Z",
            check_out="2024-03-01T16:00:00.000Z",
        )
    ]

    ws = _open(ReportService(state, template_path=template_path, tz=timezone.utc).build_daily(DAY, records))

    assert ws["F8"].value is None


def test_template_header_kept_and_old_body_cleared(state, template_path):
    ws = _open(ReportService(state, template_path=template_path, tz=timezone.utc).build_daily(DAY, _records()))

    assert ws["A1"].value == "ACME Contracting"
    assert "A1:H1" in {str(r) for r in ws.merged_cells.ranges}
    assert "A12:H12" not in {str(r) for r in ws.merged_cells.ranges}
    assert ws["A12"].value is None
    assert ws["B3"].value == "كشف حضور وانصراف (عقود) - الجمعة 1 مارس 2024"
    assert ws.column_dimensions["B"].width == 50
    assert ws.sheet_view.rightToLeft is True


def test_signature_block_below_last_total(state, template_path):
    ws = _open(ReportService(state, template_path=template_path, tz=timezone.utc).build_daily(DAY, _records()))

    assert ws["B13"].value == "المدير المسؤول"
    assert ws["F13"].value == "الموارد البشرية"
    assert ws["B17"].value == "........................."


def test_departments_sorted_construction_first(state, template_path):
    records = [
        AttendanceRecord(name="Z", department="Admin", job=""),
        AttendanceRecord(name="Y", department="", job=""),
        AttendanceRecord(name="X", department="Construction", job=""),
    ]

    ws = _open(ReportService(state, template_path=template_path, tz=timezone.utc).build_daily(DAY, records))

    bands = [ws.cell(row=r, column=1).value for r in (7, 10, 13)]
    assert bands == ["Construction", "Admin", "General"]


def test_defaults_to_reconciled_roster(state, template_path):
    ws = _open(ReportService(state, template_path=template_path, tz=timezone.utc).build_daily(DAY))

    names = {ws.cell(row=r, column=2).value for r in range(7, ws.max_row + 1)}
    assert {"Ahmed", "Mona", "Sara"} <= names


def test_missing_template_is_export_error(state, tmp_path):
    with pytest.raises(ExportError):
        ReportService(state, template_path=tmp_path / "missing.xlsx").build_daily(DAY, _records())
    with pytest.raises(ExportError):
        ReportService(state).build_daily(DAY, _records())


def test_corrupt_template_is_export_error_with_cause(state, tmp_path):
    broken = tmp_path / "broken.xlsx"
    broken.write_bytes(b"this is not a zip file")

    with pytest.raises(ExportError, match="not a zip file"):
        ReportService(state, template_path=broken).build_daily(DAY, _records())


def test_starter_template_drives_daily_sheet(state, tmp_path):
    path = tmp_path / "static" / "starter.xlsx"
    path.parent.mkdir()
    build_starter_template("ACME Contracting").save(path)
    svc = ReportService(state, template_path=path, tz=timezone.utc)

    ws = _open(svc.build_daily(DAY, _records()))

    assert svc.template_available()
    assert ws["A1"].value == "ACME Contracting"
    assert ws["B6"].value == "الاسم"
    assert ws["A7"].value == "Construction"
    assert ws["B8"].value == "Ahmed"


def test_template_available_reflects_the_file(state, tmp_path):
    assert not ReportService(state).template_available()
    assert not ReportService(state, template_path=tmp_path / "missing.xlsx").template_available()
