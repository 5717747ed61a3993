from __future__ import annotations

from datetime import datetime, timezone

import pytest
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from src.timekeeper.timekeeper.roster.model import Employee
from src.timekeeper.timekeeper.session.state import AttendanceState


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def roster():
    return [
        Employee(name="Ahmed", job="", department="Construction"),
        Employee(name="Mona", job="Accountant", department="Finance"),
        Employee(name="Sara", job="QC Lead", department="Quality Control"),
    ]


@pytest.fixture
def state(roster):
    return AttendanceState(roster, {})


@pytest.fixture
def template_path(tmp_path):
    """A small stand-in for the branded template: 6 header rows, a merge, some leftovers below."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Attendance"
    ws["A1"] = "ACME Contracting"
    ws["A1"].font = Font(name="Arial", size=24, bold=True)
    ws["A1"].fill = PatternFill(fill_type="solid", start_color="FF102542", end_color="FF102542")
    ws.merge_cells("A1:H1")
    ws.row_dimensions[1].height = 50
    ws["B3"] = "title placeholder"
    for col, text in enumerate(["#", "Name", "Job", "In", "Out", "OT", "Sign", "Notes"], start=1):
        ws.cell(row=6, column=col, value=text)
    ws.column_dimensions["B"].width = 44

    # leftovers from a previous export that the daily report must clear
    ws["B9"] = "old row"
    ws.merge_cells("A12:H12")
    ws["A12"] = "old department"

    path = tmp_path / "Daily Attendance 2.xlsx"
    wb.save(path)
    return path
