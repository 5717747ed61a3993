from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.worksheet.page import PageMargins
from openpyxl.worksheet.properties import PageSetupProperties
from openpyxl.worksheet.worksheet import Worksheet

from ..attendance.model import AttendanceRecord, History
from ..common.datetime_utils import (
    arabic_long_date,
    arabic_weekday,
    calculate_worked_hours,
    format_iso_date,
    month_label,
    overtime_hours,
    time_fraction,
)
from ..core.constants import DEFAULT_DEPARTMENT, PRIORITY_DEPARTMENT, TEMPLATE_HEADER_ROWS
from ..roster.model import Employee
from . import styles
from .template import set_widths

DAILY_WIDTHS = (12, 50, 35, 25, 25, 22, 22, 22)
MONTHLY_WIDTHS = (12, 30, 25, 25, 25, 40)
SHEET_COLUMNS = 8

DAILY_TITLE = "كشف حضور وانصراف (عقود)"
TOTAL_LABEL = "إجمالي القسم:"
MANAGER_SIGNATURE = "المدير المسؤول"
HR_SIGNATURE = "الموارد البشرية"
SIGNATURE_LINE = "........................."

DAILY_HEADERS = ("م", "الاسم", "الوظيفة", "حضور", "انصراف", "إضافي", "التوقيع", "ملاحظات")
MONTHLY_HEADERS = ("م", "التاريخ / Date", "اليوم / Day", "حضور / In", "انصراف / Out", "ملاحظات")
MONTHLY_SIGNATURES = ((2, "الموظف / Employee"), (4, "HR / شؤون العاملين"), (6, "Manager / اعتماد"))

_DEPARTMENT_TITLES = {
    "Construction": "Site Engineer",
    "Quality Control": "QC Engineer",
    "Technical office": "Technical Office Eng",
    "HSE": "Safety Officer",
    "Surveying": "Surveyor",
    "Finance": "Accountant",
    "IT": "IT Specialist",
    "Security": "Security Guard",
    "Human Resources": "HR Specialist",
    "Admin": "Administrator",
    "Equipment": "Equipment Manager",
}

_SHEET_NAME_INVALID = re.compile(r"[\\/?*:\[\]]")


@dataclass(frozen=True)
class SheetVariant:
    """Small visual differences between the daily sheet and history sheets."""

    title_size: int = 20
    row_height: int = 40
    job_size: Optional[int] = 16
    total_label_size: int = 20
    total_count_size: int = 20


DAILY_VARIANT = SheetVariant()
HISTORY_VARIANT = SheetVariant(title_size=18, row_height=32, job_size=None, total_label_size=13, total_count_size=14)


def job_title(record: Any) -> str:
    """The record's job, or a title inferred from its department when blank."""
    job = (getattr(record, "job", "") or "").strip()
    if job:
        return record.job
    return _DEPARTMENT_TITLES.get(getattr(record, "department", "") or "", "Employee")


def sort_departments(departments: Iterable[str]) -> List[str]:
    return sorted(set(departments), key=lambda d: (d != PRIORITY_DEPARTMENT, d.casefold(), d))


def group_by_department(records: Iterable[AttendanceRecord]) -> Dict[str, List[AttendanceRecord]]:
    groups: Dict[str, List[AttendanceRecord]] = {}
    for r in records:
        groups.setdefault(r.department or DEFAULT_DEPARTMENT, []).append(r)
    return {dept: groups[dept] for dept in sort_departments(groups)}


def monthly_sheet_title(index: int, name: str) -> str:
    return f"{index}-{_SHEET_NAME_INVALID.sub('_', name)}"[:31]


# ---------- shared sheet setup ----------
def apply_view(ws: Worksheet, *, zoom: int = 110) -> None:
    ws.sheet_view.rightToLeft = True
    ws.sheet_view.showGridLines = False
    ws.sheet_view.zoomScale = zoom


def apply_page_setup(ws: Worksheet, *, centered: bool = True) -> None:
    ws.page_setup.paperSize = ws.PAPERSIZE_A4
    ws.page_setup.orientation = ws.ORIENTATION_PORTRAIT
    ws.page_setup.fitToWidth = 1
    ws.page_setup.fitToHeight = 0
    ws.sheet_properties.pageSetUpPr = PageSetupProperties(fitToPage=True)
    if centered:
        ws.print_options.horizontalCentered = True
        ws.page_margins = PageMargins(left=0.2, right=0.2, top=0.4, bottom=0.4, header=0.2, footer=0.2)
        ws.print_title_rows = f"1:{TEMPLATE_HEADER_ROWS}"


def clear_body(ws: Worksheet) -> None:
    """Remove everything below the template header band."""
    first = TEMPLATE_HEADER_ROWS + 1
    for rng in list(ws.merged_cells.ranges):
        if rng.min_row >= first:
            ws.unmerge_cells(rng.coord)
    if ws.max_row >= first:
        ws.delete_rows(first, ws.max_row - first + 1)
    for r in [r for r in ws.row_dimensions if r >= first]:
        del ws.row_dimensions[r]


# ---------- starter template ----------
def build_starter_template(company: str) -> Workbook:
    """Plain header band for sites that have no branded template yet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Attendance"
    apply_view(ws)
    set_widths(ws, DAILY_WIDTHS)

    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=SHEET_COLUMNS)
    ws.row_dimensions[1].height = 50
    name = ws.cell(row=1, column=1, value=company)
    name.font = styles.FONT_DEPARTMENT
    name.fill = styles.FILL_DEPARTMENT
    name.alignment = styles.CENTER

    ws.row_dimensions[3].height = 40
    ws["B3"].font = styles.data_font()

    ws.row_dimensions[TEMPLATE_HEADER_ROWS].height = 40
    for column, text in enumerate(DAILY_HEADERS, start=1):
        cell = ws.cell(row=TEMPLATE_HEADER_ROWS, column=column, value=text)
        cell.font = styles.FONT_HEADER
        cell.fill = styles.FILL_HEADER
        cell.alignment = styles.CENTER
        cell.border = styles.BORDER_FULL
    return wb


# ---------- daily / history sheet ----------
def write_attendance_sheet(
    ws: Worksheet,
    records: Sequence[AttendanceRecord],
    work_date: date,
    *,
    tz: Optional[tzinfo] = None,
    variant: SheetVariant = DAILY_VARIANT,
) -> int:
    """Department bands, employee rows, per-department totals and the signature block.

    Returns the row of the signature lines.
    """
    apply_view(ws)

    title = ws["B3"]
    title.value = f"{DAILY_TITLE} - {arabic_long_date(work_date)}"
    title.font = styles.data_font(size=variant.title_size)

    row = TEMPLATE_HEADER_ROWS + 1
    counter = 1
    for dept, members in group_by_department(records).items():
        ws.row_dimensions[row].height = 42
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=SHEET_COLUMNS)
        band = ws.cell(row=row, column=1, value=dept)
        band.font = styles.FONT_DEPARTMENT
        band.fill = styles.FILL_DEPARTMENT
        band.alignment = styles.CENTER
        band.border = styles.BORDER_FULL
        row += 1

        for record in members:
            _write_employee_row(ws, row, counter, record, tz=tz, variant=variant)
            counter += 1
            row += 1

        _write_total_row(ws, row, len(members), variant)
        row += 1

    return write_signature_block(ws, row)


def _set(ws: Worksheet, row: int, column: int, value: Any, *, font=styles.FONT_DATA):
    cell = ws.cell(row=row, column=column, value=value)
    cell.font = font
    cell.border = styles.BORDER_FULL
    cell.alignment = styles.CENTER
    cell.fill = styles.FILL_DATA
    return cell


def _write_employee_row(
    ws: Worksheet, row: int, counter: int, record: AttendanceRecord, *, tz: Optional[tzinfo], variant: SheetVariant
) -> None:
    ws.row_dimensions[row].height = variant.row_height
    _set(ws, row, 1, counter)
    _set(ws, row, 2, record.name)

    job = _set(ws, row, 3, job_title(record))
    if variant.job_size:
        job.font = styles.data_font(size=variant.job_size)
        job.alignment = styles.CENTER_WRAP

    if record.status:
        status = _set(ws, row, 4, record.status, font=styles.FONT_STATUS)
        status.fill = styles.FILL_STATUS
        _set(ws, row, 5, None)
        _set(ws, row, 6, None)
    else:
        for column, value in ((4, record.check_in), (5, record.check_out)):
            fraction = time_fraction(value, tz)
            cell = _set(ws, row, column, fraction)
            if fraction is not None:
                cell.number_format = styles.TIME_FORMAT

        overtime = overtime_hours(calculate_worked_hours(record.check_in, record.check_out))
        cell = _set(ws, row, 6, overtime)
        if overtime is not None:
            cell.number_format = styles.HOURS_FORMAT
            cell.font = styles.FONT_OVERTIME

    _set(ws, row, 7, None)
    _set(ws, row, 8, None)


def _write_total_row(ws: Worksheet, row: int, count: int, variant: SheetVariant) -> None:
    ws.row_dimensions[row].height = 35
    for column in range(1, SHEET_COLUMNS + 1):
        cell = ws.cell(row=row, column=column)
        cell.fill = styles.FILL_TOTAL
        cell.border = styles.BORDER_FULL

    label = ws.cell(row=row, column=2, value=TOTAL_LABEL)
    label.font = styles.data_font(size=variant.total_label_size)
    label.alignment = styles.CENTER
    total = ws.cell(row=row, column=3, value=count)
    total.font = styles.data_font(size=variant.total_count_size)
    total.alignment = styles.CENTER


def write_signature_block(ws: Worksheet, last_row: int) -> int:
    label_row = last_row + 2
    ws.row_dimensions[label_row].height = 40
    line_row = label_row + 4
    ws.row_dimensions[line_row].height = 30

    for column, text in ((2, MANAGER_SIGNATURE), (6, HR_SIGNATURE)):
        label = ws.cell(row=label_row, column=column, value=text)
        label.font = styles.data_font(underline=True)
        label.alignment = styles.CENTER

        line = ws.cell(row=line_row, column=column, value=SIGNATURE_LINE)
        line.font = styles.data_font()
        line.alignment = styles.CENTER_BOTTOM

    return line_row


# ---------- monthly timesheet ----------
def write_monthly_sheet(
    ws: Worksheet,
    employee: Employee,
    history: History,
    days: Sequence[date],
    reference: date,
    *,
    tz: Optional[tzinfo] = None,
) -> int:
    """One row per calendar day for a single employee. Returns the signature row."""
    apply_view(ws, zoom=100)
    set_widths(ws, MONTHLY_WIDTHS)

    title = ws["B3"]
    title.value = f"MONTHLY TIME SHEET: {employee.name}"
    title.font = styles.data_font(color=styles.NIGHT_BLUE)

    ws.cell(row=5, column=2, value=f"Dept: {employee.department or '-'}")
    ws.cell(row=5, column=4, value=f"Job: {employee.job or '-'}")
    ws.cell(row=5, column=6, value=f"Month: {month_label(reference)}")

    for column, text in enumerate(MONTHLY_HEADERS, start=1):
        cell = ws.cell(row=TEMPLATE_HEADER_ROWS, column=column, value=text)
        cell.font = styles.FONT_HEADER
        cell.fill = styles.FILL_HEADER
        cell.alignment = styles.CENTER
        cell.border = styles.BORDER_FULL

    row = TEMPLATE_HEADER_ROWS + 1
    for idx, day in enumerate(days):
        iso = format_iso_date(day)
        record = _find_record(history.get(iso, ()), employee.name)
        ws.row_dimensions[row].height = 30

        values = (
            (idx + 1, None),
            (iso, None),
            (arabic_weekday(day), None),
            (time_fraction(record.check_in, tz) if record else None, styles.TIME_FORMAT),
            (time_fraction(record.check_out, tz) if record else None, styles.TIME_FORMAT),
            ("", None),
        )
        for column, (value, number_format) in enumerate(values, start=1):
            cell = ws.cell(row=row, column=column, value=value)
            cell.border = styles.BORDER_FULL
            cell.alignment = styles.CENTER
            cell.font = styles.data_font()
            if number_format:
                cell.number_format = number_format
            if idx % 2:
                cell.fill = styles.FILL_STRIPE
        row += 1

    signature_row = row + 2
    ws.row_dimensions[signature_row].height = 35
    for column, text in MONTHLY_SIGNATURES:
        cell = ws.cell(row=signature_row, column=column, value=text)
        cell.font = styles.data_font(color=None, underline=True)
        cell.alignment = styles.CENTER

    apply_page_setup(ws, centered=False)
    return signature_row


def _find_record(records: Iterable[AttendanceRecord], name: str) -> Optional[AttendanceRecord]:
    return next((r for r in records if r.name == name), None)
