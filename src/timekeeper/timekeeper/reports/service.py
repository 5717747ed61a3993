from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from io import BytesIO
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from openpyxl import Workbook

from ..attendance.model import AttendanceRecord
from ..attendance.reconciler import reconcile
from ..common.datetime_utils import month_days, month_label, parse_iso_date, today_str
from ..core.exceptions import DomainError, ExportError, ValidationError
from ..roster.model import Employee
from ..session.state import AttendanceState
from .layout import (
    DAILY_VARIANT,
    DAILY_WIDTHS,
    HISTORY_VARIANT,
    apply_page_setup,
    clear_body,
    monthly_sheet_title,
    write_attendance_sheet,
    write_monthly_sheet,
)
from .template import copy_header, load_template, set_widths, try_load_template

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass(frozen=True)
class ReportFile:
    filename: str
    content: bytes
    mimetype: str = XLSX_MIMETYPE


class ReportService:
    """Use case: render attendance data into the three spreadsheet reports.

    Every report is built completely in memory; any failure raises ExportError
    and no partial workbook is returned.
    """

    def __init__(
        self,
        state: AttendanceState,
        *,
        template_path: Optional[Union[str, Path]] = None,
        tz: Optional[tzinfo] = None,
    ):
        self._state = state
        self._template_path = template_path
        self._tz = tz

    def template_available(self) -> bool:
        return bool(self._template_path) and Path(self._template_path).is_file()

    def build_daily(self, work_date: str, records: Optional[Sequence[AttendanceRecord]] = None) -> ReportFile:
        day = _parse_date(work_date)
        if records is None:
            employees, history = self._state.snapshot()
            records = reconcile(employees, history, work_date)

        def build() -> Workbook:
            wb = load_template(self._require_template())
            ws = wb.worksheets[0]
            set_widths(ws, DAILY_WIDTHS)
            clear_body(ws)
            write_attendance_sheet(ws, records, day, tz=self._tz, variant=DAILY_VARIANT)
            apply_page_setup(ws)
            return wb

        return self._render(build, f"Daily_Attendance_{work_date}.xlsx")

    def build_history(self) -> ReportFile:
        _, history = self._state.snapshot()
        if not history:
            raise ValidationError("No attendance history to export")

        def build() -> Workbook:
            master = load_template(self._require_template()).worksheets[0]
            wb = Workbook()
            wb.remove(wb.active)
            for work_date in sorted(history, reverse=True):
                ws = wb.create_sheet(title=work_date)
                copy_header(master, ws)
                write_attendance_sheet(ws, history[work_date], _parse_date(work_date), tz=self._tz, variant=HISTORY_VARIANT)
                apply_page_setup(ws)
            return wb

        return self._render(build, f"History_All_{today_str(self._tz)}.xlsx")

    def build_monthly(self, employees: Sequence[Employee], reference_date: Optional[str] = None) -> ReportFile:
        selected = [e for e in employees if e.name]
        if not selected:
            raise ValidationError("Select at least one employee")

        reference = _parse_date(reference_date or today_str(self._tz))
        days = month_days(reference)
        _, history = self._state.snapshot()
        logger.info("Building monthly timesheets for %d employees (%s)", len(selected), month_label(reference))

        def build() -> Workbook:
            template = try_load_template(self._template_path)
            master = template.worksheets[0] if template is not None else None
            wb = Workbook()
            wb.remove(wb.active)
            for index, employee in enumerate(selected, start=1):
                ws = wb.create_sheet(title=monthly_sheet_title(index, employee.name))
                if master is not None:
                    copy_header(master, ws, max_columns=15, images=True)
                write_monthly_sheet(ws, employee, history, days, reference, tz=self._tz)
            return wb

        return self._render(build, f"Monthly_TimeSheets_{month_label(reference).replace(' ', '_')}.xlsx")

    def _require_template(self) -> Union[str, Path]:
        if not self._template_path:
            raise ExportError("Report template is not configured")
        return self._template_path

    @staticmethod
    def _render(build: Callable[[], Workbook], filename: str) -> ReportFile:
        try:
            wb = build()
            buf = BytesIO()
            wb.save(buf)
        except DomainError:
            raise
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.exception("Export of %s failed", filename)
            raise ExportError(f"Export failed: {e}") from e
        logger.info("Built report %s", filename)
        return ReportFile(filename=filename, content=buf.getvalue())


def _parse_date(value: str):
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date {value!r}, expected yyyy-MM-dd") from e
