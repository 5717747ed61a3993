from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..attendance.model import history_from_dict, history_to_dict
from ..common.datetime_utils import format_iso_date, now_utc, to_iso_timestamp, to_wall_clock
from ..common.validators import require_iso_date
from ..core.constants import BACKUP_VERSION
from ..core.exceptions import BackupImportError, ValidationError
from ..roster.model import Employee
from ..session.state import AttendanceState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupFile:
    filename: str
    payload: dict
    content: bytes
    mimetype: str = "application/json"


class BackupService:
    """Use case: whole-state JSON backup and restore."""

    def __init__(self, state: AttendanceState, *, tz=None):
        self._state = state
        self._tz = tz

    def export_backup(self, *, now: Optional[datetime] = None) -> BackupFile:
        now = now or now_utc()
        employees, history = self._state.snapshot()
        payload = {
            "employees": [e.to_dict() for e in employees],
            "history": history_to_dict(history),
            "version": BACKUP_VERSION,
            "exportDate": to_iso_timestamp(now),
        }
        content = json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")
        filename = f"TimeKeeper_Backup_{format_iso_date(to_wall_clock(now, self._tz).date())}.json"
        return BackupFile(filename=filename, payload=payload, content=content)

    def import_backup(self, raw: Union[str, bytes, dict], *, confirmed: bool) -> tuple[int, int]:
        """Replace roster and history with the backup; returns (employees, days).

        Nothing changes unless the backup parses completely.
        """
        if not confirmed:
            raise BackupImportError("Import must be confirmed: it replaces all current data")

        data = raw
        if isinstance(raw, (bytes, bytearray)):
            try:
                data = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise BackupImportError("Backup file is not UTF-8 text") from e
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError as e:
                raise BackupImportError(f"Backup file is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise BackupImportError("Backup file must contain a JSON object")
        if not isinstance(data.get("employees"), list) or not isinstance(data.get("history"), dict):
            raise BackupImportError("Backup file is missing employees or history")

        try:
            employees = [Employee.from_dict(e) for e in data["employees"]]
            history = history_from_dict(data["history"])
        except (AttributeError, TypeError) as e:
            raise BackupImportError(f"Backup file has malformed records: {e}") from e

        bad_dates = [d for d in history if not _is_iso_date(d)]
        if bad_dates:
            raise BackupImportError(f"Backup file has invalid history dates: {', '.join(sorted(bad_dates))}")

        self._state.replace(employees=employees, history=history, origin="import")
        logger.info("Imported backup: %d employees, %d days", len(employees), len(history))
        return len(employees), len(history)


def _is_iso_date(value: str) -> bool:
    try:
        require_iso_date(value)
    except ValidationError:
        return False
    return True
