from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    """Preset statuses shown in the status picker; any other text is a custom status."""

    VACATION = "إجازة"
    ABSENT = "غياب"
    SICK = "مرضي"
    MISSION = "مأمورية"
    TIME_SHEET = "time sheet"


class AttendanceFilter(str, Enum):
    """Quick filters for the daily attendance list."""

    ALL = "All"
    NOT_CHECKED_IN = "Not Checked-In"
    NOT_CHECKED_OUT = "Not Checked-Out"
    COMPLETED = "Completed"
    ON_LEAVE = "On Leave"
    ABSENT = "Absent"
    TIME_SHEET = "Time Sheet"


class AttendanceField(str, Enum):
    """Fields an operator can set on a day record (single or batch)."""

    CHECK_IN = "checkIn"
    CHECK_OUT = "checkOut"
    STATUS = "status"


class SyncPhase(str, Enum):
    UNLOADED = "UNLOADED"
    LOADED = "LOADED"
