from __future__ import annotations

import calendar
import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..core.constants import ARABIC_MONTHS, ARABIC_WEEKDAYS, ISO_DATE_FORMAT, STANDARD_WORK_HOURS
from ..core.exceptions import ValidationError

Timestamp = Union[str, datetime, None]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def now_utc() -> datetime:
    """Current time (UTC, aware).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def today_str(tz: Optional[tzinfo] = None) -> str:
    return format_iso_date(to_wall_clock(now_utc(), tz).date())


def shift_date(value: str, days: int) -> str:
    return format_iso_date(parse_iso_date(value) + timedelta(days=days))


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Map a configured zone name to a tzinfo; empty means host local time."""
    if not name:
        return None
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as written by browsers (``...Z``) or by us.

    Returns None for empty or unparsable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_iso_timestamp(value: datetime) -> str:
    """Serialize like JavaScript's ``Date.toISOString()`` so other clients can read it."""
    if value.tzinfo is None:
        value = value.astimezone()
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def to_wall_clock(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Aware timestamps are converted to ``tz`` (host local time when None); naive ones are kept."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz) if tz is not None else value.astimezone()


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def calculate_worked_hours(check_in: Timestamp, check_out: Timestamp) -> str:
    """Whole minutes between check-in and check-out, as hours with two decimals.

    A check-out earlier than the check-in yields a negative value.
    """
    start = parse_timestamp(check_in)
    end = parse_timestamp(check_out)
    if start is None or end is None:
        return "0.00"

    minutes = math.trunc((_as_aware(end) - _as_aware(start)).total_seconds() / 60)
    return f"{minutes / 60:.2f}"


def overtime_hours(worked_hours: str) -> Optional[float]:
    """Hours beyond the standard day, or None when there is no overtime."""
    hours = float(worked_hours)
    if hours > STANDARD_WORK_HOURS:
        return round(hours - STANDARD_WORK_HOURS, 2)
    return None


def time_fraction(value: Timestamp, tz: Optional[tzinfo] = None) -> Optional[float]:
    """Time of day as a fraction of 24 hours (the numeric value of a spreadsheet time cell)."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    clock = to_wall_clock(parsed, tz)
    return (clock.hour + clock.minute / 60 + clock.second / 3600) / 24


def format_clock(value: Timestamp, tz: Optional[tzinfo] = None) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        return "--:--"
    clock = to_wall_clock(parsed, tz)
    hour = clock.hour % 12 or 12
    suffix = "AM" if clock.hour < 12 else "PM"
    return f"{hour}:{clock.minute:02d} {suffix}"


def clock_to_timestamp(work_date: str, clock: str, tz: Optional[tzinfo] = None) -> str:
    """Combine an ``HH:mm`` wall-clock entry with the selected date into an ISO timestamp."""
    try:
        hours_s, minutes_s = clock.strip().split(":")[:2]
        wall = time(hour=int(hours_s), minute=int(minutes_s))
        day = parse_iso_date(work_date)
    except ValueError as e:
        raise ValidationError(f"Invalid time {clock!r} for {work_date!r}") from e

    local = datetime.combine(day, wall)
    local = local.replace(tzinfo=tz) if tz is not None else local.astimezone()
    return to_iso_timestamp(local)


def arabic_long_date(value: date) -> str:
    """E.g. ``الخميس 6 فبراير 2026``."""
    return f"{ARABIC_WEEKDAYS[value.weekday()]} {value.day} {ARABIC_MONTHS[value.month - 1]} {value.year}"


def arabic_weekday(value: date) -> str:
    return ARABIC_WEEKDAYS[value.weekday()]


def month_days(reference: date) -> list[date]:
    """Every calendar day of the month containing ``reference``."""
    last = calendar.monthrange(reference.year, reference.month)[1]
    return [date(reference.year, reference.month, d) for d in range(1, last + 1)]


def month_label(reference: date) -> str:
    return f"{calendar.month_name[reference.month]} {reference.year}"
