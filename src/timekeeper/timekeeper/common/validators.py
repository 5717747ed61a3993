from __future__ import annotations

from typing import Any, Iterable

from ..core.exceptions import ValidationError
from .datetime_utils import format_iso_date, parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_unique(value: str, existing: Iterable[str], field_name: str) -> str:
    if value in set(existing):
        raise ValidationError(f"{field_name} already exists")
    return value


def require_keys(data: Any, keys: Iterable[str]) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object")
    missing = [k for k in keys if data.get(k) is None]
    if missing:
        raise ValidationError(f"Missing required keys: {', '.join(missing)}")
    return data


def require_iso_date(value: Any, field_name: str = "date") -> str:
    """Return ``value`` when it is a canonical ``yyyy-MM-dd`` date."""
    try:
        parsed = parse_iso_date(str(value))
    except ValueError as e:
        raise ValidationError(f"Invalid {field_name} {value!r}, expected yyyy-MM-dd") from e
    if format_iso_date(parsed) != value:
        raise ValidationError(f"Invalid {field_name} {value!r}, expected yyyy-MM-dd")
    return value
