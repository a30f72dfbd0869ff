from __future__ import annotations

from typing import Any, Mapping

from ..core.exceptions import ValidationError

MIN_YEAR = 1
MAX_YEAR = 9999


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_fields(body: Mapping[str, Any], *names: str) -> None:
    """Reject bodies with missing or empty fields (0 and False count as present)."""
    for name in names:
        value = body.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("Missing required fields")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    if isinstance(value, str):
        return int(value.strip())
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("not an integer")
    return int(value)


def parse_year_month(year: Any, month: Any) -> tuple[int, int]:
    try:
        y = _as_int(year)
        m = _as_int(month)
    except (TypeError, ValueError):
        raise ValidationError("Invalid year or month")
    if not MIN_YEAR <= y <= MAX_YEAR or not 1 <= m <= 12:
        raise ValidationError("Invalid year or month")
    return y, m


def parse_status(value: Any) -> int:
    """Coerce an attendance flag ("1", 1, True, 1.0) to 0 or 1."""
    try:
        status = _as_int(value) if not isinstance(value, bool) else int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid attendance status")
    if status not in (0, 1):
        raise ValidationError("Attendance status must be 0 or 1")
    return status


def parse_order(value: Any) -> int:
    try:
        return _as_int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid member order")
