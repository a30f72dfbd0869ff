from __future__ import annotations

import calendar
from datetime import date, datetime, timezone

from ..core.constants import MEETING_WEEKDAYS


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_key(year: int, month: int) -> str:
    return f"{int(year)}-{int(month):02d}"


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def meeting_dates_of(year: int, month: int) -> list[str]:
    """Mondays, Wednesdays and Thursdays of the month, ascending, as YYYY-MM-DD.

    Works on naive calendar dates so the result does not depend on the
    server timezone.
    """
    _, days_in_month = calendar.monthrange(year, month)
    dates = []
    for day in range(1, days_in_month + 1):
        d = date(year, month, day)
        if d.weekday() in MEETING_WEEKDAYS:
            dates.append(d.isoformat())
    return dates


def is_wednesday(value: str) -> bool:
    return parse_iso_date(value).weekday() == calendar.WEDNESDAY


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
