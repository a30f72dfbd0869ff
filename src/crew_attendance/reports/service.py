from __future__ import annotations

from typing import Any, Optional

from ..attendance.model import MonthlyStats
from ..attendance.store import AttendanceStore
from ..common.datetime_utils import meeting_dates_of, month_key, now_utc
from ..core.constants import EXPORT_VERSION
from .calculator.base import StatsCalculator
from .calculator.standard_calculator import RequirementStatsCalculator


class ReportService:
    """Read-only views derived from the attendance store."""

    def __init__(self, store: AttendanceStore, *, calculator: Optional[StatsCalculator] = None):
        self._store = store
        self._calculator = calculator or RequirementStatsCalculator()

    def meeting_dates(self, year: int, month: int) -> list[str]:
        return meeting_dates_of(year, month)

    def monthly_stats(self, year: int, month: int, name: str) -> MonthlyStats:
        with self._store.locked() as months:
            record = months.get(month_key(year, month), {}).get(name)
            if record is None:
                return MonthlyStats()
            return self._calculator.monthly_stats(record, meeting_dates_of(year, month))

    def monthly_report(self, year: int, month: int) -> dict[str, Any]:
        """Members sorted by display order with stats and a full attendance grid.

        Every meeting date appears in each member's attendance (0 when unset).
        """
        dates = meeting_dates_of(year, month)
        members: dict[str, Any] = {}

        with self._store.locked() as months:
            roster = months.get(month_key(year, month), {})
            ordered = sorted(roster.items(), key=lambda item: item[1].order or 0)
            for name, record in ordered:
                stats = self._calculator.monthly_stats(record, dates)
                members[name] = {
                    "role": record.role,
                    "order": record.order or 0,
                    "stats": stats.to_dict(),
                    "attendance": {d: record.attendance.get(d, 0) for d in dates},
                    "extraAttendance": dict(record.extra_attendance),
                }

        return {
            "exportDate": now_utc().isoformat(),
            "year": year,
            "month": month,
            "members": members,
            "dates": dates,
        }

    def export_month(self, year: int, month: int) -> dict[str, Any]:
        return self.monthly_report(year, month)

    def export_all(self) -> dict[str, Any]:
        return {
            "exportDate": now_utc().isoformat(),
            "version": EXPORT_VERSION,
            "data": self._store.snapshot(),
        }
