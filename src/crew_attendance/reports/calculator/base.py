from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import MemberRecord, MonthlyStats


class StatsCalculator(ABC):
    """Calculator interface (Strategy Pattern for monthly statistics)."""

    @abstractmethod
    def monthly_stats(self, record: MemberRecord, meeting_dates: Sequence[str]) -> MonthlyStats:
        raise NotImplementedError
