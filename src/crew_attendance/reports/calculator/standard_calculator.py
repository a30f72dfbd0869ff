from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...attendance.model import MemberRecord, MonthlyStats
from ...common.datetime_utils import is_wednesday
from ...core.constants import EXTRA_KEYS
from ...core.enums import Role
from .base import StatsCalculator


@dataclass(frozen=True)
class RoleRequirement:
    total: int
    wednesday: int


ROLE_REQUIREMENTS = {
    Role.ADMIN: RoleRequirement(total=0, wednesday=0),
    Role.PACER: RoleRequirement(total=3, wednesday=0),
    Role.PACER_GANGNAM: RoleRequirement(total=3, wednesday=2),
    Role.PHOTO: RoleRequirement(total=1, wednesday=0),
}

NO_REQUIREMENT = RoleRequirement(total=0, wednesday=0)


def requirement_for(role: Optional[str]) -> RoleRequirement:
    resolved = Role.resolve(role)
    if resolved is None:
        return NO_REQUIREMENT
    return ROLE_REQUIREMENTS.get(resolved, NO_REQUIREMENT)


class RequirementStatsCalculator(StatsCalculator):
    """Standard rule: regular meeting attendance plus extra activities must reach
    the role's total, and Wednesday attendance its Wednesday minimum.
    Admins always pass.
    """

    def monthly_stats(self, record: MemberRecord, meeting_dates: Sequence[str]) -> MonthlyStats:
        regular = 0
        wednesday = 0
        for d in meeting_dates:
            if record.attendance.get(d) == 1:
                regular += 1
                if is_wednesday(d):
                    wednesday += 1

        flags = [1 if record.extra_attendance.get(k) == 1 else 0 for k in EXTRA_KEYS]
        extra = sum(flags)
        total = regular + extra

        req = requirement_for(record.role)
        if Role.resolve(record.role) == Role.ADMIN:
            meets = True
        else:
            meets = total >= req.total and wednesday >= req.wednesday

        return MonthlyStats(
            total=total,
            regular=regular,
            wednesday=wednesday,
            extra=extra,
            extra1=flags[0],
            extra2=flags[1],
            extra3=flags[2],
            meets_requirement=meets,
            required_total=req.total,
            required_wednesday=req.wednesday,
        )
