from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..common.validators import parse_order, parse_status
from ..core.constants import UNASSIGNED_ROLE
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class MemberRecord:
    """Domain entity: one member's role, attendance and display order in a month."""

    role: str
    order: int = 0
    attendance: dict[str, int] = field(default_factory=dict)
    extra_attendance: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], *, position: int, strict: bool = True) -> "MemberRecord":
        """Build a record from its JSON shape, defaulting missing fields.

        Strict mode raises TypeError or ValidationError on the first bad
        value (flags other than 0/1, non-integral orders). Lenient mode is
        for data already on disk: bad flags are dropped and a bad order
        falls back to the position, each one logged.
        """
        if not isinstance(raw, Mapping):
            raise TypeError(f"member entry must be an object, got {type(raw).__name__}")

        attendance = raw.get("attendance") or {}
        extra = raw.get("extraAttendance") or {}
        if not isinstance(attendance, Mapping) or not isinstance(extra, Mapping):
            if strict:
                raise TypeError("attendance maps must be objects")
            logger.warning("Ignoring attendance maps that are not objects")
            attendance = attendance if isinstance(attendance, Mapping) else {}
            extra = extra if isinstance(extra, Mapping) else {}

        order = raw.get("order")
        if order is None:
            order = position
        elif strict:
            order = parse_order(order)
        else:
            try:
                order = parse_order(order)
            except ValidationError:
                logger.warning("Invalid order %r, using position %d", order, position)
                order = position

        return cls(
            role=str(raw.get("role") or UNASSIGNED_ROLE),
            order=order,
            attendance=_parse_flags(attendance, strict=strict),
            extra_attendance=_parse_flags(extra, strict=strict),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "attendance": dict(self.attendance),
            "extraAttendance": dict(self.extra_attendance),
            "order": self.order,
        }


def _parse_flags(raw: Mapping[str, Any], *, strict: bool) -> dict[str, int]:
    flags: dict[str, int] = {}
    for key, value in raw.items():
        try:
            flags[str(key)] = parse_status(value)
        except ValidationError:
            if strict:
                raise
            logger.warning("Dropping invalid attendance flag %s=%r", key, value)
    return flags


# A month's roster keeps insertion order: name -> record.
MonthRoster = dict[str, MemberRecord]


@dataclass(frozen=True)
class MonthlyStats:
    """Read-model: per-member monthly counts and requirement check."""

    total: int = 0
    regular: int = 0
    wednesday: int = 0
    extra: int = 0
    extra1: int = 0
    extra2: int = 0
    extra3: int = 0
    meets_requirement: bool = False
    required_total: int = 0
    required_wednesday: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "regular": self.regular,
            "wednesday": self.wednesday,
            "extra": self.extra,
            "extra1": self.extra1,
            "extra2": self.extra2,
            "extra3": self.extra3,
            "meets_requirement": self.meets_requirement,
            "required_total": self.required_total,
            "required_wednesday": self.required_wednesday,
        }


@dataclass(frozen=True)
class ImportResult:
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        if self.message is not None:
            out["message"] = self.message
        if self.error is not None:
            out["error"] = self.error
        return out
