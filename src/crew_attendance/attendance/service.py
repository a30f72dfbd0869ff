from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from ..common.datetime_utils import month_key, previous_month
from ..common.validators import parse_order, parse_status, require_non_empty
from ..core.constants import EXTRA_PREFIX
from ..core.enums import BackupKind
from .model import ImportResult, MemberRecord
from .store import AttendanceStore, decode_roster

if TYPE_CHECKING:
    from ..backups.service import BackupManager

logger = logging.getLogger(__name__)


class AttendanceService:
    """Roster and attendance mutations.

    A missing month or member is reported with a False return, never an
    exception. Every successful change is persisted once, after the
    in-memory update.
    """

    def __init__(
        self,
        store: AttendanceStore,
        *,
        backups: Optional["BackupManager"] = None,
        backup_before_import: bool = False,
    ):
        self._store = store
        self._backups = backups
        self._backup_before_import = bool(backup_before_import)

    def get_month_members(self, year: int, month: int) -> dict[str, Any]:
        with self._store.locked() as months:
            roster = months.get(month_key(year, month), {})
            return {name: rec.to_dict() for name, rec in roster.items()}

    def ensure_month(self, year: int, month: int) -> bool:
        key = month_key(year, month)
        with self._store.locked() as months:
            if key in months:
                return False
            months[key] = {}
        self._store.persist(f"Initialize {key}")
        return True

    def add_member(self, year: int, month: int, name: str, role: str) -> bool:
        name = require_non_empty(name, "name")
        role = require_non_empty(role, "role")
        key = month_key(year, month)
        with self._store.locked() as months:
            roster = months.setdefault(key, {})
            if name in roster:
                return False
            roster[name] = MemberRecord(role=role, order=len(roster))
        self._store.persist(f"Add member: {name} ({role})")
        return True

    def delete_member(self, year: int, month: int, name: str) -> bool:
        key = month_key(year, month)
        with self._store.locked() as months:
            roster = months.get(key)
            if roster is None or name not in roster:
                return False
            del roster[name]
        self._store.persist(f"Delete member: {name}")
        return True

    def set_role(self, year: int, month: int, name: str, role: str) -> bool:
        role = require_non_empty(role, "role")
        key = month_key(year, month)
        with self._store.locked() as months:
            record = months.get(key, {}).get(name)
            if record is None:
                return False
            record.role = role
        self._store.persist(f"Change role of {name}: {role}")
        return True

    def reorder(self, year: int, month: int, orders: Sequence[Mapping[str, Any]]) -> bool:
        pairs = [
            (str(item["name"]), parse_order(item.get("order")))
            for item in orders
            if item.get("name") is not None
        ]
        key = month_key(year, month)
        with self._store.locked() as months:
            roster = months.get(key)
            if roster is None:
                return False
            for name, order in pairs:
                if name in roster:
                    roster[name].order = order
        self._store.persist("Reorder members")
        return True

    def copy_previous_month(self, year: int, month: int) -> bool:
        prev_year, prev_month = previous_month(year, month)
        prev_key = month_key(prev_year, prev_month)
        key = month_key(year, month)
        with self._store.locked() as months:
            prev = months.get(prev_key)
            if prev is None:
                return False
            months[key] = {name: MemberRecord(role=rec.role, order=rec.order) for name, rec in prev.items()}
        self._store.persist(f"Copy members from {prev_key}")
        return True

    def set_attendance(self, year: int, month: int, name: str, date_key: str, status: Any) -> bool:
        value = parse_status(status)
        date_key = require_non_empty(date_key, "date")
        key = month_key(year, month)
        with self._store.locked() as months:
            record = months.get(key, {}).get(name)
            if record is None:
                return False
            if date_key.startswith(EXTRA_PREFIX):
                record.extra_attendance[date_key] = value
            else:
                record.attendance[date_key] = value
        self._store.persist(f"Update attendance of {name} ({date_key})")
        return True

    def import_month(self, year: int, month: int, payload: Mapping[str, Any]) -> ImportResult:
        """Replace the month's roster with the payload's members.

        The new roster is built completely before the store is touched, so a
        malformed payload leaves the month as it was.
        """
        key = month_key(year, month)
        try:
            members = payload.get("members") or {}
            roster = decode_roster(members)
        except Exception as e:
            logger.error("Import of %s failed: %s", key, e)
            return ImportResult(success=False, error=f"Failed to import data: {e}")

        if self._backups is not None and self._backup_before_import:
            self._backups.create_backup(BackupKind.AUTO, description=f"Before import of {key}")

        with self._store.locked() as months:
            months[key] = roster
        self._store.persist(f"Import data for {key}")
        return ImportResult(success=True, message="Data imported successfully")
