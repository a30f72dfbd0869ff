from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Optional

from ..attendance.store import AttendanceStore
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_BACKUP_RETENTION_DAYS
from ..core.enums import BackupKind
from ..core.exceptions import BackupNotFoundError, ForbiddenError, ValidationError
from .model import BackupEntry

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S_%f"
BACKUP_NAME_RE = re.compile(r"^attendance_(auto|manual)_(\d{8}_\d{6}_\d{6})\.json$")


def backup_filename(kind: BackupKind, timestamp: datetime) -> str:
    return f"attendance_{kind.value}_{timestamp.strftime(TIMESTAMP_FORMAT)}.json"


def parse_backup_filename(filename: str) -> Optional[tuple[BackupKind, datetime]]:
    m = BACKUP_NAME_RE.match(filename)
    if not m:
        return None
    return BackupKind(m.group(1)), datetime.strptime(m.group(2), TIMESTAMP_FORMAT)


class BackupManager:
    """Whole-store snapshots kept as JSON archives in one directory.

    The kind and timestamp are part of the file name; automatic archives
    expire after the retention period, manual ones are kept until a person
    removes them outside the API.
    """

    def __init__(
        self,
        store: AttendanceStore,
        backup_dir: str | Path,
        *,
        retention_days: int = DEFAULT_BACKUP_RETENTION_DAYS,
    ):
        self._store = store
        self._dir = Path(backup_dir)
        self._retention = timedelta(days=int(retention_days))

    @property
    def backup_dir(self) -> Path:
        return self._dir

    def create_backup(self, kind: BackupKind = BackupKind.AUTO, description: Optional[str] = None) -> BackupEntry:
        self._dir.mkdir(parents=True, exist_ok=True)

        ts = now_local()
        path = self._dir / backup_filename(kind, ts)
        while path.exists():
            ts += timedelta(microseconds=1)
            path = self._dir / backup_filename(kind, ts)

        data = self._store.snapshot()
        payload = {
            "timestamp": ts.isoformat(),
            "kind": kind.value,
            "description": description,
            "data": data,
        }
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

        logger.info("Created %s backup %s", kind.value, path.name)
        return BackupEntry(
            filename=path.name,
            kind=kind,
            timestamp=ts,
            size=path.stat().st_size,
            description=description,
            months=len(data),
        )

    def list_backups(self) -> list[BackupEntry]:
        if not self._dir.exists():
            return []

        entries = []
        for path in self._dir.iterdir():
            parsed = parse_backup_filename(path.name)
            if not parsed or not path.is_file():
                continue
            kind, ts = parsed
            description = None
            months = None
            try:
                payload = self._read(path)
                description = payload.get("description")
                months = len(payload.get("data") or {})
            except (OSError, ValueError, AttributeError) as e:
                logger.warning("Unreadable backup %s: %s", path.name, e)
            entries.append(
                BackupEntry(
                    filename=path.name,
                    kind=kind,
                    timestamp=ts,
                    size=path.stat().st_size,
                    description=description,
                    months=months,
                )
            )

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries

    def path_for(self, filename: str) -> Path:
        if not parse_backup_filename(filename):
            raise BackupNotFoundError(f"Backup not found: {filename}")
        path = self._dir / filename
        if not path.is_file():
            raise BackupNotFoundError(f"Backup not found: {filename}")
        return path

    def restore(self, filename: str) -> BackupEntry:
        """Replace the live store with an archive, snapshotting the current state first."""
        path = self.path_for(filename)
        try:
            payload = self._read(path)
            data = payload["data"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise ValidationError(f"Backup file is not valid: {e}") from e

        safety = self.create_backup(BackupKind.AUTO, description=f"Before restore of {filename}")
        try:
            self._store.replace_all(data)
        except (TypeError, ValueError, AttributeError, ValidationError) as e:
            raise ValidationError(f"Backup file is not valid: {e}") from e

        self._store.persist(f"Restore backup {filename}")
        logger.info("Restored backup %s (safety copy %s)", filename, safety.filename)
        return safety

    def delete(self, filename: str) -> None:
        path = self.path_for(filename)
        kind, _ = parse_backup_filename(filename)
        if kind == BackupKind.MANUAL:
            raise ForbiddenError("Manual backups cannot be deleted")
        path.unlink()
        logger.info("Deleted backup %s", filename)

    def prune(self, now: Optional[datetime] = None) -> list[str]:
        """Delete automatic backups older than the retention period."""
        cutoff = (now or now_local()) - self._retention
        removed = []
        for entry in self.list_backups():
            if entry.kind != BackupKind.AUTO or entry.timestamp >= cutoff:
                continue
            try:
                (self._dir / entry.filename).unlink()
                removed.append(entry.filename)
            except OSError as e:
                logger.warning("Could not delete expired backup %s: %s", entry.filename, e)
        if removed:
            logger.info("Pruned %d expired backup(s)", len(removed))
        return removed

    def run_scheduled(self) -> None:
        self.create_backup(BackupKind.AUTO, description="Scheduled backup")
        self.prune()

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
