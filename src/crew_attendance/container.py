from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from .attendance.service import AttendanceService
from .attendance.store import AttendanceStore
from .backups.service import BackupManager
from .core.constants import (
    DEFAULT_BACKUP_DIR,
    DEFAULT_BACKUP_RETENTION_DAYS,
    DEFAULT_DATA_FILE,
    DEFAULT_GITHUB_DATA_PATH,
    DEFAULT_GITHUB_TIMEOUT,
)
from .reports.service import ReportService
from .storage.github_backend import GitHubBackend, GitHubConfig
from .storage.local_file_backend import LocalFileBackend
from .storage.port import PersistencePort


@dataclass(frozen=True)
class Container:
    persistence: PersistencePort
    store: AttendanceStore

    attendance_service: AttendanceService
    report_service: ReportService
    backup_manager: BackupManager


def build_persistence(config: Mapping[str, Any], *, session: Optional[requests.Session] = None) -> PersistencePort:
    """Pick the backend once: GitHub when fully configured, the local file otherwise."""
    local = LocalFileBackend(config.get("DATA_FILE") or DEFAULT_DATA_FILE)

    token = config.get("GITHUB_TOKEN")
    owner = config.get("GITHUB_OWNER")
    repo = config.get("GITHUB_REPO")
    if not (token and owner and repo):
        return local

    github = GitHubConfig(
        token=str(token),
        owner=str(owner),
        repo=str(repo),
        path=str(config.get("GITHUB_DATA_PATH") or DEFAULT_GITHUB_DATA_PATH),
        branch=config.get("GITHUB_BRANCH") or None,
        api_url=str(config.get("GITHUB_API_URL") or "https://api.github.com"),
        timeout=float(config.get("GITHUB_TIMEOUT") or DEFAULT_GITHUB_TIMEOUT),
    )
    return GitHubBackend(github, local, session=session)


def build_container(*, config: Mapping[str, Any], persistence: Optional[PersistencePort] = None) -> Container:
    persistence = persistence or build_persistence(config)
    store = AttendanceStore(persistence)

    backup_manager = BackupManager(
        store,
        config.get("BACKUP_DIR") or DEFAULT_BACKUP_DIR,
        retention_days=int(config.get("BACKUP_RETENTION_DAYS") or DEFAULT_BACKUP_RETENTION_DAYS),
    )
    attendance_service = AttendanceService(
        store,
        backups=backup_manager,
        backup_before_import=bool(config.get("BACKUP_BEFORE_IMPORT", False)),
    )
    report_service = ReportService(store)

    return Container(
        persistence=persistence,
        store=store,
        attendance_service=attendance_service,
        report_service=report_service,
        backup_manager=backup_manager,
    )
