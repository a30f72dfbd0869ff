from __future__ import annotations

import copy
from datetime import datetime
from typing import Any

import pytest

from crew_attendance.attendance.service import AttendanceService
from crew_attendance.attendance.store import AttendanceStore
from crew_attendance.core.enums import BackendKind
from crew_attendance.reports.service import ReportService
from crew_attendance.storage.port import LoadResult, SaveResult


class InMemoryPersistence:
    kind = BackendKind.LOCAL

    def __init__(self, data: dict[str, Any] | None = None, *, fail_load: bool = False):
        self.data = copy.deepcopy(data) if data is not None else None
        self.fail_load = fail_load
        self.saves: list[tuple[dict[str, Any], str]] = []

    def load(self) -> LoadResult:
        if self.fail_load:
            raise RuntimeError("disk on fire")
        if self.data is None:
            return LoadResult(source="memory")
        return LoadResult(data=copy.deepcopy(self.data), found=True, source="memory")

    def save(self, document: dict[str, Any], message: str) -> SaveResult:
        self.data = copy.deepcopy(document)
        self.saves.append((copy.deepcopy(document), message))
        return SaveResult(local_saved=True)

    def status(self) -> dict[str, Any]:
        return {"connected": False, "owner": None, "repo": None, "dataPath": ":memory:", "lastSha": None}


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 14, 9, 30, 0)


@pytest.fixture
def persistence():
    return InMemoryPersistence()


@pytest.fixture
def store(persistence):
    s = AttendanceStore(persistence)
    s.initialize()
    return s


@pytest.fixture
def attendance(store):
    return AttendanceService(store)


@pytest.fixture
def reports(store):
    return ReportService(store)


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from crew_attendance.main import create_app

    return create_app(
        {
            "DATA_FILE": str(tmp_path / "attendance_data.json"),
            "BACKUP_DIR": str(tmp_path / "backups"),
        }
    )


@pytest.fixture
def client(app):
    return app.test_client()
