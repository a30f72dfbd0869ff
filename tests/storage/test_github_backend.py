from __future__ import annotations

import base64
import json

import pytest
import requests

from crew_attendance.container import build_persistence
from crew_attendance.core.enums import BackendKind
from crew_attendance.core.exceptions import RemoteSyncError
from crew_attendance.storage.github_backend import GitHubBackend, GitHubConfig
from crew_attendance.storage.local_file_backend import LocalFileBackend


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload or {})

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, *, get=None, put=None):
        self.headers = {}
        self._get = list(get or [])
        self._put = list(put or [])
        self.get_calls = []
        self.put_calls = []

    def get(self, url, params=None, timeout=None):
        self.get_calls.append({"url": url, "params": params, "timeout": timeout})
        item = self._get.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def put(self, url, json=None, timeout=None):
        self.put_calls.append({"url": url, "json": json, "timeout": timeout})
        item = self._put.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _encoded(doc):
    return base64.b64encode(json.dumps(doc, ensure_ascii=False).encode("utf-8")).decode("ascii")


def _backend(tmp_path, session, **overrides):
    config = GitHubConfig(token="t0ken", owner="crew", repo="attendance", **overrides)
    return GitHubBackend(config, LocalFileBackend(tmp_path / "data.json"), session=session)


DOC = {"2025-03": {"a": {"role": "페이서", "attendance": {"2025-03-03": 1}, "extraAttendance": {}, "order": 0}}}


def test_load_decodes_remote_file_and_mirrors_locally(tmp_path):
    session = FakeSession(get=[FakeResponse(200, {"content": _encoded(DOC), "sha": "abc"})])
    backend = _backend(tmp_path, session)

    result = backend.load()

    assert result.found
    assert result.data == DOC
    assert backend.last_sha == "abc"
    assert backend.local.load().data == DOC
    assert session.get_calls[0]["url"] == "https://api.github.com/repos/crew/attendance/contents/data/attendance_data.json"
    assert session.headers["Authorization"] == "Bearer t0ken"


def test_load_passes_branch_as_ref(tmp_path):
    session = FakeSession(get=[FakeResponse(200, {"content": _encoded({}), "sha": "abc"})])

    _backend(tmp_path, session, branch="data").load()

    assert session.get_calls[0]["params"] == {"ref": "data"}


def test_load_missing_remote_file_creates_it(tmp_path):
    session = FakeSession(
        get=[FakeResponse(404, {"message": "Not Found"})],
        put=[FakeResponse(201, {"content": {"sha": "new"}})],
    )
    backend = _backend(tmp_path, session)

    result = backend.load()

    assert result.data == {}
    assert not result.found
    assert len(session.put_calls) == 1
    body = session.put_calls[0]["json"]
    assert "sha" not in body
    assert json.loads(base64.b64decode(body["content"])) == {}
    assert backend.last_sha == "new"


def test_load_falls_back_to_local_on_remote_error(tmp_path):
    LocalFileBackend(tmp_path / "data.json").save(DOC, "seed")
    session = FakeSession(get=[FakeResponse(500, {"message": "boom"})])

    result = _backend(tmp_path, session).load()

    assert result.source == "local"
    assert result.data == DOC


def test_load_falls_back_to_local_on_network_error(tmp_path):
    session = FakeSession(get=[requests.ConnectionError("offline")])

    result = _backend(tmp_path, session).load()

    assert result.source == "local"
    assert result.data == {}


def test_save_sends_last_sha_and_tracks_new_one(tmp_path):
    session = FakeSession(
        get=[FakeResponse(200, {"content": _encoded({}), "sha": "v1"})],
        put=[FakeResponse(200, {"content": {"sha": "v2"}})],
    )
    backend = _backend(tmp_path, session)
    backend.load()

    result = backend.save(DOC, "Add member")

    assert result.remote_saved and result.local_saved
    assert result.synchronized
    assert result.version == "v2"
    body = session.put_calls[0]["json"]
    assert body["sha"] == "v1"
    assert body["message"].startswith("Add member - ")
    assert backend.local.load().data == DOC


def test_save_conflict_is_not_retried_and_kept_locally(tmp_path):
    session = FakeSession(
        get=[FakeResponse(200, {"content": _encoded({}), "sha": "stale"})],
        put=[FakeResponse(409, {"message": "sha does not match"})],
    )
    backend = _backend(tmp_path, session)
    backend.load()

    result = backend.save(DOC, "Add member")

    assert not result.remote_saved
    assert result.local_saved
    assert "conflict" in result.error
    assert len(session.put_calls) == 1
    assert backend.last_sha == "stale"
    assert backend.local.load().data == DOC


def test_save_network_error_writes_locally(tmp_path):
    session = FakeSession(put=[requests.Timeout("slow")])
    backend = _backend(tmp_path, session)

    result = backend.save(DOC, "Add member")

    assert not result.synchronized
    assert result.local_saved
    assert backend.local.load().data == DOC


def test_fetch_remote_raises_on_failure(tmp_path):
    session = FakeSession(get=[FakeResponse(401, {"message": "Bad credentials"})])

    with pytest.raises(RemoteSyncError):
        _backend(tmp_path, session).fetch_remote()


def test_fetch_remote_rejects_invalid_json(tmp_path):
    bad = base64.b64encode(b"{oops").decode("ascii")
    session = FakeSession(get=[FakeResponse(200, {"content": bad, "sha": "x"})])

    with pytest.raises(RemoteSyncError):
        _backend(tmp_path, session).fetch_remote()


def test_build_persistence_selects_backend(tmp_path):
    local = build_persistence({"DATA_FILE": str(tmp_path / "d.json"), "GITHUB_TOKEN": "t", "GITHUB_OWNER": "o"})
    remote = build_persistence(
        {"DATA_FILE": str(tmp_path / "d.json"), "GITHUB_TOKEN": "t", "GITHUB_OWNER": "o", "GITHUB_REPO": "r"},
        session=FakeSession(),
    )

    assert local.kind == BackendKind.LOCAL
    assert remote.kind == BackendKind.GITHUB
    assert remote.status()["repo"] == "r"
