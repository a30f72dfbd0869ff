from __future__ import annotations

import base64
import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_GITHUB_DATA_PATH, DEFAULT_GITHUB_TIMEOUT
from ..core.enums import BackendKind
from ..core.exceptions import RemoteSyncError
from .local_file_backend import LocalFileBackend
from .port import LoadResult, SaveResult

logger = logging.getLogger(__name__)

CONFLICT_STATUSES = frozenset({409, 422})


@dataclass
class GitHubConfig:
    token: str
    owner: str
    repo: str
    path: str = DEFAULT_GITHUB_DATA_PATH
    branch: Optional[str] = None
    api_url: str = "https://api.github.com"
    timeout: float = DEFAULT_GITHUB_TIMEOUT


class GitHubBackend:
    """Stores the attendance document as one file in a GitHub repository.

    Every update must carry the blob sha from the last read or write; GitHub
    rejects stale shas and the rejection is reported, not retried. Every
    write is mirrored to the local backend, which also takes over whenever
    GitHub cannot be reached.
    """

    kind = BackendKind.GITHUB

    def __init__(self, config: GitHubConfig, local: LocalFileBackend, *, session: Optional[requests.Session] = None):
        self._config = config
        self._local = local
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {config.token}",
                "Accept": "application/vnd.github+json",
            }
        )
        self._sha: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def last_sha(self) -> Optional[str]:
        return self._sha

    @property
    def local(self) -> LocalFileBackend:
        return self._local

    def _contents_url(self) -> str:
        c = self._config
        return f"{c.api_url.rstrip('/')}/repos/{c.owner}/{c.repo}/contents/{c.path}"

    def fetch_remote(self) -> LoadResult:
        """Read the remote file without local fallback.

        A missing file is returned as found=False; anything else that keeps
        the document from being read raises RemoteSyncError.
        """
        params = {"ref": self._config.branch} if self._config.branch else None
        try:
            resp = self._session.get(self._contents_url(), params=params, timeout=self._config.timeout)
        except requests.RequestException as e:
            raise RemoteSyncError(f"GitHub request failed: {e}") from e

        if resp.status_code == 404:
            return LoadResult(source="github")
        if resp.status_code != 200:
            raise RemoteSyncError(f"GitHub API error: {resp.status_code} {resp.text}")

        try:
            payload = resp.json()
            encoded = payload.get("content")
            if not encoded:
                raise RemoteSyncError("GitHub returned no file content")
            data = json.loads(base64.b64decode(encoded).decode("utf-8"))
        except (ValueError, AttributeError) as e:
            raise RemoteSyncError(f"GitHub data file is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise RemoteSyncError("GitHub data file does not hold a JSON object")

        with self._lock:
            self._sha = payload.get("sha")
        self._local.save(data, "mirror of remote data")
        return LoadResult(data=data, found=True, source="github", version=self._sha)

    def load(self) -> LoadResult:
        c = self._config
        logger.info("Loading data from GitHub: %s/%s/%s", c.owner, c.repo, c.path)
        try:
            result = self.fetch_remote()
        except RemoteSyncError as e:
            logger.error("GitHub load failed, falling back to local file: %s", e)
            return self._local.load()

        if not result.found:
            logger.info("No data file on GitHub yet, creating it")
            with self._lock:
                self._sha = None
            self.save({}, "Create initial data file")
            return LoadResult(source="github", version=self._sha)

        logger.info("Loaded data from GitHub (sha=%s)", result.version)
        return result

    def save(self, document: dict[str, Any], message: str) -> SaveResult:
        content = json.dumps(document, ensure_ascii=False, indent=2)
        body: dict[str, Any] = {
            "message": f"{message} - {now_local().strftime('%Y-%m-%d %H:%M:%S')}",
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if self._config.branch:
            body["branch"] = self._config.branch

        with self._lock:
            if self._sha:
                body["sha"] = self._sha
            error = self._put(body)

        local = self._local.save(document, message)
        if error:
            return SaveResult(local_saved=local.local_saved, remote_saved=False, version=self._sha, error=error)
        return SaveResult(local_saved=local.local_saved, remote_saved=True, version=self._sha)

    def _put(self, body: dict[str, Any]) -> Optional[str]:
        """PUT the file; returns an error description or None. Caller holds the lock."""
        try:
            resp = self._session.put(self._contents_url(), json=body, timeout=self._config.timeout)
        except requests.RequestException as e:
            logger.warning("GitHub save failed, data kept locally only: %s", e)
            return str(e)

        if resp.status_code in CONFLICT_STATUSES:
            logger.warning("GitHub rejected the update (stale sha %s): %s", self._sha, resp.text)
            return f"version conflict ({resp.status_code})"
        if resp.status_code not in (200, 201):
            logger.warning("GitHub save failed with %s, data kept locally only: %s", resp.status_code, resp.text)
            return f"GitHub API error ({resp.status_code})"

        try:
            self._sha = resp.json()["content"]["sha"]
        except (ValueError, KeyError, TypeError):
            logger.warning("GitHub save response had no content sha")
            self._sha = None
        logger.info("Saved data to GitHub (sha=%s)", self._sha)
        return None

    def status(self) -> dict[str, Any]:
        return {
            "connected": True,
            "owner": self._config.owner,
            "repo": self._config.repo,
            "dataPath": self._config.path,
            "lastSha": self._sha,
        }
