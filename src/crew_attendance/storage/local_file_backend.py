from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..core.enums import BackendKind
from .port import LoadResult, SaveResult

logger = logging.getLogger(__name__)


class LocalFileBackend:
    """Stores the attendance document in one JSON file on disk.

    Read failures (missing or corrupt file) yield an empty document; write
    failures are logged and reported through SaveResult. Neither raises.
    """

    kind = BackendKind.LOCAL

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> LoadResult:
        if not self._path.exists():
            logger.info("Local data file %s not found, starting with empty data", self._path)
            return LoadResult(source="local")

        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to read local data file %s: %s", self._path, e)
            return LoadResult(source="local")

        if not isinstance(data, dict):
            logger.error("Local data file %s does not hold a JSON object, ignoring it", self._path)
            return LoadResult(source="local")

        logger.info("Loaded data from local file %s", self._path)
        return LoadResult(data=data, found=True, source="local")

    def save(self, document: dict[str, Any], message: str = "") -> SaveResult:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            if self._path.parent and not self._path.parent.exists():
                self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write local data file %s: %s", self._path, e)
            return SaveResult(local_saved=False, error=str(e))

        logger.debug("Saved local data file %s (%s)", self._path, message)
        return SaveResult(local_saved=True)

    def status(self) -> dict[str, Any]:
        return {
            "connected": False,
            "owner": None,
            "repo": None,
            "dataPath": str(self._path),
            "lastSha": None,
        }
