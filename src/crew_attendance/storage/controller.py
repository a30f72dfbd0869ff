from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import now_utc
from ..common.http import json_api
from ..container import Container
from ..core.enums import BackendKind
from ..core.exceptions import RemoteSyncError, ValidationError
from .github_backend import GitHubBackend

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    api = json_api(container.store)
    persistence = container.persistence

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        last_save = container.store.last_save
        return jsonify(
            {
                "status": "OK",
                "timestamp": now_utc().isoformat(),
                "backend": persistence.kind.value,
                "github_connected": persistence.kind == BackendKind.GITHUB,
                "github_synchronized": bool(last_save.synchronized) if last_save else None,
                "data_initialized": container.store.is_initialized,
            }
        )

    @app.route("/api/github/status", methods=["GET"], endpoint="github_status")
    def github_status():
        return jsonify(persistence.status())

    @app.route("/api/github/sync", methods=["POST"], endpoint="github_sync")
    @api
    def github_sync():
        if not isinstance(persistence, GitHubBackend):
            return jsonify({"success": False, "error": "GitHub storage is not configured"}), 500

        try:
            result = persistence.fetch_remote()
            if not result.found:
                raise RemoteSyncError("GitHub data file does not exist")
            container.store.replace_all(result.data)
        except (RemoteSyncError, ValidationError, TypeError, ValueError) as e:
            logger.error("GitHub sync failed: %s", e)
            return jsonify({"success": False, "error": "GitHub sync failed"}), 500

        return jsonify({"success": True, "message": "Synchronized latest data from GitHub"})
