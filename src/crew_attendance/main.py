from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .backups.controller import register as register_backups
from .backups.scheduler import start_backup_scheduler
from .container import build_container
from .core.constants import DEFAULT_BACKUP_INTERVAL_HOURS
from .reports.controller import register as register_reports
from .storage.controller import register as register_storage
from .storage.port import PersistencePort

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(overrides: Optional[Mapping[str, Any]] = None, *, persistence: Optional[PersistencePort] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, static_folder=None)

    settings_module = get_settings_module()
    app.config.from_object(importlib.import_module(settings_module))
    if overrides:
        app.config.update(overrides)

    # Member names are Korean and rosters are ordered by insertion.
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    container = build_container(config=app.config, persistence=persistence)
    app.extensions["crew_attendance"] = container
    logger.info(
        "Starting crew attendance (settings=%s, backend=%s)",
        settings_module,
        container.persistence.kind.value,
    )

    if app.config.get("INIT_IN_BACKGROUND", True):
        container.store.start_background_initialization()
    else:
        container.store.initialize()

    if app.config.get("BACKUP_SCHEDULER_ENABLED", False):
        app.extensions["backup_scheduler"] = start_backup_scheduler(
            container.backup_manager,
            interval_hours=float(app.config.get("BACKUP_INTERVAL_HOURS", DEFAULT_BACKUP_INTERVAL_HOURS)),
        )

    register_attendance(app, container)
    register_reports(app, container)
    register_backups(app, container)
    register_storage(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return jsonify({"error": "Method not allowed"}), 405

    return app
