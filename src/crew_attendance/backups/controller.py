from __future__ import annotations

from flask import Flask, jsonify, send_file

from ..common.http import json_api, json_body
from ..common.validators import require_fields
from ..container import Container
from ..core.enums import BackupKind


def register(app: Flask, container: Container) -> None:
    api = json_api(container.store)
    backups = container.backup_manager

    @app.route("/api/backup/create", methods=["POST"], endpoint="create_backup")
    @api
    def create_backup():
        body = json_body()
        description = body.get("description")
        entry = backups.create_backup(BackupKind.MANUAL, description=str(description) if description else None)
        return jsonify({"success": True, "backup": entry.to_dict()})

    @app.route("/api/backup/list", methods=["GET"], endpoint="list_backups")
    @api
    def list_backups():
        return jsonify({"backups": [e.to_dict() for e in backups.list_backups()]})

    @app.route("/api/backup/restore", methods=["POST"], endpoint="restore_backup")
    @api
    def restore_backup():
        body = json_body()
        require_fields(body, "filename")
        safety = backups.restore(str(body["filename"]))
        return jsonify({"success": True, "safetyBackup": safety.filename})

    @app.route("/api/backup/download/<filename>", methods=["GET"], endpoint="download_backup")
    @api
    def download_backup(filename):
        path = backups.path_for(filename)
        return send_file(path.resolve(), mimetype="application/json", as_attachment=True, download_name=filename)

    @app.route("/api/backup/<filename>", methods=["DELETE"], endpoint="delete_backup")
    @api
    def delete_backup(filename):
        backups.delete(filename)
        return jsonify({"success": True})
