from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_api, json_body
from ..common.validators import parse_year_month, require_fields
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    api = json_api(container.store)
    reports = container.report_service

    @app.route("/api/monthly_report/<year>/<month>", methods=["GET"], endpoint="monthly_report")
    @api
    def monthly_report(year, month):
        y, m = parse_year_month(year, month)
        return jsonify(reports.monthly_report(y, m))

    @app.route("/api/dates/<year>/<month>", methods=["GET"], endpoint="meeting_dates")
    @api
    def meeting_dates(year, month):
        y, m = parse_year_month(year, month)
        return jsonify(reports.meeting_dates(y, m))

    @app.route("/api/export/all", methods=["GET"], endpoint="export_all")
    @api
    def export_all():
        return jsonify(reports.export_all())

    @app.route("/api/export/<year>/<month>", methods=["GET"], endpoint="export_month")
    @api
    def export_month(year, month):
        y, m = parse_year_month(year, month)
        return jsonify(reports.export_month(y, m))

    @app.route("/api/import_month_data", methods=["POST"], endpoint="import_month_data")
    @api
    def import_month_data():
        body = json_body()
        try:
            require_fields(body, "year", "month", "data")
            y, m = parse_year_month(body["year"], body["month"])
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        data = body["data"]
        if not isinstance(data, dict):
            return jsonify({"success": False, "error": "Import data must be a JSON object"}), 400

        result = container.attendance_service.import_month(y, m, data)
        return jsonify(result.to_dict())
