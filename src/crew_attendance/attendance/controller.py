from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_api, json_body
from ..common.validators import parse_year_month, require_fields
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    api = json_api(container.store)
    service = container.attendance_service

    @app.route("/api/members/<year>/<month>", methods=["GET"], endpoint="get_members")
    @api
    def get_members(year, month):
        y, m = parse_year_month(year, month)
        return jsonify(service.get_month_members(y, m))

    @app.route("/api/init_month", methods=["POST"], endpoint="init_month")
    @api
    def init_month():
        body = json_body()
        require_fields(body, "year", "month")
        y, m = parse_year_month(body["year"], body["month"])
        created = service.ensure_month(y, m)
        return jsonify({"success": True, "created": created})

    @app.route("/api/add_member", methods=["POST"], endpoint="add_member")
    @api
    def add_member():
        body = json_body()
        require_fields(body, "year", "month", "name", "role")
        y, m = parse_year_month(body["year"], body["month"])
        if service.add_member(y, m, str(body["name"]), str(body["role"])):
            return jsonify({"success": True})
        return jsonify({"error": "Member already exists"}), 400

    @app.route("/api/member/<year>/<month>/<path:name>", methods=["DELETE"], endpoint="delete_member")
    @api
    def delete_member(year, month, name):
        y, m = parse_year_month(year, month)
        if service.delete_member(y, m, name):
            return jsonify({"success": True})
        return jsonify({"error": "Failed to delete member"}), 400

    @app.route("/api/member_role", methods=["PUT"], endpoint="update_member_role")
    @api
    def update_member_role():
        body = json_body()
        require_fields(body, "year", "month", "name", "role")
        y, m = parse_year_month(body["year"], body["month"])
        if service.set_role(y, m, str(body["name"]), str(body["role"])):
            return jsonify({"success": True})
        return jsonify({"error": "Failed to update member role"}), 400

    @app.route("/api/member_orders", methods=["PUT"], endpoint="update_member_orders")
    @api
    def update_member_orders():
        body = json_body()
        require_fields(body, "year", "month", "orders")
        orders = body["orders"]
        if not isinstance(orders, list) or not all(isinstance(o, dict) for o in orders):
            raise ValidationError("Missing required fields or invalid orders")
        y, m = parse_year_month(body["year"], body["month"])
        if service.reorder(y, m, orders):
            return jsonify({"success": True})
        return jsonify({"error": "Failed to update member orders"}), 400

    @app.route("/api/copy_previous_month", methods=["POST"], endpoint="copy_previous_month")
    @api
    def copy_previous_month():
        body = json_body()
        require_fields(body, "year", "month")
        y, m = parse_year_month(body["year"], body["month"])
        if service.copy_previous_month(y, m):
            return jsonify({"success": True})
        return jsonify({"error": "No previous month data found or failed to copy"}), 400

    @app.route("/api/attendance", methods=["POST"], endpoint="update_attendance")
    @api
    def update_attendance():
        body = json_body()
        require_fields(body, "year", "month", "name", "date", "status")
        y, m = parse_year_month(body["year"], body["month"])
        if service.set_attendance(y, m, str(body["name"]), str(body["date"]), body["status"]):
            return jsonify({"success": True})
        return jsonify({"error": "Failed to update attendance"}), 400
