from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import jsonify, request

from ..attendance.store import AttendanceStore
from ..core.exceptions import BackupNotFoundError, ForbiddenError, ValidationError

logger = logging.getLogger(__name__)


def json_api(store: AttendanceStore):
    """Request boundary for JSON endpoints.

    Waits for the store to finish loading, maps domain errors to 4xx and
    turns anything unexpected into a generic 500 without internal detail.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            store.wait_for_initialization()
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"error": str(e)}), 400
            except ForbiddenError as e:
                return jsonify({"error": str(e)}), 403
            except BackupNotFoundError as e:
                return jsonify({"error": str(e)}), 404
            except Exception:
                logger.exception("Error in %s %s", request.method, request.path)
                return jsonify({"error": "Internal server error"}), 500

        return wrapper

    return decorator


def json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
