from __future__ import annotations

from datetime import date
from typing import Optional

from flask import jsonify

from ..core.exceptions import ValidationError
from .validators import require_iso_date


def error_response(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def date_arg(value: Optional[str], default: date, field_name: str = "date") -> date:
    """Query-string date, ``default`` when absent."""
    if not value:
        return default
    return require_iso_date(value, field_name)


def json_body(request) -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
