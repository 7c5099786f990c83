"""
Request-parsing helpers shared by the route modules.
"""

from flask import request

from druginfo.exceptions import ValidationError


def json_body() -> dict:
    """Parsed JSON object from the request, or {} when absent or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def require_fields(data, fields, raw=()) -> dict:
    """
    Return the values of *fields* from *data*, stripped of surrounding
    whitespace except for the names listed in *raw* (passwords).
    Raises ValidationError naming every missing or blank field.
    """
    values = {}
    missing = []
    for field in fields:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
            continue
        values[field] = value if field in raw else value.strip()
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)
    return values
