import re

from flask import request

from services.errors import ValidationError

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email) -> bool:
    return isinstance(email, str) and len(email) <= 255 and bool(_EMAIL.match(email))


def parse_id(value) -> int:
    """Record ids arrive as JSON numbers or as strings (query args)."""
    if value is None or value == "":
        raise ValidationError("ID is required")
    if isinstance(value, bool):
        raise ValidationError("ID must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError("ID must be an integer")


def reject_unknown_fields(data: dict, allowed) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValidationError("Unknown field(s): " + ", ".join(unknown))


def json_object() -> dict:
    """The request body as a dict. A missing body reads as {}."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
