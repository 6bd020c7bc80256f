from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_instant(value) -> datetime:
    """
    Parse an ISO-8601 instant like "2025-10-25T10:00:00.000Z" into naive UTC.
    Values without an offset are taken as UTC already.
    Raises ValueError on anything else.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Expected an ISO-8601 string")
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def format_instant(dt):
    if dt is None:
        return None
    return dt.isoformat(timespec="milliseconds") + "Z"
