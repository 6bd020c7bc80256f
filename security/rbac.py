from functools import wraps
from flask import g

from services.errors import Unauthorized


def is_admin() -> bool:
    return getattr(g, "admin_session", None) is not None


def ensure_admin():
    """Fails closed: anything but a live admin session is Unauthorized."""
    if not is_admin():
        raise Unauthorized("Unauthorized")


def require_admin(fn):
    """
    Usage: @require_admin
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        ensure_admin()
        return fn(*args, **kwargs)
    return wrapper
