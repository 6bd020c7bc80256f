"""
Double-submit CSRF protection for the admin session.

Login sets a readable `csrf_token` cookie next to the HttpOnly session cookie;
the admin UI echoes it back in the X-CSRF-Token header on every write.
Public visitors hold no session, so their writes are not checked.
"""
import hmac
import secrets
from flask import g, request, current_app

from services.errors import CsrfError

CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"

UNSAFE_METHODS = ("POST", "PUT", "PATCH", "DELETE")
CSRF_EXEMPT_PATHS = frozenset({"/auth/login", "/health"})


def issue_csrf_token(resp):
    """Pairs a fresh token with the admin session cookie, same lifetime."""
    resp.set_cookie(
        CSRF_COOKIE,
        secrets.token_urlsafe(32),
        max_age=current_app.config.get("SESSION_LIFETIME_SECONDS"),
        httponly=False,  # the admin UI reads it
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Strict"),
        path="/",
    )
    return resp


def clear_csrf_token(resp):
    resp.delete_cookie(CSRF_COOKIE, path="/")
    return resp


def tokens_match(cookie_token, header_token) -> bool:
    if not cookie_token or not header_token:
        return False
    return hmac.compare_digest(cookie_token.encode("utf-8"), header_token.encode("utf-8"))


def protect_admin_writes():
    """before_request hook: an admin write without a matching header is a 403."""
    if request.method not in UNSAFE_METHODS or request.path in CSRF_EXEMPT_PATHS:
        return
    if getattr(g, "admin_session", None) is None:
        return

    if not tokens_match(request.cookies.get(CSRF_COOKIE), request.headers.get(CSRF_HEADER)):
        current_app.logger.warning("CSRF mismatch on %s %s", request.method, request.path)
        raise CsrfError()
