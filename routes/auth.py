from flask import Blueprint, request, jsonify, current_app

from security.bruteforce import is_locked, register_failure, reset_attempts
from security.csrf import clear_csrf_token, issue_csrf_token
from security.password import verify_admin_password
from security.rbac import is_admin
from security.session import create_session, revoke_session
from utils.audit import log_event
from utils.validation import json_object

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.post("/login")
def login():
    data = json_object()
    password = data.get("password") or ""

    locked, seconds_left = is_locked()
    if locked:
        log_event("ADMIN_LOGIN_LOCKED", metadata={"seconds_left": seconds_left})
        return jsonify(error="Too many failed attempts. Try again later.", retry_after_seconds=seconds_left), 429

    if not verify_admin_password(password):
        fail_count, locked_now = register_failure()
        log_event("ADMIN_LOGIN_FAIL", metadata={"fail_count": fail_count, "locked_now": locked_now})
        if locked_now:
            return jsonify(
                error="Too many failed attempts. Login locked.",
                lockout_minutes=current_app.config.get("LOCKOUT_MINUTES", 10),
            ), 429
        return jsonify(error="Invalid password"), 401

    reset_attempts()
    raw_token = create_session()
    log_event("ADMIN_LOGIN_SUCCESS", actor="admin")

    resp = jsonify(message="Logged in")
    resp.set_cookie(
        current_app.config.get("AUTH_COOKIE_NAME", "admin_session"),
        raw_token,
        max_age=current_app.config.get("SESSION_LIFETIME_SECONDS"),
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Strict"),
        path="/",
    )
    issue_csrf_token(resp)
    return resp, 200


@auth_bp.post("/logout")
def logout():
    cookie_name = current_app.config.get("AUTH_COOKIE_NAME", "admin_session")
    if revoke_session(request.cookies.get(cookie_name)):
        log_event("ADMIN_LOGOUT", actor="admin")

    resp = jsonify(message="Logged out")
    resp.delete_cookie(cookie_name, path="/")
    clear_csrf_token(resp)
    return resp, 200


@auth_bp.get("/me")
def me():
    return jsonify(authenticated=is_admin()), 200
