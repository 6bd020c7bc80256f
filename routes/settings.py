from flask import Blueprint, Response, request, jsonify

from security.rbac import require_admin
from services.settings_store import get_settings, update_settings
from utils.audit import log_event
from utils.theme import generate_theme_css

settings_bp = Blueprint("settings", __name__)


# Public: the about page and the site header read these
@settings_bp.get("/settings")
def read_settings():
    return jsonify(get_settings()), 200


@settings_bp.put("/settings")
@require_admin
def write_settings():
    updates = request.get_json(silent=True)
    settings = update_settings(updates)

    log_event("SETTINGS_UPDATE", actor="admin", entity="settings", metadata={"fields": sorted(updates)})
    return jsonify(success=True, settings=settings), 200


@settings_bp.get("/theme.css")
def theme_css():
    resp = Response(generate_theme_css(get_settings()), mimetype="text/css")
    resp.headers["Cache-Control"] = "no-cache"
    return resp
