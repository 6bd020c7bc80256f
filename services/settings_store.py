import copy

from models import db
from models.site_settings import SiteSettings
from services.errors import ValidationError
from utils.theme import DEFAULT_FONT, DEFAULT_PRESET, validate_theme

DEFAULT_SETTINGS = {
    "photographerName": "",
    "location": "",
    "bio": "",
    "email": "",
    "instagram": "",
    "profilePhoto": "",
    "siteTitle": "Portfolio",
    "languages": "",
    "equipment": "",
    "isConfigured": False,
    "theme": {
        "preset": DEFAULT_PRESET,
        "fontFamily": DEFAULT_FONT,
    },
}

TEXT_FIELDS = (
    "photographerName", "location", "bio", "email", "instagram",
    "profilePhoto", "siteTitle", "languages", "equipment",
)


def _row() -> SiteSettings:
    row = SiteSettings.query.order_by(SiteSettings.id.asc()).first()
    if row is None:
        row = SiteSettings(data=copy.deepcopy(DEFAULT_SETTINGS))
        db.session.add(row)
        db.session.commit()
    return row


def get_settings() -> dict:
    merged = copy.deepcopy(DEFAULT_SETTINGS)
    merged.update(_row().data or {})
    return merged


def update_settings(updates) -> dict:
    """Shallow merge of known keys. Marks the site as configured."""
    if not isinstance(updates, dict):
        raise ValidationError("Settings payload must be an object")

    unknown = sorted(set(updates) - set(TEXT_FIELDS) - {"theme", "isConfigured"})
    if unknown:
        raise ValidationError("Unknown settings field(s): " + ", ".join(unknown))

    for field in TEXT_FIELDS:
        if field in updates and not isinstance(updates[field], str):
            raise ValidationError(f"{field} must be a string")

    if "theme" in updates:
        errors = validate_theme(updates["theme"])
        if errors:
            raise ValidationError("; ".join(errors))

    row = _row()
    data = get_settings()
    data.update({k: v for k, v in updates.items() if k != "isConfigured"})
    data["isConfigured"] = True

    # reassign so the JSON column is flagged dirty
    row.data = data
    db.session.commit()
    return data


def notification_recipient(fallback=None):
    return get_settings().get("email") or fallback
