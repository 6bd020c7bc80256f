from flask import Blueprint, jsonify

from models import db
from models.contact_message import ContactMessage
from security.rbac import require_admin
from services.errors import ValidationError
from services.notifications import dispatch_after_commit, notify_contact_message
from utils.audit import log_event
from utils.timeutil import format_instant
from utils.validation import is_valid_email, json_object

contact_bp = Blueprint("contact", __name__, url_prefix="/contact")


@contact_bp.post("")
def create_contact_message():
    data = json_object()
    email = (data.get("email") or "").strip()
    message = (data.get("message") or "").strip()

    if not email or not message:
        raise ValidationError("Email and message are required")
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")

    msg = ContactMessage(email=email, message=message)
    db.session.add(msg)
    db.session.commit()

    log_event("CONTACT_MESSAGE_CREATE", entity="contact_message", entity_id=msg.id)
    dispatch_after_commit(notify_contact_message, msg)
    return jsonify(success=True, id=msg.id), 201


@contact_bp.get("/messages")
@require_admin
def list_contact_messages():
    rows = ContactMessage.query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).limit(200).all()
    return jsonify([
        {
            "id": m.id,
            "email": m.email,
            "message": m.message,
            "createdAt": format_instant(m.created_at),
            "notifiedAt": format_instant(m.notified_at),
        }
        for m in rows
    ]), 200
