from flask import Blueprint, request, jsonify

from security.rbac import require_admin
from services import coupon_store
from services.errors import BookingSystemError
from utils.audit import log_event
from utils.timeutil import format_instant
from utils.validation import json_object, parse_id, reject_unknown_fields

coupons_bp = Blueprint("coupons", __name__, url_prefix="/coupons")


def _coupon_json(c):
    return {
        "id": c.id,
        "code": c.code,
        "name": c.name,
        "email": c.email,
        "slotDurationHours": c.slot_duration_hours,
        "isActive": c.is_active,
        "createdAt": format_instant(c.created_at),
        "usedAt": format_instant(c.used_at),
    }


@coupons_bp.get("")
@require_admin
def list_coupons():
    return jsonify([_coupon_json(c) for c in coupon_store.list_all()]), 200


@coupons_bp.post("")
@require_admin
def create_coupon():
    data = json_object()
    reject_unknown_fields(data, ("name", "email", "slotDurationHours"))

    coupon = coupon_store.create(data.get("name"), data.get("email"), data.get("slotDurationHours"))

    log_event("COUPON_CREATE", actor="admin", entity="coupon", entity_id=coupon.id)
    return jsonify(_coupon_json(coupon)), 201


@coupons_bp.put("")
@require_admin
def update_coupon():
    data = json_object()
    reject_unknown_fields(data, ("id", "name", "email", "isActive", "slotDurationHours"))

    coupon = coupon_store.update(
        parse_id(data.get("id")),
        name=data.get("name"),
        email=data.get("email"),
        is_active=data.get("isActive"),
        slot_duration_hours=data.get("slotDurationHours"),
    )

    changed = sorted(k for k in data if k != "id")
    log_event("COUPON_UPDATE", actor="admin", entity="coupon", entity_id=coupon.id, metadata={"fields": changed})
    return jsonify(_coupon_json(coupon)), 200


@coupons_bp.delete("")
@require_admin
def delete_coupon():
    coupon_id = parse_id(request.args.get("id"))
    coupon_store.delete(coupon_id)

    log_event("COUPON_DELETE", actor="admin", entity="coupon", entity_id=coupon_id)
    return jsonify(message="Coupon deleted successfully"), 200


# ---------- PUBLIC: unlock the booking calendar ----------
@coupons_bp.post("/validate")
def validate_coupon():
    try:
        coupon = coupon_store.validate(json_object().get("code"))
    except BookingSystemError as exc:
        if exc.status_code == 404:
            log_event("COUPON_VALIDATE_FAIL", entity="coupon")
        return jsonify(valid=False, error=exc.message, message=exc.message), exc.status_code

    return jsonify(
        valid=True,
        message="Coupon is valid",
        slotDurationHours=coupon.slot_duration_hours,
        coupon={"name": coupon.name, "email": coupon.email},
    ), 200
