from flask import Blueprint, request, jsonify

from security.rbac import ensure_admin, require_admin
from services import admin_bookings, booking_store
from services.errors import ConflictError
from utils.audit import log_event
from utils.timeutil import format_instant
from utils.validation import json_object, parse_id, reject_unknown_fields

booking_bp = Blueprint("booking", __name__, url_prefix="/bookings")


def _booking_json(b):
    return {
        "id": b.id,
        "couponCode": b.coupon_code,
        "name": b.name,
        "email": b.email,
        "startTime": format_instant(b.start_time),
        "endTime": format_instant(b.end_time),
        "status": b.status,
        "createdAt": format_instant(b.created_at),
        "confirmedAt": format_instant(b.confirmed_at),
    }


def _public_booking_json(b):
    """
    Calendar projection of a booking. Drops email and couponCode for every
    row, the caller's own pending ones included: the caller already holds
    both, and the listing is reachable without authentication.
    """
    return {
        "id": b.id,
        "name": b.name,
        "startTime": format_instant(b.start_time),
        "endTime": format_instant(b.end_time),
        "status": b.status,
    }


@booking_bp.get("")
def list_bookings():
    if request.args.get("public") == "true":
        rows = booking_store.list_public(request.args.get("email"))
        return jsonify([_public_booking_json(b) for b in rows]), 200

    ensure_admin()
    return jsonify([_booking_json(b) for b in booking_store.list_all()]), 200


# ---------- PUBLIC: request a slot (collision-checked) ----------
@booking_bp.post("")
def create_booking():
    data = json_object()
    reject_unknown_fields(data, ("couponCode", "name", "email", "startTime", "endTime"))

    try:
        booking = booking_store.create(
            data.get("couponCode"),
            data.get("name"),
            data.get("email"),
            data.get("startTime"),
            data.get("endTime"),
        )
    except ConflictError:
        log_event(
            "BOOKING_FAIL_CONFLICT",
            entity="booking",
            metadata={"startTime": data.get("startTime"), "endTime": data.get("endTime")},
        )
        raise

    log_event("BOOKING_CREATE", entity="booking", entity_id=booking.id, metadata={"couponCode": booking.coupon_code})
    return jsonify(_booking_json(booking)), 201


# ---------- ADMIN: edit / status transitions ----------
@booking_bp.put("")
@require_admin
def update_booking():
    data = json_object()
    reject_unknown_fields(data, ("id", "startTime", "endTime", "status"))

    booking = booking_store.update(
        parse_id(data.get("id")),
        start_time=data.get("startTime"),
        end_time=data.get("endTime"),
        status=data.get("status"),
    )

    changed = {k: data[k] for k in ("startTime", "endTime", "status") if k in data}
    log_event("BOOKING_UPDATE", actor="admin", entity="booking", entity_id=booking.id, metadata=changed)
    return jsonify(_booking_json(booking)), 200


@booking_bp.delete("")
@require_admin
def delete_booking():
    booking_id = parse_id(request.args.get("id"))
    admin_bookings.delete(booking_id)

    log_event("BOOKING_DELETE", actor="admin", entity="booking", entity_id=booking_id)
    return jsonify(message="Booking deleted successfully"), 200


@booking_bp.post("/<int:booking_id>/confirm")
@require_admin
def confirm_booking(booking_id: int):
    booking = admin_bookings.confirm(booking_id)
    log_event("BOOKING_UPDATE", actor="admin", entity="booking", entity_id=booking.id, metadata={"status": "confirmed"})
    return jsonify(_booking_json(booking)), 200


@booking_bp.post("/<int:booking_id>/cancel")
@require_admin
def cancel_booking(booking_id: int):
    booking = admin_bookings.cancel(booking_id)
    log_event("BOOKING_UPDATE", actor="admin", entity="booking", entity_id=booking.id, metadata={"status": "cancelled"})
    return jsonify(_booking_json(booking)), 200
