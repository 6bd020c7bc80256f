import secrets
import string

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from models import db
from models.coupon import Coupon
from services.errors import NotFoundError, ValidationError
from utils.timeutil import utcnow

CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 5

INVALID_CODE_MESSAGE = "Invalid coupon code. Please contact me to receive a booking code."


def generate_code(length: int = 8) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def _clean_str(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def _clean_duration(value) -> int:
    error = ValidationError("slotDurationHours must be a positive integer")
    # bool is an int subclass
    if isinstance(value, bool):
        raise error
    if isinstance(value, str):
        if not value.strip().isdigit():
            raise error
        value = int(value.strip())
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise error
    return value


def create(name, email, slot_duration_hours) -> Coupon:
    if not name or not email or not slot_duration_hours:
        raise ValidationError("Name, email and slot duration are required")

    name = _clean_str(name, "name")
    email = _clean_str(email, "email")
    hours = _clean_duration(slot_duration_hours)
    length = current_app.config.get("COUPON_CODE_LENGTH", 8)

    # Unique index on code; regenerate on the (unlikely) collision
    for _ in range(MAX_CODE_ATTEMPTS):
        coupon = Coupon(
            code=generate_code(length),
            name=name,
            email=email,
            slot_duration_hours=hours,
            is_active=True,
            created_at=utcnow(),
        )
        db.session.add(coupon)
        try:
            db.session.commit()
            return coupon
        except IntegrityError:
            db.session.rollback()

    raise RuntimeError("Could not generate a unique coupon code")


def get(coupon_id) -> Coupon:
    coupon = db.session.get(Coupon, coupon_id) if coupon_id is not None else None
    if not coupon:
        raise NotFoundError("Coupon not found")
    return coupon


def validate(code) -> Coupon:
    """
    Case-insensitive lookup among active coupons.
    The caller reads slot_duration_hours, name and email off the result.
    """
    if not isinstance(code, str) or not code.strip():
        raise ValidationError("Coupon code is required")

    coupon = (
        Coupon.query
        .filter(func.upper(Coupon.code) == code.strip().upper(), Coupon.is_active.is_(True))
        .first()
    )
    if not coupon:
        raise NotFoundError(INVALID_CODE_MESSAGE)
    return coupon


def update(coupon_id, name=None, email=None, is_active=None, slot_duration_hours=None) -> Coupon:
    coupon = get(coupon_id)

    if name is not None:
        coupon.name = _clean_str(name, "name")
    if email is not None:
        coupon.email = _clean_str(email, "email")
    if is_active is not None:
        if not isinstance(is_active, bool):
            raise ValidationError("isActive must be a boolean")
        coupon.is_active = is_active
    if slot_duration_hours is not None:
        coupon.slot_duration_hours = _clean_duration(slot_duration_hours)

    db.session.commit()
    return coupon


def delete(coupon_id) -> None:
    coupon = get(coupon_id)
    db.session.delete(coupon)
    db.session.commit()


def list_all():
    return Coupon.query.order_by(Coupon.created_at.desc(), Coupon.id.desc()).all()


def mark_used(code) -> None:
    """Stamp used_at the first time a booking is made with this code. Does not commit."""
    if not code:
        return
    coupon = Coupon.query.filter(func.upper(Coupon.code) == code.strip().upper()).first()
    if coupon and coupon.used_at is None:
        coupon.used_at = utcnow()
