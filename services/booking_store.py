import threading

from sqlalchemy import and_, func, or_

from models import db
from models.booking import Booking, BOOKING_STATUSES
from services import coupon_store
from services.errors import ConflictError, NotFoundError, ValidationError
from services.notifications import dispatch_after_commit, notify_booking_created
from utils.timeutil import parse_instant, utcnow

# Serializes check-then-insert within one process. Separate worker processes
# sharing the database can still race; see DESIGN.md.
_WRITE_LOCK = threading.Lock()


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    """Half-open interval test on [start, end)."""
    return a_start < b_end and a_end > b_start


def _parse_time(value, field: str):
    try:
        return parse_instant(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an ISO-8601 datetime")


def find_collision(start, end):
    """First non-cancelled booking overlapping [start, end), or None."""
    for existing in Booking.query.filter(Booking.status != "cancelled").all():
        if overlaps(start, end, existing.start_time, existing.end_time):
            return existing
    return None


def create(coupon_code, name, email, start_time, end_time) -> Booking:
    if not coupon_code or not name or not email or not start_time or not end_time:
        raise ValidationError("All fields are required")

    start = _parse_time(start_time, "startTime")
    end = _parse_time(end_time, "endTime")
    if end <= start:
        raise ValidationError("endTime must be after startTime")

    with _WRITE_LOCK:
        if find_collision(start, end) is not None:
            raise ConflictError("Time slot is already booked")

        booking = Booking(
            coupon_code=str(coupon_code).strip(),
            name=str(name).strip(),
            email=str(email).strip(),
            start_time=start,
            end_time=end,
            status="pending",
            created_at=utcnow(),
        )
        db.session.add(booking)
        coupon_store.mark_used(booking.coupon_code)
        db.session.commit()

    # The booking row is the source of truth; the email is best-effort.
    dispatch_after_commit(notify_booking_created, booking)
    return booking


def get(booking_id) -> Booking:
    booking = db.session.get(Booking, booking_id) if booking_id is not None else None
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


def list_public(user_email=None):
    """Confirmed bookings plus the pending ones belonging to user_email."""
    visible = Booking.status == "confirmed"
    if user_email and user_email.strip():
        own_pending = and_(
            Booking.status == "pending",
            func.lower(Booking.email) == user_email.strip().lower(),
        )
        visible = or_(visible, own_pending)
    return Booking.query.filter(visible).order_by(Booking.start_time.asc()).all()


def list_all():
    return Booking.query.order_by(Booking.start_time.asc(), Booking.id.asc()).all()


def update(booking_id, start_time=None, end_time=None, status=None) -> Booking:
    """
    Admin edit. Time changes are applied as given: unlike create(), no
    collision check runs here.
    """
    booking = get(booking_id)

    if status is not None and status not in BOOKING_STATUSES:
        raise ValidationError("status must be one of: " + ", ".join(BOOKING_STATUSES))

    new_start = _parse_time(start_time, "startTime") if start_time is not None else booking.start_time
    new_end = _parse_time(end_time, "endTime") if end_time is not None else booking.end_time
    if new_end <= new_start:
        raise ValidationError("endTime must be after startTime")

    with _WRITE_LOCK:
        booking.start_time = new_start
        booking.end_time = new_end
        if status is not None:
            booking.status = status
            if status == "confirmed" and booking.confirmed_at is None:
                booking.confirmed_at = utcnow()
        db.session.commit()

    return booking


def delete(booking_id) -> None:
    booking = get(booking_id)
    with _WRITE_LOCK:
        db.session.delete(booking)
        db.session.commit()
