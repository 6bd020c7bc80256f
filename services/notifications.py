"""
Email notifications for new bookings and contact messages.

Notifications run after the triggering write has committed. A failed send is
logged (app logger + audit trail) and dropped; it never fails the request.
"""
from flask import current_app

from models import db
from services.errors import NotificationDispatchError
from services.settings_store import notification_recipient
from utils.audit import log_event
from utils.emailer import send_email
from utils.timeutil import utcnow


def _recipient() -> str:
    fallback = current_app.config.get("CONTACT_EMAIL")
    return notification_recipient(fallback)


def _deliver(subject: str, body: str, reply_to: str = None, html: str = None) -> None:
    ok, error = send_email(_recipient(), subject, body, reply_to=reply_to, html=html)
    if not ok:
        raise NotificationDispatchError(error or "Failed to send email")


def booking_duration_hours(booking) -> int:
    return round((booking.end_time - booking.start_time).total_seconds() / 3600)


def notify_booking_created(booking) -> None:
    base_url = current_app.config.get("PUBLIC_BASE_URL") or "http://localhost:5000"
    admin_link = f"{base_url.rstrip('/')}/admin/bookings"

    day = booking.start_time.strftime("%Y-%m-%d")
    time_range = f"{booking.start_time:%H:%M} - {booking.end_time:%H:%M} UTC"
    hours = booking_duration_hours(booking)

    subject = f"New Booking: {booking.name}"
    body = (
        "New Booking Request\n\n"
        f"Name: {booking.name}\n"
        f"Email: {booking.email}\n"
        f"Coupon: {booking.coupon_code}\n\n"
        f"Date: {day}\n"
        f"Time: {time_range}\n"
        f"Duration: {hours} hours\n\n"
        f"View in Admin: {admin_link}"
    )
    _deliver(subject, body, reply_to=booking.email)


def notify_contact_message(message) -> None:
    subject = f"Contact Form: {message.email}"
    body = f"New Contact Form Message\n\nFrom: {message.email}\n\n{message.message}"
    _deliver(subject, body, reply_to=message.email)

    message.notified_at = utcnow()
    db.session.commit()


def dispatch_after_commit(action, *args) -> bool:
    """
    Runs a notification once the caller's transaction is committed.
    Returns whether it was delivered.
    """
    try:
        action(*args)
    except NotificationDispatchError as exc:
        current_app.logger.warning("%s failed: %s", action.__name__, exc.message)
        error = exc.message
    except Exception as exc:
        # the triggering write is already committed; report, never propagate
        current_app.logger.exception("%s raised", action.__name__)
        error = f"{type(exc).__name__}: {exc}"
    else:
        return True

    db.session.rollback()
    log_event(
        "NOTIFICATION_FAIL",
        actor="system",
        metadata={"notification": action.__name__, "error": error},
    )
    return False
