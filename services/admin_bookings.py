"""Admin actions over bookings. Callers must already be authorized."""
from services import booking_store


def confirm(booking_id):
    return booking_store.update(booking_id, status="confirmed")


def cancel(booking_id):
    return booking_store.update(booking_id, status="cancelled")


def delete(booking_id):
    booking_store.delete(booking_id)
