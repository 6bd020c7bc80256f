class BookingSystemError(Exception):
    """Base error for the coupon/booking subsystem. Carries an HTTP status."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BookingSystemError):
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(BookingSystemError):
    status_code = 401
    default_message = "Unauthorized"


class CsrfError(BookingSystemError):
    status_code = 403
    default_message = "CSRF validation failed"


class NotFoundError(BookingSystemError):
    status_code = 404
    default_message = "Not found"


class ConflictError(BookingSystemError):
    status_code = 409
    default_message = "Time slot is already booked"


class NotificationDispatchError(BookingSystemError):
    # Never reaches a response: dispatch failures are logged and dropped.
    default_message = "Failed to send notification"
