"""
Client-side booking flow as a state machine:

    LOCKED -> UNLOCKED -> SLOT_PICKING(day) -> CONFIRMING(slot) -> SUBMITTED

The availability check here is advisory. The Booking Store re-checks
collisions on submit and is the only authority.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from services import booking_store, coupon_store
from services.errors import BookingSystemError, ConflictError

HOUR_SLOTS = tuple(range(6, 23))  # 06:00 .. 22:00 starts

UNLOCK_PROMPT = "Please enter your booking code to unlock the calendar."
SLOT_CONFLICT_MESSAGE = "This time slot conflicts with an existing booking. Please choose another time."
BOOKING_SENT_NOTICE = "Booking request sent! I will contact you soon to confirm."
GENERIC_VALIDATE_ERROR = "Error validating coupon. Please try again."
GENERIC_BOOKING_ERROR = "Failed to create booking. Please try again."


class FlowState(Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    SLOT_PICKING = "slot_picking"
    CONFIRMING = "confirming"
    SUBMITTED = "submitted"


class InvalidTransition(RuntimeError):
    pass


@dataclass
class CalendarEvent:
    title: str
    start: datetime
    end: datetime
    is_booked: bool  # confirmed (gray) vs. the user's own pending (green)


@dataclass
class HourSlot:
    hour: int
    start: datetime
    end: datetime
    available: bool


class StoreBackend:
    """In-process backend; needs an application context."""

    def validate_coupon(self, code):
        return coupon_store.validate(code)

    def list_public(self, email=None):
        return booking_store.list_public(email)

    def create_booking(self, coupon_code, name, email, start, end):
        return booking_store.create(coupon_code, name, email, start, end)


def _event_from_booking(booking) -> CalendarEvent:
    if booking.status == "pending":
        title = "Your Booking - Pending Confirmation"
    else:
        title = f"Booked - {booking.name}"
    return CalendarEvent(
        title=title,
        start=booking.start_time,
        end=booking.end_time,
        is_booked=booking.status == "confirmed",
    )


class BookingFlow:
    def __init__(self, backend=None, hours=HOUR_SLOTS):
        self.backend = backend or StoreBackend()
        self.hours = tuple(hours)
        self.lock()

    # ----- state helpers -----
    def _require(self, *states):
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransition(f"{self.state.value} does not allow this action (expected {allowed})")

    def _slot_for(self, hour: int):
        start = datetime.combine(self.selected_day, time(hour))
        return start, start + timedelta(hours=self.slot_duration_hours)

    def has_collision(self, start, end) -> bool:
        return any(
            booking_store.overlaps(start, end, event.start, event.end)
            for event in self.events
        )

    def reload_events(self):
        bookings = self.backend.list_public(self.email)
        self.events = [_event_from_booking(b) for b in bookings]
        return self.events

    # ----- transitions -----
    def lock(self):
        """Back to the initial state, forgetting the unlocked identity."""
        self.state = FlowState.LOCKED
        self.coupon_code = None
        self.slot_duration_hours = None
        self.name = None
        self.email = None
        self.events = []
        self.selected_day = None
        self.selected_slot = None
        self.error = None
        self.notice = None

    def unlock(self, code) -> bool:
        self._require(FlowState.LOCKED)
        self.error = None
        code = (code or "").strip().upper()

        try:
            coupon = self.backend.validate_coupon(code)
        except BookingSystemError as exc:
            self.error = exc.message or GENERIC_VALIDATE_ERROR
            return False

        self.coupon_code = code
        self.slot_duration_hours = coupon.slot_duration_hours
        self.name = coupon.name
        self.email = coupon.email
        self.state = FlowState.UNLOCKED
        self.reload_events()
        return True

    def select_day(self, day) -> bool:
        if self.state == FlowState.LOCKED:
            self.error = UNLOCK_PROMPT
            return False
        self._require(FlowState.UNLOCKED, FlowState.SLOT_PICKING)

        if isinstance(day, datetime):
            day = day.date()
        if not isinstance(day, date):
            raise TypeError("day must be a date")

        self.selected_day = day
        self.selected_slot = None
        self.error = None
        self.state = FlowState.SLOT_PICKING
        return True

    def hour_slots(self):
        self._require(FlowState.SLOT_PICKING)
        slots = []
        for hour in self.hours:
            start, end = self._slot_for(hour)
            slots.append(HourSlot(hour, start, end, not self.has_collision(start, end)))
        return slots

    def select_hour(self, hour: int) -> bool:
        self._require(FlowState.SLOT_PICKING)
        if hour not in self.hours:
            raise ValueError(f"hour must be one of {self.hours[0]}..{self.hours[-1]}")

        start, end = self._slot_for(hour)
        if self.has_collision(start, end):
            self.error = SLOT_CONFLICT_MESSAGE
            return False

        self.selected_slot = (start, end)
        self.error = None
        self.state = FlowState.CONFIRMING
        return True

    def confirm(self) -> bool:
        self._require(FlowState.CONFIRMING)
        start, end = self.selected_slot
        self.state = FlowState.SUBMITTED
        self.error = None
        self.notice = None

        try:
            self.backend.create_booking(self.coupon_code, self.name, self.email, start, end)
        except ConflictError as exc:
            # someone else took the slot since our last fetch
            self.error = exc.message
            self.selected_slot = None
            self.state = FlowState.UNLOCKED
            self.reload_events()
            return False
        except BookingSystemError as exc:
            self.error = exc.message or GENERIC_BOOKING_ERROR
            self.state = FlowState.CONFIRMING
            return False

        self.events.append(CalendarEvent(
            title="Your Booking - Pending Confirmation",
            start=start,
            end=end,
            is_booked=False,
        ))
        self.selected_slot = None
        self.selected_day = None
        self.notice = BOOKING_SENT_NOTICE
        self.state = FlowState.UNLOCKED
        return True

    def cancel(self):
        self._require(FlowState.UNLOCKED, FlowState.SLOT_PICKING, FlowState.CONFIRMING)
        self.selected_day = None
        self.selected_slot = None
        self.error = None
        self.state = FlowState.UNLOCKED
