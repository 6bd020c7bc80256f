from .db import db
from .coupon import Coupon
from .booking import Booking, BOOKING_STATUSES
from .session import AdminSession
from .login_attempt import LoginAttempt
from .audit_log import AuditLog
from .contact_message import ContactMessage
from .site_settings import SiteSettings
