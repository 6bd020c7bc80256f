from .health import health_bp
from .auth import auth_bp
from .coupons import coupons_bp
from .booking import booking_bp
from .contact import contact_bp
from .settings import settings_bp
from .audit_logs import audit_bp
