import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored beside the code as portfolio.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "portfolio.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # create_all() at startup; turn off once migrations manage the schema
    AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", "true")

    # Admin login: bcrypt hash (see `flask hash-password`) or plain password
    ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

    # Session cookie name for the admin token
    AUTH_COOKIE_NAME = "admin_session"

    # 7 days session lifetime
    SESSION_LIFETIME_SECONDS = 7 * 24 * 60 * 60

    # Idle timeout: 24 hours
    IDLE_TIMEOUT_SECONDS = int(os.getenv("IDLE_TIMEOUT_SECONDS", str(24 * 60 * 60)))

    # Session/cookie security defaults
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Strict"
    SESSION_COOKIE_SECURE = _env_bool("ADMIN_COOKIE_SECURE", "false")  # set true when using HTTPS

    # Brute-force protection on /auth/login
    MAX_LOGIN_ATTEMPTS = 5
    LOCKOUT_MINUTES = 10

    # Coupons
    COUPON_CODE_LENGTH = 8

    # Notification recipient when settings carry no email
    CONTACT_EMAIL = os.getenv("CONTACT_EMAIL")

    # Used for links in notification emails
    PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")

    # Email (SMTP)
    SMTP_HOST = os.getenv("SMTP_HOST")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME = os.getenv("SMTP_USERNAME")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
    SMTP_FROM_EMAIL = os.getenv("SMTP_FROM_EMAIL")
    SMTP_USE_TLS = _env_bool("SMTP_USE_TLS", "true")

    # Basic app settings
    DEBUG = False
