import pytest

from app import create_app
from models import db
from models.booking import Booking
from models.coupon import Coupon
from utils.timeutil import parse_instant

ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
def app(tmp_path):
    """Fresh app + SQLite file per test. Email is unconfigured unless a test patches it."""
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///" + str(tmp_path / "test.db"),
        "AUTO_CREATE_TABLES": True,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "ADMIN_PASSWORD_HASH": None,
        "SMTP_HOST": None,
        "CONTACT_EMAIL": "studio@example.com",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    """Logged-in client that sends the CSRF header on every request."""
    client = app.test_client()
    resp = client.post("/auth/login", json={"password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    client.environ_base["HTTP_X_CSRF_TOKEN"] = client.get_cookie("csrf_token").value
    return client


@pytest.fixture
def sent_emails(monkeypatch):
    """Captures outgoing mail instead of talking to SMTP."""
    sent = []

    def fake_send_email(to_email, subject, body, reply_to=None, html=None):
        sent.append({"to": to_email, "subject": subject, "body": body, "reply_to": reply_to})
        return True, None

    monkeypatch.setattr("services.notifications.send_email", fake_send_email)
    return sent


def make_coupon(code="PHOTO2025", name="Jane", email="jane@x.com", hours=2, active=True):
    coupon = Coupon(code=code, name=name, email=email, slot_duration_hours=hours, is_active=active)
    db.session.add(coupon)
    db.session.commit()
    return coupon


def make_booking(start, end, status="pending", email="someone@x.com", name="Someone", code="PHOTO2025"):
    booking = Booking(
        coupon_code=code,
        name=name,
        email=email,
        start_time=parse_instant(start),
        end_time=parse_instant(end),
        status=status,
    )
    db.session.add(booking)
    db.session.commit()
    return booking
