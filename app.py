from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from config import Config
from routes import health_bp, auth_bp, coupons_bp, booking_bp, contact_bp, settings_bp, audit_bp

from models import db
from flask_migrate import Migrate
from services.errors import BookingSystemError
from utils.seed import seed_settings
from utils.auth_context import load_current_admin
from security.csrf import protect_admin_writes


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(coupons_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(audit_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    with app.app_context():
        if app.config.get("AUTO_CREATE_TABLES"):
            db.create_all()
        # Default settings row (safe & idempotent)
        seed_settings()

    @app.before_request
    def _load_admin():
        load_current_admin()

    app.before_request(protect_admin_writes)

    register_error_handlers(app)

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        if resp.mimetype == "application/json":
            resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app


def register_error_handlers(app):
    @app.errorhandler(BookingSystemError)
    def _booking_error(exc):
        db.session.rollback()
        return jsonify(error=exc.message), exc.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc):
        return jsonify(error=exc.description), exc.code

    @app.errorhandler(Exception)
    def _unexpected_error(exc):
        db.session.rollback()
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(error="Internal server error"), 500

#-------------------------
import click
from security.password import hash_password
from services import coupon_store


def register_cli(app):
    @app.cli.command("hash-password")
    @click.password_option()
    def hash_password_command(password):
        """Print a bcrypt hash to use as ADMIN_PASSWORD_HASH."""
        click.echo(hash_password(password))

    @app.cli.command("create-coupon")
    @click.argument("name")
    @click.argument("email")
    @click.option("--hours", default=2, show_default=True, type=int, help="Slot duration in hours.")
    def create_coupon_command(name, email, hours):
        """Issue a booking coupon and print its code."""
        coupon = coupon_store.create(name, email, hours)
        click.echo(f"{coupon.code} ({coupon.slot_duration_hours}h) for {coupon.name} <{coupon.email}>")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5000)
