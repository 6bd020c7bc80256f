from models.db import db
from utils.timeutil import utcnow


class Coupon(db.Model):
    __tablename__ = "coupons"

    id = db.Column(db.Integer, primary_key=True)

    # Generated codes are 8 chars of [A-Z0-9]; lookups compare upper-cased
    code = db.Column(db.String(32), unique=True, nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    slot_duration_hours = db.Column(db.Integer, nullable=False, default=2)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    used_at = db.Column(db.DateTime, nullable=True)
