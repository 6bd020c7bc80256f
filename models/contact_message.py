from models.db import db
from utils.timeutil import utcnow


class ContactMessage(db.Model):
    __tablename__ = "contact_messages"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    # set once the notification email went out
    notified_at = db.Column(db.DateTime, nullable=True)
