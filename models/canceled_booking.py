from datetime import datetime
from models.db import db


class CanceledBooking(db.Model):
    """Append-only copy of a booking taken at the moment it was canceled."""

    __tablename__ = "canceled_bookings"

    id = db.Column(db.Integer, primary_key=True)
    # the booking row itself is gone, so these are plain references
    booking_id = db.Column(db.Integer, nullable=False, index=True)
    slot_id = db.Column(db.Integer, nullable=True)

    slot_date = db.Column(db.Date, nullable=False, index=True)
    slot_time = db.Column(db.Time, nullable=False)
    slot_duration = db.Column(db.Integer, nullable=False)

    full_name = db.Column(db.String(160), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(40), nullable=False)
    address = db.Column(db.String(255), nullable=False)
    postal_code = db.Column(db.String(20), nullable=False)
    city = db.Column(db.String(120), nullable=False)
    unit_count = db.Column(db.Integer, nullable=True)
    note = db.Column(db.Text, nullable=True)
    booking_created_at = db.Column(db.DateTime, nullable=True)

    reason = db.Column(db.String(500), nullable=False)
    canceled_by = db.Column(db.String(80), nullable=False)
    canceled_by_id = db.Column(db.Integer, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
