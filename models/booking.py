from datetime import datetime
from models.db import db

class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)
    slot_id = db.Column(db.Integer, db.ForeignKey("slots.id"), nullable=False, index=True)

    full_name = db.Column(db.String(160), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(40), nullable=False)
    address = db.Column(db.String(255), nullable=False)
    postal_code = db.Column(db.String(20), nullable=False)
    city = db.Column(db.String(120), nullable=False)
    unit_count = db.Column(db.Integer, nullable=True)
    note = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # set once when staff marks the job done
    completed_by = db.Column(db.String(80), nullable=True)
    completed_at = db.Column(db.DateTime, nullable=True)

    slot = db.relationship("Slot")

    __table_args__ = (
        # only one active booking can exist per slot (prevents double booking)
        db.UniqueConstraint("slot_id", name="uq_booking_slot_once"),
    )
