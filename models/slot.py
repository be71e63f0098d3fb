from datetime import datetime
from models.db import db

SLOT_FREE = "free"
SLOT_BOOKED = "booked"


class Slot(db.Model):
    __tablename__ = "slots"

    id = db.Column(db.Integer, primary_key=True)

    date = db.Column(db.Date, nullable=False, index=True)
    time = db.Column(db.Time, nullable=False)
    duration = db.Column(db.Integer, nullable=False, default=120)  # minutes

    status = db.Column(db.String(10), nullable=False, default=SLOT_FREE)
    # status values: free, booked

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
