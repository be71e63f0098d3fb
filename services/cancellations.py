from models import CanceledBooking
from services.slots import parse_day


def list_cancellations(session, date_from=None, date_to=None):
    """Archive rows, optionally limited to an inclusive range of original slot dates."""
    q = session.query(CanceledBooking)
    if date_from:
        q = q.filter(CanceledBooking.slot_date >= parse_day(date_from))
    if date_to:
        q = q.filter(CanceledBooking.slot_date <= parse_day(date_to))
    return q.order_by(
        CanceledBooking.slot_date.asc(),
        CanceledBooking.slot_time.asc(),
        CanceledBooking.id.asc(),
    ).all()
