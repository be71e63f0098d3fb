"""
Booking lifecycle.

    Slot.free --create_booking--> Slot.booked + Booking (open)
    Booking (open) --complete_booking--> Booking (completed, slot stays booked)
    Booking (open) --cancel_booking--> CanceledBooking + Booking deleted + Slot.free

Every transition commits once. The slot flip on booking is a conditional
UPDATE, and ``bookings.slot_id`` is unique, so two requests racing for the same
slot end with exactly one booking.
"""
import logging
from datetime import datetime

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError

from models import Booking, CanceledBooking, Slot, SLOT_BOOKED, SLOT_FREE
from services.errors import Conflict, NotFound, ServiceError
from services.slots import parse_day
from utils.serializers import fmt_clock, fmt_day

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("fullName", "email", "phone", "address", "plz", "city")


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _is_valid_email(email: str) -> bool:
    return "@" in email and len(email) <= 255


def _parse_units(value):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ServiceError("invalid_units")
    try:
        units = int(value)
    except (TypeError, ValueError):
        raise ServiceError("invalid_units")
    if units <= 0:
        raise ServiceError("invalid_units")
    return units


def snapshot(booking: Booking, slot: Slot) -> dict:
    """Flat copy of a booking and its slot, used for emails."""
    return {
        "booking_id": booking.id,
        "slot_id": slot.id,
        "date": fmt_day(slot.date),
        "time": fmt_clock(slot.time),
        "duration": slot.duration,
        "full_name": booking.full_name,
        "email": booking.email,
        "phone": booking.phone,
        "address": booking.address,
        "postal_code": booking.postal_code,
        "city": booking.city,
        "unit_count": booking.unit_count,
        "note": booking.note,
    }


def create_booking(session, notifier, slot_id, customer: dict) -> dict:
    customer = customer or {}
    values = {name: _text(customer.get(name)) for name in REQUIRED_FIELDS}
    if slot_id in (None, "") or not all(values.values()):
        raise ServiceError("missing_fields")
    if not _is_valid_email(values["email"]):
        raise ServiceError("invalid_email")
    units = _parse_units(customer.get("units"))

    try:
        slot_id = int(slot_id)
    except (TypeError, ValueError):
        raise NotFound("slot_not_found")

    slot = session.get(Slot, slot_id)
    if slot is None:
        raise NotFound("slot_not_found")
    if slot.status != SLOT_FREE:
        raise Conflict("already_booked")

    claimed = session.execute(
        update(Slot)
        .where(Slot.id == slot_id, Slot.status == SLOT_FREE)
        .values(status=SLOT_BOOKED)
    )
    if claimed.rowcount != 1:
        session.rollback()
        raise Conflict("already_booked")

    booking = Booking(
        slot_id=slot_id,
        full_name=values["fullName"],
        email=values["email"],
        phone=values["phone"],
        address=values["address"],
        postal_code=values["plz"],
        city=values["city"],
        unit_count=units,
        note=_text(customer.get("note")) or None,
    )
    session.add(booking)
    try:
        session.commit()
    except IntegrityError:
        # uq_booking_slot_once: another request got there first
        session.rollback()
        raise Conflict("already_booked")

    logger.info("Booking %s created for slot %s", booking.id, slot_id)
    if notifier is not None:
        notifier.booking_created(snapshot(booking, slot))

    return {"bookingId": booking.id, "slotId": slot_id}


def complete_booking(session, booking_id: int, actor_username: str):
    """
    Marks a booking as done. Completing twice is a no-op: the first
    ``completed_by``/``completed_at`` stay. Returns (booking, already_completed).
    """
    booking = session.get(Booking, booking_id)
    if booking is None:
        raise NotFound()
    if booking.completed_at is not None:
        return booking, True

    result = session.execute(
        update(Booking)
        .where(Booking.id == booking_id, Booking.completed_at.is_(None))
        .values(completed_by=actor_username, completed_at=datetime.utcnow())
    )
    session.commit()
    session.refresh(booking)
    return booking, result.rowcount == 0


def cancel_booking(session, notifier, booking_id: int, reason, actor=None) -> CanceledBooking:
    reason = _text(reason)
    if not reason:
        raise ServiceError("reason_required")

    booking = session.get(Booking, booking_id)
    if booking is None:
        raise NotFound()
    # completed is terminal
    if booking.completed_at is not None:
        raise Conflict("already_completed")
    slot = session.get(Slot, booking.slot_id)
    if slot is None:
        raise NotFound("slot_not_found")

    data = snapshot(booking, slot)
    record = CanceledBooking(
        booking_id=booking.id,
        slot_id=slot.id,
        slot_date=slot.date,
        slot_time=slot.time,
        slot_duration=slot.duration,
        full_name=booking.full_name,
        email=booking.email,
        phone=booking.phone,
        address=booking.address,
        postal_code=booking.postal_code,
        city=booking.city,
        unit_count=booking.unit_count,
        note=booking.note,
        booking_created_at=booking.created_at,
        reason=reason,
        canceled_by=getattr(actor, "username", None) or "system",
        canceled_by_id=getattr(actor, "uid", None),
    )

    try:
        session.add(record)
        removed = session.execute(
            delete(Booking).where(Booking.id == booking_id, Booking.completed_at.is_(None))
        )
        if removed.rowcount != 1:
            session.rollback()
            # completed or removed by a concurrent request
            if session.get(Booking, booking_id) is not None:
                raise Conflict("already_completed")
            raise NotFound()
        session.execute(
            update(Slot).where(Slot.id == slot.id).values(status=SLOT_FREE)
        )
        session.commit()
    except ServiceError:
        raise
    except Exception:
        session.rollback()
        raise

    if notifier is not None:
        data.update(reason=reason, canceled_by=record.canceled_by)
        notifier.booking_canceled(data)

    return record


def _date_range(q, column, date_from=None, date_to=None):
    if date_from:
        q = q.filter(column >= parse_day(date_from))
    if date_to:
        q = q.filter(column <= parse_day(date_to))
    return q


def _bookings_with_slots(session, completed: bool, date_from=None, date_to=None):
    q = session.query(Booking, Slot).join(Slot, Booking.slot_id == Slot.id)
    if completed:
        q = q.filter(Booking.completed_at.isnot(None))
    else:
        q = q.filter(Booking.completed_at.is_(None))
    q = _date_range(q, Slot.date, date_from, date_to)
    return q.order_by(Slot.date.asc(), Slot.time.asc(), Booking.id.asc()).all()


def list_open_bookings(session, date_from=None, date_to=None):
    """(booking, slot) pairs not yet completed, ordered by slot date and time."""
    return _bookings_with_slots(session, False, date_from, date_to)


def list_completed_bookings(session, date_from=None, date_to=None):
    return _bookings_with_slots(session, True, date_from, date_to)


def get_booking_with_slot(session, booking_id: int):
    row = (
        session.query(Booking, Slot)
        .join(Slot, Booking.slot_id == Slot.id)
        .filter(Booking.id == booking_id)
        .first()
    )
    if row is None:
        raise NotFound()
    return row
