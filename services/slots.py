from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from flask import current_app, has_app_context
from sqlalchemy import delete

from models import Slot, SLOT_FREE, SLOT_BOOKED
from services.errors import ServiceError

DEFAULT_DURATION = 120
DEFAULT_BULK_MAX_DAYS = 366


def parse_day(value) -> date:
    """Accepts a ``date`` or a ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat((value or "").strip())
    except (TypeError, ValueError):
        raise ServiceError("invalid_date")


def parse_clock(value) -> time:
    """Accepts a ``time`` or an ``HH:MM`` string."""
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except (TypeError, ValueError):
        raise ServiceError("invalid_time")


def parse_duration(value) -> int:
    if value is None or value == "":
        return DEFAULT_DURATION
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise ServiceError("invalid_duration")
    if minutes <= 0:
        raise ServiceError("invalid_duration")
    return minutes


def _bulk_max_days() -> int:
    if not has_app_context():
        return DEFAULT_BULK_MAX_DAYS
    return int(current_app.config.get("BULK_MAX_DAYS", DEFAULT_BULK_MAX_DAYS))


def list_slots(session, day=None):
    q = session.query(Slot)
    if day is not None:
        q = q.filter(Slot.date == parse_day(day))
    return q.order_by(Slot.date.asc(), Slot.time.asc(), Slot.id.asc()).all()


def create_slot(session, day, clock, duration=DEFAULT_DURATION) -> Slot:
    # no overlap check: several slots may share the same date and time
    slot = Slot(
        date=parse_day(day),
        time=parse_clock(clock),
        duration=parse_duration(duration),
        status=SLOT_FREE,
    )
    session.add(slot)
    session.commit()
    return slot


def _parse_weekdays(days_of_week: Optional[Iterable]) -> set:
    if not days_of_week:
        raise ServiceError("missing_fields")
    weekdays = set()
    for value in days_of_week:
        try:
            day = int(value)
        except (TypeError, ValueError):
            raise ServiceError("invalid_days")
        if day < 1 or day > 7:
            raise ServiceError("invalid_days")
        weekdays.add(day)
    return weekdays


def create_slots_bulk(session, date_from, date_to, clock, duration=DEFAULT_DURATION, days_of_week=None) -> dict:
    """
    Creates one slot per matching day in [date_from, date_to] at ``clock``.
    ``days_of_week`` uses ISO numbering (1 = Monday ... 7 = Sunday).
    Existing slots with the same date and time are left alone and counted as
    ``skipped`` (free) or ``conflicts`` (booked). All inserts share one commit.
    """
    start = parse_day(date_from)
    end = parse_day(date_to)
    at = parse_clock(clock)
    minutes = parse_duration(duration)
    weekdays = _parse_weekdays(days_of_week)

    if start > end:
        raise ServiceError("invalid_range")
    if (end - start).days + 1 > _bulk_max_days():
        raise ServiceError("range_too_large")

    existing = {}
    rows = (
        session.query(Slot)
        .filter(Slot.date >= start, Slot.date <= end, Slot.time == at)
        .all()
    )
    for row in rows:
        # a booked duplicate wins over a free one on the same day
        if existing.get(row.date) != SLOT_BOOKED:
            existing[row.date] = row.status

    created = skipped = conflicts = 0
    try:
        day = start
        while day <= end:
            if day.isoweekday() in weekdays:
                status = existing.get(day)
                if status == SLOT_BOOKED:
                    conflicts += 1
                elif status is not None:
                    skipped += 1
                else:
                    session.add(Slot(date=day, time=at, duration=minutes, status=SLOT_FREE))
                    created += 1
            day += timedelta(days=1)
        session.commit()
    except Exception:
        session.rollback()
        raise

    return {"created": created, "skipped": skipped, "conflicts": conflicts}


def delete_slot(session, slot_id: int) -> int:
    """Deletes a free slot. Returns the number of deleted rows (0 or 1)."""
    result = session.execute(
        delete(Slot).where(Slot.id == slot_id, Slot.status == SLOT_FREE)
    )
    session.commit()
    return result.rowcount
