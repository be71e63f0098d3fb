from datetime import date, time

import pytest

from conftest import customer
from models import Slot
from services import bookings as booking_service
from services import slots as slot_service
from services.errors import ServiceError


def test_list_slots_orders_by_date_then_time(session):
    slot_service.create_slot(session, "2025-03-02", "08:00")
    slot_service.create_slot(session, "2025-03-01", "14:00")
    slot_service.create_slot(session, "2025-03-01", "09:30")

    rows = slot_service.list_slots(session)
    assert [(s.date.isoformat(), s.time.strftime("%H:%M")) for s in rows] == [
        ("2025-03-01", "09:30"),
        ("2025-03-01", "14:00"),
        ("2025-03-02", "08:00"),
    ]


def test_list_slots_for_one_date(session):
    slot_service.create_slot(session, "2025-03-01", "14:00")
    slot_service.create_slot(session, "2025-03-02", "08:00")

    rows = slot_service.list_slots(session, "2025-03-02")
    assert len(rows) == 1
    assert rows[0].date == date(2025, 3, 2)


def test_create_slot_defaults(session):
    slot = slot_service.create_slot(session, "2025-03-01", "08:00")
    assert slot.id is not None
    assert slot.status == "free"
    assert slot.duration == 120
    assert slot.time == time(8, 0)


def test_create_slot_allows_same_date_and_time(session):
    slot_service.create_slot(session, "2025-03-01", "08:00", 60)
    slot_service.create_slot(session, "2025-03-01", "08:00", 90)
    assert session.query(Slot).count() == 2


@pytest.mark.parametrize("day,clock,code", [
    ("01.03.2025", "08:00", "invalid_date"),
    ("2025-03-01", "8 Uhr", "invalid_time"),
])
def test_create_slot_rejects_bad_input(session, day, clock, code):
    with pytest.raises(ServiceError) as exc:
        slot_service.create_slot(session, day, clock)
    assert exc.value.code == code


def test_bulk_weekdays_on_empty_table(session):
    result = slot_service.create_slots_bulk(
        session, "2025-01-06", "2025-01-10", "08:00", 120, [1, 2, 3, 4, 5]
    )
    assert result == {"created": 5, "skipped": 0, "conflicts": 0}

    rows = slot_service.list_slots(session)
    assert [s.date.isoweekday() for s in rows] == [1, 2, 3, 4, 5]
    assert all(s.time == time(8, 0) and s.status == "free" for s in rows)


def test_bulk_counts_existing_duplicates(session):
    slot_service.create_slot(session, "2025-01-07", "08:00")
    booked = slot_service.create_slot(session, "2025-01-08", "08:00")
    booking_service.create_booking(session, None, booked.id, customer())
    # same day but other time: not a duplicate
    slot_service.create_slot(session, "2025-01-09", "10:00")

    result = slot_service.create_slots_bulk(
        session, "2025-01-06", "2025-01-12", "08:00", 120, [1, 2, 3, 4, 5]
    )
    assert result == {"created": 3, "skipped": 1, "conflicts": 1}
    assert sum(result.values()) == 5
    assert session.query(Slot).filter(Slot.time == time(8, 0)).count() == 5


def test_bulk_only_selected_weekdays(session):
    result = slot_service.create_slots_bulk(
        session, "2025-01-01", "2025-01-31", "09:00", 60, [6, 7]
    )
    # January 2025 has four Saturdays and four Sundays
    assert result["created"] == 8
    assert {s.date.isoweekday() for s in slot_service.list_slots(session)} == {6, 7}


@pytest.mark.parametrize("kwargs,code", [
    ({"date_from": "2025-01-10", "date_to": "2025-01-06", "days_of_week": [1]}, "invalid_range"),
    ({"date_from": "2025-01-06", "date_to": "2025-01-10", "days_of_week": []}, "missing_fields"),
    ({"date_from": "2025-01-06", "date_to": "2025-01-10", "days_of_week": [0, 8]}, "invalid_days"),
    ({"date_from": "2025-01-01", "date_to": "2027-01-01", "days_of_week": [1]}, "range_too_large"),
])
def test_bulk_rejects_bad_input(session, kwargs, code):
    with pytest.raises(ServiceError) as exc:
        slot_service.create_slots_bulk(session, clock="08:00", **kwargs)
    assert exc.value.code == code
    assert session.query(Slot).count() == 0


def test_bulk_failure_rolls_back_every_insert(session, monkeypatch):
    def boom():
        raise RuntimeError("disk full")

    monkeypatch.setattr(session(), "commit", boom)
    with pytest.raises(RuntimeError):
        slot_service.create_slots_bulk(
            session, "2025-01-06", "2025-01-10", "08:00", 120, [1, 2, 3, 4, 5]
        )
    monkeypatch.undo()

    assert session.query(Slot).count() == 0


def test_delete_free_slot(session):
    slot = slot_service.create_slot(session, "2025-03-01", "08:00")
    slot_id = slot.id
    assert slot_service.delete_slot(session, slot_id) == 1
    assert session.get(Slot, slot_id) is None


def test_delete_booked_slot_is_refused(session):
    slot = slot_service.create_slot(session, "2025-03-01", "08:00")
    booking_service.create_booking(session, None, slot.id, customer())

    assert slot_service.delete_slot(session, slot.id) == 0
    kept = session.get(Slot, slot.id)
    assert kept is not None
    assert kept.status == "booked"


def test_delete_unknown_slot(session):
    assert slot_service.delete_slot(session, 999) == 0
