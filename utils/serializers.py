def fmt_day(value):
    return value.isoformat() if value else None


def fmt_clock(value):
    return value.strftime("%H:%M") if value else None


def fmt_ts(value):
    return value.isoformat() if value else None


def slot_json(s):
    return {
        "id": s.id,
        "date": fmt_day(s.date),
        "time": fmt_clock(s.time),
        "duration": s.duration,
        "status": s.status,
    }


def booking_json(b, s):
    return {
        "id": b.id,
        "slot_id": b.slot_id,
        "date": fmt_day(s.date) if s else None,
        "time": fmt_clock(s.time) if s else None,
        "duration": s.duration if s else None,
        "full_name": b.full_name,
        "email": b.email,
        "phone": b.phone,
        "address": b.address,
        "plz": b.postal_code,
        "city": b.city,
        "units": b.unit_count,
        "note": b.note,
        "created_at": fmt_ts(b.created_at),
        "completed_by": b.completed_by,
        "completed_at": fmt_ts(b.completed_at),
    }


def cancellation_json(c):
    return {
        "id": c.id,
        "booking_id": c.booking_id,
        "slot_id": c.slot_id,
        "date": fmt_day(c.slot_date),
        "time": fmt_clock(c.slot_time),
        "duration": c.slot_duration,
        "full_name": c.full_name,
        "email": c.email,
        "phone": c.phone,
        "address": c.address,
        "plz": c.postal_code,
        "city": c.city,
        "units": c.unit_count,
        "note": c.note,
        "booking_created_at": fmt_ts(c.booking_created_at),
        "reason": c.reason,
        "canceled_by": c.canceled_by,
        "canceled_at": fmt_ts(c.created_at),
    }


def user_json(u):
    return {
        "id": u.id,
        "username": u.username,
        "role": u.role,
        "email": u.email,
        "created_at": fmt_ts(u.created_at),
    }
