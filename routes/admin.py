from flask import Blueprint, current_app, jsonify, g, request

from models import db
from security import policy
from security.policy import require_permission
from services import bookings as booking_service
from services import users as user_service
from services.cancellations import list_cancellations
from utils.api_errors import api_errors
from utils.audit import log_event
from utils.serializers import booking_json, cancellation_json, fmt_ts, user_json

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _range_args():
    return request.args.get("from") or None, request.args.get("to") or None


# ---------- STAFF: booking lists ----------
@admin_bp.get("/bookings")
@require_permission(policy.BOOKING_LIST)
@api_errors("bookings_list_failed")
def list_open_bookings():
    rows = booking_service.list_open_bookings(db.session, *_range_args())
    return jsonify([booking_json(b, s) for b, s in rows]), 200


@admin_bp.get("/completed")
@require_permission(policy.BOOKING_LIST)
@api_errors("completed_list_failed")
def list_completed_bookings():
    rows = booking_service.list_completed_bookings(db.session, *_range_args())
    return jsonify([booking_json(b, s) for b, s in rows]), 200


@admin_bp.get("/cancellations")
@require_permission(policy.BOOKING_LIST)
@api_errors("cancellations_list_failed")
def list_canceled_bookings():
    rows = list_cancellations(db.session, *_range_args())
    return jsonify([cancellation_json(c) for c in rows]), 200


# ---------- STAFF: booking actions ----------
@admin_bp.post("/bookings/<int:booking_id>/complete")
@require_permission(policy.BOOKING_COMPLETE)
@api_errors("booking_complete_failed")
def complete_booking(booking_id: int):
    booking, already = booking_service.complete_booking(db.session, booking_id, g.actor.username)
    if not already:
        log_event("BOOKING_COMPLETE", actor=g.actor, entity="booking", entity_id=booking_id)
    return jsonify(
        ok=True,
        bookingId=booking.id,
        completed_by=booking.completed_by,
        completed_at=fmt_ts(booking.completed_at),
        alreadyCompleted=already,
    ), 200


@admin_bp.delete("/bookings/<int:booking_id>")
@require_permission(policy.BOOKING_CANCEL)
@api_errors("booking_delete_failed")
def cancel_booking(booking_id: int):
    data = request.get_json(silent=True) or {}
    record = booking_service.cancel_booking(
        db.session,
        current_app.extensions["notifier"],
        booking_id,
        data.get("reason"),
        g.actor,
    )
    log_event(
        "BOOKING_CANCEL",
        actor=g.actor,
        entity="booking",
        entity_id=booking_id,
        metadata={"reason": record.reason, "cancellation_id": record.id},
    )
    return jsonify(ok=True, cancellationId=record.id), 200


# ---------- ADMIN: staff accounts ----------
@admin_bp.get("/users")
@require_permission(policy.USER_MANAGE)
@api_errors("users_list_failed")
def list_users():
    return jsonify([user_json(u) for u in user_service.list_users(db.session)]), 200


@admin_bp.post("/users")
@require_permission(policy.USER_MANAGE)
@api_errors("user_create_failed")
def create_user():
    data = request.get_json(silent=True) or {}
    user = user_service.create_user(
        db.session,
        data.get("username"),
        data.get("password"),
        data.get("role") or "user",
        data.get("email"),
    )
    log_event("USER_CREATE", actor=g.actor, entity="user", entity_id=user.id, metadata={"role": user.role})
    return jsonify(user_json(user)), 201


@admin_bp.patch("/users/<int:user_id>")
@require_permission(policy.USER_MANAGE)
@api_errors("user_update_failed")
def update_user(user_id: int):
    data = request.get_json(silent=True) or {}
    user = user_service.update_user(
        db.session,
        user_id,
        password=data.get("password"),
        role=data.get("role"),
        email=data.get("email"),
        actor_id=g.actor.uid,
    )
    log_event(
        "USER_UPDATE",
        actor=g.actor,
        entity="user",
        entity_id=user.id,
        metadata={"fields": sorted(k for k in ("password", "role", "email") if data.get(k) is not None)},
    )
    return jsonify(user_json(user)), 200


@admin_bp.delete("/users/<int:user_id>")
@require_permission(policy.USER_MANAGE)
@api_errors("user_delete_failed")
def delete_user(user_id: int):
    user_service.delete_user(db.session, user_id, actor_id=g.actor.uid)
    log_event("USER_DELETE", actor=g.actor, entity="user", entity_id=user_id)
    return jsonify(ok=True), 200
