from flask import Blueprint, request, jsonify, g

from models import db
from security import policy
from security.policy import require_permission
from services import slots as slot_service
from utils.api_errors import api_errors
from utils.audit import log_event
from utils.serializers import slot_json

slots_bp = Blueprint("slots", __name__, url_prefix="/api/slots")


# ---------- PUBLIC: calendar ----------
@slots_bp.get("")
@api_errors("slots_list_failed")
def list_slots():
    day = request.args.get("date") or None
    rows = slot_service.list_slots(db.session, day)
    return jsonify([slot_json(s) for s in rows]), 200


# ---------- STAFF: single slot ----------
@slots_bp.post("")
@require_permission(policy.SLOT_CREATE)
@api_errors("slot_create_failed")
def create_slot():
    data = request.get_json(silent=True) or {}
    day = data.get("date")
    clock = data.get("time")
    if not day or not clock:
        return jsonify(error="missing_fields"), 400

    slot = slot_service.create_slot(
        db.session, day, clock, data.get("duration", slot_service.DEFAULT_DURATION)
    )
    log_event("SLOT_CREATE", actor=g.actor, entity="slot", entity_id=slot.id)
    return jsonify(slot_json(slot)), 201


# ---------- ADMIN: recurring slots ----------
@slots_bp.post("/bulk")
@require_permission(policy.SLOT_BULK_CREATE)
@api_errors("slot_bulk_failed")
def create_slots_bulk():
    data = request.get_json(silent=True) or {}
    date_from = data.get("from")
    date_to = data.get("to")
    clock = data.get("time")
    if not date_from or not date_to or not clock:
        return jsonify(error="missing_fields"), 400

    result = slot_service.create_slots_bulk(
        db.session,
        date_from,
        date_to,
        clock,
        data.get("duration", slot_service.DEFAULT_DURATION),
        data.get("daysOfWeek"),
    )
    log_event(
        "SLOT_BULK_CREATE",
        actor=g.actor,
        entity="slot",
        metadata={"from": date_from, "to": date_to, "time": clock, **result},
    )
    return jsonify(result), 200


# ---------- ADMIN: delete a free slot ----------
@slots_bp.delete("/<int:slot_id>")
@require_permission(policy.SLOT_DELETE)
@api_errors("slot_delete_failed")
def delete_slot(slot_id: int):
    deleted = slot_service.delete_slot(db.session, slot_id)
    if deleted:
        log_event("SLOT_DELETE", actor=g.actor, entity="slot", entity_id=slot_id)
    return jsonify(deleted=deleted), 200
