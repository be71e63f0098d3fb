from collections import namedtuple
from functools import wraps

from flask import g, jsonify

from models.user import ROLE_ADMIN, ROLE_USER

# Decoded session claims of the caller
Actor = namedtuple("Actor", ["uid", "username", "role"])

SLOT_CREATE = "slot:create"
SLOT_BULK_CREATE = "slot:bulk_create"
SLOT_DELETE = "slot:delete"
BOOKING_LIST = "booking:list"
BOOKING_EXPORT = "booking:export"
BOOKING_COMPLETE = "booking:complete"
BOOKING_CANCEL = "booking:cancel"
USER_MANAGE = "user:manage"

_OPERATOR = {
    SLOT_CREATE,
    BOOKING_LIST,
    BOOKING_EXPORT,
    BOOKING_COMPLETE,
    BOOKING_CANCEL,
}

PERMISSIONS = {
    ROLE_ADMIN: _OPERATOR | {SLOT_BULK_CREATE, SLOT_DELETE, USER_MANAGE},
    ROLE_USER: _OPERATOR,
}


def authorize(actor, action: str) -> bool:
    if actor is None:
        return False
    return action in PERMISSIONS.get(actor.role, ())


def require_permission(action: str):
    """
    Usage: @require_permission(SLOT_DELETE)
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            actor = getattr(g, "actor", None)
            if actor is None:
                return jsonify(error="unauthorized"), 401
            if not authorize(actor, action):
                return jsonify(error="forbidden"), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator
