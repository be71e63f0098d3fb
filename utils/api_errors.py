from functools import wraps

from flask import current_app, jsonify

from models import db
from services.errors import ServiceError


def api_errors(failure_code: str):
    """
    Maps service errors to JSON error responses. Anything unexpected is logged
    with its stack trace and answered with a generic 500 ``failure_code``.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except ServiceError as exc:
                return jsonify(error=exc.code, **exc.details), exc.status
            except Exception:
                db.session.rollback()
                current_app.logger.exception("%s in %s", failure_code, fn.__name__)
                return jsonify(error=failure_code), 500
        return wrapper
    return decorator
