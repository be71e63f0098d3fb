import json
import logging
from flask import has_request_context, request

audit_logger = logging.getLogger("audit")


def log_event(action: str, actor=None, entity=None, entity_id=None, metadata=None):
    """Emits one staff/booking event on the ``audit`` logger."""
    ip = None
    if has_request_context():
        ip = request.headers.get("X-Forwarded-For", request.remote_addr)

    audit_logger.info(
        "%s actor=%s entity=%s:%s ip=%s %s",
        action,
        getattr(actor, "username", None) or "-",
        entity or "-",
        entity_id if entity_id is not None else "-",
        ip or "-",
        json.dumps(metadata, default=str) if metadata else "",
    )
