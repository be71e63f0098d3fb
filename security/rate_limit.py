from datetime import datetime, timedelta
from flask import request, current_app, jsonify
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from models import db
from models.rate_limit_window import RateLimitWindow

def _client_ip() -> str:
    return request.headers.get("X-Forwarded-For", request.remote_addr) or "unknown"

def _window_row(bucket: str, ip: str, now: datetime) -> RateLimitWindow:
    row = RateLimitWindow.query.filter_by(bucket=bucket, ip=ip).first()
    if row:
        return row

    db.session.add(RateLimitWindow(bucket=bucket, ip=ip, window_start=now, count=0))
    try:
        db.session.commit()
    except IntegrityError:
        # a concurrent first request from the same IP created it
        db.session.rollback()
    return RateLimitWindow.query.filter_by(bucket=bucket, ip=ip).one()

def check_and_increment(bucket: str) -> tuple[bool, int]:
    """
    Returns (allowed, retry_after_seconds).
    Simple fixed window per IP and bucket; limits come from
    <BUCKET>_RATE_WINDOW_SECONDS / <BUCKET>_RATE_MAX_REQUESTS.
    """
    ip = _client_ip()
    now = datetime.utcnow()

    prefix = bucket.upper()
    window_seconds = current_app.config.get(f"{prefix}_RATE_WINDOW_SECONDS", 60)
    max_requests = current_app.config.get(f"{prefix}_RATE_MAX_REQUESTS", 100)

    row = _window_row(bucket, ip, now)

    # Reset window if expired (only the first request to notice wins)
    if now >= row.window_start + timedelta(seconds=window_seconds):
        db.session.execute(
            update(RateLimitWindow)
            .where(RateLimitWindow.id == row.id, RateLimitWindow.window_start == row.window_start)
            .values(window_start=now, count=0)
        )

    db.session.execute(
        update(RateLimitWindow)
        .where(RateLimitWindow.id == row.id)
        .values(count=RateLimitWindow.count + 1, updated_at=now)
    )
    db.session.commit()
    db.session.refresh(row)

    if row.count > max_requests:
        window_end = row.window_start + timedelta(seconds=window_seconds)
        retry_after = int((window_end - now).total_seconds())
        return False, max(retry_after, 1)

    return True, 0

def rate_limited(bucket: str):
    """Returns a 429 response when the caller is over the limit, else None."""
    if not current_app.config.get("RATE_LIMIT_ENABLED", True):
        return None
    allowed, retry_after = check_and_increment(bucket)
    if allowed:
        return None
    return jsonify(error="rate_limited", retry_after_seconds=retry_after), 429
