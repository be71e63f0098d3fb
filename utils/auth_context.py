from flask import current_app, g, request

from models import db
from models.user import User
from security.policy import Actor
from security.tokens import decode_token


def load_current_user():
    g.actor = None
    cookie_name = current_app.config.get("AUTH_COOKIE_NAME", "booking_session")
    claims = decode_token(request.cookies.get(cookie_name), current_app.config["JWT_SECRET"])
    if not claims:
        return
    try:
        uid = int(claims.get("uid"))
    except (TypeError, ValueError):
        return
    # tokens of deleted accounts are ignored
    user = db.session.get(User, uid)
    if user is None:
        return
    # the token only proves identity; the role is the one stored now
    g.actor = Actor(uid=user.id, username=user.username, role=user.role)
