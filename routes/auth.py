from flask import Blueprint, request, jsonify, current_app, g

from models import db
from models.user import ROLE_ADMIN
from security.rate_limit import rate_limited
from security.tokens import issue_token
from services.users import authenticate
from utils.api_errors import api_errors
from utils.audit import log_event


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.before_request
def _limit_auth_requests():
    return rate_limited("auth")


@auth_bp.post("/login")
@api_errors("login_failed")
def login():
    data = request.get_json(silent=True) or {}
    username = data.get("username")
    password = data.get("password")

    user = authenticate(db.session, username, password)
    if user is None:
        log_event("LOGIN_FAIL", metadata={"username": username})
        return jsonify(error="bad_credentials"), 401

    ttl = current_app.config.get("JWT_TTL_SECONDS", 7 * 24 * 3600)
    token = issue_token(
        {"uid": user.id, "username": user.username, "role": user.role},
        current_app.config["JWT_SECRET"],
        ttl,
    )

    resp = jsonify(ok=True, username=user.username, role=user.role)
    resp.set_cookie(
        current_app.config.get("AUTH_COOKIE_NAME", "booking_session"),
        token,
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        max_age=ttl,
        path="/",
    )

    log_event("LOGIN_SUCCESS", actor=user, entity="user", entity_id=user.id)
    return resp, 200


@auth_bp.post("/logout")
def logout():
    if g.actor is not None:
        log_event("LOGOUT", actor=g.actor)
    resp = jsonify(ok=True)
    resp.delete_cookie(current_app.config.get("AUTH_COOKIE_NAME", "booking_session"), path="/")
    return resp, 200


@auth_bp.get("/me")
def me():
    actor = g.actor
    if actor is None:
        return jsonify(authenticated=False, admin=False), 200
    return jsonify(
        authenticated=True,
        admin=actor.role == ROLE_ADMIN,
        id=actor.uid,
        username=actor.username,
        role=actor.role,
    ), 200
