import logging

from flask import current_app

from models import db, User, ROLE_ADMIN
from security.password import hash_password

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USER = "admin"
DEFAULT_ADMIN_PASSWORD = "admin"


def seed_admin():
    """Makes sure at least one admin account exists (safe & idempotent)."""
    if User.query.filter_by(role=ROLE_ADMIN).first():
        return None

    username = (current_app.config.get("ADMIN_USER") or DEFAULT_ADMIN_USER).strip()
    pass_hash = current_app.config.get("ADMIN_PASS_HASH")
    if not pass_hash:
        password = current_app.config.get("ADMIN_PASSWORD")
        if not password:
            logger.warning("No admin credentials configured, seeding default '%s' account", username)
            password = DEFAULT_ADMIN_PASSWORD
        pass_hash = hash_password(password)

    user = User.query.filter_by(username=username).first()
    if user:
        # an operator with the configured admin name gets promoted
        user.role = ROLE_ADMIN
        user.password_hash = pass_hash
    else:
        user = User(username=username, password_hash=pass_hash, role=ROLE_ADMIN)
        db.session.add(user)
    db.session.commit()
    logger.info("Seeded admin account '%s'", username)
    return user
