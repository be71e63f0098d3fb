from sqlalchemy.exc import IntegrityError

from models import User, ROLES, ROLE_ADMIN, ROLE_USER
from security.password import hash_password, verify_password
from services.errors import Conflict, NotFound, ServiceError


def _clean(value) -> str:
    return (value or "").strip() if isinstance(value, str) else ""


def _check_role(role: str) -> str:
    role = _clean(role).lower()
    if role not in ROLES:
        raise ServiceError("invalid_role")
    return role


def _admin_count(session) -> int:
    return session.query(User).filter(User.role == ROLE_ADMIN).count()


def list_users(session):
    return session.query(User).order_by(User.username.asc()).all()


def create_user(session, username, password, role=ROLE_USER, email=None) -> User:
    username = _clean(username)
    if not username or not isinstance(password, str) or not password:
        raise ServiceError("missing_fields")
    role = _check_role(role or ROLE_USER)

    if session.query(User).filter_by(username=username).first():
        raise Conflict("user_exists")

    user = User(
        username=username,
        password_hash=hash_password(password),
        role=role,
        email=_clean(email) or None,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("user_exists")
    return user


def update_user(session, user_id: int, password=None, role=None, email=None, actor_id=None) -> User:
    """Partial update; only the arguments that are not None are applied."""
    user = session.get(User, user_id)
    if user is None:
        raise NotFound()

    # validate everything before the row is touched
    if role is not None:
        role = _check_role(role)
        if user.role == ROLE_ADMIN and role != ROLE_ADMIN:
            if actor_id is not None and user.id == actor_id:
                raise ServiceError("cannot_demote_self", 403)
            if _admin_count(session) <= 1:
                raise ServiceError("last_admin", 403)
    if password is not None and (not isinstance(password, str) or not password):
        raise ServiceError("missing_fields")

    if role is not None:
        user.role = role
    if password is not None:
        user.password_hash = hash_password(password)
    if email is not None:
        user.email = _clean(email) or None

    session.commit()
    return user


def delete_user(session, user_id: int, actor_id=None) -> None:
    user = session.get(User, user_id)
    if user is None:
        raise NotFound()
    if actor_id is not None and user.id == actor_id:
        raise ServiceError("cannot_delete_self", 403)
    if user.role == ROLE_ADMIN and _admin_count(session) <= 1:
        raise ServiceError("last_admin", 403)

    session.delete(user)
    session.commit()


def authenticate(session, username, password):
    """Returns the user for valid credentials, else None."""
    username = _clean(username)
    if not username or not password:
        return None
    user = session.query(User).filter_by(username=username).first()
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user
