import bcrypt
import pytest

from conftest import OPERATOR_PASSWORD
from models import User
from security.password import verify_password
from services import users as user_service
from services.errors import ServiceError
from utils.seed import seed_admin


def test_create_user_stores_hash_only(session):
    user = user_service.create_user(session, " anna ", "geheim-123", "user", "anna@example.com")

    assert user.username == "anna"
    assert user.role == "user"
    assert user.email == "anna@example.com"
    assert user.password_hash != "geheim-123"
    assert verify_password("geheim-123", user.password_hash)


def test_create_user_rejects_duplicate_username(session):
    user_service.create_user(session, "anna", "pw-1")
    with pytest.raises(ServiceError) as exc:
        user_service.create_user(session, "anna", "pw-2")
    assert exc.value.code == "user_exists"
    assert exc.value.status == 409


@pytest.mark.parametrize("username,password,role,code", [
    ("", "pw", "user", "missing_fields"),
    ("anna", "", "user", "missing_fields"),
    ("anna", "pw", "superuser", "invalid_role"),
])
def test_create_user_validation(session, username, password, role, code):
    with pytest.raises(ServiceError) as exc:
        user_service.create_user(session, username, password, role)
    assert exc.value.code == code
    assert session.query(User).count() == 0


def test_update_user_is_partial(session):
    user = user_service.create_user(session, "anna", "old-pass", "user", "anna@example.com")
    old_hash = user.password_hash

    user_service.update_user(session, user.id, email="neu@example.com")
    assert user.email == "neu@example.com"
    assert user.password_hash == old_hash
    assert user.role == "user"

    user_service.update_user(session, user.id, password="new-pass", role="admin")
    assert user.role == "admin"
    assert user.password_hash != old_hash
    assert verify_password("new-pass", user.password_hash)
    assert not verify_password("old-pass", user.password_hash)


def test_rejected_update_changes_nothing(session, admin):
    user = user_service.create_user(session, "anna", "old-pass", "user")

    with pytest.raises(ServiceError) as exc:
        user_service.update_user(session, user.id, role="admin", password="", email="neu@example.com")
    assert exc.value.code == "missing_fields"

    assert user.role == "user"
    assert user.email is None
    assert user not in session.dirty
    session.commit()
    session.expire_all()
    assert session.get(User, user.id).role == "user"


def test_update_unknown_user(session):
    with pytest.raises(ServiceError) as exc:
        user_service.update_user(session, 404, role="user")
    assert exc.value.code == "not_found"


def test_cannot_demote_last_admin(session, admin):
    with pytest.raises(ServiceError) as exc:
        user_service.update_user(session, admin.id, role="user")
    assert exc.value.code == "last_admin"
    assert admin.role == "admin"


def test_demote_admin_when_another_exists(session, admin):
    other = user_service.create_user(session, "zweiter", "pw", "admin")
    user_service.update_user(session, other.id, role="user", actor_id=admin.id)
    assert other.role == "user"


def test_delete_user(session, admin):
    user = user_service.create_user(session, "anna", "pw")
    user_id = user.id
    user_service.delete_user(session, user_id, actor_id=admin.id)
    assert session.get(User, user_id) is None


def test_delete_self_is_refused(session, admin):
    user_service.create_user(session, "zweiter", "pw", "admin")
    with pytest.raises(ServiceError) as exc:
        user_service.delete_user(session, admin.id, actor_id=admin.id)
    assert exc.value.code == "cannot_delete_self"


def test_delete_last_admin_is_refused(session, admin):
    with pytest.raises(ServiceError) as exc:
        user_service.delete_user(session, admin.id)
    assert exc.value.code == "last_admin"


def test_authenticate(session, operator):
    assert user_service.authenticate(session, "mitarbeiter", OPERATOR_PASSWORD).id == operator.id
    assert user_service.authenticate(session, "mitarbeiter", "wrong") is None
    assert user_service.authenticate(session, "nobody", OPERATOR_PASSWORD) is None
    assert user_service.authenticate(session, "", "") is None


def test_seed_admin_default_account(app, session):
    user = seed_admin()
    assert user.username == "admin"
    assert user.role == "admin"
    assert verify_password("admin", user.password_hash)

    # second run is a no-op
    assert seed_admin() is None
    assert session.query(User).count() == 1


def test_seed_admin_uses_configured_hash(app, session):
    app.config["ADMIN_USER"] = "boss"
    app.config["ADMIN_PASS_HASH"] = bcrypt.hashpw(b"s3cret", bcrypt.gensalt(rounds=4)).decode()

    user = seed_admin()
    assert user.username == "boss"
    assert verify_password("s3cret", user.password_hash)


def test_seed_admin_skips_when_admin_exists(app, session, admin):
    assert seed_admin() is None
    assert session.query(User).count() == 1
