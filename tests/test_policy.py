import pytest

from security import policy
from security.policy import Actor, authorize

ADMIN = Actor(uid=1, username="chef", role="admin")
OPERATOR = Actor(uid=2, username="mitarbeiter", role="user")


@pytest.mark.parametrize("action,admin_ok,operator_ok", [
    (policy.SLOT_CREATE, True, True),
    (policy.SLOT_BULK_CREATE, True, False),
    (policy.SLOT_DELETE, True, False),
    (policy.BOOKING_LIST, True, True),
    (policy.BOOKING_EXPORT, True, True),
    (policy.BOOKING_COMPLETE, True, True),
    (policy.BOOKING_CANCEL, True, True),
    (policy.USER_MANAGE, True, False),
])
def test_capabilities(action, admin_ok, operator_ok):
    assert authorize(ADMIN, action) is admin_ok
    assert authorize(OPERATOR, action) is operator_ok


def test_anonymous_and_unknown_roles_get_nothing():
    assert authorize(None, policy.SLOT_CREATE) is False
    assert authorize(Actor(uid=3, username="x", role="guest"), policy.BOOKING_LIST) is False
