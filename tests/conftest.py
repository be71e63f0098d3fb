import pytest

from app import create_app
from config import Config
from models import db
from services import users as user_service

ADMIN_PASSWORD = "admin-pass-123"
OPERATOR_PASSWORD = "operator-pass-123"


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    AUTO_MIGRATE = False
    SEED_ADMIN = False
    BCRYPT_ROUNDS = 4
    JWT_SECRET = "test-secret"
    RATE_LIMIT_ENABLED = False
    ADMIN_EMAIL = "office@example.com"
    BRAND_NAME = "TestDienst"


def file_config(tmp_path, **overrides):
    """Config on a SQLite file, for tests that need several connections."""
    attrs = {
        "SQLALCHEMY_DATABASE_URI": "sqlite:///" + str(tmp_path / "booking.sqlite"),
        "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"check_same_thread": False, "timeout": 15}},
    }
    attrs.update(overrides)
    return type("FileConfig", (TestingConfig,), attrs)


class RecordingNotifier:
    """Stands in for the threaded notifier; keeps what would have been sent."""

    def __init__(self):
        self.created = []
        self.canceled = []

    def booking_created(self, data):
        self.created.append(data)

    def booking_canceled(self, data):
        self.canceled.append(data)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(notifier):
    app = create_app(TestingConfig, notifier=notifier)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def admin(session):
    return user_service.create_user(session, "chef", ADMIN_PASSWORD, "admin", "chef@example.com")


@pytest.fixture
def operator(session):
    return user_service.create_user(session, "mitarbeiter", OPERATOR_PASSWORD, "user")


def login(client, username, password):
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app, admin):
    return login(app.test_client(), admin.username, ADMIN_PASSWORD)


@pytest.fixture
def operator_client(app, operator):
    return login(app.test_client(), operator.username, OPERATOR_PASSWORD)


def customer(**overrides):
    data = {
        "fullName": "Erika Mustermann",
        "email": "erika@example.com",
        "phone": "+49 30 1234567",
        "address": "Hauptstr. 1",
        "plz": "10115",
        "city": "Berlin",
        "note": "Bitte klingeln",
    }
    data.update(overrides)
    return data
