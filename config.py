import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")
    JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)
    JWT_TTL_SECONDS = int(os.getenv("JWT_TTL_SECONDS", str(7 * 24 * 3600)))  # 7 days

    # SQLite database file stored inside data/ as booking.sqlite
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "data", "booking.sqlite")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Apply migrations/versions at startup, then make sure an admin exists
    AUTO_MIGRATE = _flag("AUTO_MIGRATE", "true")
    SEED_ADMIN = _flag("SEED_ADMIN", "true")

    # Bootstrap admin (ADMIN_PASS_HASH is a bcrypt hash and wins over ADMIN_PASSWORD)
    ADMIN_USER = os.getenv("ADMIN_USER", "admin")
    ADMIN_PASS_HASH = os.getenv("ADMIN_PASS_HASH")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Cookie holding the signed session token
    AUTH_COOKIE_NAME = "booking_session"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE", "false")  # set True when using HTTPS

    # Per-IP fixed windows
    RATE_LIMIT_ENABLED = True
    AUTH_RATE_WINDOW_SECONDS = 60
    AUTH_RATE_MAX_REQUESTS = 20
    BOOKING_RATE_WINDOW_SECONDS = 60
    BOOKING_RATE_MAX_REQUESTS = 100

    # Bulk slot creation refuses longer ranges
    BULK_MAX_DAYS = 366

    # Email (SMTP)
    SMTP_HOST = os.getenv("SMTP_HOST")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME = os.getenv("SMTP_USERNAME")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
    SMTP_FROM_EMAIL = os.getenv("SMTP_FROM_EMAIL")
    SMTP_USE_TLS = _flag("SMTP_USE_TLS", "true")
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
    REPLY_TO_EMAIL = os.getenv("REPLY_TO_EMAIL", "termin@mydienst.de")
    BRAND_NAME = os.getenv("BRAND_NAME", "MyDienst")
    NOTIFY_WORKERS = int(os.getenv("NOTIFY_WORKERS", "2"))

    # Frontend origin allowed to call the API with cookies
    CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:3000")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Basic app settings
    DEBUG = False
