import logging
import os

import click
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate, upgrade

from config import BASE_DIR, Config
from routes import health_bp, auth_bp, slots_bp, booking_bp, admin_bp

from models import db
from models.user import User, ROLES, ROLE_ADMIN
from services import users as user_service
from services.errors import ServiceError
from services.notifications import Notifier
from utils.seed import seed_admin
from utils.auth_context import load_current_user

MIGRATIONS_DIR = os.path.join(BASE_DIR, "migrations")


def _ensure_sqlite_dir(uri: str):
    if uri.startswith("sqlite:///") and uri != "sqlite:///:memory:":
        os.makedirs(os.path.dirname(uri[len("sqlite:///"):]) or ".", exist_ok=True)


def create_app(config_object=Config, notifier=None):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(slots_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(admin_bp)

    CORS(app, origins=[app.config.get("CORS_ORIGIN")], supports_credentials=True)

    # Database init
    _ensure_sqlite_dir(app.config["SQLALCHEMY_DATABASE_URI"])
    db.init_app(app)

    # Migrations
    Migrate(app, db, directory=MIGRATIONS_DIR, render_as_batch=True)

    # One notifier per process, shared by all requests
    app.extensions["notifier"] = notifier or Notifier.from_config(app.config)

    with app.app_context():
        if app.config.get("AUTO_MIGRATE"):
            upgrade(directory=MIGRATIONS_DIR)
        # Seed the bootstrap admin at startup (safe & idempotent)
        if app.config.get("SEED_ADMIN"):
            seed_admin()

    @app.before_request
    def _load_user():
        load_current_user()

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        return resp

    register_cli(app)

    return app

#-------------------------

def register_cli(app):
    @app.cli.command("create-user")
    @click.argument("username")
    @click.option("--role", type=click.Choice(ROLES), default="user", show_default=True)
    @click.option("--email", default=None)
    @click.password_option()
    def create_user(username, role, email, password):
        """Create a staff account."""
        try:
            user = user_service.create_user(db.session, username, password, role, email)
        except ServiceError as exc:
            raise click.ClickException(exc.code)
        click.echo(f"{user.username} created ({user.role})")

    @app.cli.command("make-admin")
    @click.argument("username")
    def make_admin(username):
        """Promote a staff account to admin (bootstrap)."""
        user = User.query.filter_by(username=username.strip()).first()
        if not user:
            raise click.ClickException("User not found")

        if user.role != ROLE_ADMIN:
            user.role = ROLE_ADMIN
            db.session.commit()

        click.echo(f"{user.username} promoted to admin")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5174)
