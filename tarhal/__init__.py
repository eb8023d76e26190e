import logging
import math
import os
import time

import click
from flask import Flask, g, jsonify, request
from flask_limiter.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException

from tarhal.config import config_by_name, sqlite_uri
from tarhal.extensions import db, migrate, login_manager, limiter

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Application factory."""

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.config["SQLALCHEMY_DATABASE_URI"] = sqlite_uri(app.config["DATABASE_PATH"])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Init extensions ---
    db.init_app(app)
    migrate.init_app(app, db, directory=app.config["MIGRATIONS_DIR"])
    login_manager.init_app(app)
    limiter.init_app(app)

    # --- Import models so create_all() sees every table ---
    with app.app_context():
        from tarhal import models  # noqa: F401
        from tarhal import database  # noqa: F401  (registers SQLite pragmas)

        if app.config.get("AUTO_INIT_DB"):
            database.init_database(app)

    # --- Register blueprints ---
    from tarhal.blueprints.auth import auth_bp
    from tarhal.blueprints.countries import countries_bp
    from tarhal.blueprints.provinces import provinces_bp
    from tarhal.blueprints.cities import cities_bp
    from tarhal.blueprints.destinations import destinations_bp
    from tarhal.blueprints.events import events_bp
    from tarhal.blueprints.travel_offices import travel_offices_bp
    from tarhal.blueprints.travel_offers import travel_offers_bp
    from tarhal.blueprints.payments import payments_bp
    from tarhal.blueprints.system import system_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(countries_bp)
    app.register_blueprint(provinces_bp)
    app.register_blueprint(cities_bp)
    app.register_blueprint(destinations_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(travel_offices_bp)
    app.register_blueprint(travel_offers_bp)
    app.register_blueprint(payments_bp)
    app.register_blueprint(system_bp)

    register_error_handlers(app)
    register_request_hooks(app)

    # --- CLI commands ---
    register_cli(app)

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


def _is_api_request():
    return request.path.startswith("/api")


def _json_error(error, status, **extra):
    body = {"success": False, "error": error}
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(app):
    """Map service and framework errors to JSON envelopes."""
    from tarhal.services.errors import InvalidTransitionError, RecordNotFoundError
    from tarhal.validators import ValidationError

    @app.errorhandler(ValidationError)
    def validation_failed(e):
        return _json_error(e.message, 400, details=e.details)

    @app.errorhandler(RecordNotFoundError)
    def record_not_found(e):
        return _json_error(f"{e.entity} not found", 404)

    @app.errorhandler(InvalidTransitionError)
    def invalid_transition(e):
        return _json_error(str(e), 409, current_status=e.current_status)

    @app.errorhandler(RateLimitExceeded)
    def rate_limited(e):
        retry_after = 60
        current = limiter.current_limit
        if current is not None:
            retry_after = max(1, math.ceil(current.reset_at - time.time()))
        response, status = _json_error(
            "Too many requests", 429, retryAfter=retry_after
        )
        response.headers["Retry-After"] = str(retry_after)
        return response, status

    @app.errorhandler(IntegrityError)
    def constraint_violation(e):
        db.session.rollback()
        logger.warning(f"Constraint violation on {request.path}: {e.orig}")
        extra = {"details": str(e.orig)} if app.debug else {}
        return _json_error("Database constraint violation", 400, **extra)

    @app.errorhandler(SQLAlchemyError)
    def database_error(e):
        db.session.rollback()
        logger.error(f"Database error on {request.method} {request.path}", exc_info=True)
        extra = {"details": str(e)} if app.debug else {}
        return _json_error("Database error", 500, **extra)

    @app.errorhandler(HTTPException)
    def http_error(e):
        if _is_api_request():
            return _json_error(e.description or e.name, e.code)
        return e

    @app.errorhandler(Exception)
    def unhandled_error(e):
        logger.error(f"Unhandled error on {request.method} {request.path}", exc_info=True)
        extra = {"details": str(e)} if app.debug else {}
        return _json_error("Internal server error", 500, **extra)


def register_request_hooks(app):
    """Request timing log, CORS and security headers."""

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def finalize_response(response):
        if _is_api_request():
            # API responses are always JSON, never an HTML error page
            if response.mimetype != "application/json":
                response.headers["Content-Type"] = "application/json"

            if app.config.get("API_REQUEST_LOGGING"):
                started = g.get("request_started")
                elapsed = (time.perf_counter() - started) * 1000 if started else 0
                logger.info(
                    f"{request.method} {request.full_path.rstrip('?')} "
                    f"- {response.status_code} - {elapsed:.0f}ms"
                )

        # CORS
        origin = request.headers.get("Origin")
        allowed = app.config.get("CORS_ORIGINS") or []
        if origin and (not allowed or origin in allowed):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = (
                "Authorization, Content-Type, Stripe-Signature"
            )
            response.headers["Access-Control-Allow-Methods"] = (
                "GET, POST, PUT, DELETE, OPTIONS"
            )

        # Security headers
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("init-db")
    def init_db():
        """Create tables and upgrade to the latest migration revision."""
        from tarhal.database import init_database

        revision = init_database(app)
        click.echo(f"Database ready at revision {revision}.")

    @app.cli.command("seed-admin")
    @click.option("--email", default="admin@tarhal.local", help="Admin email")
    @click.option("--password", default="admin123", help="Admin password")
    @click.option("--name", default="Admin", help="Display name")
    def seed_admin(email, password, name):
        """Create the first admin user.

        Usage:
            flask seed-admin
            flask seed-admin --email admin@example.com --password s3cret
        """
        from tarhal.models.user import User
        from tarhal.services.auth_service import create_user

        if User.query.filter_by(email=email.strip().lower()).first():
            click.echo(f"Admin user already exists: {email}")
            return
        create_user(email, password, role="admin", full_name=name)
        click.echo(f"Created admin user: {email}")

    @app.cli.command("cleanup-audit")
    @click.option("--days", type=int, default=None, help="Days of history to keep")
    def cleanup_audit(days):
        """Delete audit log entries older than AUDIT_RETENTION_DAYS."""
        from tarhal.services.audit_service import cleanup_audit_logs

        days = days if days is not None else app.config["AUDIT_RETENTION_DAYS"]
        deleted = cleanup_audit_logs(days)
        click.echo(f"Removed {deleted} audit log entries older than {days} days.")

    @app.cli.command("backup-db")
    @click.option("--path", "backup_path", default=None, help="Backup file path")
    def backup_db(backup_path):
        """Copy the database file with VACUUM INTO."""
        from tarhal.database import backup_database

        path = backup_database(app, backup_path)
        click.echo(f"Backup written to {path}")
