"""Database lifecycle for the single SQLite file.

- Connection pragmas (foreign keys on every connection, WAL for files).
- init_database(): create tables, then upgrade to the latest alembic revision.
- check_database_health(), backup_database().
"""

import logging
import os
from datetime import datetime

from alembic.migration import MigrationContext
from flask_migrate import upgrade
from sqlalchemy import event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from tarhal.extensions import db

logger = logging.getLogger(__name__)

HEALTH_TABLES = (
    "countries", "provinces", "cities", "destinations", "events",
    "travel_offices", "travel_offers", "payments", "users", "audit_log",
)


@event.listens_for(Engine, "connect")
def _set_sqlite_pragmas(dbapi_connection, connection_record):
    """Enable FK enforcement (and WAL on file databases) for SQLite."""
    module = type(dbapi_connection).__module__
    if "sqlite" not in module:
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA database_list")
    main = cursor.fetchone()
    if main and main[2]:  # empty filename means in-memory
        cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def current_revision():
    """The alembic revision the database is stamped with, or None."""
    with db.engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def init_database(app):
    """Create all tables, then upgrade to head. Needs an app context.

    Revisions skip tables, columns and indexes that already exist, so they
    apply on top of a schema built by create_all() as well as an old one.
    Returns the revision the database ends at.
    """
    from tarhal import models  # noqa: F401

    db.create_all()
    before = current_revision()
    upgrade(directory=app.config.get("MIGRATIONS_DIR"))
    after = current_revision()
    if after != before:
        logger.info(f"Database upgraded from {before or 'empty'} to {after}")
    return after


def check_database_health():
    """Report connectivity, expected tables and row counts."""
    try:
        db.session.execute(text("SELECT 1"))
        existing = set(inspect(db.engine).get_table_names())
        counts = {}
        for table in HEALTH_TABLES:
            if table in existing:
                counts[table] = db.session.execute(
                    text(f'SELECT COUNT(*) FROM "{table}"')
                ).scalar()
        return {
            "connected": True,
            "tables_exist": all(t in existing for t in HEALTH_TABLES),
            "record_counts": counts,
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return {"connected": False, "tables_exist": False, "record_counts": {}}


def backup_database(app, backup_path=None):
    """Copy the live database with VACUUM INTO. Returns the backup path."""
    source = app.config.get("DATABASE_PATH")
    if not source or source == ":memory:":
        raise ValueError("Cannot back up an in-memory database.")
    if backup_path is None:
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        root, ext = os.path.splitext(os.path.abspath(source))
        backup_path = f"{root}.backup-{stamp}{ext or '.db'}"
    os.makedirs(os.path.dirname(os.path.abspath(backup_path)), exist_ok=True)

    with db.engine.connect() as conn:
        conn = conn.execution_options(isolation_level="AUTOCOMMIT")
        conn.execute(text("VACUUM INTO :path"), {"path": backup_path})
    logger.info(f"Database backed up to {backup_path}")
    return backup_path
