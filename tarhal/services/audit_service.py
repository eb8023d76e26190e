"""Audit service: append-only change history.

log_audit_action() runs after the primary operation has committed and
commits on its own. Any failure is logged and swallowed; it never raises
and never rolls back the caller's work.
"""

import logging
from datetime import timedelta

from flask import has_request_context, request

from tarhal.extensions import db
from tarhal.models.audit import AuditLog
from tarhal.models.json_column import stringify_json
from tarhal.models.mixins import utcnow

logger = logging.getLogger(__name__)


def snapshot(record):
    """Serializable view of a model instance (or passthrough for dicts/None)."""
    if record is None or isinstance(record, dict):
        return record
    return record.to_dict()


def log_audit_action(user_id, action, table_name, record_id,
                     old_values=None, new_values=None,
                     ip_address=None, user_agent=None):
    """Write one audit entry. Never raises.

    Inside a request, missing ip_address/user_agent are taken from it.
    A snapshot that cannot be serialized is stored as null.
    """
    try:
        if has_request_context():
            if ip_address is None:
                ip_address = request.remote_addr
            if user_agent is None:
                user_agent = request.headers.get("User-Agent")

        entry = AuditLog(
            user_id=user_id,
            action=action,
            table_name=table_name,
            record_id=record_id,
            old_values=stringify_json(old_values) if old_values else None,
            new_values=stringify_json(new_values) if new_values else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        db.session.add(entry)
        db.session.commit()
    except Exception as e:
        logger.error(
            f"Failed to log audit action {action} on {table_name}:{record_id}: {e}",
            exc_info=True,
        )
        try:
            db.session.rollback()
        except Exception:
            logger.exception("Rollback after audit failure also failed")


def list_audit_entries(table_name=None, record_id=None, limit=100, offset=0):
    """Newest-first audit entries, optionally scoped to one table/record."""
    query = AuditLog.query
    if table_name:
        query = query.filter_by(table_name=table_name)
    if record_id:
        query = query.filter_by(record_id=record_id)
    return (
        query.order_by(AuditLog.created_at.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def cleanup_audit_logs(days_to_keep=30):
    """Delete audit entries older than N days. Returns the number removed."""
    cutoff = utcnow() - timedelta(days=days_to_keep)
    deleted = AuditLog.query.filter(AuditLog.created_at < cutoff).delete(
        synchronize_session=False
    )
    db.session.commit()
    logger.info(f"Cleaned up {deleted} audit log entries older than {days_to_keep} days")
    return deleted
