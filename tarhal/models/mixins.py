"""Shared column sets and helpers for every persisted entity.

- generate_id: "<prefix>_<uuid4>" identifiers.
- RecordMixin: is_active soft-delete flag + created_at/updated_at.
- ReviewWorkflowMixin: status + submit/review/publish provenance columns
  carried by destinations, events and travel offices.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import inspect

from tarhal.extensions import db


def generate_id(prefix=None):
    """Return a unique id, optionally namespaced as ``<prefix>_<uuid4>``."""
    token = str(uuid.uuid4())
    if prefix:
        return f"{prefix}_{token}"
    return token


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    """Render a datetime as ISO-8601 UTC. SQLite hands back naive values."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class RecordMixin:
    """Soft-delete flag and timestamps. ``updated_at`` is set by the services."""

    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        """Serialize mapped columns, keyed by their database column name."""
        data = {}
        for prop in inspect(self).mapper.column_attrs:
            value = getattr(self, prop.key)
            if isinstance(value, datetime):
                value = isoformat(value)
            data[prop.columns[0].name] = value
        return data


class ReviewWorkflowMixin:
    """Moderation state for content records."""

    STATUSES = ["draft", "pending_review", "published", "archived"]

    status = db.Column(
        db.String(20), default="draft", nullable=False
    )  # draft | pending_review | published | archived
    submitted_by = db.Column(db.String(64))
    submitted_at = db.Column(db.DateTime(timezone=True))
    reviewed_by = db.Column(db.String(64))
    reviewed_at = db.Column(db.DateTime(timezone=True))
    published_by = db.Column(db.String(64))
    published_at = db.Column(db.DateTime(timezone=True))
    rejection_reason = db.Column(db.Text)
