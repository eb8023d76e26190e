"""Generic persistence rules shared by every catalogue record.

RecordService owns list/get/create/update/soft_delete/hard_delete for one
model. Subclasses declare the model, the audit table name, the fields a
caller may write (EDITABLE_FIELDS) and the scope filters a listing
accepts (FILTER_FIELDS).

- Lookups (get) return None for an unknown id; deletes return False.
- update() raises RecordNotFoundError for an unknown id.
- update() touches only the keys present in the payload that are in
  EDITABLE_FIELDS; an empty change set returns the row untouched.
- Each mutation commits first, then writes its audit entry when an actor
  is known.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from tarhal.extensions import db
from tarhal.models.mixins import utcnow
from tarhal.services.audit_service import log_audit_action, snapshot
from tarhal.services.errors import RecordNotFoundError

logger = logging.getLogger(__name__)


class RecordService:
    model = None
    table_name = None
    label = "Record"
    EDITABLE_FIELDS = ()
    FILTER_FIELDS = ()

    # ── Queries ───────────────────────────────────────

    def ordering(self):
        """Columns for the default listing order."""
        return [self.model.name_ar]

    def apply_filters(self, query, filters):
        for field in self.FILTER_FIELDS:
            value = filters.get(field)
            if value is not None and value != "":
                query = query.filter(getattr(self.model, field) == value)
        return query

    def list_records(self, active_only=True, **filters):
        """Rows matching every supplied filter, in display order."""
        query = self.model.query
        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        query = self.apply_filters(query, filters)
        return query.order_by(*self.ordering()).all()

    def get(self, record_id):
        if not record_id:
            return None
        return db.session.get(self.model, record_id)

    def get_or_raise(self, record_id):
        record = self.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.label, record_id)
        return record

    # ── Mutations ─────────────────────────────────────

    def pick_fields(self, data):
        return {f: data[f] for f in self.EDITABLE_FIELDS if f in data}

    def prepare_new(self, record, data, actor_id):
        """Hook run on a new row before it is inserted."""

    def prepare_changes(self, record, changes, actor_id):
        """Hook run before partial-update changes are applied."""

    def create(self, data, actor_id=None):
        fields = self.pick_fields(data)
        if fields.get("is_active") is None:
            fields["is_active"] = True

        record = self.model(**fields)
        self.prepare_new(record, data, actor_id)
        db.session.add(record)
        db.session.commit()
        logger.info(f"Created {self.table_name} {record.id}")

        if actor_id:
            log_audit_action(
                actor_id, "create", self.table_name, record.id,
                None, snapshot(record),
            )
        return record

    def update(self, record_id, data, actor_id=None):
        record = self.get_or_raise(record_id)
        changes = self.pick_fields(data)
        if not changes:
            return record

        old_values = snapshot(record)
        self.prepare_changes(record, changes, actor_id)
        for field, value in changes.items():
            setattr(record, field, value)
        record.updated_at = utcnow()
        db.session.commit()

        if actor_id:
            log_audit_action(
                actor_id, "update", self.table_name, record.id,
                old_values, snapshot(record),
            )
        return record

    def soft_delete(self, record_id, actor_id=None):
        """Hide a row (is_active = False). False if the id is unknown."""
        record = self.get(record_id)
        if record is None:
            return False

        old_values = snapshot(record)
        record.is_active = False
        record.updated_at = utcnow()
        db.session.commit()

        if actor_id:
            log_audit_action(
                actor_id, "soft_delete", self.table_name, record_id,
                old_values, snapshot(record),
            )
        return True

    def hard_delete(self, record_id, actor_id=None):
        """Permanently remove a row. False if the id is unknown."""
        record = self.get(record_id)
        if record is None:
            return False

        old_values = snapshot(record)
        db.session.delete(record)
        db.session.commit()
        logger.info(f"Permanently deleted {self.table_name} {record_id}")

        if actor_id:
            log_audit_action(
                actor_id, "hard_delete", self.table_name, record_id,
                old_values, None,
            )
        return True


LANGUAGES = ("ar", "en", "fr")


def multilingual(*concepts):
    """Expand concept names into their per-language column names."""
    return tuple(f"{concept}_{lang}" for concept in concepts for lang in LANGUAGES)


def round_one_decimal(value):
    """Round half-up to one decimal place (0.25 -> 0.3)."""
    return float(
        Decimal(str(value or 0)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    )
