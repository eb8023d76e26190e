"""Review workflow for content records (destinations, events, offices).

    draft --submit--> pending_review --approve--> published
      ^                     |
      +-------reject--------+   (reject is accepted from any status)

By default approve applies from any status. With
STRICT_REVIEW_TRANSITIONS on, submit needs draft and approve needs
pending_review; anything else raises InvalidTransitionError.

Provenance columns (submitted_*, reviewed_*, published_*,
rejection_reason) are only ever overwritten by a later transition,
never cleared.
"""

from flask import current_app

from tarhal.extensions import db
from tarhal.models.mixins import utcnow
from tarhal.services.audit_service import log_audit_action, snapshot
from tarhal.services.errors import InvalidTransitionError
from tarhal.services.record_service import RecordService


def strict_transitions():
    return bool(current_app.config.get("STRICT_REVIEW_TRANSITIONS", False))


class ContentService(RecordService):

    def prepare_new(self, record, data, actor_id):
        if not record.status:
            record.status = "draft"
        if record.status == "pending_review":
            record.submitted_at = utcnow()
            if actor_id:
                record.submitted_by = actor_id

    def prepare_changes(self, record, changes, actor_id):
        new_status = changes.get("status")
        now = utcnow()
        if new_status == "pending_review" and record.status == "draft":
            record.submitted_at = now
            if actor_id:
                record.submitted_by = actor_id
        if new_status == "published" and record.status != "published":
            record.published_at = now
            if actor_id:
                record.published_by = actor_id

    def _transition(self, record, action, actor_id, old_values):
        record.updated_at = utcnow()
        db.session.commit()
        log_audit_action(
            actor_id, action, self.table_name, record.id,
            old_values, snapshot(record),
        )
        return record

    def submit_for_review(self, record_id, actor_id):
        """Move to pending_review, stamping the submitter each time."""
        record = self.get_or_raise(record_id)
        if strict_transitions() and record.status != "draft":
            raise InvalidTransitionError("submit", record.status)

        old_values = snapshot(record)
        record.status = "pending_review"
        record.submitted_by = actor_id
        record.submitted_at = utcnow()
        return self._transition(record, "submit", actor_id, old_values)

    def approve(self, record_id, actor_id):
        record = self.get_or_raise(record_id)
        if strict_transitions() and record.status != "pending_review":
            raise InvalidTransitionError("approve", record.status)

        old_values = snapshot(record)
        now = utcnow()
        record.status = "published"
        record.reviewed_by = actor_id
        record.reviewed_at = now
        record.published_by = actor_id
        record.published_at = now
        return self._transition(record, "approve", actor_id, old_values)

    def reject(self, record_id, actor_id, reason):
        """Send back to draft with a reason, from any status."""
        record = self.get_or_raise(record_id)

        old_values = snapshot(record)
        record.status = "draft"
        record.reviewed_by = actor_id
        record.reviewed_at = utcnow()
        record.rejection_reason = reason
        return self._transition(record, "reject", actor_id, old_values)
