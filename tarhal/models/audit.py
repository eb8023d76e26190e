"""Audit log entry.

Append-only history of who changed what: actor, action verb, table,
record id, and JSON snapshots of the row before and after the change.
Snapshots are stored as serialized strings; see audit_service.
"""

from tarhal.extensions import db
from tarhal.models.mixins import generate_id, isoformat, utcnow


class AuditLog(db.Model):
    __tablename__ = "audit_log"

    # -- Action verbs written by the services --
    ACTIONS = [
        "create", "update", "submit", "approve", "reject",
        "soft_delete", "hard_delete", "login",
    ]

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("audit")
    )
    user_id = db.Column(db.String(64), index=True)  # actor; null for system
    action = db.Column(db.String(50), nullable=False)
    table_name = db.Column(db.String(64), nullable=False)
    record_id = db.Column(db.String(64), index=True)
    old_values = db.Column(db.Text)  # JSON snapshot or null
    new_values = db.Column(db.Text)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.Text)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "action": self.action,
            "table_name": self.table_name,
            "record_id": self.record_id,
            "old_values": self.old_values,
            "new_values": self.new_values,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "created_at": isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<AuditLog {self.action} {self.table_name}:{self.record_id}>"
