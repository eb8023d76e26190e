"""Processed Stripe webhook events.

The webhook handler looks up the event id here first; a known id is
acknowledged without touching the payment ledger again, so provider
retries never re-apply a status change.
"""

from tarhal.extensions import db
from tarhal.models.mixins import generate_id, isoformat, utcnow


class StripeEvent(db.Model):
    __tablename__ = "stripe_events"

    id = db.Column(db.String(64), primary_key=True, default=generate_id)
    stripe_event_id = db.Column(db.String(255), unique=True, nullable=False)  # evt_...
    event_type = db.Column(db.String(255), nullable=False)
    object_id = db.Column(db.String(255), index=True)  # cs_..., pi_..., ch_...
    handled = db.Column(db.Boolean, nullable=False, default=True)  # False: type ignored
    processed_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            "stripe_event_id": self.stripe_event_id,
            "event_type": self.event_type,
            "object_id": self.object_id,
            "handled": self.handled,
            "processed_at": isoformat(self.processed_at),
        }

    def __repr__(self):
        return f"<StripeEvent {self.stripe_event_id} ({self.event_type})>"
