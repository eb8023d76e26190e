"""Payment ledger entry.

One row per checkout attempt with an external provider. Amounts are
integers in the currency's minor unit; status is driven by provider
callbacks (webhooks) or the confirm poll.
"""

from tarhal.extensions import db
from tarhal.models.json_column import JSONDict
from tarhal.models.mixins import generate_id, isoformat, utcnow


class Payment(db.Model):
    __tablename__ = "payments"

    # -- Valid statuses --
    STATUSES = ["pending", "paid", "failed", "refunded", "canceled"]

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("pay")
    )
    provider = db.Column(db.String(20), nullable=False, default="stripe")
    provider_session_id = db.Column(db.String(255), index=True)  # cs_...
    provider_payment_intent_id = db.Column(db.String(255), index=True)  # pi_...
    amount = db.Column(db.Integer, nullable=False)  # minor units
    currency = db.Column(db.String(3), nullable=False)  # upper-cased ISO code
    description = db.Column(db.Text)
    customer_email = db.Column(db.String(255))
    metadata_ = db.Column(
        "metadata", JSONDict("payments.metadata"), default=dict
    )  # named metadata_ to avoid clashing with SQLAlchemy's MetaData
    status = db.Column(
        db.String(20), nullable=False, default="pending", index=True
    )  # pending | paid | failed | refunded | canceled
    booking_id = db.Column(db.String(64))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending','paid','failed','refunded','canceled')",
            name="ck_payments_status",
        ),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "provider": self.provider,
            "provider_session_id": self.provider_session_id,
            "provider_payment_intent_id": self.provider_payment_intent_id,
            "amount": self.amount,
            "currency": self.currency,
            "description": self.description,
            "customer_email": self.customer_email,
            "metadata": self.metadata_ or {},
            "status": self.status,
            "booking_id": self.booking_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Payment {self.id} {self.amount} {self.currency} ({self.status})>"
