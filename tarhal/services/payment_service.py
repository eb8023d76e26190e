"""Payment ledger service.

Local record of every checkout attempt. Rows start "pending" and move to
paid / failed / refunded / canceled as the provider reports back; no
transition is guarded here, the webhook handler decides.

Amounts are stored as given (minor units); currency is upper-cased.
"""

import logging

from sqlalchemy import func, or_

from tarhal.extensions import db
from tarhal.models.mixins import utcnow
from tarhal.models.payment import Payment
from tarhal.services.audit_service import log_audit_action, snapshot

logger = logging.getLogger(__name__)

# Fields update_by_provider_refs() may set, besides status
_MUTABLE_FIELDS = ("description", "customer_email", "amount", "currency", "metadata")


def create_payment(amount, currency, provider="stripe", description=None,
                   customer_email=None, metadata=None, booking_id=None,
                   provider_session_id=None, provider_payment_intent_id=None,
                   actor_id=None):
    """Insert a pending ledger row."""
    payment = Payment(
        provider=provider,
        provider_session_id=provider_session_id or None,
        provider_payment_intent_id=provider_payment_intent_id or None,
        amount=int(amount),
        currency=currency.upper(),
        description=description,
        customer_email=customer_email,
        metadata_=metadata or {},
        status="pending",
        booking_id=booking_id,
    )
    db.session.add(payment)
    db.session.commit()
    logger.info(f"Payment {payment.id} created: {payment.amount} {payment.currency}")

    if actor_id:
        log_audit_action(actor_id, "create", "payments", payment.id, None, snapshot(payment))
    return payment


def get_payment(payment_id):
    return db.session.get(Payment, payment_id)


def find_by_session(session_id):
    return Payment.query.filter_by(provider_session_id=session_id).first()


def find_by_intent(intent_id):
    return Payment.query.filter_by(provider_payment_intent_id=intent_id).first()


def attach_provider_refs(payment_id, refs):
    """Set provider_session_id / provider_payment_intent_id for the keys present.

    A key that is absent leaves the column unchanged; an explicit None
    clears it. Returns False if the payment does not exist.
    """
    payment = get_payment(payment_id)
    if payment is None:
        return False
    if "session_id" in refs:
        payment.provider_session_id = refs["session_id"]
    if "intent_id" in refs:
        payment.provider_payment_intent_id = refs["intent_id"]
    payment.updated_at = utcnow()
    db.session.commit()
    return True


def update_by_provider_refs(update):
    """Apply field updates to rows matching the session id OR intent id.

    ``update`` carries the match keys (provider_session_id,
    provider_payment_intent_id) plus any of status, description,
    customer_email, amount, currency, metadata. Returns the number of rows
    changed; 0 without touching the table when no match key is given.
    """
    criteria = []
    if update.get("provider_session_id"):
        criteria.append(Payment.provider_session_id == update["provider_session_id"])
    if update.get("provider_payment_intent_id"):
        criteria.append(
            Payment.provider_payment_intent_id == update["provider_payment_intent_id"]
        )
    if not criteria:
        return 0

    changes = {}
    if update.get("status"):
        changes["status"] = update["status"]
    for field in _MUTABLE_FIELDS:
        if field in update:
            changes[field] = update[field]
    if changes.get("currency"):
        changes["currency"] = changes["currency"].upper()

    rows = Payment.query.filter(or_(*criteria)).all()
    for payment in rows:
        for field, value in changes.items():
            setattr(payment, "metadata_" if field == "metadata" else field, value)
        payment.updated_at = utcnow()
    db.session.commit()

    if rows:
        logger.info(
            f"Updated {len(rows)} payment(s) by provider refs "
            f"(status={changes.get('status')})"
        )
    return len(rows)


def update_status(payment_id, status):
    payment = get_payment(payment_id)
    if payment is None:
        return False
    payment.status = status
    payment.updated_at = utcnow()
    db.session.commit()
    return True


def list_payments(status=None, limit=100, offset=0):
    """Newest first, optionally filtered by status."""
    query = Payment.query
    if status:
        query = query.filter_by(status=status)
    return (
        query.order_by(Payment.created_at.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def payment_stats():
    """Row counts overall and per status."""
    counts = dict(
        db.session.query(Payment.status, func.count(Payment.id))
        .group_by(Payment.status)
        .all()
    )
    stats = {"total": sum(counts.values())}
    for status in Payment.STATUSES:
        stats[status] = counts.get(status, 0)
    return stats
