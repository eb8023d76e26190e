"""Stripe service: all Stripe API calls and webhook handling.

Responsible for:
- Converting checkout amounts to minor units
- Creating one-off Stripe Checkout Sessions backed by a local ledger row
- Reconciling a session on demand (confirm)
- Handling incoming webhooks with signature verification
- Dispatching to event-specific handlers
- Idempotency via stripe_events table
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import stripe
from flask import current_app

from tarhal.extensions import db
from tarhal.models.stripe_event import StripeEvent
from tarhal.services import payment_service
from tarhal.services.errors import PaymentConfigurationError
from tarhal.validators import ValidationError

logger = logging.getLogger(__name__)

ZERO_DECIMAL_CURRENCIES = frozenset({
    "BIF", "CLP", "DJF", "GNF", "JPY", "KMF", "KRW", "MGA",
    "PYG", "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF",
})

ALLOWED_PAYMENT_METHODS = frozenset({
    "card", "sepa_debit", "sofort", "giropay", "ideal",
    "bancontact", "eps", "p24", "grabpay", "alipay",
})

CURRENCY_RE = re.compile(r"[A-Za-z]{3}")

MINIMUM_AMOUNT = 50  # minor units
MAXIMUM_AMOUNT = 99_999_999  # Stripe's per-charge ceiling, minor units


def _configure():
    api_key = current_app.config.get("STRIPE_SECRET_KEY")
    if not api_key:
        raise PaymentConfigurationError(
            "Stripe is not configured. Please set STRIPE_SECRET_KEY"
        )
    stripe.api_key = api_key


def _bad_request(message):
    return ValidationError([message], message=message)


# ──────────────────────────────────────────────
# Amounts
# ──────────────────────────────────────────────

def is_zero_decimal(currency):
    return currency.upper() in ZERO_DECIMAL_CURRENCIES


def to_minor_units(amount, currency):
    """Major units -> integer minor units, rounding half-up.

    10.50 USD -> 1050; 1050 JPY -> 1050.
    """
    value = Decimal(str(amount))
    if not is_zero_decimal(currency):
        value = value * 100
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def resolve_amount(amount, amount_cents, currency):
    """Pick the minor-unit amount from a checkout request.

    amount_cents wins when both are given. Raises ValidationError outside
    MINIMUM_AMOUNT..MAXIMUM_AMOUNT or for non-numeric input.
    """
    if amount is None and amount_cents is None:
        raise _bad_request("amount or amount_cents is required")
    try:
        if amount_cents is not None:
            minor = int(
                Decimal(str(amount_cents)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            )
        else:
            minor = to_minor_units(amount, currency)
    except (InvalidOperation, ValueError, TypeError):
        raise _bad_request("Invalid amount")
    if minor < MINIMUM_AMOUNT or minor > MAXIMUM_AMOUNT:
        raise _bad_request("Invalid amount")
    return minor


def sanitize_payment_methods(methods):
    """Keep allow-listed method types; default to card."""
    if not isinstance(methods, list) or not methods:
        return ["card"]
    allowed = [str(m) for m in methods if str(m) in ALLOWED_PAYMENT_METHODS]
    return allowed or ["card"]


# ──────────────────────────────────────────────
# Checkout Sessions
# ──────────────────────────────────────────────

def create_checkout_session(payload, origin):
    """Create a local pending payment, then a Stripe Checkout Session for it.

    Returns {"sessionId", "url", "localPaymentId"}.
    Raises ValidationError on bad input, PaymentConfigurationError without
    keys, stripe.StripeError on API failures.
    """
    currency = payload.get("currency") or "USD"
    if not isinstance(currency, str) or not CURRENCY_RE.fullmatch(currency):
        raise _bad_request("Valid 3-letter ISO currency is required")

    minor_amount = resolve_amount(
        payload.get("amount"), payload.get("amount_cents"), currency
    )
    methods = sanitize_payment_methods(payload.get("payment_method_types"))
    description = payload.get("description")
    customer_email = payload.get("customer_email")
    metadata = payload.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise _bad_request("metadata must be an object")

    _configure()

    local = payment_service.create_payment(
        amount=minor_amount,
        currency=currency,
        description=description,
        customer_email=customer_email,
        metadata=metadata,
        booking_id=payload.get("booking_id"),
    )

    success_url = payload.get("success_url")
    if not isinstance(success_url, str) or not success_url:
        success_url = (
            f"{origin}/checkout?status=success"
            f"&session_id={{CHECKOUT_SESSION_ID}}&pid={local.id}"
        )
    cancel_url = payload.get("cancel_url")
    if not isinstance(cancel_url, str) or not cancel_url:
        cancel_url = f"{origin}/checkout?status=cancel&pid={local.id}"

    session_params = {
        "mode": "payment",
        "payment_method_types": methods,
        "line_items": [
            {
                "price_data": {
                    "currency": currency.lower(),
                    "product_data": {"name": description or "Payment"},
                    "unit_amount": minor_amount,
                },
                "quantity": 1,
            }
        ],
        "success_url": success_url,
        "cancel_url": cancel_url,
        "metadata": {**{k: str(v) for k, v in metadata.items()},
                     "local_payment_id": local.id},
    }
    if customer_email:
        session_params["customer_email"] = customer_email

    try:
        session = stripe.checkout.Session.create(**session_params)
    except stripe.StripeError:
        payment_service.update_status(local.id, "failed")
        raise

    intent = session.get("payment_intent")
    payment_service.attach_provider_refs(local.id, {
        "session_id": session["id"],
        "intent_id": str(intent) if intent else None,
    })
    logger.info(f"Checkout session {session['id']} created for payment {local.id}")

    return {
        "sessionId": session["id"],
        "url": session.get("url"),
        "localPaymentId": local.id,
    }


def confirm_checkout_session(session_id):
    """Poll Stripe for a session and mark the local row paid if it is.

    Fallback for when the webhook has not arrived yet. Returns a summary
    of the provider's session.
    """
    _configure()
    session = stripe.checkout.Session.retrieve(session_id)

    if session.get("payment_status") == "paid":
        _mark_session_paid(session)

    customer_details = session.get("customer_details") or {}
    return {
        "id": session.get("id"),
        "status": session.get("status"),
        "payment_status": session.get("payment_status"),
        "amount_total": session.get("amount_total"),
        "currency": session.get("currency"),
        "payment_intent": session.get("payment_intent"),
        "customer_email": customer_details.get("email"),
    }


def _mark_session_paid(session):
    """Set paid (and capture email + intent) for a completed session."""
    intent = session.get("payment_intent")
    update = {
        "provider_session_id": session.get("id"),
        "status": "paid",
    }
    customer_details = session.get("customer_details") or {}
    if customer_details.get("email"):
        update["customer_email"] = customer_details["email"]
    changed = payment_service.update_by_provider_refs(update)

    if intent:
        payment = payment_service.find_by_session(session.get("id"))
        if payment and not payment.provider_payment_intent_id:
            payment_service.attach_provider_refs(payment.id, {"intent_id": str(intent)})
    return changed


# ──────────────────────────────────────────────
# Webhook Handling
# ──────────────────────────────────────────────

def verify_webhook_signature(payload, sig_header):
    """Verify Stripe webhook signature and construct the event.

    Returns the verified Stripe event object.
    Raises PaymentConfigurationError without a webhook secret and
    stripe.SignatureVerificationError on an invalid signature.
    """
    webhook_secret = current_app.config.get("STRIPE_WEBHOOK_SECRET")
    if not webhook_secret:
        raise PaymentConfigurationError("Webhook not configured")
    return stripe.Webhook.construct_event(payload, sig_header, webhook_secret)


def handle_webhook_event(event):
    """Process a verified Stripe webhook event.

    Idempotency: checks stripe_events table before processing.
    If the event was already processed, returns immediately.

    Returns (success: bool, message: str).
    """
    event_id = event["id"]
    event_type = event["type"]

    # --- Idempotency check ---
    existing = StripeEvent.query.filter_by(stripe_event_id=event_id).first()
    if existing:
        logger.info(f"Duplicate webhook event {event_id}, skipping")
        return True, "already_processed"

    # --- Route to handler ---
    handlers = {
        "checkout.session.completed": _handle_checkout_completed,
        "checkout.session.expired": _handle_checkout_expired,
        "payment_intent.succeeded": _handle_intent_succeeded,
        "payment_intent.payment_failed": _handle_intent_failed,
        "charge.refunded": _handle_charge_refunded,
    }

    handler = handlers.get(event_type)
    if handler:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Error handling {event_type}: {e}", exc_info=True)
            db.session.rollback()
            return False, str(e)
    else:
        logger.info(f"Ignoring unhandled webhook event type {event_type}")

    # --- Record event for idempotency ---
    obj = (event.get("data") or {}).get("object") or {}
    db.session.add(StripeEvent(
        stripe_event_id=event_id,
        event_type=event_type,
        object_id=obj.get("id"),
        handled=handler is not None,
    ))
    db.session.commit()

    return True, "processed"


# ──────────────────────────────────────────────
# Event Handlers
# ──────────────────────────────────────────────

def _handle_checkout_completed(event):
    session = event["data"]["object"]
    changed = _mark_session_paid(session)
    if not changed:
        logger.warning(
            f"checkout.session.completed: no local payment for session {session.get('id')}"
        )


def _handle_checkout_expired(event):
    session = event["data"]["object"]
    payment_service.update_by_provider_refs({
        "provider_session_id": session.get("id"),
        "status": "canceled",
    })


def _handle_intent_succeeded(event):
    intent = event["data"]["object"]
    payment_service.update_by_provider_refs({
        "provider_payment_intent_id": intent.get("id"),
        "status": "paid",
    })


def _handle_intent_failed(event):
    intent = event["data"]["object"]
    payment_service.update_by_provider_refs({
        "provider_payment_intent_id": intent.get("id"),
        "status": "failed",
    })


def _handle_charge_refunded(event):
    charge = event["data"]["object"]
    intent_id = charge.get("payment_intent")
    if not intent_id:
        logger.warning(f"charge.refunded without payment_intent: {charge.get('id')}")
        return
    payment_service.update_by_provider_refs({
        "provider_payment_intent_id": str(intent_id),
        "status": "refunded",
    })
