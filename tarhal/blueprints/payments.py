"""Payments blueprint — /api/payments

Route Map:
  GET  /api/payments                   — Ledger listing (admin)
  GET  /api/payments/stats             — Counts by status (admin)
  POST /api/payments/checkout-session  — Start a Stripe Checkout
  POST /api/payments/webhook           — Stripe events (signature-verified)
  GET  /api/payments/confirm           — Poll a session's payment status

The webhook reads the raw body, which signature verification requires.
"""

import logging

import stripe
from flask import Blueprint, request

from tarhal.blueprints.api import error_response, json_body, success_response
from tarhal.decorators import admin_required
from tarhal.extensions import limiter
from tarhal.models.payment import Payment
from tarhal.services import payment_service, stripe_service
from tarhal.services.errors import PaymentConfigurationError

logger = logging.getLogger(__name__)

payments_bp = Blueprint("payments", __name__, url_prefix="/api/payments")


def _int_arg(name, default, maximum=None):
    try:
        value = int(request.args.get(name, default))
    except (TypeError, ValueError):
        value = default
    value = max(value, 0)
    if maximum is not None:
        value = min(value, maximum)
    return value


@payments_bp.route("", methods=["GET"])
@admin_required
def list_payments():
    status = request.args.get("status")
    if status and status not in Payment.STATUSES:
        return error_response(
            f"Invalid status. Must be one of: {', '.join(Payment.STATUSES)}", 400
        )
    rows = payment_service.list_payments(
        status=status,
        limit=_int_arg("limit", 100, maximum=500),
        offset=_int_arg("offset", 0),
    )
    data = [p.to_dict() for p in rows]
    return success_response(data, count=len(data))


@payments_bp.route("/stats", methods=["GET"])
@admin_required
def payment_stats():
    return success_response(payment_service.payment_stats())


@payments_bp.route("/checkout-session", methods=["POST"])
def create_checkout_session():
    origin = request.headers.get("Origin") or request.host_url.rstrip("/")
    try:
        result = stripe_service.create_checkout_session(json_body(), origin)
    except PaymentConfigurationError as e:
        logger.error(f"Checkout unavailable: {e}")
        return error_response("Payments are not configured", 500)
    except stripe.StripeError as e:
        logger.error(f"Stripe checkout error: {e}")
        return error_response("Failed to create checkout session", 500)
    return success_response(**result)


@payments_bp.route("/webhook", methods=["POST"])
@limiter.exempt
def stripe_webhook():
    """Receive and process Stripe webhook events.

    1. Get raw body (required for signature verification)
    2. Verify signature with STRIPE_WEBHOOK_SECRET
    3. Pass to handle_webhook_event (idempotent via stripe_events table)
    4. Return 200 to acknowledge receipt
    """
    payload = request.get_data(as_text=True)
    sig_header = request.headers.get("Stripe-Signature")

    if not sig_header:
        logger.warning("Webhook received without Stripe-Signature header")
        return error_response("Missing signature", 400)

    # --- Verify signature ---
    try:
        event = stripe_service.verify_webhook_signature(payload, sig_header)
    except PaymentConfigurationError:
        logger.error("Webhook received but STRIPE_WEBHOOK_SECRET is not set")
        return error_response("Webhook not configured", 500)
    except Exception as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        return error_response("Invalid signature", 400)

    # --- Process event (idempotent) ---
    success, message = stripe_service.handle_webhook_event(event)

    if success:
        return success_response(received=True, result=message)
    logger.error(f"Webhook processing failed: {message}")
    return error_response("Webhook handling failed", 500)


@payments_bp.route("/confirm", methods=["GET"])
def confirm_session():
    session_id = request.args.get("session_id")
    if not session_id:
        return error_response("session_id is required", 400)
    try:
        session = stripe_service.confirm_checkout_session(session_id)
    except PaymentConfigurationError as e:
        logger.error(f"Confirm unavailable: {e}")
        return error_response("Payments are not configured", 500)
    except stripe.InvalidRequestError:
        return error_response("Session not found", 404)
    except stripe.StripeError as e:
        logger.error(f"Confirm session failed: {e}")
        return error_response("Failed to confirm session", 500)

    payment = payment_service.find_by_session(session_id)
    return success_response(
        payment_status=session["payment_status"],
        session=session,
        payment=payment.to_dict() if payment else None,
    )
