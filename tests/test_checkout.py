"""Tests for Stripe Checkout session creation and confirmation.

Covers:
- Minor-unit conversion (two-decimal and zero-decimal currencies)
- Amount and currency validation -> 400
- Payment method allow-list
- Local ledger row created and linked to the session
- Stripe failures mark the row failed -> 500
- /confirm polling marks paid sessions
"""

from unittest.mock import patch

import pytest
import stripe

from tarhal.models.payment import Payment
from tarhal.services import payment_service
from tarhal.services.stripe_service import (
    resolve_amount,
    sanitize_payment_methods,
    to_minor_units,
)
from tarhal.validators import ValidationError

SESSION_CREATE = "tarhal.services.stripe_service.stripe.checkout.Session.create"
SESSION_RETRIEVE = "tarhal.services.stripe_service.stripe.checkout.Session.retrieve"


def _session(**overrides):
    session = {
        "id": "cs_test_123",
        "url": "https://checkout.stripe.test/cs_test_123",
        "payment_intent": None,
    }
    session.update(overrides)
    return session


class TestAmounts:

    def test_two_decimal_currency(self):
        assert to_minor_units("10.50", "USD") == 1050
        assert to_minor_units(10.005, "usd") == 1001

    def test_zero_decimal_currency(self):
        assert to_minor_units(1050, "JPY") == 1050

    def test_amount_cents_wins(self):
        assert resolve_amount(99, 1500, "USD") == 1500

    def test_below_minimum(self):
        with pytest.raises(ValidationError):
            resolve_amount("0.49", None, "USD")

    def test_missing_amount(self):
        with pytest.raises(ValidationError) as exc:
            resolve_amount(None, None, "USD")
        assert exc.value.message == "amount or amount_cents is required"

    def test_non_numeric(self):
        with pytest.raises(ValidationError):
            resolve_amount("ten", None, "USD")

    def test_above_maximum(self):
        with pytest.raises(ValidationError):
            resolve_amount(None, 10**20, "USD")
        assert resolve_amount(None, 99_999_999, "USD") == 99_999_999

    def test_payment_methods(self):
        assert sanitize_payment_methods(None) == ["card"]
        assert sanitize_payment_methods(["ideal", "bitcoin"]) == ["ideal"]
        assert sanitize_payment_methods(["bitcoin"]) == ["card"]


class TestCheckoutSession:

    @patch(SESSION_CREATE)
    def test_creates_ledger_row_and_session(self, mock_create, client, db_session):
        mock_create.return_value = _session(payment_intent="pi_123")

        resp = client.post(
            "/api/payments/checkout-session",
            json={
                "amount": "10.50",
                "currency": "usd",
                "description": "Nile cruise",
                "customer_email": "guest@example.com",
                "metadata": {"booking": 7},
            },
            headers={"Origin": "https://shop.example.com"},
        )

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["sessionId"] == "cs_test_123"
        assert body["url"].startswith("https://checkout.stripe.test")

        payment = db_session.get(Payment, body["localPaymentId"])
        assert payment.amount == 1050
        assert payment.currency == "USD"
        assert payment.status == "pending"
        assert payment.provider_session_id == "cs_test_123"
        assert payment.provider_payment_intent_id == "pi_123"

        kwargs = mock_create.call_args.kwargs
        assert kwargs["mode"] == "payment"
        assert kwargs["payment_method_types"] == ["card"]
        assert kwargs["line_items"][0]["price_data"]["unit_amount"] == 1050
        assert kwargs["line_items"][0]["price_data"]["currency"] == "usd"
        assert kwargs["customer_email"] == "guest@example.com"
        assert kwargs["metadata"] == {"booking": "7", "local_payment_id": payment.id}
        assert kwargs["success_url"].startswith("https://shop.example.com/checkout?status=success")
        assert "{CHECKOUT_SESSION_ID}" in kwargs["success_url"]

    @patch(SESSION_CREATE)
    def test_zero_decimal_amount(self, mock_create, client, db_session):
        mock_create.return_value = _session()
        resp = client.post(
            "/api/payments/checkout-session", json={"amount": 1050, "currency": "JPY"}
        )
        payment = db_session.get(Payment, resp.get_json()["localPaymentId"])
        assert payment.amount == 1050

    @patch(SESSION_CREATE)
    def test_invalid_currency(self, mock_create, client):
        resp = client.post(
            "/api/payments/checkout-session", json={"amount": 10, "currency": "dollars"}
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Valid 3-letter ISO currency is required"
        mock_create.assert_not_called()

    @patch(SESSION_CREATE)
    def test_non_ascii_currency(self, mock_create, client, db_session):
        resp = client.post(
            "/api/payments/checkout-session", json={"amount": 10, "currency": "دول"}
        )
        assert resp.status_code == 400
        assert Payment.query.count() == 0
        mock_create.assert_not_called()

    @patch(SESSION_CREATE)
    def test_huge_amount_is_rejected(self, mock_create, client, db_session):
        resp = client.post(
            "/api/payments/checkout-session",
            json={"amount": 10**30, "currency": "USD"},
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid amount"
        assert Payment.query.count() == 0
        mock_create.assert_not_called()

    @patch(SESSION_CREATE)
    def test_below_minimum_creates_nothing(self, mock_create, client, db_session):
        resp = client.post(
            "/api/payments/checkout-session", json={"amount_cents": 49, "currency": "USD"}
        )
        assert resp.status_code == 400
        assert Payment.query.count() == 0
        mock_create.assert_not_called()

    @patch(SESSION_CREATE)
    def test_stripe_failure_marks_row_failed(self, mock_create, client, db_session):
        mock_create.side_effect = stripe.StripeError("card network down")

        resp = client.post(
            "/api/payments/checkout-session", json={"amount": 20, "currency": "EUR"}
        )

        assert resp.status_code == 500
        assert resp.get_json()["error"] == "Failed to create checkout session"
        payment = Payment.query.one()
        assert payment.status == "failed"

    def test_missing_keys(self, app, client):
        app.config["STRIPE_SECRET_KEY"] = None
        try:
            resp = client.post(
                "/api/payments/checkout-session", json={"amount": 20, "currency": "EUR"}
            )
        finally:
            app.config["STRIPE_SECRET_KEY"] = "sk_test_fake"
        assert resp.status_code == 500
        assert resp.get_json()["error"] == "Payments are not configured"


class TestConfirm:

    def test_requires_session_id(self, client):
        assert client.get("/api/payments/confirm").status_code == 400

    @patch(SESSION_RETRIEVE)
    def test_paid_session_marks_row_paid(self, mock_retrieve, client, db_session):
        payment = payment_service.create_payment(
            1050, "USD", provider_session_id="cs_paid"
        )
        mock_retrieve.return_value = {
            "id": "cs_paid",
            "status": "complete",
            "payment_status": "paid",
            "amount_total": 1050,
            "currency": "usd",
            "payment_intent": "pi_paid",
            "customer_details": {"email": "guest@example.com"},
        }

        resp = client.get("/api/payments/confirm?session_id=cs_paid")

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["payment_status"] == "paid"
        assert body["payment"]["status"] == "paid"
        db_session.refresh(payment)
        assert payment.customer_email == "guest@example.com"
        assert payment.provider_payment_intent_id == "pi_paid"

    @patch(SESSION_RETRIEVE)
    def test_unpaid_session_left_pending(self, mock_retrieve, client, db_session):
        payment = payment_service.create_payment(
            1050, "USD", provider_session_id="cs_open"
        )
        mock_retrieve.return_value = {"id": "cs_open", "payment_status": "unpaid"}

        resp = client.get("/api/payments/confirm?session_id=cs_open")

        assert resp.get_json()["payment"]["status"] == "pending"
        db_session.refresh(payment)
        assert payment.status == "pending"

    @patch(SESSION_RETRIEVE)
    def test_unknown_session(self, mock_retrieve, client):
        mock_retrieve.side_effect = stripe.InvalidRequestError("No such session", "id")
        resp = client.get("/api/payments/confirm?session_id=cs_nope")
        assert resp.status_code == 404
