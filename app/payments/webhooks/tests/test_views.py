"""
Tests for the Stripe webhook view.

Tests cover:
- Signature verification on the raw bytes with real signed payloads
- Plain-text 400 for rejected deliveries
- Acknowledgement regardless of handler outcome
- Idempotent recording of completed checkout sessions
"""

from unittest.mock import patch

import pytest
from django.urls import reverse

from payments import dependencies
from payments.tests.signing import make_event_payload, sign_payload
from payments.types import WebhookEvent


@pytest.fixture
def webhook_url():
    return reverse("payments:stripe_webhook")


@pytest.fixture
def post_webhook(client, webhook_url):
    """POST raw bytes to the webhook endpoint."""

    def _post(payload: bytes, signature: str | None = None):
        headers = {}
        if signature is not None:
            headers["HTTP_STRIPE_SIGNATURE"] = signature
        return client.post(webhook_url, data=payload, content_type="application/json", **headers)

    return _post


class TestWebhookSignature:
    """Tests for rejected deliveries."""

    def test_valid_signature_acknowledged(self, post_webhook):
        payload = make_event_payload(payment_intent="pi_1")

        response = post_webhook(payload, sign_payload(payload))

        assert response.status_code == 200
        assert response.json() == {"received": True}

    def test_bad_signature_rejected(self, post_webhook):
        """A tampered payload gets a plain-text 400."""
        payload = make_event_payload(payment_intent="pi_1")
        signature = sign_payload(payload)

        response = post_webhook(payload.replace(b"pi_1", b"pi_2"), signature)

        assert response.status_code == 400
        assert response["Content-Type"].startswith("text/plain")
        assert response.content.decode().startswith("Webhook Error: ")

    def test_missing_header_rejected(self, post_webhook):
        response = post_webhook(make_event_payload())

        assert response.status_code == 400
        assert response.content.decode() == "Webhook Error: Missing Stripe-Signature header"

    def test_wrong_secret_rejected(self, post_webhook):
        payload = make_event_payload()

        response = post_webhook(payload, sign_payload(payload, secret="whsec_attacker"))

        assert response.status_code == 400

    def test_unconfigured_secret_rejected(self, post_webhook, settings):
        """Without a configured secret every delivery is rejected."""
        settings.STRIPE_WEBHOOK_SECRET = ""
        payload = make_event_payload()

        response = post_webhook(payload, sign_payload(payload))

        assert response.status_code == 400
        assert b"not configured" in response.content

    def test_rejected_delivery_has_no_side_effects(self, post_webhook):
        payload = make_event_payload(payment_intent="pi_1")

        post_webhook(payload, "t=1,v1=deadbeef")

        assert dependencies.get_session_store().get_completed_session("cs_test_123") is None

    def test_get_not_allowed(self, client, webhook_url):
        assert client.get(webhook_url).status_code == 405


class TestWebhookDispatch:
    """Tests for verified deliveries."""

    def test_records_completed_session(self, post_webhook):
        payload = make_event_payload(payment_intent="pi_1")

        post_webhook(payload, sign_payload(payload))

        record = dependencies.get_session_store().get_completed_session("cs_test_123")
        assert record["payment_intent_id"] == "pi_1"
        assert record["event_id"] == "evt_test_1"

    def test_redelivery_acknowledged_once_recorded(self, post_webhook):
        """The same event delivered twice is acknowledged both times."""
        payload = make_event_payload(payment_intent="pi_1")

        first = post_webhook(payload, sign_payload(payload))
        second = post_webhook(payload, sign_payload(payload))

        assert first.status_code == second.status_code == 200
        assert dependencies.get_session_store().get_completed_session("cs_test_123")["event_id"] == "evt_test_1"

    def test_unknown_event_acknowledged(self, post_webhook):
        payload = make_event_payload("customer.created", id="cus_1", object="customer")

        response = post_webhook(payload, sign_payload(payload))

        assert response.status_code == 200
        assert response.json() == {"received": True}

    def test_handler_failure_still_acknowledged(self, post_webhook):
        """A verified event is acknowledged even when its handler fails."""
        payload = make_event_payload(id=None)

        response = post_webhook(payload, sign_payload(payload))

        assert response.status_code == 200

    def test_uses_injected_provider(self, client, webhook_url, fake_provider):
        """The view verifies through the provider from payments.dependencies."""
        fake_provider.event = WebhookEvent.from_dict(
            {"id": "evt_fake", "type": "charge.refunded", "data": {"object": {"id": "ch_1"}}}
        )

        with patch("payments.dependencies.get_payment_provider", return_value=fake_provider):
            response = client.post(
                webhook_url,
                data=b'{"raw": true}',
                content_type="application/json",
                HTTP_STRIPE_SIGNATURE="t=1,v1=abc",
            )

        assert response.status_code == 200
        call = fake_provider.calls_to("verify_webhook_signature")[0]
        assert call["payload"] == b'{"raw": true}'
        assert call["signature"] == "t=1,v1=abc"
