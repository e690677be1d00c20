"""
Pytest fixtures for webhook tests.

Provides WebhookEvent factories for the handled event types and a
WebhookContext backed by the test cache.
"""

import pytest

from payments.types import WebhookEvent
from payments.webhooks import WebhookContext


@pytest.fixture
def webhook_context(session_store):
    """WebhookContext on the locmem session store."""
    return WebhookContext(session_store=session_store)


@pytest.fixture
def make_event():
    """Factory for WebhookEvent objects."""

    def _create(
        event_type: str = "checkout.session.completed",
        data_object: dict | None = None,
        event_id: str = "evt_test_1",
    ) -> WebhookEvent:
        return WebhookEvent.from_dict(
            {
                "id": event_id,
                "object": "event",
                "type": event_type,
                "created": 1700000000,
                "livemode": False,
                "data": {"object": data_object if data_object is not None else {}},
            }
        )

    return _create


@pytest.fixture
def checkout_completed_event(make_event):
    """A checkout.session.completed event for cs_test_123 / pi_test_123."""
    return make_event(
        data_object={
            "id": "cs_test_123",
            "object": "checkout.session",
            "payment_intent": "pi_test_123",
            "payment_status": "paid",
            "metadata": {"item_id": "bike-42", "nights": "3", "host_connect_id": "acct_host_1"},
        }
    )


@pytest.fixture
def payment_failed_event(make_event):
    """A payment_intent.payment_failed event with a decline message."""
    return make_event(
        event_type="payment_intent.payment_failed",
        event_id="evt_failed_1",
        data_object={
            "id": "pi_failed_1",
            "object": "payment_intent",
            "last_payment_error": {"message": "Your card was declined."},
        },
    )


@pytest.fixture
def charge_refunded_event(make_event):
    """A charge.refunded event for a partial refund."""
    return make_event(
        event_type="charge.refunded",
        event_id="evt_refunded_1",
        data_object={
            "id": "ch_test_1",
            "object": "charge",
            "payment_intent": "pi_test_123",
            "amount_refunded": 5000,
        },
    )
