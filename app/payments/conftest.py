"""
Pytest fixtures for payment tests.

This module provides the PaymentSettings fixture and a FakePaymentProvider
test double shared by the service, view and webhook tests.

Usage:
    def test_checkout(fake_provider, payment_settings):
        service = CheckoutService(fake_provider, payment_settings)
        service.create_checkout_session(request)
        assert fake_provider.calls[0][0] == "create_checkout_session"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import pytest

from payments.conf import PaymentSettings
from payments.exceptions import WebhookSignatureError
from payments.stores import CacheCheckoutSessionStore
from payments.types import (
    CheckoutSessionResult,
    ConnectedAccountResult,
    OnboardingLinkResult,
    RefundResult,
    WebhookEvent,
)
from payments.tests.signing import TEST_WEBHOOK_SECRET

TEST_REFUND_SECRET = "test-refund-secret"


# =============================================================================
# Fake Provider
# =============================================================================


@dataclass
class FakePaymentProvider:
    """
    In-memory PaymentProvider that records every call.

    Set ``fail_with`` to an exception (keyed by method name) to make that
    method raise instead of returning.
    """

    calls: list[tuple[str, Any]] = field(default_factory=list)
    fail_with: dict[str, Exception] = field(default_factory=dict)
    event: WebhookEvent | None = None

    def _record(self, name: str, payload: Any) -> None:
        self.calls.append((name, payload))
        if name in self.fail_with:
            raise self.fail_with[name]

    def calls_to(self, name: str) -> list[Any]:
        return [payload for call_name, payload in self.calls if call_name == name]

    def create_checkout_session(self, params):
        self._record("create_checkout_session", params)
        return CheckoutSessionResult(
            id="cs_test_123",
            url="https://checkout.stripe.com/c/pay/cs_test_123",
            payment_intent_id=None,
        )

    def create_connected_account(self, params):
        self._record("create_connected_account", params)
        return ConnectedAccountResult(
            id="acct_test_host",
            email=params.email,
            country=params.country,
            requested_capabilities=list(params.capabilities),
        )

    def create_onboarding_link(self, account_id, refresh_url, return_url, idempotency_key=None):
        self._record(
            "create_onboarding_link",
            {
                "account_id": account_id,
                "refresh_url": refresh_url,
                "return_url": return_url,
                "idempotency_key": idempotency_key,
            },
        )
        return OnboardingLinkResult(
            url=f"https://connect.stripe.com/setup/e/{account_id}/abc",
            expires_at=1700000300,
        )

    def create_refund(self, payment_intent_id, amount_cents=None, idempotency_key=None, metadata=None):
        self._record(
            "create_refund",
            {
                "payment_intent_id": payment_intent_id,
                "amount_cents": amount_cents,
                "idempotency_key": idempotency_key,
                "metadata": metadata,
            },
        )
        return RefundResult(
            id="re_test_123",
            amount_cents=amount_cents if amount_cents is not None else 15000,
            currency="eur",
            status="succeeded",
            payment_intent_id=payment_intent_id,
        )

    def verify_webhook_signature(self, payload, signature):
        self._record("verify_webhook_signature", {"payload": payload, "signature": signature})
        if self.event is None:
            raise WebhookSignatureError("No signatures found matching the expected signature for payload")
        return self.event


# =============================================================================
# Settings and Collaborators
# =============================================================================


@pytest.fixture
def payment_settings():
    """PaymentSettings with a 10% fee and known secrets."""
    return PaymentSettings(
        stripe_secret_key="sk_test_dummy",
        webhook_secret=TEST_WEBHOOK_SECRET,
        refund_secret=TEST_REFUND_SECRET,
        fee_percent=Decimal("10"),
        currency="eur",
        connect_country="ES",
        client_url="https://rentals.example.com",
    )


@pytest.fixture
def fake_provider():
    """A fresh FakePaymentProvider."""
    return FakePaymentProvider()


@pytest.fixture
def session_store():
    """CacheCheckoutSessionStore on the test cache (locmem)."""
    from django.core.cache import cache

    return CacheCheckoutSessionStore(cache, ttl_seconds=60)

