"""
Pytest fixtures for Stripe adapter tests.

This module provides fixtures for testing the Stripe adapter, including
mock Stripe API responses, error conditions, and test data.

Sections:
    - Test Data Fixtures
    - Mock Stripe Response Fixtures
    - Mock Stripe Error Fixtures
    - Mock Stripe Client Fixtures
"""

from dataclasses import dataclass
from typing import Any
from unittest.mock import patch

import pytest
import stripe

from payments.adapters import StripeAdapter
from payments.types import CreateCheckoutSessionParams, CreateConnectedAccountParams, LineItem


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def adapter(payment_settings):
    """StripeAdapter built on the test PaymentSettings."""
    return StripeAdapter(payment_settings)


@pytest.fixture
def checkout_params():
    """Create checkout session params with a fee."""

    def _create(
        application_fee_cents: int | None = 1000,
        idempotency_key: str | None = None,
    ) -> CreateCheckoutSessionParams:
        return CreateCheckoutSessionParams(
            line_items=[
                LineItem(name="Lloguer: bike-42", unit_amount_cents=10000),
                LineItem(name="Dipòsit reemborsable: bike-42", unit_amount_cents=5000),
            ],
            currency="eur",
            destination_account="acct_host_1",
            success_url="https://rentals.example.com/?success=true&session_id={CHECKOUT_SESSION_ID}",
            cancel_url="https://rentals.example.com/?canceled=true",
            application_fee_cents=application_fee_cents,
            metadata={"item_id": "bike-42", "nights": "3", "host_connect_id": "acct_host_1"},
            idempotency_key=idempotency_key,
        )

    return _create


@pytest.fixture
def account_params():
    """Connected account params for a host."""
    return CreateConnectedAccountParams(email="host@example.com", country="ES")


# =============================================================================
# Mock Stripe Response Fixtures
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object with to_dict support."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@pytest.fixture
def mock_checkout_session():
    """Create a mock Checkout Session response."""

    def _create(
        id: str = "cs_test_123",
        url: str = "https://checkout.stripe.com/c/pay/cs_test_123",
        payment_intent: str | None = None,
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "checkout.session",
                "url": url,
                "payment_intent": payment_intent,
                "mode": "payment",
            }
        )

    return _create


@pytest.fixture
def mock_account():
    """Create a mock Account response."""
    return MockStripeObject(
        {
            "id": "acct_new_host",
            "object": "account",
            "type": "express",
            "email": "host@example.com",
            "country": "ES",
        }
    )


@pytest.fixture
def mock_account_link():
    """Create a mock AccountLink response."""
    return MockStripeObject(
        {
            "object": "account_link",
            "url": "https://connect.stripe.com/setup/e/acct_new_host/abc",
            "expires_at": 1700000300,
            "created": 1700000000,
        }
    )


@pytest.fixture
def mock_refund():
    """Create a mock Refund response."""

    def _create(
        id: str = "re_test123456",
        amount: int = 5000,
        currency: str = "eur",
        status: str = "succeeded",
        payment_intent: str = "pi_test123456",
        metadata: dict | None = None,
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "refund",
                "amount": amount,
                "currency": currency,
                "status": status,
                "payment_intent": payment_intent,
                "metadata": metadata or {},
            }
        )

    return _create


# =============================================================================
# Mock Stripe Error Fixtures
# =============================================================================


@pytest.fixture
def card_error():
    """Create a Stripe CardError."""

    def _create(
        message: str = "Your card was declined.",
        code: str = "card_declined",
        decline_code: str | None = "generic_decline",
    ) -> stripe.CardError:
        error = stripe.CardError(
            message=message,
            param=None,
            code=code,
        )
        error.decline_code = decline_code
        return error

    return _create


@pytest.fixture
def invalid_request_error():
    """Create a Stripe InvalidRequestError."""

    def _create(
        message: str = "No such payment_intent: 'pi_missing'",
        param: str | None = "payment_intent",
        code: str = "resource_missing",
    ) -> stripe.InvalidRequestError:
        return stripe.InvalidRequestError(
            message=message,
            param=param,
            code=code,
        )

    return _create


@pytest.fixture
def rate_limit_error():
    """Create a Stripe RateLimitError."""
    return stripe.RateLimitError(
        message="Too many requests hit the API too quickly.",
    )


@pytest.fixture
def api_connection_error():
    """Create a Stripe APIConnectionError."""
    return stripe.APIConnectionError(
        message="Could not connect to Stripe.",
    )


@pytest.fixture
def api_error():
    """Create a Stripe APIError."""
    return stripe.APIError(
        message="Something went wrong on Stripe's end.",
    )


@pytest.fixture
def authentication_error():
    """Create a Stripe AuthenticationError."""
    return stripe.AuthenticationError(
        message="Invalid API Key provided.",
    )


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def mock_stripe_checkout_session(mock_checkout_session):
    """Mock stripe.checkout.Session API."""
    with patch("stripe.checkout.Session") as mock:
        mock.create.return_value = mock_checkout_session()
        yield mock


@pytest.fixture
def mock_stripe_account(mock_account):
    """Mock stripe.Account API."""
    with patch("stripe.Account") as mock:
        mock.create.return_value = mock_account
        yield mock


@pytest.fixture
def mock_stripe_account_link(mock_account_link):
    """Mock stripe.AccountLink API."""
    with patch("stripe.AccountLink") as mock:
        mock.create.return_value = mock_account_link
        yield mock


@pytest.fixture
def mock_stripe_refund(mock_refund):
    """Mock stripe.Refund API."""
    with patch("stripe.Refund") as mock:
        mock.create.return_value = mock_refund()
        yield mock


@pytest.fixture(autouse=True)
def mock_stripe_http_client():
    """Mock stripe.RequestsClient so no real HTTP client is built."""
    with patch("stripe.RequestsClient") as mock:
        yield mock
