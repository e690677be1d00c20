"""
Protocol definitions for payment collaborators.

Services depend on these interfaces, not on the Stripe SDK or the cache,
so tests can inject fakes and the provider can be swapped.

Available Protocols:
    PaymentProvider: Checkout, accounts, onboarding links, refunds, webhook verification
    CheckoutSessionStore: Records checkout sessions confirmed as paid

Usage:
    from payments.protocols import PaymentProvider

    class CheckoutService(BaseService):
        def __init__(self, provider: PaymentProvider, payment_settings: PaymentSettings):
            self.provider = provider

    # StripeAdapter satisfies PaymentProvider without inheriting from it
    assert isinstance(StripeAdapter(payment_settings), PaymentProvider)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Any

    from payments.types import (
        CheckoutSessionResult,
        ConnectedAccountResult,
        CreateCheckoutSessionParams,
        CreateConnectedAccountParams,
        OnboardingLinkResult,
        RefundResult,
        WebhookEvent,
    )


@runtime_checkable
class PaymentProvider(Protocol):
    """
    Protocol for the external payment provider.

    Every method either returns a result type or raises an UpstreamError
    subclass (verify_webhook_signature raises WebhookSignatureError).
    """

    def create_checkout_session(
        self, params: CreateCheckoutSessionParams
    ) -> CheckoutSessionResult:
        """Create a hosted checkout session with a destination split."""
        ...

    def create_connected_account(
        self, params: CreateConnectedAccountParams
    ) -> ConnectedAccountResult:
        """Create a connected account for a host."""
        ...

    def create_onboarding_link(
        self,
        account_id: str,
        refresh_url: str,
        return_url: str,
        idempotency_key: str | None = None,
    ) -> OnboardingLinkResult:
        """Create a single-use onboarding link for a connected account."""
        ...

    def create_refund(
        self,
        payment_intent_id: str,
        amount_cents: int | None = None,
        idempotency_key: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> RefundResult:
        """Refund a payment, fully when amount_cents is None."""
        ...

    def verify_webhook_signature(self, payload: bytes, signature: str) -> WebhookEvent:
        """Authenticate raw webhook bytes and return the parsed event."""
        ...


@runtime_checkable
class CheckoutSessionStore(Protocol):
    """
    Protocol for recording checkout sessions confirmed as paid.

    Implementations must be insert-if-absent: the first record for a session
    id wins and later deliveries never overwrite it.
    """

    def record_completed_session(
        self,
        session_id: str,
        payment_intent_id: str | None,
        event_id: str,
    ) -> bool:
        """
        Record a completed session.

        Returns:
            True if newly recorded, False if a record already existed
        """
        ...

    def get_completed_session(self, session_id: str) -> dict[str, Any] | None:
        """Return the stored record for a session, or None."""
        ...
