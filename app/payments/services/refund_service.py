"""
Refund service for returning rental deposits.

Refunds are gated by a shared secret instead of user authentication.
The gate is evaluated before the request body is even parsed, so an
unauthorized caller learns nothing about body validation.

The service implements:
1. Constant-time shared-secret check (fails closed when unconfigured)
2. Refund request validation
3. Full or partial refund through the payment provider

Usage:
    from payments.services import RefundService

    service = RefundService(provider, payment_settings)
    result = service.refund_deposit(
        presented_secret=request.headers.get("x-refund-secret"),
        load_request=lambda: RefundRequest(payment_intent_id="pi_123", amount_cents=5000),
    )
"""

from __future__ import annotations

import hmac
from typing import TYPE_CHECKING, Callable

from django.db import models

from core.services import BaseService

from payments.exceptions import PaymentValidationError, RefundAuthorizationError

if TYPE_CHECKING:
    from payments.conf import PaymentSettings
    from payments.protocols import PaymentProvider
    from payments.types import RefundRequest, RefundResult


class RefundGateDecision(models.TextChoices):
    """Outcome of the refund shared-secret check."""

    AUTHORIZED = "authorized", "Authorized"
    DENIED = "denied", "Denied"


def authorize_refund(configured_secret: str | None, presented: str | None) -> RefundGateDecision:
    """
    Decide whether a presented refund secret is accepted.

    Denied when the configured secret is unset or empty, when nothing is
    presented, or when the two differ. The comparison is constant-time
    over the UTF-8 bytes.
    """
    if not configured_secret or not presented:
        return RefundGateDecision.DENIED
    if hmac.compare_digest(presented.encode("utf-8"), configured_secret.encode("utf-8")):
        return RefundGateDecision.AUTHORIZED
    return RefundGateDecision.DENIED


class RefundService(BaseService):
    """Executes deposit refunds behind the shared-secret gate."""

    def __init__(self, provider: PaymentProvider, payment_settings: PaymentSettings):
        self.provider = provider
        self.payment_settings = payment_settings

    def refund_deposit(
        self,
        presented_secret: str | None,
        load_request: Callable[[], RefundRequest],
    ) -> RefundResult:
        """
        Authorize, validate and execute a refund.

        Args:
            presented_secret: Value of the x-refund-secret header
            load_request: Parses the request body; only called once authorized

        Returns:
            RefundResult from the provider

        Raises:
            RefundAuthorizationError: Secret missing, wrong, or not configured
            PaymentValidationError: Missing payment_intent or invalid amount
            UpstreamError: Provider rejected the refund
        """
        logger = self.get_logger()

        decision = authorize_refund(self.payment_settings.refund_secret, presented_secret)
        if decision != RefundGateDecision.AUTHORIZED:
            logger.warning(
                "Refund request denied",
                extra={
                    "secret_configured": bool(self.payment_settings.refund_secret),
                    "secret_presented": bool(presented_secret),
                },
            )
            raise RefundAuthorizationError("Forbidden - invalid refund secret")

        request = load_request()

        if self.validate_required(payment_intent=request.payment_intent_id):
            raise PaymentValidationError("payment_intent required")

        amount_cents = request.amount_cents
        if amount_cents is not None and (
            not isinstance(amount_cents, int)
            or isinstance(amount_cents, bool)
            or amount_cents <= 0
        ):
            raise PaymentValidationError(
                "amount_cents must be a positive integer",
                details={"amount_cents": amount_cents},
            )

        logger.info(
            "Refunding deposit",
            extra={
                "payment_intent_id": request.payment_intent_id,
                "amount_cents": amount_cents,
                "full_refund": amount_cents is None,
            },
        )

        result = self.provider.create_refund(
            request.payment_intent_id,
            amount_cents=amount_cents,
            idempotency_key=request.idempotency_key,
            metadata={"reason": "deposit_refund"},
        )

        logger.info(
            "Deposit refunded",
            extra={
                "refund_id": result.id,
                "payment_intent_id": result.payment_intent_id,
                "amount_cents": result.amount_cents,
                "status": result.status,
            },
        )
        return result
