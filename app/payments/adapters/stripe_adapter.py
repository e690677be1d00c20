"""
Stripe API adapter for payment operations.

This module provides the StripeAdapter class which encapsulates all
Stripe API interactions. All Stripe calls go through this adapter to
ensure consistent error handling, timeouts, idempotency, and observability.

Features:
- Configurable timeouts on all API calls
- Automatic error translation to domain exceptions
- Structured logging with timing metrics
- Optional idempotency keys, scoped per operation
- Webhook signature verification on raw request bytes

Configuration (via payments.conf.PaymentSettings):
- stripe_secret_key: Stripe API secret key
- webhook_secret: Webhook signing secret
- webhook_tolerance_seconds: Maximum signature age (default: 300)
- api_timeout_seconds: API call timeout (default: 10)

Usage:
    from payments.adapters import StripeAdapter
    from payments.conf import get_payment_settings

    adapter = StripeAdapter(get_payment_settings())

    session = adapter.create_checkout_session(params)
    refund = adapter.create_refund("pi_xxx", amount_cents=5000)
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from typing import TYPE_CHECKING, Any

import stripe
from django.conf import settings

from payments.exceptions import (
    StripeAPIUnavailableError,
    StripeCardDeclinedError,
    StripeInsufficientFundsError,
    StripeInvalidAccountError,
    StripeInvalidRequestError,
    StripeRateLimitError,
    StripeTimeoutError,
    WebhookSignatureError,
)
from payments.types import (
    CheckoutSessionResult,
    ConnectedAccountResult,
    OnboardingLinkResult,
    RefundResult,
    WebhookEvent,
)

if TYPE_CHECKING:
    from payments.conf import PaymentSettings
    from payments.types import CreateCheckoutSessionParams, CreateConnectedAccountParams


# =============================================================================
# Idempotency Key Generator
# =============================================================================


class IdempotencyKeyGenerator:
    """
    Generate idempotency keys for Stripe API calls.

    Format: "{operation}:{entity_id}:{attempt}:{hash}"

    Stripe rejects a key reused across different endpoints, so a single
    client-supplied key is scoped per operation before it is sent. The
    hash ties the key to this deployment.

    Example:
        key = IdempotencyKeyGenerator.generate(
            operation="create_account",
            entity_id="client-key-123",
        )
        # Result: "create_account:client-key-123:1:a1b2c3d4"
    """

    @staticmethod
    def generate(
        operation: str,
        entity_id: str,
        attempt: int = 1,
    ) -> str:
        """
        Generate a unique idempotency key.

        Args:
            operation: The Stripe operation (create_checkout_session, create_refund, etc.)
            entity_id: The client-supplied key or domain entity ID
            attempt: Attempt number (default: 1)

        Returns:
            Formatted idempotency key string
        """
        entity_str = str(entity_id)
        hash_input = f"{operation}:{entity_str}:{attempt}:{settings.SECRET_KEY}"
        short_hash = hashlib.sha256(hash_input.encode()).hexdigest()[:8]

        return f"{operation}:{entity_str}:{attempt}:{short_hash}"


# =============================================================================
# Stripe Adapter
# =============================================================================


class StripeAdapter:
    """
    Adapter for Stripe API operations.

    Implements payments.protocols.PaymentProvider. Holds only the
    read-only PaymentSettings it was built with.

    Features:
    - Configurable timeouts on all API calls
    - Automatic error translation to domain exceptions
    - Structured logging with timing metrics
    - No automatic retries (every failure surfaces to the caller)

    Usage:
        adapter = StripeAdapter(payment_settings)
        result = adapter.create_connected_account(params)
        link = adapter.create_onboarding_link(result.id, refresh_url, return_url)
    """

    def __init__(self, payment_settings: PaymentSettings):
        self.payment_settings = payment_settings

    # =========================================================================
    # Configuration
    # =========================================================================

    def _configure_stripe(self) -> None:
        """Configure Stripe client with API key and timeout."""
        stripe.api_key = self.payment_settings.stripe_secret_key
        stripe.max_network_retries = 0
        stripe.default_http_client = stripe.RequestsClient(
            timeout=self.payment_settings.api_timeout_seconds
        )

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @staticmethod
    def _request_options(operation: str, idempotency_key: str | None) -> dict[str, Any]:
        if not idempotency_key:
            return {}
        return {"idempotency_key": IdempotencyKeyGenerator.generate(operation, idempotency_key)}

    # =========================================================================
    # Checkout
    # =========================================================================

    def create_checkout_session(
        self, params: CreateCheckoutSessionParams
    ) -> CheckoutSessionResult:
        """
        Create a hosted Checkout Session with a destination charge.

        The whole payment is routed to ``params.destination_account``; the
        marketplace keeps ``application_fee_cents`` when it is set. No fee
        instruction is sent at all when it is None.

        Args:
            params: Line items, currency, destination, redirects and fee

        Returns:
            CheckoutSessionResult with the hosted payment page URL

        Raises:
            StripeInvalidAccountError: Destination account unusable
            StripeInvalidRequestError: Invalid parameters
            StripeAPIUnavailableError: Stripe service unavailable
            StripeTimeoutError: Request timed out
        """
        self._configure_stripe()
        logger = self.get_logger()

        log_context = {
            "operation": "create_checkout_session",
            "destination_account": params.destination_account,
            "total_cents": params.total_cents,
            "application_fee_cents": params.application_fee_cents,
            "currency": params.currency,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            payment_intent_data: dict[str, Any] = {
                "transfer_data": {"destination": params.destination_account},
            }
            if params.application_fee_cents is not None:
                payment_intent_data["application_fee_amount"] = params.application_fee_cents

            session = stripe.checkout.Session.create(
                mode="payment",
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": params.currency,
                            "product_data": {"name": item.name},
                            "unit_amount": item.unit_amount_cents,
                        },
                        "quantity": item.quantity,
                    }
                    for item in params.line_items
                ],
                payment_intent_data=payment_intent_data,
                success_url=params.success_url,
                cancel_url=params.cancel_url,
                metadata=params.metadata,
                **self._request_options("create_checkout_session", params.idempotency_key),
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "session_id": session.id,
                    "duration_ms": duration_ms,
                },
            )

            return CheckoutSessionResult(
                id=session.id,
                url=session.url,
                payment_intent_id=getattr(session, "payment_intent", None),
                raw_response=session.to_dict(),
            )

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

    # =========================================================================
    # Connected Accounts
    # =========================================================================

    def create_connected_account(
        self, params: CreateConnectedAccountParams
    ) -> ConnectedAccountResult:
        """
        Create a connected account for a host.

        Args:
            params: Email, country, account type and requested capabilities

        Returns:
            ConnectedAccountResult with the new account id

        Raises:
            StripeInvalidRequestError: Invalid email or country
            StripeAPIUnavailableError: Stripe service unavailable
        """
        self._configure_stripe()
        logger = self.get_logger()

        log_context = {
            "operation": "create_connected_account",
            "country": params.country,
            "account_type": params.account_type,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            account = stripe.Account.create(
                type=params.account_type,
                country=params.country,
                email=params.email,
                capabilities={
                    capability: {"requested": True} for capability in params.capabilities
                },
                **self._request_options("create_account", params.idempotency_key),
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "account_id": account.id,
                    "duration_ms": duration_ms,
                },
            )

            return ConnectedAccountResult(
                id=account.id,
                email=getattr(account, "email", None),
                country=getattr(account, "country", None),
                requested_capabilities=list(params.capabilities),
                raw_response=account.to_dict(),
            )

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

    def create_onboarding_link(
        self,
        account_id: str,
        refresh_url: str,
        return_url: str,
        idempotency_key: str | None = None,
    ) -> OnboardingLinkResult:
        """
        Create a single-use onboarding link for a connected account.

        Args:
            account_id: Connected account ID (acct_xxx)
            refresh_url: Where an expired link sends the host
            return_url: Where the host lands after onboarding
            idempotency_key: Optional client-supplied key

        Returns:
            OnboardingLinkResult with the link URL and expiry

        Raises:
            StripeInvalidAccountError: Account not found
            StripeAPIUnavailableError: Stripe service unavailable
        """
        self._configure_stripe()
        logger = self.get_logger()

        log_context = {
            "operation": "create_onboarding_link",
            "account_id": account_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            link = stripe.AccountLink.create(
                account=account_id,
                refresh_url=refresh_url,
                return_url=return_url,
                type="account_onboarding",
                **self._request_options("create_account_link", idempotency_key),
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={**log_context, "duration_ms": duration_ms},
            )

            return OnboardingLinkResult(
                url=link.url,
                expires_at=getattr(link, "expires_at", None),
                raw_response=link.to_dict(),
            )

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Refunds
    # =========================================================================

    def create_refund(
        self,
        payment_intent_id: str,
        amount_cents: int | None = None,
        idempotency_key: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> RefundResult:
        """
        Create a refund for a PaymentIntent.

        Args:
            payment_intent_id: Stripe PaymentIntent ID (pi_xxx)
            amount_cents: Amount to refund (None for the full remaining balance)
            idempotency_key: Optional client-supplied key
            metadata: Optional metadata dict

        Returns:
            RefundResult with refund details

        Raises:
            StripeInvalidRequestError: Refund not possible
        """
        self._configure_stripe()
        logger = self.get_logger()

        log_context = {
            "operation": "create_refund",
            "payment_intent_id": payment_intent_id,
            "amount_cents": amount_cents,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            refund_params: dict[str, Any] = {
                "payment_intent": payment_intent_id,
                "metadata": metadata or {},
            }
            if amount_cents is not None:
                refund_params["amount"] = amount_cents

            refund = stripe.Refund.create(
                **refund_params,
                **self._request_options("create_refund", idempotency_key),
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "refund_id": refund.id,
                    "status": refund.status,
                    "duration_ms": duration_ms,
                },
            )

            return RefundResult(
                id=refund.id,
                amount_cents=refund.amount,
                currency=refund.currency,
                status=refund.status,
                payment_intent_id=refund.payment_intent,
                metadata=dict(refund.metadata or {}),
                raw_response=refund.to_dict(),
            )

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Webhook Verification
    # =========================================================================

    def verify_webhook_signature(self, payload: bytes, signature: str) -> WebhookEvent:
        """
        Verify and parse a Stripe webhook event.

        The signature is checked against the exact bytes received; the
        payload is only parsed once the signature matches.

        Args:
            payload: Raw webhook payload bytes
            signature: Stripe-Signature header value

        Returns:
            WebhookEvent built from the verified payload

        Raises:
            WebhookSignatureError: Missing header, unconfigured secret,
                undecodable payload, bad/stale signature
        """
        logger = self.get_logger()

        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")

        secret = self.payment_settings.webhook_secret
        if not secret:
            logger.error("Webhook received but STRIPE_WEBHOOK_SECRET is not configured")
            raise WebhookSignatureError("Webhook secret not configured")

        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WebhookSignatureError("Payload is not valid UTF-8") from e

        try:
            stripe.WebhookSignature.verify_header(
                text,
                signature,
                secret,
                tolerance=self.payment_settings.webhook_tolerance_seconds,
            )
        except stripe.SignatureVerificationError as e:
            raise WebhookSignatureError(
                e.user_message or "Signature verification failed",
                details={"reason": "signature_verification_failed"},
            ) from e

        try:
            event = json.loads(text)
        except ValueError as e:
            raise WebhookSignatureError("Payload is not valid JSON") from e

        if not isinstance(event, dict) or not event.get("type"):
            raise WebhookSignatureError("Payload is not a webhook event")

        return WebhookEvent.from_dict(event)

    # =========================================================================
    # Error Handling
    # =========================================================================

    @classmethod
    def _handle_stripe_error(
        cls,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate Stripe exceptions to domain exceptions.

        Maps Stripe SDK errors to appropriate domain exceptions
        with proper error categorization.

        Messages:
            Card and invalid-request errors keep Stripe's own message
            (user_message when present). Rate-limit, connection, timeout
            and API errors use a fixed "... Please retry." message.
            Authentication errors are masked as "Stripe authentication
            failed" and never carry Stripe's text, which can include key
            fragments. The SDK error stays chained as __cause__.

        Args:
            error: The Stripe exception
            log_context: Logging context dict
            duration_ms: Operation duration for logging

        Raises:
            StripeCardDeclinedError: Card was declined
            StripeInsufficientFundsError: Insufficient funds
            StripeInvalidAccountError: Invalid Connect account
            StripeInvalidRequestError: Invalid request parameters
            StripeRateLimitError: Rate limited
            StripeAPIUnavailableError: API unavailable
            StripeTimeoutError: Request timed out
        """
        logger = cls.get_logger()

        # Add timing to context
        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, stripe.CardError):
            decline_code = getattr(error, "decline_code", None)
            logger.warning(
                "Card error from Stripe",
                extra={**log_context, "decline_code": decline_code},
            )

            if decline_code == "insufficient_funds":
                raise StripeInsufficientFundsError(
                    str(error.user_message or error),
                    stripe_code=error.code,
                    decline_code=decline_code,
                ) from error

            raise StripeCardDeclinedError(
                str(error.user_message or error),
                stripe_code=error.code,
                decline_code=decline_code,
            ) from error

        elif isinstance(error, stripe.InvalidRequestError):
            # Invalid parameters or resource not found
            logger.error(
                "Invalid request to Stripe",
                extra={**log_context, "stripe_code": error.code},
            )

            message = str(error.user_message or error)
            if "account" in message.lower():
                raise StripeInvalidAccountError(
                    message,
                    stripe_code=error.code,
                ) from error

            raise StripeInvalidRequestError(
                message,
                stripe_code=error.code,
            ) from error

        elif isinstance(error, stripe.RateLimitError):
            logger.warning(
                "Rate limited by Stripe",
                extra=log_context,
            )
            raise StripeRateLimitError(
                "Stripe rate limit exceeded. Please retry.",
                stripe_code="rate_limit",
            ) from error

        elif isinstance(error, stripe.APIConnectionError):
            logger.error(
                "Connection error to Stripe",
                extra=log_context,
                exc_info=True,
            )
            if "timed out" in str(error).lower() or "timeout" in str(error).lower():
                raise StripeTimeoutError(
                    "Stripe request timed out. Please retry.",
                    stripe_code="timeout",
                ) from error
            raise StripeAPIUnavailableError(
                "Could not connect to Stripe. Please retry.",
                stripe_code="api_connection_error",
            ) from error

        elif isinstance(error, stripe.AuthenticationError):
            # Invalid API key - operational issue
            logger.critical(
                "Stripe authentication failed - check API key",
                extra=log_context,
            )
            raise StripeInvalidRequestError(
                "Stripe authentication failed",
                stripe_code="authentication_error",
            ) from error

        elif isinstance(error, stripe.APIError):
            logger.error(
                "Stripe API error",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                "Stripe service error. Please retry.",
                stripe_code="api_error",
            ) from error

        else:
            logger.error(
                f"Unexpected error from Stripe: {type(error).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                f"Unexpected Stripe error: {error}",
                stripe_code="unknown_error",
            ) from error
