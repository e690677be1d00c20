"""
Payment-specific exceptions for payment operations.

This module provides a hierarchy of exceptions for the payment endpoints.
Each family carries the HTTP status its view answers with, so views map
errors in a single ``except PaymentError`` block.

Exception Hierarchy:
    PaymentError (base for payment domain)
    ├── PaymentValidationError - Request missing/malformed fields (400)
    ├── RefundAuthorizationError - Refund shared secret rejected (403)
    ├── WebhookSignatureError - Webhook payload failed verification (400, plain text)
    └── UpstreamError - Payment provider rejected or failed a call (500)
        └── StripeError - Base for all Stripe errors
            ├── StripeCardDeclinedError - Card declined (permanent)
            ├── StripeInsufficientFundsError - Insufficient funds (permanent)
            ├── StripeInvalidAccountError - Invalid Stripe account (permanent)
            ├── StripeInvalidRequestError - Invalid request params (permanent)
            ├── StripeRateLimitError - Rate limited (transient)
            ├── StripeAPIUnavailableError - API unavailable (transient)
            └── StripeTimeoutError - Request timeout (transient)

Usage:
    from payments.exceptions import PaymentError, PaymentValidationError

    if not email:
        raise PaymentValidationError("Missing email")

    try:
        service.create_checkout_session(request)
    except PaymentError as e:
        return Response(e.to_dict(), status=e.status_code)

Note:
    Nothing in this service retries upstream failures. ``is_retryable`` is
    informational for callers that want to retry on their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import (
    BaseApplicationError,
    ExternalServiceError,
    PermissionDeniedError,
    ValidationError,
)

if TYPE_CHECKING:
    from typing import Any


# =============================================================================
# Payment Domain Exceptions
# =============================================================================


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment operations.

    All payment-specific exceptions inherit from this class,
    which itself inherits from BaseApplicationError for
    consistent API error responses.

    Example:
        try:
            OnboardingService(provider, payment_settings).create_account_link(email)
        except PaymentError as e:
            logger.warning(f"Onboarding failed: {e}")
            return Response(e.to_dict(), status=e.status_code)
    """

    default_error_code: str = "PAYMENT_ERROR"


class PaymentValidationError(PaymentError, ValidationError):
    """
    Raised when a payment request fails validation.

    Use for:
    - Missing required fields (item, nights, host account, email)
    - Non-positive nights or negative amounts
    - Missing payment intent on a refund request

    Always raised before any provider call.

    Example:
        if nights <= 0:
            raise PaymentValidationError(
                "nights must be a positive integer",
                details={"nights": nights}
            )
    """

    default_error_code: str = "PAYMENT_VALIDATION_ERROR"


class RefundAuthorizationError(PaymentError, PermissionDeniedError):
    """
    Raised when a refund request presents a missing or wrong shared secret.

    Also raised when no refund secret is configured at all, so an
    unconfigured deployment can never issue refunds.

    Note:
        The message never includes the configured or presented secret.
    """

    default_error_code: str = "REFUND_FORBIDDEN"


class WebhookSignatureError(PaymentError):
    """
    Raised when a webhook payload cannot be authenticated.

    Use for:
    - Missing Stripe-Signature header
    - Webhook signing secret not configured
    - Payload that is not UTF-8 JSON
    - Malformed header, mismatched signature, or stale timestamp

    The webhook view answers with a plain-text ``Webhook Error: <message>``
    body instead of the JSON error envelope.
    """

    default_error_code: str = "WEBHOOK_SIGNATURE_INVALID"
    status_code: int = 400


class UpstreamError(PaymentError, ExternalServiceError):
    """
    Raised when the payment provider rejects or fails a call.

    The message is the provider's user-facing description and is passed
    through to the client.
    """

    default_error_code: str = "UPSTREAM_ERROR"
    status_code: int = 500


# =============================================================================
# Stripe-Specific Exceptions
# =============================================================================


class StripeError(UpstreamError):
    """
    Base exception for all Stripe-related errors.

    Provides common attributes for Stripe error handling:
    - stripe_code: Stripe's internal error code
    - decline_code: Card decline code (if applicable)
    - is_retryable: Whether the operation could be retried

    Example:
        try:
            adapter.create_refund(payment_intent_id)
        except StripeError as e:
            logger.warning(
                "Refund failed",
                extra={"stripe_code": e.stripe_code, "retryable": e.is_retryable},
            )
            raise
    """

    default_error_code: str = "STRIPE_ERROR"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        stripe_code: str | None = None,
        decline_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if stripe_code:
            details["stripe_code"] = stripe_code
        if decline_code:
            details["decline_code"] = decline_code
        super().__init__(message, error_code=error_code, details=details)
        self.stripe_code = stripe_code
        self.decline_code = decline_code


# -----------------------------------------------------------------------------
# Permanent Errors
# -----------------------------------------------------------------------------


class StripeCardDeclinedError(StripeError):
    """
    Card was declined by the issuing bank.

    The decline_code attribute contains the specific reason
    (generic_decline, lost_card, expired_card, incorrect_cvc, ...).
    """

    default_error_code: str = "CARD_DECLINED"
    is_retryable: bool = False


class StripeInsufficientFundsError(StripeError):
    """
    Insufficient funds on the payment method.

    Separate from StripeCardDeclinedError for clearer user messaging.
    """

    default_error_code: str = "INSUFFICIENT_FUNDS"
    is_retryable: bool = False


class StripeInvalidAccountError(StripeError):
    """
    Invalid Stripe Connect account.

    Raised when the host's destination account is:
    - Not found
    - Disabled or restricted
    - Not properly onboarded

    Example:
        except StripeInvalidAccountError as e:
            logger.error("Host account cannot receive funds", extra={"code": e.stripe_code})
    """

    default_error_code: str = "INVALID_STRIPE_ACCOUNT"
    is_retryable: bool = False


class StripeInvalidRequestError(StripeError):
    """
    Invalid request parameters sent to Stripe.

    Possible causes:
    - Unknown payment intent ID
    - Refund amount above the refundable remainder
    - Payment already fully refunded

    Check stripe_code and details for the specific reason.
    """

    default_error_code: str = "INVALID_STRIPE_REQUEST"
    is_retryable: bool = False


# -----------------------------------------------------------------------------
# Transient Errors
# -----------------------------------------------------------------------------


class StripeRateLimitError(StripeError):
    """
    Rate limited by Stripe API.

    Stripe allows 100 requests/second in live mode, 25/second in test mode.
    """

    default_error_code: str = "STRIPE_RATE_LIMITED"
    is_retryable: bool = True


class StripeAPIUnavailableError(StripeError):
    """
    Stripe API is temporarily unavailable (5xx responses, network failures).
    """

    default_error_code: str = "STRIPE_API_UNAVAILABLE"
    is_retryable: bool = True


class StripeTimeoutError(StripeError):
    """
    Request to Stripe timed out.

    The operation may or may not have completed on Stripe's side. Callers
    that retry should reuse the same idempotency key.
    """

    default_error_code: str = "STRIPE_TIMEOUT"
    is_retryable: bool = True


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Payment domain
    "PaymentError",
    "PaymentValidationError",
    "RefundAuthorizationError",
    "WebhookSignatureError",
    "UpstreamError",
    # Stripe-specific
    "StripeError",
    "StripeCardDeclinedError",
    "StripeInsufficientFundsError",
    "StripeInvalidAccountError",
    "StripeInvalidRequestError",
    "StripeRateLimitError",
    "StripeAPIUnavailableError",
    "StripeTimeoutError",
]
