"""
Webhook event handlers for Stripe events.

This module provides a handler registry and implementations for
processing different Stripe webhook events.

The handler registry allows:
- Clean separation between event routing and handling
- Easy extension for new event types
- Centralized error handling

Handled events:
    checkout.session.completed      - record the paid session (idempotent)
    payment_intent.payment_failed   - warning log, no state change
    charge.refunded                 - info log, no state change

Every other event type is acknowledged without side effects.

Usage:
    from payments.webhooks.handlers import dispatch_webhook, register_handler

    # Register a custom handler
    @register_handler("custom.event")
    def handle_custom_event(event: WebhookEvent, context: WebhookContext) -> ServiceResult:
        ...

    # Dispatch an event to its handler
    result = dispatch_webhook(event, WebhookContext(session_store=store))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from core.services import ServiceResult

if TYPE_CHECKING:
    from payments.protocols import CheckoutSessionStore
    from payments.types import WebhookEvent


logger = logging.getLogger(__name__)


@dataclass
class WebhookContext:
    """Collaborators available to webhook handlers."""

    session_store: CheckoutSessionStore


# =============================================================================
# Handler Registry
# =============================================================================


WebhookHandler = Callable[["WebhookEvent", WebhookContext], ServiceResult]

# Maps event type strings to handler functions
WEBHOOK_HANDLERS: dict[str, WebhookHandler] = {}


def register_handler(event_type: str) -> Callable:
    """
    Decorator to register a webhook event handler.

    Usage:
        @register_handler("checkout.session.completed")
        def handle_checkout_completed(event, context) -> ServiceResult:
            ...

    Args:
        event_type: The Stripe event type (e.g., "charge.refunded")

    Returns:
        Decorator function that registers the handler
    """

    def decorator(func: WebhookHandler) -> WebhookHandler:
        WEBHOOK_HANDLERS[event_type] = func
        logger.debug(f"Registered webhook handler for {event_type}")
        return func

    return decorator


def dispatch_webhook(event: WebhookEvent, context: WebhookContext) -> ServiceResult:
    """
    Dispatch a webhook event to the appropriate handler.

    Looks up the handler by event type and calls it. If no handler
    is registered, logs and returns success (to avoid failing on
    unknown events). Never raises: a handler exception is logged with
    its traceback and returned as a failed result.

    Args:
        event: The verified WebhookEvent
        context: Collaborators for the handlers

    Returns:
        ServiceResult from the handler, or success if no handler
    """
    handler = WEBHOOK_HANDLERS.get(event.type)

    if not handler:
        logger.info(
            f"Unhandled event type {event.type}",
            extra={"stripe_event_id": event.id},
        )
        return ServiceResult.success(None)

    logger.info(
        f"Dispatching {event.type} to handler",
        extra={"stripe_event_id": event.id},
    )

    try:
        return handler(event, context)
    except Exception as e:
        logger.error(
            f"Webhook handler for {event.type} failed: {type(e).__name__}",
            extra={"stripe_event_id": event.id, "event_type": event.type},
            exc_info=True,
        )
        return ServiceResult.from_exception(e, "WEBHOOK_HANDLER_ERROR")


# =============================================================================
# Checkout Handlers
# =============================================================================


@register_handler("checkout.session.completed")
def handle_checkout_session_completed(
    event: WebhookEvent, context: WebhookContext
) -> ServiceResult:
    """
    Handle a checkout session the renter has paid.

    Records the session in the session store. Redelivery of the same
    session is a no-op; a redelivery carrying a different payment
    reference is logged and ignored, the first record wins.

    Returns:
        ServiceResult with {"session_id", "created"} on success
    """
    session_id = event.object_id

    if not session_id:
        logger.error(
            "checkout.session.completed: Could not extract session id",
            extra={"stripe_event_id": event.id},
        )
        return ServiceResult.failure(
            "Could not extract session id from webhook",
            error_code="INVALID_WEBHOOK_PAYLOAD",
        )

    payment_intent_id = event.data_object.get("payment_intent")

    logger.info(
        "Checkout session completed",
        extra={
            "stripe_event_id": event.id,
            "session_id": session_id,
            "payment_intent_id": payment_intent_id,
            "metadata": event.data_object.get("metadata") or {},
        },
    )

    created = context.session_store.record_completed_session(
        session_id, payment_intent_id, event.id
    )

    if not created:
        existing = context.session_store.get_completed_session(session_id) or {}
        if existing and existing.get("payment_intent_id") != payment_intent_id:
            logger.warning(
                "Conflicting payment reference for completed session, keeping first record",
                extra={
                    "stripe_event_id": event.id,
                    "session_id": session_id,
                    "recorded_payment_intent_id": existing.get("payment_intent_id"),
                    "received_payment_intent_id": payment_intent_id,
                },
            )
        else:
            logger.info(
                "Duplicate checkout.session.completed delivery ignored",
                extra={"stripe_event_id": event.id, "session_id": session_id},
            )

    return ServiceResult.success({"session_id": session_id, "created": created})


# =============================================================================
# Payment Intent Handlers
# =============================================================================


@register_handler("payment_intent.payment_failed")
def handle_payment_intent_failed(
    event: WebhookEvent, context: WebhookContext
) -> ServiceResult:
    """
    Handle payment failure notification.

    Observation only: logs the payment reference and the provider's
    failure message. No state changes.
    """
    payment_intent_id = event.object_id
    last_error = event.data_object.get("last_payment_error") or {}
    reason = last_error.get("message", "Payment failed")

    logger.warning(
        "Payment failed",
        extra={
            "stripe_event_id": event.id,
            "payment_intent_id": payment_intent_id,
            "reason": reason,
        },
    )

    return ServiceResult.success({"payment_intent_id": payment_intent_id})


# =============================================================================
# Charge Handlers
# =============================================================================


@register_handler("charge.refunded")
def handle_charge_refunded(event: WebhookEvent, context: WebhookContext) -> ServiceResult:
    """Log a refunded charge. No state changes."""
    charge = event.data_object

    logger.info(
        "Charge refunded",
        extra={
            "stripe_event_id": event.id,
            "charge_id": charge.get("id"),
            "payment_intent_id": charge.get("payment_intent"),
            "amount_refunded": charge.get("amount_refunded"),
        },
    )

    return ServiceResult.success({"charge_id": charge.get("id")})
