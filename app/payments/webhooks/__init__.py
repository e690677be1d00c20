"""
Webhook handling for payment events from Stripe.

This module provides the view and handlers for processing Stripe webhooks.
Webhooks are verified, dispatched synchronously, and acknowledged.

Usage:
    # In urls.py
    from payments.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhook", stripe_webhook, name="stripe_webhook"),
    ]
"""

from payments.webhooks.handlers import WebhookContext, dispatch_webhook, register_handler

__all__ = [
    "WebhookContext",
    "dispatch_webhook",
    "register_handler",
]
