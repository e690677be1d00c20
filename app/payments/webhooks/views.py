"""
Webhook endpoint view for Stripe.

The view:
1. Verifies the webhook signature on the raw request bytes
2. Dispatches the verified event to its handler
3. Acknowledges with 200 {"received": true}

Acknowledgement does not depend on the handler outcome: once the
signature is valid the event is accepted, and handler failures are only
logged. A 400 tells Stripe the delivery was rejected.

Usage:
    # In urls.py
    from payments.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhook", stripe_webhook, name="stripe_webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from payments import dependencies
from payments.exceptions import WebhookSignatureError
from payments.webhooks.handlers import dispatch_webhook

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest) -> HttpResponse:
    """
    Receive Stripe webhook events.

    Security:
    - Signature verification prevents spoofed webhooks
    - CSRF exemption required for external webhooks
    - Only POST requests accepted

    Returns:
        HttpResponse with status:
        - 200: {"received": true}, event verified (handled, ignored or failed)
        - 400: "Webhook Error: <reason>" as plain text

    Example Stripe-Signature header:
        t=1614556800,v1=xxx,v0=yyy
    """
    payload = request.body
    signature = request.headers.get("Stripe-Signature", "")

    try:
        event = dependencies.get_payment_provider().verify_webhook_signature(payload, signature)
    except WebhookSignatureError as e:
        logger.warning(
            "Webhook signature verification failed",
            extra={"error": e.message},
        )
        return HttpResponse(
            f"Webhook Error: {e.message}",
            status=400,
            content_type="text/plain; charset=utf-8",
        )

    logger.info(
        f"Webhook received: {event.type}",
        extra={"stripe_event_id": event.id, "event_type": event.type},
    )

    result = dispatch_webhook(event, dependencies.get_webhook_context())

    if not result:
        logger.warning(
            "Webhook acknowledged with handler failure",
            extra={
                "stripe_event_id": event.id,
                "event_type": event.type,
                "error": result.error,
                "error_code": result.error_code,
            },
        )

    return JsonResponse({"received": True})
