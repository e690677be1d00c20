"""
Factories wiring payment services to their collaborators.

Views build services per request through these functions. Tests patch
them (e.g. ``patch("payments.dependencies.get_checkout_service")``) to inject a
fake provider.
"""

from __future__ import annotations

from django.core.cache import cache

from payments.adapters import StripeAdapter
from payments.conf import get_payment_settings
from payments.protocols import CheckoutSessionStore, PaymentProvider
from payments.services import CheckoutService, OnboardingService, RefundService
from payments.stores import CacheCheckoutSessionStore
from payments.webhooks.handlers import WebhookContext


def get_payment_provider() -> PaymentProvider:
    return StripeAdapter(get_payment_settings())


def get_session_store() -> CheckoutSessionStore:
    return CacheCheckoutSessionStore(
        cache, ttl_seconds=get_payment_settings().checkout_record_ttl_seconds
    )


def get_webhook_context() -> WebhookContext:
    return WebhookContext(session_store=get_session_store())


def get_checkout_service() -> CheckoutService:
    return CheckoutService(get_payment_provider(), get_payment_settings())


def get_onboarding_service() -> OnboardingService:
    return OnboardingService(get_payment_provider(), get_payment_settings())


def get_refund_service() -> RefundService:
    return RefundService(get_payment_provider(), get_payment_settings())
