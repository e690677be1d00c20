"""
Payment services for coordinating payment operations.

This module provides:
- CheckoutService: Creates rental checkout sessions with the fee split
- OnboardingService: Creates host accounts and onboarding links
- RefundService: Refunds deposits behind the shared-secret gate

Services take their provider and PaymentSettings through the constructor;
payments.dependencies builds them for the views.

Usage:
    from payments.services import CheckoutService

    result = CheckoutService(provider, payment_settings).create_checkout_session(request)

    from payments.services import RefundService, authorize_refund

    authorize_refund(configured_secret, presented)  # RefundGateDecision
"""

from payments.services.checkout_service import (
    DEFAULT_TOTAL_AMOUNT_CENTS,
    CheckoutService,
)
from payments.services.onboarding_service import OnboardingService
from payments.services.refund_service import (
    RefundGateDecision,
    RefundService,
    authorize_refund,
)

__all__ = [
    "DEFAULT_TOTAL_AMOUNT_CENTS",
    "CheckoutService",
    "OnboardingService",
    "RefundGateDecision",
    "RefundService",
    "authorize_refund",
]
