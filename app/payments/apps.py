"""
Payments app configuration.

This app provides the marketplace payment surface:
- Checkout sessions with marketplace fee and host split
- Host account onboarding
- Shared-secret gated deposit refunds
- Stripe webhook verification and dispatch
"""

from django.apps import AppConfig
from django.core.signals import setting_changed


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"

    def ready(self):
        from payments.conf import get_payment_settings, reset_payment_settings

        # Register webhook handlers with the dispatcher
        from payments.webhooks import handlers  # noqa: F401

        setting_changed.connect(reset_payment_settings, dispatch_uid="payments.reset_settings")

        # Fail at boot on a bad payment configuration
        get_payment_settings()
