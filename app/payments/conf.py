"""
Immutable payment configuration.

Django settings are read exactly once into a frozen PaymentSettings instance.
Services and adapters receive that instance through their constructor and
never look at django.conf.settings or the process environment themselves.

Usage:
    from payments.conf import get_payment_settings

    payment_settings = get_payment_settings()
    payment_settings.success_url
    # 'http://localhost:3000/?success=true&session_id={CHECKOUT_SESSION_ID}'

Note:
    get_payment_settings() is cached for the process lifetime. The cache is
    cleared on Django's setting_changed signal (see PaymentsConfig.ready) so
    override_settings works in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

# Stripe substitutes the real session id into this placeholder on redirect
CHECKOUT_SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"

# Settings whose change invalidates the cached PaymentSettings
PAYMENT_SETTING_NAMES = frozenset(
    {
        "STRIPE_SECRET_KEY",
        "STRIPE_WEBHOOK_SECRET",
        "STRIPE_WEBHOOK_TOLERANCE_SECONDS",
        "STRIPE_API_TIMEOUT_SECONDS",
        "REFUND_SECRET",
        "MARKETPLACE_FEE_PERCENT",
        "MARKETPLACE_CURRENCY",
        "CONNECT_ACCOUNT_COUNTRY",
        "CLIENT_URL",
        "CHECKOUT_RECORD_TTL_SECONDS",
    }
)


@dataclass(frozen=True)
class PaymentSettings:
    """
    Read-only configuration for the payment services.

    Attributes:
        stripe_secret_key: Provider API credential
        webhook_secret: Webhook signing secret (empty means unconfigured)
        webhook_tolerance_seconds: Maximum signature timestamp age
        api_timeout_seconds: Outbound HTTP timeout for provider calls
        refund_secret: Shared secret gating refunds (empty denies all)
        fee_percent: Marketplace fee as a decimal percent in [0, 100]
        currency: Lowercase ISO currency code for line items
        connect_country: Country for newly created host accounts
        client_url: Base URL of the web client, without trailing slash
        checkout_record_ttl_seconds: Lifetime of completed-session records
    """

    stripe_secret_key: str = ""
    webhook_secret: str = ""
    webhook_tolerance_seconds: int = 300
    api_timeout_seconds: int = 10
    refund_secret: str = ""
    fee_percent: Decimal = Decimal("0")
    currency: str = "eur"
    connect_country: str = "ES"
    client_url: str = "http://localhost:3000"
    checkout_record_ttl_seconds: int = 30 * 24 * 60 * 60

    def __post_init__(self):
        try:
            fee_percent = Decimal(str(self.fee_percent))
        except InvalidOperation as e:
            raise ImproperlyConfigured(
                f"MARKETPLACE_FEE_PERCENT must be a number, got {self.fee_percent!r}"
            ) from e
        if not fee_percent.is_finite() or not Decimal("0") <= fee_percent <= Decimal("100"):
            raise ImproperlyConfigured(
                f"MARKETPLACE_FEE_PERCENT must be between 0 and 100, got {fee_percent}"
            )
        if self.webhook_tolerance_seconds <= 0:
            raise ImproperlyConfigured("STRIPE_WEBHOOK_TOLERANCE_SECONDS must be positive")
        if self.api_timeout_seconds <= 0:
            raise ImproperlyConfigured("STRIPE_API_TIMEOUT_SECONDS must be positive")
        if not self.client_url:
            raise ImproperlyConfigured("CLIENT_URL must not be empty")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "fee_percent", fee_percent)
        object.__setattr__(self, "currency", self.currency.lower())
        object.__setattr__(self, "client_url", self.client_url.rstrip("/"))

    @classmethod
    def from_django_settings(cls) -> PaymentSettings:
        """Build the configuration from the current Django settings."""
        return cls(
            stripe_secret_key=getattr(settings, "STRIPE_SECRET_KEY", ""),
            webhook_secret=getattr(settings, "STRIPE_WEBHOOK_SECRET", ""),
            webhook_tolerance_seconds=int(
                getattr(settings, "STRIPE_WEBHOOK_TOLERANCE_SECONDS", 300)
            ),
            api_timeout_seconds=int(getattr(settings, "STRIPE_API_TIMEOUT_SECONDS", 10)),
            refund_secret=getattr(settings, "REFUND_SECRET", ""),
            fee_percent=getattr(settings, "MARKETPLACE_FEE_PERCENT", "0"),
            currency=getattr(settings, "MARKETPLACE_CURRENCY", "eur"),
            connect_country=getattr(settings, "CONNECT_ACCOUNT_COUNTRY", "ES"),
            client_url=getattr(settings, "CLIENT_URL", "http://localhost:3000"),
            checkout_record_ttl_seconds=int(
                getattr(settings, "CHECKOUT_RECORD_TTL_SECONDS", 30 * 24 * 60 * 60)
            ),
        )

    @property
    def success_url(self) -> str:
        """Checkout success redirect, with the session id placeholder."""
        return f"{self.client_url}/?success=true&session_id={CHECKOUT_SESSION_ID_PLACEHOLDER}"

    @property
    def cancel_url(self) -> str:
        """Checkout cancellation redirect."""
        return f"{self.client_url}/?canceled=true"

    @property
    def onboarding_refresh_url(self) -> str:
        """Where an expired onboarding link sends the host."""
        return f"{self.client_url}/onboarding/refresh"

    @property
    def onboarding_return_url(self) -> str:
        """Where the host lands after finishing onboarding."""
        return f"{self.client_url}/onboarding/complete"

    def __repr__(self) -> str:
        # Secrets stay out of logs and tracebacks
        return (
            f"PaymentSettings(fee_percent={self.fee_percent}, currency={self.currency!r}, "
            f"connect_country={self.connect_country!r}, client_url={self.client_url!r})"
        )


@lru_cache(maxsize=1)
def get_payment_settings() -> PaymentSettings:
    """Return the process-wide PaymentSettings instance."""
    payment_settings = PaymentSettings.from_django_settings()
    if not payment_settings.refund_secret:
        logger.warning("REFUND_SECRET is not set; every refund request will be denied")
    if not payment_settings.webhook_secret:
        logger.warning("STRIPE_WEBHOOK_SECRET is not set; every webhook will be rejected")
    return payment_settings


def reset_payment_settings(*, setting: str, **kwargs) -> None:
    """setting_changed receiver: drop the cached instance when a payment setting changes."""
    if setting in PAYMENT_SETTING_NAMES:
        get_payment_settings.cache_clear()
