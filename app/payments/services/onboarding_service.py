"""
Onboarding service for host connected accounts.

Creates an express connected account for a host and returns a
single-use onboarding link. No local account record is kept; the
provider is the source of truth for onboarding status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService

from payments.exceptions import PaymentValidationError
from payments.types import CreateConnectedAccountParams, OnboardingResult

if TYPE_CHECKING:
    from payments.conf import PaymentSettings
    from payments.protocols import PaymentProvider


class OnboardingService(BaseService):
    """Creates connected accounts and their onboarding links."""

    def __init__(self, provider: PaymentProvider, payment_settings: PaymentSettings):
        self.provider = provider
        self.payment_settings = payment_settings

    def create_account_link(
        self, email: str | None, idempotency_key: str | None = None
    ) -> OnboardingResult:
        """
        Create a connected account for ``email`` and an onboarding link for it.

        If the link step fails the account already exists on the provider
        side; the error is surfaced and nothing is rolled back.

        Raises:
            PaymentValidationError: Missing or blank email
            UpstreamError: Provider rejected either step
        """
        logger = self.get_logger()

        if not isinstance(email, str) or self.validate_required(email=email):
            raise PaymentValidationError("Missing email")
        email = email.strip()

        account = self.provider.create_connected_account(
            CreateConnectedAccountParams(
                email=email,
                country=self.payment_settings.connect_country,
                idempotency_key=idempotency_key,
            )
        )
        logger.info(
            "Created connected account",
            extra={"account_id": account.id, "country": self.payment_settings.connect_country},
        )

        link = self.provider.create_onboarding_link(
            account.id,
            refresh_url=self.payment_settings.onboarding_refresh_url,
            return_url=self.payment_settings.onboarding_return_url,
            idempotency_key=idempotency_key,
        )
        logger.info(
            "Created onboarding link",
            extra={"account_id": account.id, "expires_at": link.expires_at},
        )

        return OnboardingResult(url=link.url, account_id=account.id)
