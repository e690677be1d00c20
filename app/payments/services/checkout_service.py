"""
Checkout service for starting rental payments.

A checkout session charges the renter for the rental total plus a
refundable deposit. The funds go to the host's connected account and the
marketplace keeps a percentage of the rental total as its fee. The
deposit never carries a fee.

Usage:
    from payments.services import CheckoutService

    service = CheckoutService(provider, payment_settings)
    result = service.create_checkout_session(
        CheckoutRequest(
            item_id="bike-42",
            nights=3,
            host_connect_id="acct_123",
            total_amount_cents=10000,
            deposit_cents=5000,
        )
    )
    result.url  # hosted payment page
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService

from payments.exceptions import PaymentValidationError
from payments.fees import application_fee_or_none
from payments.types import CreateCheckoutSessionParams, LineItem

if TYPE_CHECKING:
    from payments.conf import PaymentSettings
    from payments.protocols import PaymentProvider
    from payments.types import CheckoutRequest, CheckoutSessionResult


# Rental total charged when the client sends none
DEFAULT_TOTAL_AMOUNT_CENTS = 100

RENTAL_LINE_ITEM_NAME = "Lloguer: {item_id}"
DEPOSIT_LINE_ITEM_NAME = "Dipòsit reemborsable: {item_id}"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class CheckoutService(BaseService):
    """
    Creates checkout sessions with the marketplace fee split.

    Dependencies are injected so tests can pass a fake provider.
    """

    def __init__(self, provider: PaymentProvider, payment_settings: PaymentSettings):
        self.provider = provider
        self.payment_settings = payment_settings

    def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSessionResult:
        """
        Validate the request and create a checkout session.

        Args:
            request: Item, nights, host account and amounts

        Returns:
            CheckoutSessionResult with the hosted page URL and session id

        Raises:
            PaymentValidationError: Missing fields or invalid amounts
                (raised before any provider call)
            UpstreamError: Provider rejected the session
        """
        logger = self.get_logger()

        total_cents, deposit_cents = self._validate(request)
        fee_cents = application_fee_or_none(total_cents, self.payment_settings.fee_percent)

        params = CreateCheckoutSessionParams(
            line_items=[
                LineItem(
                    name=RENTAL_LINE_ITEM_NAME.format(item_id=request.item_id),
                    unit_amount_cents=total_cents,
                ),
                LineItem(
                    name=DEPOSIT_LINE_ITEM_NAME.format(item_id=request.item_id),
                    unit_amount_cents=deposit_cents,
                ),
            ],
            currency=self.payment_settings.currency,
            destination_account=request.host_connect_id,
            success_url=self.payment_settings.success_url,
            cancel_url=self.payment_settings.cancel_url,
            application_fee_cents=fee_cents,
            metadata={
                "item_id": str(request.item_id),
                "nights": str(request.nights),
                "host_connect_id": request.host_connect_id,
            },
            idempotency_key=request.idempotency_key,
        )

        logger.info(
            "Creating checkout session",
            extra={
                "item_id": request.item_id,
                "nights": request.nights,
                "host_connect_id": request.host_connect_id,
                "total_amount_cents": total_cents,
                "deposit_cents": deposit_cents,
                "application_fee_cents": fee_cents,
            },
        )

        result = self.provider.create_checkout_session(params)

        logger.info(
            "Checkout session created",
            extra={"session_id": result.id, "item_id": request.item_id},
        )
        return result

    def _validate(self, request: CheckoutRequest) -> tuple[int, int]:
        """Check the request and return (total_cents, deposit_cents) with defaults applied."""
        missing = self.validate_required(
            item_id=request.item_id,
            nights=request.nights,
            host_connect_id=request.host_connect_id,
        )
        if missing:
            raise PaymentValidationError(
                "Missing required fields",
                details={"missing": missing},
            )

        if not _is_int(request.nights) or request.nights <= 0:
            raise PaymentValidationError(
                "nights must be a positive integer",
                details={"nights": request.nights},
            )

        total_cents = (
            DEFAULT_TOTAL_AMOUNT_CENTS
            if request.total_amount_cents is None
            else request.total_amount_cents
        )
        deposit_cents = 0 if request.deposit_cents is None else request.deposit_cents

        for field_name, value in (
            ("total_amount_cents", total_cents),
            ("deposit_cents", deposit_cents),
        ):
            if not _is_int(value) or value < 0:
                raise PaymentValidationError(
                    f"{field_name} must be a non-negative integer",
                    details={field_name: value},
                )

        return total_cents, deposit_cents
