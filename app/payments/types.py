"""
Data types exchanged between payment views, services and the provider.

All monetary amounts are integers in the currency's smallest unit
(cents for EUR). Provider results keep the full provider response in
``raw_response`` for debugging.

Request types:
    CheckoutRequest, RefundRequest

Provider parameter types:
    LineItem, CreateCheckoutSessionParams, CreateConnectedAccountParams

Provider result types:
    CheckoutSessionResult, ConnectedAccountResult, OnboardingLinkResult,
    RefundResult, WebhookEvent

Service result types:
    OnboardingResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Requests
# =============================================================================


@dataclass
class CheckoutRequest:
    """
    Client request to start a rental checkout.

    Attributes:
        item_id: Listing identifier
        nights: Number of nights booked
        host_connect_id: Host's connected account id (acct_xxx)
        total_amount_cents: Rental total; None falls back to the default total
        deposit_cents: Refundable deposit; None means no deposit
        idempotency_key: Optional client-supplied idempotency key
    """

    item_id: str | None
    nights: int | None
    host_connect_id: str | None
    total_amount_cents: int | None = None
    deposit_cents: int | None = None
    idempotency_key: str | None = None


@dataclass
class RefundRequest:
    """
    Parsed body of a deposit refund request.

    Attributes:
        payment_intent_id: Payment reference to refund against
        amount_cents: Amount to refund; None refunds the remaining balance
        idempotency_key: Optional client-supplied idempotency key
    """

    payment_intent_id: str | None
    amount_cents: int | None = None
    idempotency_key: str | None = None


# =============================================================================
# Provider Parameters
# =============================================================================


@dataclass
class LineItem:
    """One priced line on a checkout session."""

    name: str
    unit_amount_cents: int
    quantity: int = 1

    @property
    def total_cents(self) -> int:
        return self.unit_amount_cents * self.quantity


@dataclass
class CreateCheckoutSessionParams:
    """
    Parameters for creating a hosted checkout session with a destination split.

    Attributes:
        line_items: Priced lines shown to the renter
        currency: ISO 4217 currency code
        destination_account: Connected account that receives the funds
        success_url: Redirect after payment (with session id placeholder)
        cancel_url: Redirect when the renter abandons checkout
        application_fee_cents: Marketplace fee; None means no fee instruction
        metadata: Key-value pairs attached to the session
        idempotency_key: Optional key for idempotent creation

    Raises:
        ValueError: On an explicit non-positive fee (a zero fee must be None)
            or a fee greater than the line-item total
    """

    line_items: list[LineItem]
    currency: str
    destination_account: str
    success_url: str
    cancel_url: str
    application_fee_cents: int | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    idempotency_key: str | None = None

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if not self.line_items:
            raise ValueError("line_items must not be empty")
        if not self.destination_account:
            raise ValueError("destination_account is required")
        if not self.currency:
            raise ValueError("currency is required")
        if self.application_fee_cents is not None:
            if self.application_fee_cents <= 0:
                raise ValueError("application_fee_cents must be positive or None")
            if self.application_fee_cents > self.total_cents:
                raise ValueError("application_fee_cents must not exceed the total")

    @property
    def total_cents(self) -> int:
        return sum(item.total_cents for item in self.line_items)


@dataclass
class CreateConnectedAccountParams:
    """
    Parameters for creating a host's connected account.

    Attributes:
        email: Host email address
        country: ISO 3166 country code for the account
        account_type: Connected account type (default: 'express')
        capabilities: Capabilities to request on creation
        idempotency_key: Optional key for idempotent creation
    """

    email: str
    country: str
    account_type: str = "express"
    capabilities: tuple[str, ...] = ("card_payments", "transfers")
    idempotency_key: str | None = None

    def __post_init__(self) -> None:
        if not self.email:
            raise ValueError("email is required")
        if not self.country:
            raise ValueError("country is required")


# =============================================================================
# Provider Results
# =============================================================================


@dataclass
class CheckoutSessionResult:
    """
    Result from checkout session creation.

    Attributes:
        id: Checkout session id (cs_xxx)
        url: Hosted payment page the renter is redirected to
        payment_intent_id: Payment reference, if the provider assigned one yet
        raw_response: Full provider response dict
    """

    id: str
    url: str
    payment_intent_id: str | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)


@dataclass
class ConnectedAccountResult:
    """Result from connected account creation."""

    id: str
    email: str | None = None
    country: str | None = None
    requested_capabilities: list[str] = field(default_factory=list)
    raw_response: dict[str, Any] = field(default_factory=dict)


@dataclass
class OnboardingLinkResult:
    """
    Result from onboarding link creation.

    Attributes:
        url: Single-use onboarding URL
        expires_at: Unix timestamp after which the link is dead
        raw_response: Full provider response dict
    """

    url: str
    expires_at: int | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)


@dataclass
class RefundResult:
    """
    Result from refund creation.

    Attributes:
        id: Refund ID (re_xxx)
        amount_cents: Refunded amount in cents
        currency: Currency code
        status: Refund status (succeeded, pending, failed)
        payment_intent_id: Original payment reference
        metadata: Attached metadata
        raw_response: Full provider response dict
    """

    id: str
    amount_cents: int
    currency: str
    status: str
    payment_intent_id: str | None
    metadata: dict[str, str] = field(default_factory=dict)
    raw_response: dict[str, Any] = field(default_factory=dict)

    def to_summary(self) -> dict[str, Any]:
        """Client-facing subset of the refund."""
        return {
            "id": self.id,
            "amount": self.amount_cents,
            "currency": self.currency,
            "status": self.status,
            "payment_intent": self.payment_intent_id,
        }


@dataclass
class WebhookEvent:
    """
    A verified provider notification.

    Attributes:
        id: Event id (evt_xxx)
        type: Event kind, e.g. 'checkout.session.completed'
        data_object: The object the event is about (session, intent, charge)
        created: Unix timestamp of event creation
        livemode: Whether the event came from live mode
        raw: Full verified event dict
    """

    id: str
    type: str
    data_object: dict[str, Any] = field(default_factory=dict)
    created: int | None = None
    livemode: bool = False
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def object_id(self) -> str | None:
        return self.data_object.get("id")

    @classmethod
    def from_dict(cls, event: dict[str, Any]) -> WebhookEvent:
        """Build from a verified event dict as delivered by the provider."""
        data = event.get("data") or {}
        return cls(
            id=event.get("id", ""),
            type=event.get("type", ""),
            data_object=dict(data.get("object") or {}),
            created=event.get("created"),
            livemode=bool(event.get("livemode", False)),
            raw=event,
        )


# =============================================================================
# Service Results
# =============================================================================


@dataclass
class OnboardingResult:
    """Onboarding link handed back to the host, with the new account id."""

    url: str
    account_id: str
