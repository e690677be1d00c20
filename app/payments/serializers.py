"""
DRF serializers for payments app.

This module provides serializers for:
- Checkout session requests and responses
- Host onboarding link requests and responses
- Deposit refund requests and responses
- The shared error envelope

Request fields are optional at the serializer level: presence rules and
their messages ("Missing required fields", "Missing email",
"payment_intent required") belong to the services. Serializers only
reject values of the wrong type.

Related files:
    - services/: Business rules applied to the parsed requests
    - views.py: Payment API views

Usage:
    serializer = CheckoutSessionRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=False)
    checkout_request = serializer.to_checkout_request(idempotency_key)
"""

from __future__ import annotations

from rest_framework import serializers

from payments.types import CheckoutRequest, RefundRequest


# =============================================================================
# Requests
# =============================================================================


class CheckoutSessionRequestSerializer(serializers.Serializer):
    """
    Body of POST /create-checkout-session.

    Fields:
        itemId: Listing identifier
        nights: Number of nights
        hostConnectId: Host's connected account id
        totalAmountCents: Rental total in cents (defaults to 100)
        depositCents: Refundable deposit in cents (defaults to 0)
    """

    itemId = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    nights = serializers.IntegerField(required=False, allow_null=True)
    hostConnectId = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    totalAmountCents = serializers.IntegerField(required=False, allow_null=True)
    depositCents = serializers.IntegerField(required=False, allow_null=True)

    def to_checkout_request(self, idempotency_key: str | None = None) -> CheckoutRequest:
        data = self.validated_data
        return CheckoutRequest(
            item_id=data.get("itemId"),
            nights=data.get("nights"),
            host_connect_id=data.get("hostConnectId"),
            total_amount_cents=data.get("totalAmountCents"),
            deposit_cents=data.get("depositCents"),
            idempotency_key=idempotency_key,
        )


class AccountLinkRequestSerializer(serializers.Serializer):
    """Body of POST /create-account-link."""

    email = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class RefundDepositRequestSerializer(serializers.Serializer):
    """
    Body of POST /refund-deposit.

    Fields:
        payment_intent: Payment reference to refund
        amount_cents: Amount to refund; omit for a full refund
    """

    payment_intent = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    amount_cents = serializers.IntegerField(required=False, allow_null=True)

    def to_refund_request(self, idempotency_key: str | None = None) -> RefundRequest:
        data = self.validated_data
        return RefundRequest(
            payment_intent_id=data.get("payment_intent"),
            amount_cents=data.get("amount_cents"),
            idempotency_key=idempotency_key,
        )


# =============================================================================
# Responses
# =============================================================================


class CheckoutSessionResponseSerializer(serializers.Serializer):
    url = serializers.URLField()
    sessionId = serializers.CharField()
    paymentIntent = serializers.CharField(allow_null=True)


class AccountLinkResponseSerializer(serializers.Serializer):
    url = serializers.URLField()
    accountId = serializers.CharField()


class RefundSummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    amount = serializers.IntegerField()
    currency = serializers.CharField()
    status = serializers.CharField()
    payment_intent = serializers.CharField(allow_null=True)


class RefundDepositResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    refund = RefundSummarySerializer()


class ErrorResponseSerializer(serializers.Serializer):
    """Error envelope shared by all JSON payment endpoints."""

    error = serializers.CharField()
    error_code = serializers.CharField()
    details = serializers.DictField(required=False)
