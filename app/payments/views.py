"""
DRF views for payments app.

This module provides API views for:
- Checkout session creation
- Host onboarding links
- Deposit refunds (shared-secret gated)

The Stripe webhook endpoint is a plain Django view in
payments.webhooks.views because it must read the raw request bytes.

Related files:
    - services/: CheckoutService, OnboardingService, RefundService
    - dependencies.py: Per-request service factories
    - serializers.py: Request/response serializers
    - urls.py: URL routing

Endpoints:
    POST /create-checkout-session - Create checkout session
    POST /create-account-link - Create host account and onboarding link
    POST /refund-deposit - Refund a deposit (x-refund-secret header)

Error responses:
    Every PaymentError is rendered as {"error", "error_code"[, "details"]}
    with the status carried by the exception (400, 403 or 500).
"""

from __future__ import annotations

import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from payments import dependencies
from payments.exceptions import PaymentError, PaymentValidationError
from payments.serializers import (
    AccountLinkRequestSerializer,
    AccountLinkResponseSerializer,
    CheckoutSessionRequestSerializer,
    CheckoutSessionResponseSerializer,
    ErrorResponseSerializer,
    RefundDepositRequestSerializer,
    RefundDepositResponseSerializer,
)

logger = logging.getLogger(__name__)


IDEMPOTENCY_KEY_PARAMETER = OpenApiParameter(
    name="Idempotency-Key",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.HEADER,
    required=False,
    description="Forwarded to the payment provider so a retried request is not executed twice.",
)


def _idempotency_key(request) -> str | None:
    return request.headers.get("Idempotency-Key") or None


def _request_data(request):
    try:
        return request.data
    except ParseError as e:
        raise PaymentValidationError("Request body is not valid JSON") from e
    except UnsupportedMediaType as e:
        raise PaymentValidationError("Request body must be JSON") from e


def _validated(serializer):
    """Run serializer validation, mapping type errors to PaymentValidationError."""
    if not serializer.is_valid():
        raise PaymentValidationError("Invalid request body", details=serializer.errors)
    return serializer


def _error_response(error: PaymentError, operation: str) -> Response:
    log = logger.error if error.status_code >= 500 else logger.warning
    log(
        f"{operation} failed",
        extra={"error_code": error.error_code, "status_code": error.status_code},
    )
    return Response(error.to_dict(), status=error.status_code)


class CreateCheckoutSessionView(APIView):
    """
    Create a checkout session for a rental.

    POST /create-checkout-session

    Request:
        {"itemId", "nights", "hostConnectId", "totalAmountCents", "depositCents"}

    Response:
        200 OK: {"url", "sessionId", "paymentIntent"}
        400 Bad Request: Missing or invalid fields
        500 Internal Server Error: Provider rejected the session
    """

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="create_checkout_session",
        summary="Create checkout session",
        description=(
            "Create a hosted checkout session charging the rental total plus a "
            "refundable deposit. Funds go to the host's connected account; the "
            "marketplace fee is taken from the rental total only."
        ),
        request=CheckoutSessionRequestSerializer,
        parameters=[IDEMPOTENCY_KEY_PARAMETER],
        responses={
            200: CheckoutSessionResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Provider error"),
        },
        tags=["Payments - Checkout"],
    )
    def post(self, request):
        try:
            serializer = _validated(CheckoutSessionRequestSerializer(data=_request_data(request)))
            result = dependencies.get_checkout_service().create_checkout_session(
                serializer.to_checkout_request(_idempotency_key(request))
            )
        except PaymentError as e:
            return _error_response(e, "create-checkout-session")

        return Response(
            {
                "url": result.url,
                "sessionId": result.id,
                "paymentIntent": result.payment_intent_id,
            },
            status=status.HTTP_200_OK,
        )


class CreateAccountLinkView(APIView):
    """
    Create a connected account for a host and return its onboarding link.

    POST /create-account-link

    Request:
        {"email"}

    Response:
        200 OK: {"url", "accountId"}
        400 Bad Request: Missing email
        500 Internal Server Error: Provider rejected account or link creation
    """

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="create_account_link",
        summary="Create host onboarding link",
        request=AccountLinkRequestSerializer,
        parameters=[IDEMPOTENCY_KEY_PARAMETER],
        responses={
            200: AccountLinkResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing email"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Provider error"),
        },
        tags=["Payments - Onboarding"],
    )
    def post(self, request):
        try:
            serializer = _validated(AccountLinkRequestSerializer(data=_request_data(request)))
            result = dependencies.get_onboarding_service().create_account_link(
                serializer.validated_data.get("email"),
                idempotency_key=_idempotency_key(request),
            )
        except PaymentError as e:
            return _error_response(e, "create-account-link")

        return Response({"url": result.url, "accountId": result.account_id})


class RefundDepositView(APIView):
    """
    Refund a rental deposit.

    POST /refund-deposit

    Headers:
        x-refund-secret: Shared refund secret

    Request:
        {"payment_intent", "amount_cents"}  (omit amount_cents for a full refund)

    Response:
        200 OK: {"success": true, "refund": {id, amount, currency, status, payment_intent}}
        403 Forbidden: Missing or wrong secret (checked before the body is read)
        400 Bad Request: Missing payment_intent or invalid amount
        500 Internal Server Error: Provider rejected the refund
    """

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="refund_deposit",
        summary="Refund deposit",
        request=RefundDepositRequestSerializer,
        parameters=[
            OpenApiParameter(
                name="x-refund-secret",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.HEADER,
                required=True,
                description="Shared secret authorizing refunds.",
            ),
            IDEMPOTENCY_KEY_PARAMETER,
        ],
        responses={
            200: RefundDepositResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid refund secret"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Provider error"),
        },
        tags=["Payments - Refunds"],
    )
    def post(self, request):
        idempotency_key = _idempotency_key(request)

        def load_request():
            # request.data is parsed lazily, so this runs only after authorization
            serializer = _validated(RefundDepositRequestSerializer(data=_request_data(request)))
            return serializer.to_refund_request(idempotency_key)

        try:
            result = dependencies.get_refund_service().refund_deposit(
                request.headers.get("x-refund-secret"),
                load_request,
            )
        except PaymentError as e:
            return _error_response(e, "refund-deposit")

        return Response({"success": True, "refund": result.to_summary()})
