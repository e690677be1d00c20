"""
URL configuration for the payments app.

Routes:
    - POST /create-checkout-session - Create a rental checkout session
    - POST /create-account-link - Onboard a host
    - POST /refund-deposit - Refund a deposit
    - POST /webhook - Stripe webhook endpoint

Included at the site root by config/urls.py.
"""

from django.urls import path

from payments.views import CreateAccountLinkView, CreateCheckoutSessionView, RefundDepositView
from payments.webhooks.views import stripe_webhook

app_name = "payments"

urlpatterns = [
    path(
        "create-checkout-session",
        CreateCheckoutSessionView.as_view(),
        name="create_checkout_session",
    ),
    path("create-account-link", CreateAccountLinkView.as_view(), name="create_account_link"),
    path("refund-deposit", RefundDepositView.as_view(), name="refund_deposit"),
    # Webhook endpoints
    path("webhook", stripe_webhook, name="stripe_webhook"),
]
