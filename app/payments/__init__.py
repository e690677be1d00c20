"""
Payments app for the rental marketplace.

This app handles:
- Checkout sessions charging rental plus refundable deposit, split to the host
- Host connected-account onboarding
- Deposit refunds behind a shared secret
- Stripe webhook verification and event handling

Usage:
    from payments.dependencies import get_checkout_service

    result = get_checkout_service().create_checkout_session(checkout_request)
"""
