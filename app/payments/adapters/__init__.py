"""
Payment adapters for external services.

All external payment API calls go through these adapters to ensure
consistent error handling, timeouts, idempotency, and observability.

Usage:
    from payments.adapters import StripeAdapter

    adapter = StripeAdapter(get_payment_settings())
    result = adapter.create_refund("pi_xxx", amount_cents=5000)
"""

from payments.adapters.stripe_adapter import (
    IdempotencyKeyGenerator,
    StripeAdapter,
)

__all__ = [
    "IdempotencyKeyGenerator",
    "StripeAdapter",
]
