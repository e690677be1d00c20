"""
Marketplace fee computation.

The fee is a percentage of the rental total, rounded half-up to a whole
cent and clamped to [0, total]. The refundable deposit never carries a fee.

Usage:
    from payments.fees import calculate_application_fee

    calculate_application_fee(10000, Decimal("10"))   # 1000
    calculate_application_fee(999, Decimal("12.5"))   # 125 (124.875 rounds up)
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def calculate_application_fee(total_amount_cents: int, fee_percent: Decimal | int | str) -> int:
    """
    Return the marketplace fee in cents for a rental total.

    Args:
        total_amount_cents: Rental total in cents (deposit excluded)
        fee_percent: Fee as a percent, e.g. Decimal("10") for 10%

    Returns:
        round_half_up(total * percent / 100), clamped to [0, total]
    """
    if total_amount_cents <= 0:
        return 0
    fee = (Decimal(total_amount_cents) * Decimal(str(fee_percent)) / Decimal("100")).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return max(0, min(int(fee), total_amount_cents))


def application_fee_or_none(
    total_amount_cents: int, fee_percent: Decimal | int | str
) -> int | None:
    """Like calculate_application_fee, but None when there is no fee to collect."""
    fee = calculate_application_fee(total_amount_cents, fee_percent)
    return fee or None
