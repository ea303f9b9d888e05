"""
Order pricing: subtotal of line prices and the tiered discount.

Rules (additive, applied once to the subtotal):
  - 10% when the subtotal is above 500
  - another 5% when the order has more than 5 distinct products
An order without products totals exactly 0. Results are rounded to cents
with ROUND_HALF_UP.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from constants.discounts import (
    MONEY_QUANTUM,
    PRODUCT_COUNT_DISCOUNT_RATE,
    PRODUCT_COUNT_THRESHOLD,
    SUBTOTAL_DISCOUNT_RATE,
    SUBTOTAL_THRESHOLD,
)

ZERO = Decimal("0.00")


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def subtotal_of(prices: Iterable[Optional[Decimal]]) -> Decimal:
    """
    Sum of line prices before discounts. Missing prices count as zero.
    """
    return sum((p or ZERO for p in prices), ZERO)


def discount_rate(subtotal: Decimal, distinct_product_count: int) -> Decimal:
    rate = Decimal("0")
    if subtotal > SUBTOTAL_THRESHOLD:
        rate += SUBTOTAL_DISCOUNT_RATE
    if distinct_product_count > PRODUCT_COUNT_THRESHOLD:
        rate += PRODUCT_COUNT_DISCOUNT_RATE
    return rate


def compute_total(subtotal: Decimal, distinct_product_count: int) -> Decimal:
    """
    Final order total for `subtotal` spread over `distinct_product_count` products.
    """
    if distinct_product_count == 0:
        return ZERO
    rate = discount_rate(subtotal, distinct_product_count)
    return round_money(subtotal * (1 - rate))
