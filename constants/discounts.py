"""
Tiered discount rules applied to order totals. Rates add up, they do not compound.
"""
from decimal import Decimal

# 10% when the subtotal is strictly above this amount
SUBTOTAL_THRESHOLD = Decimal("500")
SUBTOTAL_DISCOUNT_RATE = Decimal("0.10")

# extra 5% when the order has strictly more distinct products than this
PRODUCT_COUNT_THRESHOLD = 5
PRODUCT_COUNT_DISCOUNT_RATE = Decimal("0.05")

MONEY_QUANTUM = Decimal("0.01")
