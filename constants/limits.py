"""
Business limits for the product catalog and purchase orders.
"""
from decimal import Decimal

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

PRICE_MIN = Decimal("0.01")
PRICE_MAX = Decimal("999999.99")

MIN_LINES_PER_ORDER = 1
MAX_LINES_PER_ORDER = 50

# Row IDs are 32-bit signed integers
ID_MIN = 1
ID_MAX = 2**31 - 1
