"""Catalog constants.

Product identifiers are issued sequentially from a single bounded range by
``ProductIdAllocator``; the tracker row starts one below the floor so the
first allocation yields ``PRODUCT_ID_MIN``.
"""

from decimal import Decimal

PRODUCT_ID_MIN = 100000
PRODUCT_ID_MAX = 999999

ID_TRACKER_PK = 1
ID_TRACKER_SEED = PRODUCT_ID_MIN - 1

NAME_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 5
DESCRIPTION_MAX_LENGTH = 500

QUANTITY_MIN = 1
QUANTITY_MAX = 100000

PRICE_MIN = Decimal("1")
PRICE_MAX = Decimal("9999999.99")
PRICE_MAX_DIGITS = 18
PRICE_DECIMAL_PLACES = 2

STOCK_ADJUSTMENT_MIN = 1
STOCK_ADJUSTMENT_MAX = 100000
