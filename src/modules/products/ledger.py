"""Stock ledger: signed quantity adjustments without lost updates.

Adjustments are applied by the storage layer as a single
``quantity = quantity + delta`` expression, never as read/add/write-back in
Python.  Adjustments to one product are therefore linearizable; different
products never contend with each other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.products.exceptions import (
    InsufficientStock,
    InvalidProductData,
    ProductNotFound,
)

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class StockLedger:
    """Applies stock deltas through ``IProductRepository.apply_stock_delta``.

    ``allow_negative`` keeps the historical behaviour of letting a decrement
    push the quantity below zero.  With ``allow_negative=False`` such a
    decrement fails with ``InsufficientStock`` and the row is not touched.
    Increments are never guarded, so a row left negative can be refilled.
    """

    def __init__(self, repository: IProductRepository, allow_negative: bool = True) -> None:
        self._repo = repository
        self._allow_negative = allow_negative

    def adjust_stock(self, product_id: int, delta: int) -> int:
        """Add ``delta`` (signed) to the product's quantity; return the new quantity.

        Raises:
            ProductNotFound: no product with ``product_id``.
            InsufficientStock: negative stock is disabled and the result
                would be below zero.
        """
        log = logger.bind(product_id=product_id, delta=delta)
        # Only removals are guarded; an increment may start from a negative row.
        floor = 0 if not self._allow_negative and delta < 0 else None

        with self._repo.atomic():
            quantity = self._repo.apply_stock_delta(product_id, delta, floor=floor)
            if quantity is None:
                if floor is not None and self._repo.get_by_id(product_id) is not None:
                    log.warning("stock.insufficient")
                    raise InsufficientStock(
                        f"Product {product_id}: cannot remove {-delta} units."
                    )
                log.warning("stock.product_not_found")
                raise ProductNotFound(f"Product {product_id} not found.")

        log.info("stock.adjusted", quantity=quantity)
        return quantity

    def increment_stock(self, product_id: int, quantity: int) -> int:
        _require_positive(quantity)
        return self.adjust_stock(product_id, quantity)

    def decrement_stock(self, product_id: int, quantity: int) -> int:
        _require_positive(quantity)
        return self.adjust_stock(product_id, -quantity)


def _require_positive(quantity: int) -> None:
    if quantity <= 0:
        raise InvalidProductData(
            "Quantity must be a positive integer.",
            errors=[{"attr": "quantity", "detail": "Quantity must be a positive integer."}],
        )
