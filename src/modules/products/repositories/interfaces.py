"""Product repository interfaces (the catalog storage port).

``IProductRepository`` extends ``IRepository[Product]`` with the row-locked
read used by updates and the atomic increment used by the stock ledger.
``IProductIdTrackerRepository`` gives the allocator access to the
singleton counter row.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository, ITransactional

if TYPE_CHECKING:
    from modules.products.models import Product, ProductIdTracker


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional["Product"]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Must be called inside ``atomic()``.  Returns ``None`` if the
        product does not exist.
        """

    @abstractmethod
    def apply_stock_delta(
        self, id: int, delta: int, floor: Optional[int] = None
    ) -> Optional[int]:
        """Add ``delta`` to the stored quantity as one atomic storage operation.

        When ``floor`` is given the row is only updated if the resulting
        quantity stays ``>= floor``.  Returns the new quantity, or ``None``
        when no row was updated (missing product or floor violated).
        """


class IProductIdTrackerRepository(ITransactional):
    """Repository contract for the singleton id tracker row."""

    @abstractmethod
    def get(self) -> Optional["ProductIdTracker"]:
        """Read the tracker without locking it."""

    @abstractmethod
    def get_for_update(self) -> Optional["ProductIdTracker"]:
        """Read the tracker holding an exclusive row lock until commit."""

    @abstractmethod
    def save(self, tracker: "ProductIdTracker") -> "ProductIdTracker":
        """Persist the tracker."""
