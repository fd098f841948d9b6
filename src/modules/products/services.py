"""Product service layer (Use Cases).

Composes the id allocator, the stock ledger and the product repository
into the catalog operations exposed to the API.

- Create: the id is allocated (and committed) first, then the product is
  inserted in its own transaction.  A failed insert leaves the id consumed.
- Update / delete of a missing product raise ``ProductNotFound``.
- Stock changes go exclusively through ``StockLedger``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog

from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.allocator import AllocatorState, ProductIdAllocator
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.ledger import StockLedger
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives its collaborators via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        allocator: ProductIdAllocator,
        ledger: StockLedger,
    ) -> None:
        self._repo = repository
        self._allocator = allocator
        self._ledger = ledger

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product under a freshly allocated id.

        Raises:
            ProductIdRangeExhausted: no ids left.
            ProductIdTrackerNotInitialized: tracker row missing.
            ProductConflict / StorageFailure: the insert failed; the
                allocated id is not reused.
        """
        product_id = self._allocator.allocate_next_id()
        log = logger.bind(product_id=product_id)

        with self._repo.atomic():
            product = Product(
                id=product_id,
                name=dto.name,
                quantity=dto.quantity,
                price=dto.price,
                description=dto.description,
            )
            product = self._repo.save(product)

        log.info("product.created")
        return product

    def update_product(self, id: int, dto: UpdateProductDTO) -> Product:
        """Replace every mutable field of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        log = logger.bind(product_id=id)

        with self._repo.atomic():
            product = self._repo.get_for_update(id)
            if not product:
                log.warning("product.update_not_found")
                raise ProductNotFound(f"Product {id} not found.")

            product.name = dto.name
            product.quantity = dto.quantity
            product.price = dto.price
            product.description = dto.description
            product = self._repo.save(product)

        log.info("product.updated")
        return product

    def delete_product(self, id: int) -> None:
        """Delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        with self._repo.atomic():
            product = self._repo.get_by_id(id)
            if not product:
                logger.warning("product.delete_not_found", product_id=id)
                raise ProductNotFound(f"Product {id} not found.")
            self._repo.delete(id)
        logger.info("product.deleted", product_id=id)

    def increment_stock(self, id: int, quantity: int) -> int:
        """Add ``quantity`` units; return the new stock level."""
        return self._ledger.increment_stock(id, quantity)

    def decrement_stock(self, id: int, quantity: int) -> int:
        """Remove ``quantity`` units; return the new stock level."""
        return self._ledger.decrement_stock(id, quantity)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        return self._repo.list()

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def id_allocation_state(self) -> AllocatorState:
        return self._allocator.state()


def build_product_service() -> ProductService:
    """Wire ``ProductService`` with the Django ORM repositories and settings."""
    from django.conf import settings

    from modules.products.allocator import ProductIdAllocator
    from modules.products.ledger import StockLedger
    from modules.products.repositories.django_repository import (
        ProductDjangoRepository,
        ProductIdTrackerDjangoRepository,
    )

    repository = ProductDjangoRepository()
    return ProductService(
        repository=repository,
        allocator=ProductIdAllocator(ProductIdTrackerDjangoRepository()),
        ledger=StockLedger(
            repository, allow_negative=settings.CATALOG_ALLOW_NEGATIVE_STOCK
        ),
    )
