"""Django ORM implementation of the catalog repositories.

Satisfies ``IProductRepository`` and ``IProductIdTrackerRepository`` using
Django's QuerySet API.  Look-ups follow the Null Object pattern (``None``
for a missing row); the Service Layer decides what a missing entity means.

Database faults are logged here, once, and re-raised as domain errors
(including failures to begin or commit the transaction scope):
``IntegrityError`` becomes ``ProductConflict``, any other ``DatabaseError``
becomes ``StorageFailure``.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ContextManager, Iterator, List, Optional

import structlog
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from modules.products.constants import ID_TRACKER_PK
from modules.products.exceptions import ProductConflict, StorageFailure
from modules.products.models import Product, ProductIdTracker
from modules.products.repositories.interfaces import (
    IProductIdTrackerRepository,
    IProductRepository,
)

logger = structlog.get_logger(__name__)


@contextmanager
def _storage_errors(operation: str, **context: Any) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        logger.error(
            "catalog.storage_conflict", operation=operation, error=str(exc), **context
        )
        raise ProductConflict(f"Write rejected by the database ({operation}).") from exc
    except DatabaseError as exc:
        logger.error(
            "catalog.storage_failure", operation=operation, error=str(exc), **context
        )
        raise StorageFailure(f"Database failure during {operation}.") from exc


@contextmanager
def _atomic() -> Iterator[None]:
    # Covers BEGIN and COMMIT as well as the statements in the block.
    with _storage_errors("transaction"):
        with transaction.atomic():
            yield


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def atomic(self) -> ContextManager[None]:
        return _atomic()

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or non-integer IDs.
        """
        try:
            product_id = int(id)
        except (TypeError, ValueError):
            return None
        with _storage_errors("get_product", product_id=product_id):
            return Product.objects.filter(id=product_id).first()

    def list(self) -> List[Product]:
        with _storage_errors("list_products"):
            return list(Product.objects.all())

    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product.

        New instances are force-inserted: an id that is already taken fails
        with ``ProductConflict`` instead of silently overwriting the row.
        """
        with _storage_errors("save_product", product_id=entity.id):
            with transaction.atomic():
                entity.save(force_insert=entity._state.adding)
        logger.info("product.saved", product_id=entity.id)
        return entity

    def delete(self, id: int) -> bool:
        """Hard-delete a product by ID.

        Returns ``True`` if a row was removed, ``False`` if none existed.
        """
        with _storage_errors("delete_product", product_id=id):
            with transaction.atomic():
                deleted, _ = Product.objects.filter(id=id).delete()
        if deleted:
            logger.info("product.deleted", product_id=id)
        return bool(deleted)

    def get_for_update(self, id: int) -> Optional[Product]:
        with _storage_errors("lock_product", product_id=id):
            return Product.objects.select_for_update().filter(id=id).first()

    def apply_stock_delta(
        self, id: int, delta: int, floor: Optional[int] = None
    ) -> Optional[int]:
        """Run ``UPDATE … SET quantity = quantity + delta`` and read the result back.

        The UPDATE takes the row lock, so the read inside the same
        transaction sees exactly this adjustment on top of every earlier one.
        """
        with _storage_errors("adjust_stock", product_id=id, delta=delta):
            with transaction.atomic():
                queryset = Product.objects.filter(id=id)
                if floor is not None:
                    queryset = queryset.filter(quantity__gte=floor - delta)
                updated = queryset.update(
                    quantity=F("quantity") + delta, updated_at=timezone.now()
                )
                if not updated:
                    return None
                return (
                    Product.objects.filter(id=id)
                    .values_list("quantity", flat=True)
                    .get()
                )


class ProductIdTrackerDjangoRepository(IProductIdTrackerRepository):
    """Concrete tracker repository backed by Django ORM."""

    def atomic(self) -> ContextManager[None]:
        return _atomic()

    def get(self) -> Optional[ProductIdTracker]:
        with _storage_errors("read_id_tracker"):
            return ProductIdTracker.objects.filter(id=ID_TRACKER_PK).first()

    def get_for_update(self) -> Optional[ProductIdTracker]:
        with _storage_errors("lock_id_tracker"):
            return (
                ProductIdTracker.objects.select_for_update()
                .filter(id=ID_TRACKER_PK)
                .first()
            )

    def save(self, tracker: ProductIdTracker) -> ProductIdTracker:
        with _storage_errors("save_id_tracker", last_id=tracker.last_id):
            with transaction.atomic():
                tracker.save()
        return tracker
