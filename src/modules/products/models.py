"""Product catalog models.

- ``Product``: the catalog entry.  Its primary key is **not** generated by
  the database; ``ProductIdAllocator`` is the only source of ids, so no
  insert-mode toggling is ever needed.
- ``ProductIdTracker``: single-row table holding the last issued product id.
  Seeded with ``(1, 99999)`` by the initial migration.

Check constraints mirror the invariants: ids inside the allocatable range,
``last_id`` never above the range ceiling, exactly one tracker identity.
"""

from __future__ import annotations

import structlog
from django.core.validators import (
    MaxLengthValidator,
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
)
from django.db import models

from modules.core.models import TimestampedModel
from modules.products.constants import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    ID_TRACKER_PK,
    ID_TRACKER_SEED,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX,
    PRICE_MAX_DIGITS,
    PRICE_MIN,
    PRODUCT_ID_MAX,
    PRODUCT_ID_MIN,
)

logger = structlog.get_logger(__name__)


class Product(TimestampedModel):
    """Product aggregate root.

    ``quantity`` is a plain ``IntegerField``: whether stock may go negative
    is a ledger policy (``CATALOG_ALLOW_NEGATIVE_STOCK``), not a schema rule.
    """

    id = models.IntegerField(
        primary_key=True,
        validators=[
            MinValueValidator(PRODUCT_ID_MIN),
            MaxValueValidator(PRODUCT_ID_MAX),
        ],
    )
    name = models.CharField(max_length=NAME_MAX_LENGTH)
    quantity = models.IntegerField(default=0)
    price = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        validators=[MinValueValidator(PRICE_MIN), MaxValueValidator(PRICE_MAX)],
    )
    description = models.TextField(
        null=True,
        blank=True,
        default=None,
        validators=[
            MinLengthValidator(DESCRIPTION_MIN_LENGTH),
            MaxLengthValidator(DESCRIPTION_MAX_LENGTH),
        ],
    )

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(id__gte=PRODUCT_ID_MIN)
                & models.Q(id__lte=PRODUCT_ID_MAX),
                name="products_id_in_range",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=PRICE_MIN),
                name="products_price_min",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=self.id,
                name=self.name,
                quantity=self.quantity,
            )

    def __str__(self) -> str:
        return f"{self.id} - {self.name}"


class ProductIdTracker(models.Model):
    """Singleton counter row backing product id allocation."""

    id = models.IntegerField(primary_key=True, default=ID_TRACKER_PK)
    last_id = models.IntegerField(default=ID_TRACKER_SEED)

    class Meta:
        db_table = "product_id_trackers"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(id=ID_TRACKER_PK),
                name="product_id_trackers_singleton",
            ),
            models.CheckConstraint(
                condition=models.Q(last_id__lte=PRODUCT_ID_MAX),
                name="product_id_trackers_last_id_max",
            ),
        ]

    @property
    def is_exhausted(self) -> bool:
        return self.last_id >= PRODUCT_ID_MAX

    def __str__(self) -> str:
        return f"ProductIdTracker(last_id={self.last_id})"
