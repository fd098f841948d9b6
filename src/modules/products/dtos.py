"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (views) and the Service
layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for a full product replacement (every
  mutable field is supplied; ``id`` is never part of it).
- ``StockAdjustmentDTO``: input for increment / decrement stock.

Ranges are inclusive: quantity 1–100000, price 1–9999999.99 with at most
two decimal places, product id 100000–999999.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.products.constants import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_MAX,
    PRICE_MIN,
    PRODUCT_ID_MAX,
    PRODUCT_ID_MIN,
    QUANTITY_MAX,
    QUANTITY_MIN,
    STOCK_ADJUSTMENT_MAX,
    STOCK_ADJUSTMENT_MIN,
)

_CENTS = Decimal("0.01")


# ---------------------------------------------------------------------------
# Product drafts
# ---------------------------------------------------------------------------


class ProductDraftDTO(BaseModel):
    """Fields shared by create and update requests."""

    model_config = ConfigDict(frozen=True)

    name: str
    quantity: int
    price: Decimal
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str) -> str:
        v = v.strip()
        if not v or len(v) > NAME_MAX_LENGTH:
            raise ValueError(
                f"Name must be between 1 and {NAME_MAX_LENGTH} characters."
            )
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_in_range(cls, v: int) -> int:
        if not QUANTITY_MIN <= v <= QUANTITY_MAX:
            raise ValueError(
                f"Quantity must be between {QUANTITY_MIN} and {QUANTITY_MAX}."
            )
        return v

    @field_validator("price")
    @classmethod
    def price_in_range(cls, v: Decimal) -> Decimal:
        if not PRICE_MIN <= v <= PRICE_MAX:
            raise ValueError(f"Price must be between {PRICE_MIN} and {PRICE_MAX}.")
        if v != v.quantize(_CENTS):
            raise ValueError("Price must have at most 2 decimal places.")
        return v.quantize(_CENTS)

    @field_validator("description")
    @classmethod
    def description_length(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not (
            DESCRIPTION_MIN_LENGTH <= len(v) <= DESCRIPTION_MAX_LENGTH
        ):
            raise ValueError(
                f"Description must be between {DESCRIPTION_MIN_LENGTH} and "
                f"{DESCRIPTION_MAX_LENGTH} characters."
            )
        return v


class CreateProductDTO(ProductDraftDTO):
    """Immutable DTO for product creation requests."""


class UpdateProductDTO(ProductDraftDTO):
    """Immutable DTO for product update requests (full replacement)."""


# ---------------------------------------------------------------------------
# Stock
# ---------------------------------------------------------------------------


class StockAdjustmentDTO(BaseModel):
    """Immutable DTO for increment / decrement stock requests."""

    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: int

    @field_validator("product_id")
    @classmethod
    def product_id_in_range(cls, v: int) -> int:
        if not PRODUCT_ID_MIN <= v <= PRODUCT_ID_MAX:
            raise ValueError(
                f"Product ID must be between {PRODUCT_ID_MIN} and {PRODUCT_ID_MAX}."
            )
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_in_range(cls, v: int) -> int:
        if not STOCK_ADJUSTMENT_MIN <= v <= STOCK_ADJUSTMENT_MAX:
            raise ValueError(
                f"Quantity must be between {STOCK_ADJUSTMENT_MIN} and "
                f"{STOCK_ADJUSTMENT_MAX}."
            )
        return v
