"""Product domain exceptions.

Raised by the Service Layer (and by the repositories for storage faults).
Each exception declares its ``ErrorKind``; the API exception handler maps
the kind to an HTTP status, so views never translate them one by one.
"""

from __future__ import annotations

from typing import Any, Dict, List

from modules.core.exceptions import DomainError, ErrorKind


class InvalidProductData(DomainError):
    """Input is malformed or outside the allowed ranges."""

    kind = ErrorKind.VALIDATION
    code = "invalid"

    @classmethod
    def from_pydantic(cls, exc: Any) -> InvalidProductData:
        """Build from a ``pydantic.ValidationError`` keeping per-field messages."""
        errors: List[Dict[str, Any]] = [
            {
                "attr": ".".join(str(part) for part in error["loc"]) or None,
                "detail": error["msg"],
            }
            for error in exc.errors()
        ]
        return cls("Invalid product data.", errors=errors)


class ProductNotFound(DomainError):
    """The requested product does not exist."""

    kind = ErrorKind.NOT_FOUND
    code = "product_not_found"


class ProductConflict(DomainError):
    """The store rejected a write because it collides with existing data."""

    kind = ErrorKind.CONFLICT
    code = "product_conflict"


class InsufficientStock(DomainError):
    """A decrement would take the quantity below zero while negative stock is disabled."""

    kind = ErrorKind.CONFLICT
    code = "insufficient_stock"


class ProductIdRangeExhausted(DomainError):
    """Every identifier in the product id range has been issued."""

    kind = ErrorKind.RANGE_EXHAUSTED
    code = "product_id_range_exhausted"


class ProductIdTrackerNotInitialized(DomainError):
    """The id tracker row is missing; the database was not provisioned."""

    kind = ErrorKind.CONFIGURATION
    code = "product_id_tracker_not_initialized"


class StorageFailure(DomainError):
    """The database failed while reading or writing catalog data."""

    kind = ErrorKind.STORAGE
    code = "storage_failure"
