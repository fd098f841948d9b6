"""Product repositories package."""

from modules.products.repositories.django_repository import (
    ProductDjangoRepository,
    ProductIdTrackerDjangoRepository,
)
from modules.products.repositories.interfaces import (
    IProductIdTrackerRepository,
    IProductRepository,
)

__all__ = [
    "IProductIdTrackerRepository",
    "IProductRepository",
    "ProductDjangoRepository",
    "ProductIdTrackerDjangoRepository",
]
