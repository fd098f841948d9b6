"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Every repository also exposes ``atomic()``, the transaction scope of the
storage port: writes issued inside the block commit together or are rolled
back when any exception (cancellation included) leaves the block.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ContextManager, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ITransactional(ABC):
    """Anything that can open a transaction scope on the backing store."""

    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        """Return a context manager wrapping a single atomic unit of work."""


class IRepository(ITransactional, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Remove an entity by ID."""
