"""Transactional product id allocator.

Issues identifiers from ``[PRODUCT_ID_MIN, PRODUCT_ID_MAX]`` by incrementing
the singleton ``ProductIdTracker`` row.  The read-increment-write runs in one
transaction holding the row lock, so concurrent callers are serialized by
the database: N callers get N distinct, consecutive ids.

Each allocation commits on its own.  An id handed to a caller whose product
insert later fails is not returned to the pool; the sequence tolerates
gaps, never reuse.

Lifecycle of the range::

    active --(allocation that sets last_id == PRODUCT_ID_MAX)--> exhausted
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from modules.products.constants import PRODUCT_ID_MAX
from modules.products.exceptions import (
    ProductIdRangeExhausted,
    ProductIdTrackerNotInitialized,
)

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductIdTrackerRepository

logger = structlog.get_logger(__name__)


class AllocatorStatus(str, Enum):
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class AllocatorState:
    """Read-only snapshot of the id range."""

    last_id: int
    max_id: int

    @property
    def remaining(self) -> int:
        return max(self.max_id - self.last_id, 0)

    @property
    def status(self) -> AllocatorStatus:
        if self.last_id >= self.max_id:
            return AllocatorStatus.EXHAUSTED
        return AllocatorStatus.ACTIVE


class ProductIdAllocator:
    """Owns the id tracker row; the only component that mutates it."""

    def __init__(
        self,
        repository: IProductIdTrackerRepository,
        max_id: int = PRODUCT_ID_MAX,
    ) -> None:
        self._repo = repository
        self._max_id = max_id

    def allocate_next_id(self) -> int:
        """Reserve and return the next product id.

        Raises:
            ProductIdTrackerNotInitialized: the tracker row is missing.
            ProductIdRangeExhausted: ``last_id`` already reached the ceiling;
                the tracker is left untouched.
        """
        with self._repo.atomic():
            tracker = self._repo.get_for_update()
            if tracker is None:
                logger.critical("product_id.tracker_missing")
                raise ProductIdTrackerNotInitialized(
                    "Product id tracker is not initialized."
                )
            if tracker.last_id >= self._max_id:
                logger.error(
                    "product_id.range_exhausted",
                    last_id=tracker.last_id,
                    max_id=self._max_id,
                )
                raise ProductIdRangeExhausted(
                    f"Product id range exhausted at {tracker.last_id}."
                )

            tracker.last_id += 1
            self._repo.save(tracker)
            allocated = tracker.last_id

        logger.info("product_id.allocated", product_id=allocated)
        return allocated

    def state(self) -> AllocatorState:
        """Return the current range snapshot without locking or mutating it.

        Raises:
            ProductIdTrackerNotInitialized: the tracker row is missing.
        """
        tracker = self._repo.get()
        if tracker is None:
            logger.critical("product_id.tracker_missing")
            raise ProductIdTrackerNotInitialized(
                "Product id tracker is not initialized."
            )
        return AllocatorState(last_id=tracker.last_id, max_id=self._max_id)
