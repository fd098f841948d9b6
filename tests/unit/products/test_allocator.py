"""Unit tests for ProductIdAllocator.

Covers:
- allocate_next_id: sequential ids starting at 100000, tracker updated.
- Exhaustion at the range ceiling without mutating the tracker.
- Missing tracker row.
- state(): last_id, remaining and status snapshots.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from modules.products.allocator import (
    AllocatorState,
    AllocatorStatus,
    ProductIdAllocator,
)
from modules.products.constants import PRODUCT_ID_MAX, PRODUCT_ID_MIN
from modules.products.exceptions import (
    ProductIdRangeExhausted,
    ProductIdTrackerNotInitialized,
)
from modules.products.models import ProductIdTracker
from modules.products.repositories.django_repository import (
    ProductIdTrackerDjangoRepository,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def allocator(id_tracker):
    return ProductIdAllocator(ProductIdTrackerDjangoRepository())


# ===========================================================================
# allocate_next_id (mocked repository)
# ===========================================================================


class TestAllocateWithMockRepository:
    def test_increments_and_saves_tracker(self, mock_repo):
        tracker = ProductIdTracker(last_id=100041)
        mock_repo.get_for_update.return_value = tracker

        product_id = ProductIdAllocator(mock_repo).allocate_next_id()

        assert product_id == 100042
        assert tracker.last_id == 100042
        mock_repo.save.assert_called_once_with(tracker)

    def test_missing_tracker_raises(self, mock_repo):
        mock_repo.get_for_update.return_value = None

        with pytest.raises(ProductIdTrackerNotInitialized):
            ProductIdAllocator(mock_repo).allocate_next_id()
        mock_repo.save.assert_not_called()

    def test_exhausted_range_does_not_save(self, mock_repo):
        mock_repo.get_for_update.return_value = ProductIdTracker(last_id=PRODUCT_ID_MAX)

        with pytest.raises(ProductIdRangeExhausted):
            ProductIdAllocator(mock_repo).allocate_next_id()
        mock_repo.save.assert_not_called()

    def test_custom_ceiling(self, mock_repo):
        mock_repo.get_for_update.return_value = ProductIdTracker(last_id=100009)

        with pytest.raises(ProductIdRangeExhausted):
            ProductIdAllocator(mock_repo, max_id=100009).allocate_next_id()


# ===========================================================================
# allocate_next_id (database)
# ===========================================================================


class TestAllocateNextId:
    def test_first_id_is_range_minimum(self, allocator):
        assert allocator.allocate_next_id() == PRODUCT_ID_MIN
        assert ProductIdTracker.objects.get().last_id == PRODUCT_ID_MIN

    def test_ids_are_consecutive(self, allocator):
        ids = [allocator.allocate_next_id() for _ in range(3)]
        assert ids == [100000, 100001, 100002]
        assert ProductIdTracker.objects.get().last_id == 100002

    def test_last_id_in_range(self, allocator, id_tracker):
        id_tracker.last_id = PRODUCT_ID_MAX - 1
        id_tracker.save()

        assert allocator.allocate_next_id() == PRODUCT_ID_MAX

    def test_exhausted_raises_and_keeps_tracker(self, allocator, id_tracker):
        id_tracker.last_id = PRODUCT_ID_MAX
        id_tracker.save()

        with pytest.raises(ProductIdRangeExhausted):
            allocator.allocate_next_id()

        assert ProductIdTracker.objects.get().last_id == PRODUCT_ID_MAX

    def test_exhaustion_is_logged(self, allocator, id_tracker, caplog):
        id_tracker.last_id = PRODUCT_ID_MAX
        id_tracker.save()

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ProductIdRangeExhausted):
                allocator.allocate_next_id()

        assert any(
            "product_id.range_exhausted" in r.getMessage() for r in caplog.records
        )

    def test_missing_tracker_raises(self, allocator):
        ProductIdTracker.objects.all().delete()

        with pytest.raises(ProductIdTrackerNotInitialized):
            allocator.allocate_next_id()


# ===========================================================================
# state
# ===========================================================================


class TestState:
    def test_initial_state(self, allocator):
        state = allocator.state()
        assert state.last_id == 99999
        assert state.max_id == PRODUCT_ID_MAX
        assert state.remaining == 900000
        assert state.status is AllocatorStatus.ACTIVE

    def test_state_does_not_mutate(self, allocator):
        allocator.state()
        allocator.state()
        assert ProductIdTracker.objects.get().last_id == 99999

    def test_state_after_allocation(self, allocator):
        allocator.allocate_next_id()
        assert allocator.state().remaining == 899999

    def test_missing_tracker_raises(self, allocator):
        ProductIdTracker.objects.all().delete()
        with pytest.raises(ProductIdTrackerNotInitialized):
            allocator.state()


class TestAllocatorState:
    def test_exhausted(self):
        state = AllocatorState(last_id=PRODUCT_ID_MAX, max_id=PRODUCT_ID_MAX)
        assert state.status is AllocatorStatus.EXHAUSTED
        assert state.remaining == 0

    def test_status_value_is_plain_string(self):
        state = AllocatorState(last_id=100000, max_id=PRODUCT_ID_MAX)
        assert state.status.value == "active"
