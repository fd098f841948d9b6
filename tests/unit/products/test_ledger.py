"""Unit tests for StockLedger.

Covers:
- increment / decrement arithmetic, including stock going negative.
- Non-existent products.
- Guarded mode (allow_negative=False): InsufficientStock, row untouched;
  increments stay unguarded.
- Non-positive adjustment quantities.
- ``updated_at`` refreshed by every adjustment.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from modules.products.exceptions import (
    InsufficientStock,
    InvalidProductData,
    ProductNotFound,
)
from modules.products.ledger import StockLedger
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _make_product(**overrides) -> Product:
    defaults = {
        "id": 100001,
        "name": "Widget",
        "price": Decimal("19.99"),
        "quantity": 10,
    }
    defaults.update(overrides)
    product = Product(**defaults)
    product.save(force_insert=True)
    return product


@pytest.fixture()
def ledger():
    return StockLedger(ProductDjangoRepository())


@pytest.fixture()
def guarded_ledger():
    return StockLedger(ProductDjangoRepository(), allow_negative=False)


# ===========================================================================
# Arithmetic
# ===========================================================================


class TestAdjustStock:
    def test_increment_returns_new_quantity(self, ledger):
        _make_product()
        assert ledger.increment_stock(100001, 5) == 15
        assert Product.objects.get(id=100001).quantity == 15

    def test_decrement_below_zero_is_allowed(self, ledger):
        _make_product()
        ledger.increment_stock(100001, 5)
        assert ledger.decrement_stock(100001, 20) == -5
        assert Product.objects.get(id=100001).quantity == -5

    def test_increment_then_decrement_restores_quantity(self, ledger):
        _make_product(quantity=42)
        ledger.increment_stock(100001, 7)
        assert ledger.decrement_stock(100001, 7) == 42

    def test_signed_delta(self, ledger):
        _make_product()
        assert ledger.adjust_stock(100001, -3) == 7

    def test_other_products_untouched(self, ledger):
        _make_product()
        _make_product(id=100002, name="Gadget", quantity=3)

        ledger.increment_stock(100001, 1)

        assert Product.objects.get(id=100002).quantity == 3

    @freeze_time("2026-03-01 12:00:00")
    def test_updated_at_refreshed(self, ledger):
        with freeze_time("2026-01-01 08:00:00"):
            _make_product()

        ledger.increment_stock(100001, 1)

        product = Product.objects.get(id=100001)
        assert product.updated_at == datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert product.created_at == datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)


# ===========================================================================
# Errors
# ===========================================================================


class TestAdjustStockErrors:
    def test_unknown_product_raises_not_found(self, ledger):
        with pytest.raises(ProductNotFound):
            ledger.increment_stock(100001, 5)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, ledger, quantity):
        _make_product()
        with pytest.raises(InvalidProductData):
            ledger.decrement_stock(100001, quantity)
        assert Product.objects.get(id=100001).quantity == 10

    def test_guarded_decrement_raises_insufficient_stock(self, guarded_ledger):
        _make_product()

        with pytest.raises(InsufficientStock):
            guarded_ledger.decrement_stock(100001, 11)

        assert Product.objects.get(id=100001).quantity == 10

    def test_guarded_decrement_to_zero_succeeds(self, guarded_ledger):
        _make_product()
        assert guarded_ledger.decrement_stock(100001, 10) == 0

    def test_guarded_unknown_product_raises_not_found(self, guarded_ledger):
        with pytest.raises(ProductNotFound):
            guarded_ledger.decrement_stock(100001, 1)

    def test_guarded_increment_on_negative_row_succeeds(self, guarded_ledger):
        _make_product(quantity=-8)
        assert guarded_ledger.increment_stock(100001, 3) == -5
        assert Product.objects.get(id=100001).quantity == -5

    def test_guarded_decrement_on_negative_row_raises(self, guarded_ledger):
        _make_product(quantity=-8)
        with pytest.raises(InsufficientStock):
            guarded_ledger.decrement_stock(100001, 1)


class TestLedgerWithMockRepository:
    def test_passes_floor_only_for_guarded_removals(self):
        repo = MagicMock()
        repo.apply_stock_delta.return_value = 3

        StockLedger(repo).decrement_stock(100001, 2)
        repo.apply_stock_delta.assert_called_with(100001, -2, floor=None)

        StockLedger(repo, allow_negative=False).decrement_stock(100001, 2)
        repo.apply_stock_delta.assert_called_with(100001, -2, floor=0)

        StockLedger(repo, allow_negative=False).increment_stock(100001, 2)
        repo.apply_stock_delta.assert_called_with(100001, 2, floor=None)
