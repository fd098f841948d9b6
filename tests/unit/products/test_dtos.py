"""Unit tests for Product DTOs (Pydantic v2).

Covers:
- Valid creation with defaults.
- Immutability (frozen).
- Inclusive boundaries for quantity, price, description and product id.
- Price precision and normalization.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import (
    CreateProductDTO,
    StockAdjustmentDTO,
    UpdateProductDTO,
)

pytestmark = pytest.mark.unit


def _payload(**overrides):
    data = {"name": "Widget", "quantity": 10, "price": "19.99"}
    data.update(overrides)
    return data


class TestCreateProductDTO:
    def test_valid_creation(self):
        dto = CreateProductDTO(**_payload())
        assert dto.name == "Widget"
        assert dto.quantity == 10
        assert dto.price == Decimal("19.99")
        assert dto.description is None

    def test_frozen(self):
        dto = CreateProductDTO(**_payload())
        with pytest.raises(ValidationError):
            dto.name = "Other"

    def test_name_is_stripped(self):
        assert CreateProductDTO(**_payload(name="  Widget  ")).name == "Widget"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 101])
    def test_invalid_name(self, name):
        with pytest.raises(ValidationError, match="Name must be between"):
            CreateProductDTO(**_payload(name=name))

    @pytest.mark.parametrize("quantity", [1, 100000])
    def test_quantity_bounds_inclusive(self, quantity):
        assert CreateProductDTO(**_payload(quantity=quantity)).quantity == quantity

    @pytest.mark.parametrize("quantity", [0, -1, 100001])
    def test_quantity_out_of_range(self, quantity):
        with pytest.raises(ValidationError, match="Quantity must be between"):
            CreateProductDTO(**_payload(quantity=quantity))

    @pytest.mark.parametrize("price", ["1", "9999999.99"])
    def test_price_bounds_inclusive(self, price):
        assert CreateProductDTO(**_payload(price=price)).price == Decimal(price)

    @pytest.mark.parametrize("price", ["0.99", "0", "10000000"])
    def test_price_out_of_range(self, price):
        with pytest.raises(ValidationError, match="Price must be between"):
            CreateProductDTO(**_payload(price=price))

    def test_price_with_three_decimals_rejected(self):
        with pytest.raises(ValidationError, match="at most 2 decimal places"):
            CreateProductDTO(**_payload(price="19.999"))

    def test_price_normalized_to_cents(self):
        assert str(CreateProductDTO(**_payload(price="5")).price) == "5.00"

    @pytest.mark.parametrize("description", ["abcde", "x" * 500])
    def test_description_bounds_inclusive(self, description):
        dto = CreateProductDTO(**_payload(description=description))
        assert dto.description == description

    @pytest.mark.parametrize("description", ["abcd", "x" * 501])
    def test_description_out_of_range(self, description):
        with pytest.raises(ValidationError, match="Description must be between"):
            CreateProductDTO(**_payload(description=description))

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            CreateProductDTO(name="Widget", quantity=1)


class TestUpdateProductDTO:
    def test_same_rules_as_create(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(**_payload(quantity=0))

    def test_has_no_id_field(self):
        dto = UpdateProductDTO(**_payload(id=123456))
        assert not hasattr(dto, "id")


class TestStockAdjustmentDTO:
    def test_parses_path_strings(self):
        dto = StockAdjustmentDTO(product_id="100001", quantity="5")
        assert dto.product_id == 100001
        assert dto.quantity == 5

    @pytest.mark.parametrize("product_id", [99999, 1000000])
    def test_product_id_out_of_range(self, product_id):
        with pytest.raises(ValidationError, match="Product ID must be between"):
            StockAdjustmentDTO(product_id=product_id, quantity=1)

    @pytest.mark.parametrize("quantity", [0, -5, 100001])
    def test_quantity_out_of_range(self, quantity):
        with pytest.raises(ValidationError, match="Quantity must be between"):
            StockAdjustmentDTO(product_id=100001, quantity=quantity)
