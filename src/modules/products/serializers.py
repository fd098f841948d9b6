"""Product DRF serializers for API output.

Input is validated by the Pydantic DTOs in ``dtos.py``; these serializers
only render service results (and document them in the OpenAPI schema).
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "quantity",
            "price",
            "description",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StockLevelSerializer(serializers.Serializer):
    """Result of a stock adjustment."""

    id = serializers.IntegerField()
    quantity = serializers.IntegerField()


class IdRangeSerializer(serializers.Serializer):
    """Snapshot of the product id range."""

    last_id = serializers.IntegerField()
    max_id = serializers.IntegerField()
    remaining = serializers.IntegerField()
    status = serializers.CharField()
