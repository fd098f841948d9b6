"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Input is
validated by the Pydantic DTOs; domain exceptions are left to propagate to
``modules.core.exceptions.api_exception_handler``, which maps their
``ErrorKind`` to a status code.

Routes (prefix ``/api/v1/``)::

    GET    products/                                  list
    POST   products/                                  create
    GET    products/{id}/                             retrieve
    PUT    products/{id}/                             update (full replacement)
    DELETE products/{id}/                             destroy
    PUT    products/add-to-stock/{id}/{quantity}/     increment stock
    PUT    products/decrement-stock/{id}/{quantity}/  decrement stock
    GET    products/id-range/                         id allocation state
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Type, TypeVar

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import (
    CreateProductDTO,
    StockAdjustmentDTO,
    UpdateProductDTO,
)
from modules.products.exceptions import InvalidProductData
from modules.products.models import Product
from modules.products.serializers import (
    IdRangeSerializer,
    ProductSerializer,
    StockLevelSerializer,
)
from modules.products.services import build_product_service

logger = structlog.get_logger(__name__)

DTO = TypeVar("DTO", bound=BaseModel)


def _build_dto(dto_class: Type[DTO], data: Any) -> DTO:
    if not isinstance(data, Mapping):
        raise InvalidProductData("Request body must be a JSON object.")
    try:
        return dto_class.model_validate(dict(data))
    except PydanticValidationError as exc:
        error = InvalidProductData.from_pydantic(exc)
        logger.info(
            "product.invalid_request", dto=dto_class.__name__, errors=error.errors
        )
        raise error from exc


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD and stock operations.

    Does **not** extend ``ModelViewSet`` — all ORM access goes through
    the service/repository layer.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    pagination_class = None
    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_product_service()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        products = self._service.list_products()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._service.get_product(int(pk))
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        dto = _build_dto(CreateProductDTO, request.data)
        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/"""
        dto = _build_dto(UpdateProductDTO, request.data)
        product = self._service.update_product(int(pk), dto)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        self._service.delete_product(int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    @action(
        detail=False,
        methods=["put"],
        url_path=r"add-to-stock/(?P<product_id>-?\d+)/(?P<quantity>-?\d+)",
        url_name="add-to-stock",
    )
    def increment_stock(
        self, request: Request, product_id: str, quantity: str
    ) -> Response:
        """PUT /api/v1/products/add-to-stock/{product_id}/{quantity}/"""
        dto = _build_dto(
            StockAdjustmentDTO, {"product_id": product_id, "quantity": quantity}
        )
        new_quantity = self._service.increment_stock(dto.product_id, dto.quantity)
        return Response(
            StockLevelSerializer({"id": dto.product_id, "quantity": new_quantity}).data
        )

    @action(
        detail=False,
        methods=["put"],
        url_path=r"decrement-stock/(?P<product_id>-?\d+)/(?P<quantity>-?\d+)",
        url_name="decrement-stock",
    )
    def decrement_stock(
        self, request: Request, product_id: str, quantity: str
    ) -> Response:
        """PUT /api/v1/products/decrement-stock/{product_id}/{quantity}/"""
        dto = _build_dto(
            StockAdjustmentDTO, {"product_id": product_id, "quantity": quantity}
        )
        new_quantity = self._service.decrement_stock(dto.product_id, dto.quantity)
        return Response(
            StockLevelSerializer({"id": dto.product_id, "quantity": new_quantity}).data
        )

    # ------------------------------------------------------------------
    # Id range
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="id-range", url_name="id-range")
    def id_range(self, request: Request) -> Response:
        """GET /api/v1/products/id-range/"""
        state = self._service.id_allocation_state()
        return Response(
            IdRangeSerializer(
                {
                    "last_id": state.last_id,
                    "max_id": state.max_id,
                    "remaining": state.remaining,
                    "status": state.status.value,
                }
            ).data
        )
