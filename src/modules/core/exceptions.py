"""Error taxonomy and the API exception handler.

Domain exceptions carry an explicit ``ErrorKind``; the handler below is the
single place where a kind becomes an HTTP status.  Every error body has the
same shape::

    {
        "type": "client_error" | "validation_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": "..." | None}],
    }
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

import structlog
from django.conf import settings
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RANGE_EXHAUSTED = "range_exhausted"
    STORAGE = "storage"
    CONFIGURATION = "configuration"


HTTP_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.RANGE_EXHAUSTED: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class DomainError(Exception):
    """Base class for errors raised by the service layer.

    Subclasses set ``kind`` (how the error is classified) and ``code``
    (a stable machine-readable identifier).  ``errors`` optionally holds
    per-field details as ``{"attr": ..., "detail": ...}`` dicts.
    """

    kind: ErrorKind = ErrorKind.CONFIGURATION
    code: str = "error"

    def __init__(
        self, detail: str = "", errors: Optional[List[Dict[str, Any]]] = None
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.errors = errors or []


# ---------------------------------------------------------------------------
# DRF exception handler
# ---------------------------------------------------------------------------


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Render domain, DRF and unexpected errors in the standard error format."""
    if isinstance(exc, DomainError):
        return _domain_error_response(exc)

    response = drf_exception_handler(exc, context)
    if response is not None:
        response.data = _format_api_exception(exc, response)
        return response

    view = context.get("view")
    logger.error(
        "api.unhandled_error",
        view=view.__class__.__name__ if view else None,
        error=str(exc),
        exc_info=exc,
    )
    if settings.DEBUG:
        return None
    return Response(
        _error_body(
            "server_error",
            [{"code": "internal_error", "detail": "Internal server error.", "attr": None}],
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _domain_error_response(exc: DomainError) -> Response:
    status_code = HTTP_STATUS_BY_KIND[exc.kind]
    if exc.kind is ErrorKind.VALIDATION:
        error_type = "validation_error"
    elif status_code >= 500:
        error_type = "server_error"
    else:
        error_type = "client_error"

    errors = [
        {
            "code": exc.code,
            "detail": item.get("detail", exc.detail),
            "attr": item.get("attr"),
        }
        for item in exc.errors
    ] or [{"code": exc.code, "detail": exc.detail, "attr": None}]
    return Response(_error_body(error_type, errors), status=status_code)


def _format_api_exception(exc: Exception, response: Response) -> Dict[str, Any]:
    if isinstance(exc, drf_exceptions.ValidationError):
        return _error_body("validation_error", _flatten(exc.detail))

    error_type = "server_error" if response.status_code >= 500 else "client_error"
    # Http404 and Django's PermissionDenied arrive without a ``detail``
    detail = getattr(exc, "detail", None) or response.data.get("detail", str(exc))
    code = getattr(detail, "code", None) or "error"
    return _error_body(
        error_type, [{"code": code, "detail": str(detail), "attr": None}]
    )


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            nested = key if attr is None else f"{attr}.{key}"
            errors.extend(_flatten(value, nested))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten(item, attr))
        return errors
    return [
        {
            "code": getattr(detail, "code", None) or "invalid",
            "detail": str(detail),
            "attr": attr,
        }
    ]


def _error_body(error_type: str, errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": error_type, "errors": errors}
