import time
from typing import Any, Dict

import structlog
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.products.constants import ID_TRACKER_PK
from modules.products.models import ProductIdTracker

logger = structlog.get_logger(__name__)


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    # Check database
    try:
        start = time.monotonic()
        conn = connections["default"]
        conn.ensure_connection()
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        services["database"] = {
            "status": "up",
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except DatabaseError:
        services["database"] = {"status": "down"}
        overall_healthy = False
        logger.error("health_check_db_failure")

    # Check the product id tracker (provisioning + remaining range)
    if overall_healthy:
        try:
            tracker = ProductIdTracker.objects.filter(id=ID_TRACKER_PK).first()
        except DatabaseError:
            tracker = None
            logger.error("health_check_tracker_query_failure")
        if tracker is None:
            services["id_allocator"] = {"status": "missing"}
            overall_healthy = False
            logger.error("health_check_tracker_missing")
        else:
            services["id_allocator"] = {
                "status": "exhausted" if tracker.is_exhausted else "active",
                "last_id": tracker.last_id,
            }

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=status_code,
    )
