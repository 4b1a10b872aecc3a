import time
from typing import Any, Dict

import structlog
from django.conf import settings
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()


def _check_database() -> Dict[str, Any]:
    start = time.monotonic()
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def _check_recurrence() -> Dict[str, Any]:
    """Reports whether the host platform wired its gateway and extractor.

    Informational only: subscriptions can still be listed and inspected
    without them, so this never flips the overall status.
    """
    gateway = bool(settings.RECURRENCE_PAYMENT_GATEWAY)
    extractor = bool(settings.RECURRENCE_ORDER_EXTRACTOR)
    return {
        "status": "configured" if gateway and extractor else "unconfigured",
        "payment_gateway": gateway,
        "order_extractor": extractor,
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    try:
        services["database"] = _check_database()
    except Exception:
        services["database"] = {"status": "down"}
        overall_healthy = False
        logger.error("health_check_db_failure", exc_info=True)

    services["recurrence"] = _check_recurrence()

    status_label = "healthy" if overall_healthy else "unhealthy"
    logger.info(
        "health_check_completed",
        status=status_label,
        recurrence=services["recurrence"]["status"],
    )

    return JsonResponse(
        {
            "status": status_label,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if overall_healthy else 503,
    )
