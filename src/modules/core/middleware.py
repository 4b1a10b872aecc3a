import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger()


class CorrelationIdMiddleware:
    """Binds a correlation ID to every log line emitted while serving a request.

    The ID comes from the ``X-Request-ID`` header or is a fresh UUID4, and is
    echoed back in the response header so dashboard calls (e.g. a
    subscription cancellation) can be traced end to end.  The bound context
    is cleared once the response is produced.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )

        started = time.monotonic()
        logger.info("request_started")

        try:
            response = self.get_response(request)
            logger.info(
                "request_finished",
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response[REQUEST_ID_HEADER] = cid
        return response
