"""Per-order structured logging."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class OrderLogService:
    """Binds the order code to every log line about that order."""

    def order_info(
        self,
        order_code: Optional[str],
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        logger.info(message, order_code=order_code, **(context or {}))

    def order_exception(self, exc: BaseException, order_code: Optional[str]) -> None:
        logger.error(
            "order.exception",
            order_code=order_code,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=exc,
        )
