"""Translates creation failures into a user-facing message."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from modules.recurrence.constants import MSG_CREATION_FAILED

if TYPE_CHECKING:
    from modules.recurrence.interfaces import Localizer, OrderLogger


class ErrorExceptionHandler:
    def __init__(self, localizer: Localizer, order_logger: OrderLogger) -> None:
        self._i18n = localizer
        self._order_logger = order_logger

    def handle(self, exc: BaseException, order_code: Optional[str]) -> str:
        """Log ``exc`` against the order and return the front-end message.

        The internal error kind is only logged, never part of the message.
        """
        self._order_logger.order_exception(exc, order_code)
        return self._i18n.get_dashboard(MSG_CREATION_FAILED, order_code)
