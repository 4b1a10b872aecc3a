"""Gateway response classification and handler dispatch.

Handlers are registered per result type in ``RESPONSE_HANDLERS``;
``get_response_handler`` picks the one matching the runtime type of the
materialized result.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Mapping, Type

import structlog

from modules.recurrence.constants import (
    FAILED_RESPONSE_STATUS,
    SUBSCRIPTION_ORDER_TRANSITIONS,
)
from modules.recurrence.exceptions import HandlerResolutionError
from modules.recurrence.models import Subscription

if TYPE_CHECKING:
    from modules.recurrence.dtos import Order
    from modules.recurrence.interfaces import OrderLogger
    from modules.recurrence.repositories.interfaces import ISubscriptionRepository

logger = structlog.get_logger(__name__)


def is_successful(response: Mapping[str, Any]) -> bool:
    """A response without ``status`` or with status ``failed`` is a failure.

    Every other status counts as success.
    """
    status = response.get("status")
    return status is not None and status != FAILED_RESPONSE_STATUS


class ResponseHandler(ABC):
    def __init__(
        self,
        subscription_repository: ISubscriptionRepository,
        order_logger: OrderLogger,
    ) -> None:
        self._repo = subscription_repository
        self._order_logger = order_logger

    @abstractmethod
    def handle(self, response: Any, order: Order) -> None:
        """Reconcile a materialized gateway result into platform state."""


class SubscriptionHandler(ResponseHandler):
    """Moves the platform order according to the subscription status and
    stores the subscription."""

    def handle(self, response: Subscription, order: Order) -> None:
        platform_order = response.platform_order
        log = logger.bind(
            order_code=order.code,
            gateway_id=response.gateway_id,
            status=response.status,
        )

        transition = SUBSCRIPTION_ORDER_TRANSITIONS.get(response.status)
        if platform_order is not None and transition is not None:
            state, status = transition
            platform_order.set_state(state)
            platform_order.set_status(status)
            log.info("subscription.order_transitioned", state=state, order_status=status)
        elif transition is None:
            log.warning("subscription.unmapped_status")

        self._repo.save(response)
        self._order_logger.order_info(
            order.code,
            f"Subscription created at gateway. Id: {response.gateway_id}",
            {"status": response.status},
        )


RESPONSE_HANDLERS: Dict[type, Type[ResponseHandler]] = {
    Subscription: SubscriptionHandler,
}


def get_response_handler(response: Any) -> Type[ResponseHandler]:
    """Return the handler class registered for ``type(response)``.

    Raises:
        HandlerResolutionError: nothing is registered for that type.
    """
    handler_class = RESPONSE_HANDLERS.get(type(response))
    if handler_class is None:
        raise HandlerResolutionError(
            f"No response handler registered for {type(response).__name__}."
        )
    return handler_class
