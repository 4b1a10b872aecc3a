"""Subscription service layer (Use Cases).

Orchestrates subscription creation at the payment gateway for a platform
order, subscription listing, and cancellation.

Creation protocol:
1. Mark the platform order ``new`` / ``pending`` before any network call.
2. Extract the canonical order and build the subscription request.
3. Submit it and classify the gateway answer.
4. On success save the platform order, materialize the subscription,
   dispatch it to its response handler and save the platform order again.

Creation failures of any kind surface as one ``SubscriptionCreationError``
with a localized message.  Cancellation never raises: every outcome is a
``CancellationResult``.  Single attempt, no retries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.core.exceptions import ImproperlyConfigured

from modules.recurrence.builder import get_subscription_items
from modules.recurrence.constants import (
    CREATION_ERROR_CODE,
    MSG_ALREADY_CANCELED,
    MSG_CANCEL_ERROR,
    MSG_CANCELED,
    MSG_CANT_CREATE_ORDER,
    MSG_SUBSCRIPTION_NOT_FOUND,
    NOT_FOUND_CODE,
    SUCCESS_CODE,
    OrderState,
    OrderStatus,
    SubscriptionStatus,
)
from modules.recurrence.dtos import CancellationResult
from modules.recurrence.error_handlers import ErrorExceptionHandler
from modules.recurrence.exceptions import (
    GatewayRejectedError,
    SubscriptionCreationError,
    SubscriptionNotFound,
)
from modules.recurrence.factories import SubscriptionFactory
from modules.recurrence.response_handlers import get_response_handler, is_successful

if TYPE_CHECKING:
    from modules.recurrence.builder import SubscriptionRequestBuilder
    from modules.recurrence.dtos import Order
    from modules.recurrence.interfaces import (
        Localizer,
        OrderExtractor,
        OrderLogger,
        PaymentGateway,
        PlatformOrder,
    )
    from modules.recurrence.models import Subscription
    from modules.recurrence.repositories.interfaces import ISubscriptionRepository

logger = structlog.get_logger(__name__)


class SubscriptionService:
    """Application service for subscription use-cases.

    Receives its collaborators via constructor injection (DIP).
    ``cancel_error_code`` is the code returned when cancellation fails
    unexpectedly.
    """

    def __init__(
        self,
        subscription_repository: ISubscriptionRepository,
        gateway: PaymentGateway,
        builder: SubscriptionRequestBuilder,
        localizer: Localizer,
        order_logger: OrderLogger,
        order_extractor: Optional[OrderExtractor] = None,
        factory: Optional[SubscriptionFactory] = None,
        cancel_error_code: int = SUCCESS_CODE,
    ) -> None:
        self._repo = subscription_repository
        self._gateway = gateway
        self._builder = builder
        self._i18n = localizer
        self._order_logger = order_logger
        self._order_extractor = order_extractor
        self._factory = factory or SubscriptionFactory()
        self._cancel_error_code = cancel_error_code
        self._error_handler = ErrorExceptionHandler(localizer, order_logger)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_subscription(self, platform_order: PlatformOrder) -> List[Subscription]:
        """Create the subscription for ``platform_order`` at the gateway.

        Returns a single-element list with the materialized subscription.

        Raises:
            SubscriptionCreationError: any failure, with a localized message
                and code 400.
        """
        order_code: Optional[str] = None
        try:
            order_code = platform_order.get_code()

            platform_order.set_state(OrderState.NEW)
            platform_order.set_status(OrderStatus.PENDING)

            order = self._extract_order(platform_order)
            self._order_logger.order_info(
                order_code,
                "Creating subscription.",
                {
                    "items": len(order.items),
                    "recurring_items": len(get_subscription_items(order)),
                    "payment_method": order.payment_method,
                },
            )
            request = self._builder.build(order)

            response = self._gateway.create_subscription(request)
            if not is_successful(response):
                logger.warning(
                    "subscription.gateway_rejected",
                    order_code=order_code,
                    status=response.get("status"),
                )
                raise GatewayRejectedError(
                    self._i18n.get_dashboard(MSG_CANT_CREATE_ORDER)
                )

            platform_order.save()

            subscription = self._factory.create_from_post_data(response)
            subscription.set_platform_order(platform_order)

            handler_class = get_response_handler(subscription)
            handler = handler_class(self._repo, self._order_logger)
            handler.handle(subscription, order)

            platform_order.save()
        except Exception as exc:
            front_message = self._error_handler.handle(exc, order_code)
            raise SubscriptionCreationError(front_message, CREATION_ERROR_CODE) from exc

        logger.info(
            "subscription.created",
            order_code=order_code,
            subscription_id=str(subscription.id),
            gateway_id=subscription.gateway_id,
            status=subscription.status,
        )
        return [subscription]

    def cancel(self, subscription_id: str) -> CancellationResult:
        """Cancel a stored subscription at the gateway.

        - not found: code 404, no gateway call.
        - already canceled: code 200, no gateway call.
        - otherwise: gateway cancel, status ``canceled`` persisted, code 200.
        - unexpected failure: logged, ``cancel_error_code``.
        """
        log = logger.bind(subscription_id=str(subscription_id))
        try:
            subscription = self._repo.find(subscription_id)
            if subscription is None:
                message = self._i18n.get_dashboard(MSG_SUBSCRIPTION_NOT_FOUND)
                self._order_logger.order_info(
                    None, f"{message} ID {subscription_id} ."
                )
                return CancellationResult(message=message, code=NOT_FOUND_CODE)

            if subscription.is_canceled:
                log.info("subscription.already_canceled")
                return CancellationResult(
                    message=self._i18n.get_dashboard(MSG_ALREADY_CANCELED),
                    code=SUCCESS_CODE,
                )

            self._gateway.cancel_subscription(subscription)

            subscription.status = SubscriptionStatus.CANCELED
            self._repo.save(subscription)

            log.info("subscription.canceled", gateway_id=subscription.gateway_id)
            return CancellationResult(
                message=self._i18n.get_dashboard(MSG_CANCELED),
                code=SUCCESS_CODE,
            )
        except Exception as exc:
            message = self._i18n.get_dashboard(MSG_CANCEL_ERROR)
            self._order_logger.order_info(None, f"{message} - {exc}")
            log.error("subscription.cancel_failed", error=str(exc))
            return CancellationResult(message=message, code=self._cancel_error_code)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_subscription(self, subscription_id: str) -> Subscription:
        """Retrieve a single subscription.

        Raises:
            SubscriptionNotFound: if the subscription does not exist.
        """
        subscription = self._repo.find(subscription_id)
        if subscription is None:
            raise SubscriptionNotFound(f"Subscription {subscription_id} not found.")
        return subscription

    def list_all(self) -> List[Subscription]:
        return self._repo.list_entities(0, False)

    def is_subscription(self, platform_order: PlatformOrder) -> bool:
        """``True`` iff at least one order item carries a recurring option."""
        order = self._extract_order(platform_order)
        return len(get_subscription_items(order)) > 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _extract_order(self, platform_order: PlatformOrder) -> Order:
        if self._order_extractor is None:
            raise ImproperlyConfigured("No order extractor configured.")
        return self._order_extractor.extract_payment_order_from_platform_order(
            platform_order
        )
