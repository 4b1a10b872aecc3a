"""Collaborator interfaces consumed by the recurrence services.

The platform order model, the order extraction, the gateway transport and
the module configuration live outside this module; services depend on
these protocols only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from modules.recurrence.dtos import Order, RecurrenceSettings, SubscriptionRequest
    from modules.recurrence.models import Subscription


class PlatformOrder(Protocol):
    """Order object owned by the e-commerce platform."""

    def get_code(self) -> str: ...

    def set_state(self, state: str) -> None: ...

    def set_status(self, status: str) -> None: ...

    def save(self) -> None: ...


class OrderExtractor(Protocol):
    def extract_payment_order_from_platform_order(
        self, platform_order: PlatformOrder
    ) -> Order: ...


class RecurrenceCatalog(Protocol):
    def get_recurrence_product_by_product_id(
        self, product_id: str
    ) -> Optional[RecurrenceSettings]: ...


class PaymentGateway(Protocol):
    """Payment backend client.

    Implementations raise ``UnclassifiedGatewayError`` on transport
    failures; timeouts are their concern.
    """

    def create_subscription(self, request: SubscriptionRequest) -> Mapping[str, Any]: ...

    def cancel_subscription(self, subscription: Subscription) -> Dict[str, Any]: ...


class ConfigProvider(Protocol):
    def get_boleto_due_days(self) -> int: ...


class Localizer(Protocol):
    def get_dashboard(self, key: str, *args: Any) -> str: ...


class OrderLogger(Protocol):
    def order_info(
        self,
        order_code: Optional[str],
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None: ...

    def order_exception(self, exc: BaseException, order_code: Optional[str]) -> None: ...
