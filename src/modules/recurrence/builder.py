"""Builds a ``SubscriptionRequest`` out of a canonical ``Order``.

Pure transformation: the only outside read is the boleto due days from
the injected ``ConfigProvider`` (once per build) and, when a catalog is
given, the recurrence settings of the primary recurrence item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

import structlog

from modules.recurrence.dtos import (
    PricingScheme,
    PrimaryRecurrenceItem,
    RecurrenceSettings,
    SubProduct,
    SubscriptionRequest,
)
from modules.recurrence.exceptions import MissingRecurrenceItemError

if TYPE_CHECKING:
    from modules.recurrence.dtos import Order, OrderItem
    from modules.recurrence.interfaces import ConfigProvider, RecurrenceCatalog

logger = structlog.get_logger(__name__)


def get_subscription_items(order: Order) -> List[OrderItem]:
    """Return the order items carrying a selected recurring option."""
    return [item for item in order.items if item.is_recurring]


class SubscriptionRequestBuilder:
    def __init__(
        self,
        config_provider: ConfigProvider,
        catalog: Optional[RecurrenceCatalog] = None,
    ) -> None:
        self._config = config_provider
        self._catalog = catalog

    def build(self, order: Order) -> SubscriptionRequest:
        """Derive the subscription request for ``order``.

        Raises:
            MissingRecurrenceItemError: no item carries a selected repetition.
        """
        primary = self.get_primary_recurrence_item(order)
        items = self._build_sub_products(order, primary)
        first = items[0]

        interval_type = None
        interval_count = None
        # TODO: derive the interval from the recurrence catalog once it
        # exposes per-product intervals; unset when the first item has none.
        if first.selected_repetition is not None:
            interval_type = first.selected_repetition.interval
            interval_count = first.selected_repetition.interval_count

        card_token, installments = self._extract_card_data(order)

        request = SubscriptionRequest(
            code=order.code,
            customer=order.customer,
            items=items,
            interval_type=interval_type,
            interval_count=interval_count,
            description=first.description,
            shipping=order.shipping,
            card_token=card_token,
            installments=installments,
            boleto_due_days=self._config.get_boleto_due_days(),
            billing_type=primary.settings.billing_type,
            payment_method=order.payment_method,
        )

        logger.info(
            "subscription.request_built",
            order_code=order.code,
            item_count=len(items),
            interval=interval_type,
            cycles=primary.settings.cycles,
        )
        return request

    def get_primary_recurrence_item(self, order: Order) -> PrimaryRecurrenceItem:
        recurrence_items = get_subscription_items(order)
        if not recurrence_items:
            raise MissingRecurrenceItemError(
                f"Recurrence items not found for order {order.code}."
            )

        item = recurrence_items[0]
        settings = None
        if self._catalog is not None:
            settings = self._catalog.get_recurrence_product_by_product_id(item.code)
        if settings is None:
            settings = RecurrenceSettings.from_repetition(item.selected_repetition)

        return PrimaryRecurrenceItem(item=item, settings=settings)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _build_sub_products(
        order: Order, primary: PrimaryRecurrenceItem
    ) -> List[SubProduct]:
        return [
            SubProduct(
                description=item.description,
                quantity=item.quantity,
                pricing_scheme=PricingScheme.unit(item.amount),
                cycles=primary.settings.cycles,
                selected_repetition=item.selected_repetition,
            )
            for item in order.items
        ]

    @staticmethod
    def _extract_card_data(order: Order) -> tuple[Optional[str], Optional[int]]:
        if not order.payments:
            return None, None

        payment: Any = order.payments[0]
        return (
            getattr(payment, "card_token", None),
            getattr(payment, "installments", None),
        )
