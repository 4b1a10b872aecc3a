"""Recurrence repository interfaces.

``ISubscriptionRepository`` is the subscription store the services
depend on.  ``IRecurrenceProductRepository`` doubles as the
``RecurrenceCatalog`` consumed by the request builder.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.recurrence.dtos import RecurrenceSettings
    from modules.recurrence.models import RecurrenceProduct, Subscription


class ISubscriptionRepository(IRepository["Subscription"]):
    """Repository contract for subscriptions.

    Last write wins on a given subscription; callers take no locks.
    """

    @abstractmethod
    def find_by_gateway_id(self, gateway_id: str) -> Optional[Subscription]:
        """Retrieve a subscription by the identifier issued by the gateway."""


class IRecurrenceProductRepository(IRepository["RecurrenceProduct"]):
    @abstractmethod
    def get_recurrence_product_by_product_id(
        self, product_id: str
    ) -> Optional[RecurrenceSettings]:
        """Settings of an enabled catalog entry, ``None`` when unknown."""
