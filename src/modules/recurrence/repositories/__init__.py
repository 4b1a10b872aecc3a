"""Recurrence repositories package."""

from modules.recurrence.repositories.django_repository import (
    RecurrenceProductDjangoRepository,
    SubscriptionDjangoRepository,
)
from modules.recurrence.repositories.interfaces import (
    IRecurrenceProductRepository,
    ISubscriptionRepository,
)

__all__ = [
    "IRecurrenceProductRepository",
    "ISubscriptionRepository",
    "RecurrenceProductDjangoRepository",
    "SubscriptionDjangoRepository",
]
