"""Django ORM implementations of the recurrence repositories."""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.recurrence.dtos import RecurrenceSettings
from modules.recurrence.models import RecurrenceProduct, Subscription
from modules.recurrence.repositories.interfaces import (
    IRecurrenceProductRepository,
    ISubscriptionRepository,
)

logger = structlog.get_logger(__name__)

# Stored values kept when a re-materialized subscription leaves them empty.
MERGED_FIELDS = (
    "code",
    "platform_order_code",
    "interval_type",
    "interval_count",
    "payment_method",
    "installments",
    "description",
    "gateway_created_at",
)


class SubscriptionDjangoRepository(ISubscriptionRepository):
    """Concrete Subscription repository backed by Django ORM."""

    def find(self, id: str) -> Optional[Subscription]:
        """Return the subscription or ``None`` for missing or malformed IDs."""
        try:
            return Subscription.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def find_by_gateway_id(self, gateway_id: str) -> Optional[Subscription]:
        return Subscription.objects.filter(gateway_id=gateway_id).first()

    @transaction.atomic
    def save(self, entity: Subscription) -> Subscription:
        """Persist a subscription.

        A subscription materialized from a gateway response that is already
        stored (same ``gateway_id``) takes over the stored row: an archived
        row stays archived and stored values the response lacks are kept.
        """
        if entity._state.adding:
            existing = self.find_by_gateway_id(entity.gateway_id)
            if existing is not None:
                self._merge_stored(entity, existing)

        entity.save()
        logger.info(
            "subscription.saved",
            subscription_id=str(entity.id),
            gateway_id=entity.gateway_id,
            status=entity.status,
        )
        return entity

    @staticmethod
    def _merge_stored(entity: Subscription, existing: Subscription) -> None:
        entity.id = existing.id
        entity.created_at = existing.created_at
        entity.deleted_at = existing.deleted_at
        for field in MERGED_FIELDS:
            if getattr(entity, field) in (None, ""):
                setattr(entity, field, getattr(existing, field))
        entity._state.adding = False

    def list_entities(
        self, limit: int = 0, list_disabled: bool = False
    ) -> List[Subscription]:
        queryset = (
            Subscription.objects.all() if list_disabled else Subscription.objects.alive()
        )
        if limit:
            queryset = queryset[:limit]
        return list(queryset)


class RecurrenceProductDjangoRepository(IRecurrenceProductRepository):
    """Catalog of recurring products backed by Django ORM."""

    def find(self, id: str) -> Optional[RecurrenceProduct]:
        try:
            return RecurrenceProduct.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def save(self, entity: RecurrenceProduct) -> RecurrenceProduct:
        entity.save()
        logger.info(
            "recurrence_product.saved",
            product_code=entity.product_code,
            cycles=entity.cycles,
        )
        return entity

    def list_entities(
        self, limit: int = 0, list_disabled: bool = False
    ) -> List[RecurrenceProduct]:
        queryset = (
            RecurrenceProduct.objects.all()
            if list_disabled
            else RecurrenceProduct.objects.alive()
        )
        if limit:
            queryset = queryset[:limit]
        return list(queryset)

    def get_recurrence_product_by_product_id(
        self, product_id: str
    ) -> Optional[RecurrenceSettings]:
        product = RecurrenceProduct.objects.alive().filter(product_code=product_id).first()
        if product is None:
            return None
        return RecurrenceSettings.from_entity(product)
