"""Materializes domain ``Subscription`` objects from gateway payloads."""

from __future__ import annotations

from typing import Any, Mapping

from modules.recurrence.dtos import GatewaySubscriptionResponse
from modules.recurrence.models import Subscription


class SubscriptionFactory:
    def create_from_post_data(self, data: Mapping[str, Any]) -> Subscription:
        """Build an unsaved ``Subscription`` from a gateway response.

        Raises:
            pydantic.ValidationError: the payload lacks ``id`` or ``status``.
        """
        response = GatewaySubscriptionResponse.model_validate(dict(data))

        subscription = Subscription(
            gateway_id=response.id,
            code=response.code or "",
            status=response.status,
            interval_type=response.interval,
            interval_count=response.interval_count,
            payment_method=response.payment_method or "",
            installments=response.installments,
            description=response.description,
            gateway_created_at=response.created_at,
            raw_response=response.model_dump(mode="json"),
        )
        if response.billing_type:
            subscription.billing_type = response.billing_type
        return subscription
