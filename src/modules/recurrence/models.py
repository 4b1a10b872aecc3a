"""Subscription and RecurrenceProduct models.

- ``Subscription`` is created from the gateway response, updated by the
  response handler and the cancellation workflow, never deleted here.
- ``gateway_id`` is the identifier issued by the payment gateway; ``id``
  (UUIDv7) is the local key used by the dashboard and the API.
- ``platform_order`` is an in-memory reference to the originating platform
  order, attached during creation only.  ``platform_order_code`` is what
  gets persisted.
- ``RecurrenceProduct`` is the catalog entry holding the cycles and billing
  type of a recurring product.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel
from modules.recurrence.constants import (
    BillingType,
    IntervalType,
    PaymentMethod,
    SubscriptionStatus,
)

if TYPE_CHECKING:
    from modules.recurrence.interfaces import PlatformOrder


class Subscription(SoftDeleteModel):
    gateway_id: models.CharField = models.CharField(max_length=64, unique=True)
    code: models.CharField = models.CharField(max_length=64, blank=True, default="")
    platform_order_code: models.CharField = models.CharField(
        max_length=64, blank=True, default=""
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.PENDING,
    )
    interval_type: models.CharField = models.CharField(  # noqa: DJ01
        max_length=10, choices=IntervalType.choices, null=True, blank=True
    )
    interval_count: models.PositiveIntegerField = models.PositiveIntegerField(
        null=True, blank=True
    )
    billing_type: models.CharField = models.CharField(
        max_length=20, choices=BillingType.choices, default=BillingType.PREPAID
    )
    payment_method: models.CharField = models.CharField(
        max_length=20, choices=PaymentMethod.choices, blank=True, default=""
    )
    installments: models.PositiveIntegerField = models.PositiveIntegerField(
        null=True, blank=True
    )
    description: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    gateway_created_at: models.DateTimeField = models.DateTimeField(
        null=True, blank=True
    )
    raw_response: models.JSONField = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "subscriptions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="subscriptions_status_idx"),
            models.Index(
                fields=["platform_order_code"], name="subscriptions_order_idx"
            ),
        ]

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._platform_order: Optional[PlatformOrder] = None

    # ------------------------------------------------------------------
    # Platform order reference
    # ------------------------------------------------------------------

    @property
    def platform_order(self) -> Optional[PlatformOrder]:
        return self._platform_order

    def set_platform_order(self, platform_order: PlatformOrder) -> None:
        self._platform_order = platform_order
        self.platform_order_code = platform_order.get_code()

    # ------------------------------------------------------------------
    # Status helpers
    # ------------------------------------------------------------------

    @property
    def is_canceled(self) -> bool:
        return self.status == SubscriptionStatus.CANCELED

    def __str__(self) -> str:
        return f"{self.gateway_id} ({self.status})"


class RecurrenceProduct(SoftDeleteModel):
    """Catalog entry for a product sold as a subscription."""

    product_code: models.CharField = models.CharField(max_length=64, unique=True)
    cycles: models.PositiveIntegerField = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
    )
    billing_type: models.CharField = models.CharField(
        max_length=20, choices=BillingType.choices, default=BillingType.PREPAID
    )

    class Meta:
        db_table = "recurrence_products"
        ordering = ["product_code"]

    def __str__(self) -> str:
        return f"{self.product_code} [{self.billing_type}]"
