"""Recurrence DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
All DTOs are immutable (``frozen=True``).  Amounts are integer cents,
the unit the payment gateway works with.

- ``Order`` / ``OrderItem`` / payments: canonical view of a platform order.
- ``RecurrenceSettings`` / ``PrimaryRecurrenceItem``: where cycles and
  billing type come from.
- ``SubscriptionRequest`` / ``SubProduct``: the body submitted to the gateway.
- ``GatewaySubscriptionResponse``: validated gateway answer.
- ``CancellationResult``: structured outcome of a cancellation.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.recurrence.constants import UNIT_PRICING_SCHEME, BillingType

if TYPE_CHECKING:
    from modules.recurrence.models import RecurrenceProduct


# ---------------------------------------------------------------------------
# Order (input)
# ---------------------------------------------------------------------------


class SelectedRepetition(BaseModel):
    """Recurring option chosen for an order item."""

    model_config = ConfigDict(frozen=True)

    interval: str
    interval_count: int = 1
    billing_type: str = BillingType.PREPAID.value
    cycles: Optional[int] = None

    @field_validator("interval_count")
    @classmethod
    def interval_count_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Interval count must be at least 1.")
        return v


class OrderItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    description: str
    quantity: int
    amount: int
    selected_repetition: Optional[SelectedRepetition] = None

    @property
    def is_recurring(self) -> bool:
        return self.selected_repetition is not None


class CreditCardPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Literal["credit_card"] = "credit_card"
    amount: int
    card_token: str
    installments: int = 1


class BoletoPayment(BaseModel):
    """Boleto payments carry neither a card token nor installments."""

    model_config = ConfigDict(frozen=True)

    method: Literal["boleto"] = "boleto"
    amount: int


Payment = Annotated[
    Union[CreditCardPayment, BoletoPayment], Field(discriminator="method")
]


class Customer(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Optional[str] = None
    name: str
    email: str
    document: Optional[str] = None


class Shipping(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: int = 0
    description: str = ""
    recipient_name: str = ""
    recipient_phone: str = ""
    address: Dict[str, str] = Field(default_factory=dict)


class Order(BaseModel):
    """Canonical order extracted from a platform order."""

    model_config = ConfigDict(frozen=True)

    code: str
    customer: Customer
    items: List[OrderItem]
    payments: List[Payment] = Field(default_factory=list)
    shipping: Optional[Shipping] = None
    payment_method: str


# ---------------------------------------------------------------------------
# Recurrence settings
# ---------------------------------------------------------------------------


class RecurrenceSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    cycles: Optional[int] = None
    billing_type: str = BillingType.PREPAID.value

    @classmethod
    def from_repetition(cls, repetition: SelectedRepetition) -> RecurrenceSettings:
        return cls(cycles=repetition.cycles, billing_type=repetition.billing_type)

    @classmethod
    def from_entity(cls, product: RecurrenceProduct) -> RecurrenceSettings:
        return cls(cycles=product.cycles, billing_type=product.billing_type)


class PrimaryRecurrenceItem(BaseModel):
    """First recurring item of an order and its resolved settings.

    Cycles and billing type of the whole subscription come from here.
    """

    model_config = ConfigDict(frozen=True)

    item: OrderItem
    settings: RecurrenceSettings


# ---------------------------------------------------------------------------
# Subscription request (output to the gateway)
# ---------------------------------------------------------------------------


class PricingScheme(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme_type: str = UNIT_PRICING_SCHEME
    price: int

    @classmethod
    def unit(cls, price: int) -> PricingScheme:
        return cls(scheme_type=UNIT_PRICING_SCHEME, price=price)


class SubProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    quantity: int
    pricing_scheme: PricingScheme
    cycles: Optional[int] = None
    selected_repetition: Optional[SelectedRepetition] = Field(
        default=None, exclude=True
    )


class SubscriptionRequest(BaseModel):
    """Subscription body built from an ``Order``; never persisted."""

    model_config = ConfigDict(frozen=True)

    code: str
    customer: Customer
    items: List[SubProduct]
    interval_type: Optional[str] = Field(default=None, serialization_alias="interval")
    interval_count: Optional[int] = None
    description: str
    shipping: Optional[Shipping] = None
    card_token: Optional[str] = None
    installments: Optional[int] = None
    boleto_due_days: int
    billing_type: str
    payment_method: str

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, v: List[SubProduct]) -> List[SubProduct]:
        if not v:
            raise ValueError("Subscription must have at least one item.")
        return v

    def to_payload(self) -> Dict[str, Any]:
        """Gateway JSON body: aliased keys, unset fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Gateway response / results
# ---------------------------------------------------------------------------


class GatewaySubscriptionResponse(BaseModel):
    """Subset of the gateway subscription payload the module relies on."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    status: str
    code: Optional[str] = None
    interval: Optional[str] = None
    interval_count: Optional[int] = None
    billing_type: Optional[str] = None
    payment_method: Optional[str] = None
    installments: Optional[int] = None
    description: str = ""
    created_at: Optional[datetime] = None


class CancellationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    code: int
