"""Recurrence domain constants.

Subscription statuses as reported by the payment gateway, the platform
order state/status pairs the module writes, and the dashboard message
keys handed to the localizer.
"""

from django.db import models


class SubscriptionStatus(models.TextChoices):
    PENDING = "pending", "Pendente"
    ACTIVE = "active", "Ativa"
    FUTURE = "future", "Futura"
    FAILED = "failed", "Falhou"
    CANCELED = "canceled", "Cancelada"


class IntervalType(models.TextChoices):
    DAY = "day", "Dia"
    WEEK = "week", "Semana"
    MONTH = "month", "Mês"
    YEAR = "year", "Ano"


class BillingType(models.TextChoices):
    PREPAID = "prepaid", "Pré-pago"
    POSTPAID = "postpaid", "Pós-pago"
    EXACT_DAY = "exact_day", "Dia exato"


class PaymentMethod(models.TextChoices):
    CREDIT_CARD = "credit_card", "Cartão de crédito"
    BOLETO = "boleto", "Boleto"


class OrderState(models.TextChoices):
    NEW = "new", "Novo"
    PROCESSING = "processing", "Processando"
    CANCELED = "canceled", "Cancelado"


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pendente"
    PROCESSING = "processing", "Processando"
    CANCELED = "canceled", "Cancelado"


UNIT_PRICING_SCHEME = "UNIT"

FAILED_RESPONSE_STATUS = "failed"

# Platform order (state, status) written after the gateway answers.
SUBSCRIPTION_ORDER_TRANSITIONS: dict[str, tuple[str, str]] = {
    SubscriptionStatus.ACTIVE: (OrderState.PROCESSING, OrderStatus.PROCESSING),
    SubscriptionStatus.PENDING: (OrderState.NEW, OrderStatus.PENDING),
    SubscriptionStatus.FUTURE: (OrderState.NEW, OrderStatus.PENDING),
    SubscriptionStatus.FAILED: (OrderState.CANCELED, OrderStatus.CANCELED),
    SubscriptionStatus.CANCELED: (OrderState.CANCELED, OrderStatus.CANCELED),
}

CREATION_ERROR_CODE = 400
NOT_FOUND_CODE = 404
SUCCESS_CODE = 200

MSG_CANT_CREATE_ORDER = "Can't create order."
MSG_CREATION_FAILED = (
    "An error occurred when trying to create the order. "
    "Please try again. Error Reference: %s."
)
MSG_SUBSCRIPTION_NOT_FOUND = "Subscription not found"
MSG_ALREADY_CANCELED = "Subscription already canceled"
MSG_CANCELED = "Subscription canceled with success!"
MSG_CANCEL_ERROR = "Error on cancel subscription"
