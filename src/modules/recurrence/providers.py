"""Assembles ``SubscriptionService`` from Django settings.

The gateway client and the order extractor belong to the host platform;
they are referenced by dotted path in ``RECURRENCE_PAYMENT_GATEWAY`` and
``RECURRENCE_ORDER_EXTRACTOR``.
"""

from __future__ import annotations

from typing import Any, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from modules.recurrence.builder import SubscriptionRequestBuilder
from modules.recurrence.localization import DjangoLocalizer, SettingsConfigProvider
from modules.recurrence.log_service import OrderLogService
from modules.recurrence.repositories.django_repository import (
    RecurrenceProductDjangoRepository,
    SubscriptionDjangoRepository,
)
from modules.recurrence.services import SubscriptionService


def _load(setting_name: str) -> Optional[Any]:
    path = getattr(settings, setting_name, "")
    if not path:
        return None
    return import_string(path)()


def build_subscription_service() -> SubscriptionService:
    gateway = _load("RECURRENCE_PAYMENT_GATEWAY")
    if gateway is None:
        raise ImproperlyConfigured("RECURRENCE_PAYMENT_GATEWAY is not set.")

    return SubscriptionService(
        subscription_repository=SubscriptionDjangoRepository(),
        gateway=gateway,
        builder=SubscriptionRequestBuilder(
            config_provider=SettingsConfigProvider(),
            catalog=RecurrenceProductDjangoRepository(),
        ),
        localizer=DjangoLocalizer(),
        order_logger=OrderLogService(),
        order_extractor=_load("RECURRENCE_ORDER_EXTRACTOR"),
        cancel_error_code=settings.RECURRENCE_CANCEL_ERROR_STATUS,
    )
