"""Dashboard localization and module configuration adapters."""

from __future__ import annotations

from typing import Any

import structlog
from django.conf import settings
from django.utils.translation import gettext

logger = structlog.get_logger(__name__)


class DjangoLocalizer:
    """Translates dashboard messages with Django's gettext catalogs.

    A translation whose placeholders do not match ``args`` falls back to the
    untranslated key.
    """

    def get_dashboard(self, key: str, *args: Any) -> str:
        message = gettext(key)
        if not args:
            return message
        try:
            return message % args
        except (TypeError, ValueError):
            logger.warning("localization.bad_placeholders", key=key)
            return key % args


class SettingsConfigProvider:
    """Reads the recurrence module configuration from Django settings."""

    def get_boleto_due_days(self) -> int:
        return int(settings.RECURRENCE_BOLETO_DUE_DAYS)
