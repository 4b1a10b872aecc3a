"""Recurrence domain exceptions.

Internal failures raised while building, submitting or reconciling a
subscription.  ``SubscriptionService.create_subscription`` folds all of
them into a single ``SubscriptionCreationError`` before they reach the
caller; the cancellation workflow never lets any of them escape.
"""

from __future__ import annotations


class MissingRecurrenceItemError(Exception):
    """No order item carries a selected recurring option."""


class GatewayRejectedError(Exception):
    """The gateway answered without a status or with status ``failed``."""


class HandlerResolutionError(Exception):
    """No response handler is registered for a gateway result type."""


class SubscriptionNotFound(Exception):
    """The requested subscription does not exist."""


class UnclassifiedGatewayError(Exception):
    """Transport-level failure raised by a ``PaymentGateway`` implementation."""


class SubscriptionCreationError(Exception):
    """User-facing creation failure carrying a localized message.

    ``code`` mirrors an HTTP status (always 400 for creation failures).
    """

    def __init__(self, message: str, code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
