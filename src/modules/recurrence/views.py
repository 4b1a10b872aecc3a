"""Subscription API views.

Exposes ``SubscriptionService`` listing and cancellation for the admin
dashboard.  Creation is triggered in-process by the platform checkout,
not over HTTP.
"""

from __future__ import annotations

from functools import cached_property

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.recurrence.exceptions import SubscriptionNotFound
from modules.recurrence.models import Subscription
from modules.recurrence.providers import build_subscription_service
from modules.recurrence.serializers import (
    CancellationResultSerializer,
    SubscriptionSerializer,
)
from modules.recurrence.services import SubscriptionService


class SubscriptionViewSet(GenericViewSet):
    """ViewSet for subscription operations.

    All ORM access goes through the service/repository layer.
    """

    queryset = Subscription.objects.none()
    serializer_class = SubscriptionSerializer

    @cached_property
    def _service(self) -> SubscriptionService:
        return build_subscription_service()

    def list(self, request: Request) -> Response:
        """GET /api/v1/subscriptions/"""
        subscriptions = self._service.list_all()
        page = self.paginate_queryset(subscriptions)
        if page is not None:
            serializer = SubscriptionSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(SubscriptionSerializer(subscriptions, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/subscriptions/{pk}/"""
        try:
            subscription = self._service.get_subscription(pk)
        except SubscriptionNotFound:
            return Response(
                {"detail": "Subscription not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(SubscriptionSerializer(subscription).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/subscriptions/{pk}/cancel/

        The HTTP status mirrors the ``code`` of the cancellation result.
        """
        result = self._service.cancel(pk)
        serializer = CancellationResultSerializer(result.model_dump())
        return Response(serializer.data, status=result.code)
