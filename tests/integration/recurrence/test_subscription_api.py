"""Integration tests for the subscription endpoints.

Covers:
- Authentication required (401).
- Listing excludes archived subscriptions.
- Retrieve 200 / 404.
- Cancel: HTTP status mirrors the cancellation result code.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.recurrence.builder import SubscriptionRequestBuilder
from modules.recurrence.constants import SubscriptionStatus
from modules.recurrence.localization import DjangoLocalizer, SettingsConfigProvider
from modules.recurrence.log_service import OrderLogService
from modules.recurrence.models import Subscription
from modules.recurrence.repositories.django_repository import (
    SubscriptionDjangoRepository,
)
from modules.recurrence.services import SubscriptionService

pytestmark = pytest.mark.integration

User = get_user_model()

LIST_URL = "/api/v1/subscriptions/"
MISSING_ID = "0190f0c4-0000-7000-8000-000000000000"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = User.objects.create_user(username="dashboard", password="testpass123")
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def service(gateway):
    return SubscriptionService(
        subscription_repository=SubscriptionDjangoRepository(),
        gateway=gateway,
        builder=SubscriptionRequestBuilder(SettingsConfigProvider()),
        localizer=DjangoLocalizer(),
        order_logger=OrderLogService(),
    )


@pytest.fixture(autouse=True)
def _wire_service(service):
    with patch(
        "modules.recurrence.views.build_subscription_service", return_value=service
    ):
        yield


@pytest.fixture()
def active_subscription():
    return Subscription.objects.create(
        gateway_id="sub_api_active",
        platform_order_code="ORD-1001",
        status=SubscriptionStatus.ACTIVE,
    )


def cancel_url(subscription_id) -> str:
    return f"{LIST_URL}{subscription_id}/cancel/"


# ===========================================================================
# Auth
# ===========================================================================


class TestAuthentication:
    def test_list_requires_auth(self, api_client):
        assert api_client.get(LIST_URL).status_code == 401

    def test_cancel_requires_auth(self, api_client, active_subscription, gateway):
        response = api_client.post(cancel_url(active_subscription.id))

        assert response.status_code == 401
        assert gateway.canceled == []


# ===========================================================================
# List / Retrieve
# ===========================================================================


class TestList:
    def test_lists_subscriptions(self, auth_client, active_subscription):
        archived = Subscription.objects.create(gateway_id="sub_api_archived")
        archived.delete()

        response = auth_client.get(LIST_URL)

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["gateway_id"] for r in results] == ["sub_api_active"]
        assert results[0]["platform_order_code"] == "ORD-1001"
        assert "raw_response" not in results[0]


class TestRetrieve:
    def test_retrieve_existing(self, auth_client, active_subscription):
        response = auth_client.get(f"{LIST_URL}{active_subscription.id}/")

        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_retrieve_missing(self, auth_client):
        response = auth_client.get(f"{LIST_URL}{MISSING_ID}/")

        assert response.status_code == 404


# ===========================================================================
# Cancel
# ===========================================================================


class TestCancel:
    def test_cancel_active(self, auth_client, active_subscription, gateway):
        response = auth_client.post(cancel_url(active_subscription.id))

        assert response.status_code == 200
        assert response.json() == {
            "message": "Subscription canceled with success!",
            "code": 200,
        }
        assert len(gateway.canceled) == 1
        active_subscription.refresh_from_db()
        assert active_subscription.status == SubscriptionStatus.CANCELED

    def test_cancel_twice(self, auth_client, active_subscription, gateway):
        auth_client.post(cancel_url(active_subscription.id))
        response = auth_client.post(cancel_url(active_subscription.id))

        assert response.status_code == 200
        assert response.json()["message"] == "Subscription already canceled"
        assert len(gateway.canceled) == 1

    def test_cancel_missing(self, auth_client, gateway):
        response = auth_client.post(cancel_url(MISSING_ID))

        assert response.status_code == 404
        assert response.json()["code"] == 404
        assert gateway.canceled == []

    def test_cancel_propagates_request_id(self, auth_client, active_subscription):
        response = auth_client.post(
            cancel_url(active_subscription.id), HTTP_X_REQUEST_ID="cancel-req-1"
        )

        assert response["X-Request-ID"] == "cancel-req-1"
