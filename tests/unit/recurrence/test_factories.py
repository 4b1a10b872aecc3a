"""Unit tests for SubscriptionFactory."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.recurrence.constants import BillingType
from modules.recurrence.factories import SubscriptionFactory

pytestmark = pytest.mark.unit


@pytest.fixture()
def factory():
    return SubscriptionFactory()


def test_maps_gateway_payload(factory, gateway):
    subscription = factory.create_from_post_data(gateway.response)

    assert subscription._state.adding
    assert subscription.gateway_id == "sub_abc123"
    assert subscription.code == "ORD-1001"
    assert subscription.status == "active"
    assert subscription.interval_type == "month"
    assert subscription.interval_count == 1
    assert subscription.payment_method == "credit_card"
    assert subscription.installments == 3
    assert subscription.gateway_created_at is not None
    assert subscription.raw_response["id"] == "sub_abc123"


def test_minimal_payload_uses_defaults(factory):
    subscription = factory.create_from_post_data({"id": "sub_2", "status": "pending"})

    assert subscription.billing_type == BillingType.PREPAID
    assert subscription.interval_type is None
    assert subscription.code == ""


def test_unknown_keys_are_ignored(factory):
    subscription = factory.create_from_post_data(
        {"id": "sub_3", "status": "active", "current_cycle": {"id": "cycle_1"}}
    )

    assert "current_cycle" not in subscription.raw_response


@pytest.mark.parametrize("payload", [{"status": "active"}, {"id": "sub_4"}])
def test_payload_without_id_or_status_is_rejected(factory, payload):
    with pytest.raises(ValidationError):
        factory.create_from_post_data(payload)


def test_platform_order_reference(factory, platform_order):
    subscription = factory.create_from_post_data({"id": "sub_5", "status": "active"})

    subscription.set_platform_order(platform_order)

    assert subscription.platform_order is platform_order
    assert subscription.platform_order_code == platform_order.code
