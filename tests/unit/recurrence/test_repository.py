"""Unit tests for the recurrence Django repositories.

Covers:
- Subscription lookup by local ID (missing / malformed IDs -> None).
- Saving a materialized subscription whose gateway ID is already stored.
- Listing with and without soft-deleted rows, with a limit.
- Catalog look-up of enabled recurrence products only.
"""

from __future__ import annotations

import pytest

from modules.recurrence.constants import BillingType, SubscriptionStatus
from modules.recurrence.dtos import RecurrenceSettings
from modules.recurrence.factories import SubscriptionFactory
from modules.recurrence.models import RecurrenceProduct, Subscription
from modules.recurrence.repositories import (
    IRecurrenceProductRepository,
    ISubscriptionRepository,
    RecurrenceProductDjangoRepository,
    SubscriptionDjangoRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return SubscriptionDjangoRepository()


@pytest.fixture()
def catalog():
    return RecurrenceProductDjangoRepository()


def test_implements_interfaces(repo, catalog):
    assert isinstance(repo, ISubscriptionRepository)
    assert isinstance(catalog, IRecurrenceProductRepository)


class TestSubscriptionFind:
    def test_find_existing(self, repo):
        stored = Subscription.objects.create(gateway_id="sub_1")

        assert repo.find(str(stored.id)) == stored

    @pytest.mark.parametrize(
        "subscription_id", ["0190f0c4-0000-7000-8000-000000000000", "not-a-uuid"]
    )
    def test_find_missing_returns_none(self, repo, subscription_id):
        assert repo.find(subscription_id) is None

    def test_find_by_gateway_id(self, repo):
        stored = Subscription.objects.create(gateway_id="sub_2")

        assert repo.find_by_gateway_id("sub_2") == stored
        assert repo.find_by_gateway_id("sub_unknown") is None


class TestSubscriptionSave:
    def test_save_new(self, repo):
        subscription = SubscriptionFactory().create_from_post_data(
            {"id": "sub_new", "status": "active"}
        )

        repo.save(subscription)

        assert Subscription.objects.filter(gateway_id="sub_new").count() == 1

    def test_save_same_gateway_id_updates_stored_row(self, repo):
        stored = Subscription.objects.create(
            gateway_id="sub_dup", status=SubscriptionStatus.PENDING
        )
        fresh = SubscriptionFactory().create_from_post_data(
            {"id": "sub_dup", "status": "active"}
        )

        repo.save(fresh)

        assert Subscription.objects.filter(gateway_id="sub_dup").count() == 1
        assert fresh.id == stored.id
        stored.refresh_from_db()
        assert stored.status == SubscriptionStatus.ACTIVE

    def test_archived_row_stays_archived(self, repo):
        stored = Subscription.objects.create(gateway_id="sub_archived")
        stored.delete()
        fresh = SubscriptionFactory().create_from_post_data(
            {"id": "sub_archived", "status": "active"}
        )

        repo.save(fresh)

        stored.refresh_from_db()
        assert stored.deleted_at is not None
        assert repo.list_entities(0, False) == []

    def test_stored_values_missing_from_response_are_kept(self, repo):
        stored = Subscription.objects.create(
            gateway_id="sub_keep",
            platform_order_code="ORD-77",
            installments=6,
            description="Wine club",
        )
        fresh = SubscriptionFactory().create_from_post_data(
            {"id": "sub_keep", "status": "active", "installments": 2}
        )

        repo.save(fresh)

        stored.refresh_from_db()
        assert stored.platform_order_code == "ORD-77"
        assert stored.description == "Wine club"
        assert stored.installments == 2


class TestSubscriptionList:
    @pytest.fixture()
    def subscriptions(self):
        alive = [
            Subscription.objects.create(gateway_id=f"sub_{i}") for i in range(3)
        ]
        archived = Subscription.objects.create(gateway_id="sub_archived")
        archived.delete()
        return alive, archived

    def test_excludes_soft_deleted_by_default(self, repo, subscriptions):
        alive, archived = subscriptions

        listed = repo.list_entities(0, False)

        assert len(listed) == 3
        assert archived not in listed

    def test_list_disabled_includes_soft_deleted(self, repo, subscriptions):
        assert len(repo.list_entities(0, True)) == 4

    def test_limit(self, repo, subscriptions):
        assert len(repo.list_entities(2, False)) == 2


class TestCatalog:
    def test_known_product_returns_settings(self, catalog):
        RecurrenceProduct.objects.create(
            product_code="P-1", cycles=12, billing_type=BillingType.POSTPAID
        )

        settings = catalog.get_recurrence_product_by_product_id("P-1")

        assert settings == RecurrenceSettings(cycles=12, billing_type="postpaid")

    def test_unknown_product_returns_none(self, catalog):
        assert catalog.get_recurrence_product_by_product_id("P-404") is None

    def test_disabled_product_is_ignored(self, catalog):
        product = RecurrenceProduct.objects.create(product_code="P-off", cycles=3)
        product.delete()

        assert catalog.get_recurrence_product_by_product_id("P-off") is None
        assert catalog.list_entities(0, False) == []
        assert catalog.list_entities(0, True) == [product]

    def test_save_and_find(self, catalog):
        product = catalog.save(RecurrenceProduct(product_code="P-new", cycles=2))

        assert catalog.find(str(product.id)) == product
