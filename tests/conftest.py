from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from rest_framework.test import APIClient

from modules.recurrence.dtos import (
    BoletoPayment,
    CreditCardPayment,
    Customer,
    Order,
    OrderItem,
    SelectedRepetition,
    Shipping,
)


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


# ---------------------------------------------------------------------------
# Collaborator stubs
# ---------------------------------------------------------------------------


class StubPlatformOrder:
    """Records state/status changes and the pair seen at every ``save()``."""

    def __init__(self, code: str = "ORD-1001") -> None:
        self.code = code
        self.state: Optional[str] = None
        self.status: Optional[str] = None
        self.saves: List[tuple] = []

    def get_code(self) -> str:
        return self.code

    def set_state(self, state: str) -> None:
        self.state = state

    def set_status(self, status: str) -> None:
        self.status = status

    def save(self) -> None:
        self.saves.append((self.state, self.status))


class StubConfigProvider:
    def __init__(self, boleto_due_days: int = 7) -> None:
        self.boleto_due_days = boleto_due_days
        self.reads = 0

    def get_boleto_due_days(self) -> int:
        self.reads += 1
        return self.boleto_due_days


class StubGateway:
    """In-memory gateway answering with a canned payload."""

    def __init__(self, response: Optional[Dict[str, Any]] = None) -> None:
        self.response = response if response is not None else {}
        self.created: List[Any] = []
        self.canceled: List[Any] = []
        self.cancel_error: Optional[Exception] = None

    def create_subscription(self, request):
        self.created.append(request)
        return self.response

    def cancel_subscription(self, subscription):
        if self.cancel_error is not None:
            raise self.cancel_error
        self.canceled.append(subscription)
        return {"id": subscription.gateway_id, "status": "canceled"}


@pytest.fixture()
def platform_order():
    return StubPlatformOrder()


@pytest.fixture()
def config_provider():
    return StubConfigProvider()


@pytest.fixture()
def make_gateway():
    return StubGateway


@pytest.fixture()
def gateway():
    return StubGateway(
        {
            "id": "sub_abc123",
            "code": "ORD-1001",
            "status": "active",
            "interval": "month",
            "interval_count": 1,
            "billing_type": "prepaid",
            "payment_method": "credit_card",
            "installments": 3,
            "description": "Coffee club",
            "created_at": "2024-05-01T12:00:00Z",
        }
    )


# ---------------------------------------------------------------------------
# Order builders
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer():
    return Customer(code="C-1", name="Ana Souza", email="ana@example.com")


@pytest.fixture()
def make_item():
    def _make_item(
        code: str = "P-1",
        description: str = "Coffee club",
        quantity: int = 1,
        amount: int = 1000,
        repetition: Optional[Dict[str, Any]] = None,
    ) -> OrderItem:
        return OrderItem(
            code=code,
            description=description,
            quantity=quantity,
            amount=amount,
            selected_repetition=(
                SelectedRepetition(**repetition) if repetition is not None else None
            ),
        )

    return _make_item


@pytest.fixture()
def make_order(customer):
    def _make_order(
        items: List[OrderItem],
        payments: Optional[list] = None,
        code: str = "ORD-1001",
        payment_method: str = "credit_card",
        shipping: Optional[Shipping] = None,
    ) -> Order:
        return Order(
            code=code,
            customer=customer,
            items=items,
            payments=payments or [],
            shipping=shipping,
            payment_method=payment_method,
        )

    return _make_order


@pytest.fixture()
def card_payment():
    return CreditCardPayment(amount=2000, card_token="tok_1", installments=3)


@pytest.fixture()
def boleto_payment():
    return BoletoPayment(amount=2000)
