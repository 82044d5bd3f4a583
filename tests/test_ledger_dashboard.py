"""Tests for the daily dashboard summary."""

from datetime import date
from decimal import Decimal

import pytest

from dairybook.ledger.dashboard import build_dashboard
from dairybook.models import Customer, DailyOrder, OrderItem, Product

TODAY = date(2025, 3, 10)


def _item(product_id, name, quantity, unit, price) -> OrderItem:
    quantity, price = Decimal(quantity), Decimal(price)
    return OrderItem(product_id, name, quantity, unit, price, quantity * price)


def _order(id, day, items, paid="0", status="pending") -> DailyOrder:
    return DailyOrder(
        id=id,
        customer_id="c1",
        customer_name="Asha",
        date=day,
        items=tuple(items),
        total_amount=sum((i.total for i in items), Decimal("0")),
        amount_paid=Decimal(paid),
        status=status,
    )


@pytest.fixture
def products():
    return [
        Product("milk", "Milk", Decimal("60"), Decimal("1"), "L"),
        Product("paneer", "Paneer", Decimal("80"), Decimal("1"), "piece"),
        Product("cream", "Cream", Decimal("40"), Decimal("200"), "ml"),
    ]


@pytest.fixture
def customers():
    return [Customer("c1", "Asha"), Customer("c2", "Ravi")]


@pytest.fixture
def orders():
    return [
        _order("o1", TODAY, [
            _item("milk", "Milk", "2", "L", "60"),
            _item("paneer", "Paneer", "1", "piece", "80"),
        ], paid="200", status="delivered"),
        _order("o2", TODAY, [
            _item("milk", "Milk", "1.5", "L", "60"),
            _item("cream", "Cream", "1", "ml", "40"),
            _item("ghee", "Ghee", "0.5", "kg", "600"),
        ]),
        _order("o3", date(2025, 3, 9), [
            _item("milk", "Milk", "10", "L", "60"),
        ], paid="600"),
    ]


def test_only_todays_orders(orders, products, customers):
    summary = build_dashboard(orders, products, customers, today=TODAY)
    assert summary.order_count == 2
    assert summary.delivered_count == 1
    assert summary.total_amount == Decimal("200") + Decimal("430")
    assert summary.total_collected == Decimal("200")
    assert summary.total_pending == Decimal("430")
    assert summary.product_count == 3
    assert summary.customer_count == 2


def test_product_summary(orders, products, customers):
    summary = build_dashboard(orders, products, customers, today=TODAY)
    labels = [(line.label, line.quantity) for line in summary.product_summary]
    assert labels == [
        ("Milk (L)", Decimal("3.5")),
        ("Paneer (pcs)", Decimal("1")),
        ("Cream", Decimal("1")),
        ("Ghee (units)", Decimal("0.5")),
    ]


def test_no_orders_today(orders, products, customers):
    summary = build_dashboard(orders, products, customers, today=date(2025, 1, 1))
    assert summary.order_count == 0
    assert summary.total_amount == 0
    assert summary.total_pending == 0
    assert summary.product_summary == ()


def test_defaults_to_utc_today(monkeypatch, products, customers):
    monkeypatch.setattr("dairybook.ledger.dashboard.utc_today", lambda: TODAY)
    summary = build_dashboard(
        [_order("o1", TODAY, [_item("milk", "Milk", "1", "L", "60")])],
        products,
        customers,
    )
    assert summary.day == TODAY
    assert summary.order_count == 1


def test_to_dict(orders, products, customers):
    data = build_dashboard(orders, products, customers, today=TODAY).to_dict()
    assert data["date"] == "2025-03-10"
    assert data["total_pending"] == 430.0
    assert data["product_summary"][0] == {"label": "Milk (L)", "quantity": 3.5}
