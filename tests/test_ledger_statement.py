"""Tests for statement generation."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from dairybook.ledger.statement import build_statement
from dairybook.models import Customer, DailyOrder


def _order(id, customer_id, name, day, total, paid="0") -> DailyOrder:
    return DailyOrder(
        id=id,
        customer_id=customer_id,
        customer_name=name,
        date=day,
        total_amount=Decimal(total),
        amount_paid=None if paid is None else Decimal(paid),
    )


@pytest.fixture
def customers():
    return [
        Customer(id="c1", name="Ravi"),
        Customer(id="c2", name="Asha"),
        Customer(id="c3", name="meena"),
    ]


@pytest.fixture
def orders():
    return [
        _order("o1", "c1", "Ravi", date(2025, 3, 2), "120", "120"),
        _order("o2", "c2", "Asha", date(2025, 3, 1), "60", "20"),
        _order("o3", "c1", "Ravi", date(2025, 3, 1), "90", None),
        _order("o4", "c2", "Asha", date(2025, 3, 5), "30", "0"),
        _order("o5", "c3", "meena", date(2025, 2, 28), "45", "45"),
        _order("o6", "c1", "Ravi", date(2025, 3, 1), "15", "15"),
    ]


def test_groups_and_totals(orders, customers):
    st = build_statement(orders, customers, date(2025, 3, 1), date(2025, 3, 5))

    assert [cs.customer_name for cs in st.customer_statements] == ["Asha", "Ravi"]
    asha, ravi = st.customer_statements
    assert asha.total_amount == Decimal("90")
    assert asha.total_paid == Decimal("20")
    assert asha.pending_amount == Decimal("70")
    assert ravi.total_amount == Decimal("225")
    assert ravi.total_paid == Decimal("135")

    assert st.grand_total_amount == Decimal("315")
    assert st.grand_total_paid == Decimal("155")
    assert st.grand_total_pending == Decimal("160")
    assert st.total_orders == 5


def test_orders_sorted_by_date_stable(orders, customers):
    st = build_statement(orders, customers, "2025-03-01", "2025-03-05")
    ravi = st.customer_statements[1]
    assert [o.id for o in ravi.orders] == ["o3", "o6", "o1"]


def test_inclusive_boundaries(orders, customers):
    st = build_statement(orders, customers, date(2025, 2, 28), date(2025, 3, 2))
    ids = {o.id for cs in st.customer_statements for o in cs.orders}
    assert ids == {"o1", "o2", "o3", "o5", "o6"}


def test_day_outside_range_excluded(orders, customers):
    st = build_statement(orders, customers, date(2025, 3, 3), date(2025, 3, 4))
    assert st.customer_statements == ()
    assert st.total_orders == 0


def test_single_customer_uses_current_name(orders, customers):
    customers[0].name = "Ravi Kumar"
    st = build_statement(orders, customers, date(2025, 3, 1), date(2025, 3, 5), "c1")
    assert len(st.customer_statements) == 1
    assert st.customer_statements[0].customer_name == "Ravi Kumar"
    assert st.total_orders == 3


def test_all_customers_uses_snapshot_name(orders, customers):
    customers[0].name = "Ravi Kumar"
    st = build_statement(orders, customers, date(2025, 3, 1), date(2025, 3, 5))
    assert st.customer_statements[1].customer_name == "Ravi"


def test_names_sorted_case_sensitively(orders, customers):
    st = build_statement(orders, customers, date(2025, 2, 1), date(2025, 3, 31))
    assert [cs.customer_name for cs in st.customer_statements] == ["Asha", "Ravi", "meena"]


def test_empty(customers):
    st = build_statement([], customers, date(2025, 3, 1), date(2025, 3, 5), "all")
    assert st.customer_statements == ()
    assert st.grand_total_amount == 0
    assert st.grand_total_paid == 0
    assert st.grand_total_pending == 0
    assert st.total_orders == 0


def test_unknown_customer_filter(orders, customers):
    st = build_statement(orders, customers, date(2025, 3, 1), date(2025, 3, 5), "zzz")
    assert st.customer_statements == ()


def test_idempotent_and_non_mutating(orders, customers):
    before = list(orders)
    first = build_statement(orders, customers, date(2025, 2, 1), date(2025, 3, 31))
    second = build_statement(orders, customers, date(2025, 2, 1), date(2025, 3, 31))
    assert first == second
    assert orders == before


def test_grand_totals_match_groups(orders, customers):
    st = build_statement(orders, customers, date(2025, 2, 1), date(2025, 3, 31))
    assert st.grand_total_amount == sum(cs.total_amount for cs in st.customer_statements)
    assert st.grand_total_pending == st.grand_total_amount - st.grand_total_paid


def test_datetime_bounds_compared_in_utc(customers):
    order = _order("o1", "c1", "Ravi", "2025-03-01T23:30:00Z", "10")
    end = datetime(2025, 3, 2, 4, 0, tzinfo=timezone.utc)
    st = build_statement([order], customers, "2025-03-01", end.isoformat())
    assert st.total_orders == 1
    st = build_statement([order], customers, "2025-03-02", "2025-03-02")
    assert st.total_orders == 0


def test_to_dict(orders, customers):
    data = build_statement(orders, customers, date(2025, 3, 1), date(2025, 3, 1)).to_dict()
    assert data["start_date"] == "2025-03-01"
    assert data["grand_total_amount"] == 165.0
    assert data["total_orders"] == 3
    assert data["customer_statements"][0]["customer_name"] == "Asha"
    assert data["customer_statements"][0]["orders"][0]["balance"] == 40.0
