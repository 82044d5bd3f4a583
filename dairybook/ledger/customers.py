"""Per-customer and per-day views over orders."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..models import ZERO, DailyOrder, parse_date


@dataclass
class DayGroup:
    """A customer's orders on one day."""

    customer_id: str
    customer_name: str
    orders: list[DailyOrder] = field(default_factory=list)


@dataclass(frozen=True)
class CustomerSummary:
    customer_id: str
    orders: tuple[DailyOrder, ...]
    total_value: Decimal
    total_paid: Decimal

    @property
    def order_count(self) -> int:
        return len(self.orders)

    @property
    def pending_amount(self) -> Decimal:
        return self.total_value - self.total_paid


def orders_for_day(orders: list[DailyOrder], day: date | str) -> list[DayGroup]:
    """Group one day's orders by customer, in the order customers first appear."""
    target = parse_date(day)
    groups: dict[str, DayGroup] = {}
    for order in orders:
        if parse_date(order.date) != target:
            continue
        group = groups.get(order.customer_id)
        if group is None:
            group = groups[order.customer_id] = DayGroup(
                customer_id=order.customer_id,
                customer_name=order.customer_name,
            )
        group.orders.append(order)
    return list(groups.values())


def customer_summary(orders: list[DailyOrder], customer_id: str) -> CustomerSummary:
    """Totals across all of a customer's orders, newest order first."""
    mine = [o for o in orders if o.customer_id == customer_id]
    mine.sort(key=lambda o: parse_date(o.date), reverse=True)
    return CustomerSummary(
        customer_id=customer_id,
        orders=tuple(mine),
        total_value=sum((o.total_amount for o in mine), ZERO),
        total_paid=sum((o.paid for o in mine), ZERO),
    )
