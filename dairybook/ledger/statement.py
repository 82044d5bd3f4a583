"""Statements: orders in a date range, summed per customer and overall."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..models import ZERO, Customer, DailyOrder, parse_date

ALL_CUSTOMERS = "all"
UNKNOWN_CUSTOMER = "Unknown"


def _money(value: Decimal) -> float:
    return round(float(value), 2)


@dataclass(frozen=True)
class CustomerStatement:
    """Orders and totals for one customer within a statement."""

    customer_id: str
    customer_name: str
    orders: tuple[DailyOrder, ...] = field(default_factory=tuple)
    total_amount: Decimal = ZERO
    total_paid: Decimal = ZERO

    @property
    def pending_amount(self) -> Decimal:
        return self.total_amount - self.total_paid

    def to_dict(self) -> dict:
        return {
            "customer_id": self.customer_id,
            "customer_name": self.customer_name,
            "total_amount": _money(self.total_amount),
            "total_paid": _money(self.total_paid),
            "pending_amount": _money(self.pending_amount),
            "orders": [
                {
                    "id": o.id,
                    "date": o.date.isoformat(),
                    "items": [
                        f"{i.product_name} x{i.quantity.normalize():f}"
                        for i in o.items
                    ],
                    "total_amount": _money(o.total_amount),
                    "amount_paid": _money(o.paid),
                    "balance": _money(o.balance),
                    "status": o.status,
                }
                for o in self.orders
            ],
        }


@dataclass(frozen=True)
class Statement:
    start_date: date
    end_date: date
    customer_filter: str = ALL_CUSTOMERS
    customer_statements: tuple[CustomerStatement, ...] = field(default_factory=tuple)
    total_orders: int = 0

    @property
    def grand_total_amount(self) -> Decimal:
        return sum((cs.total_amount for cs in self.customer_statements), ZERO)

    @property
    def grand_total_paid(self) -> Decimal:
        return sum((cs.total_paid for cs in self.customer_statements), ZERO)

    @property
    def grand_total_pending(self) -> Decimal:
        return self.grand_total_amount - self.grand_total_paid

    def to_dict(self) -> dict:
        """Return a summary dict for JSON serialization."""
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "customer_filter": self.customer_filter,
            "grand_total_amount": _money(self.grand_total_amount),
            "grand_total_paid": _money(self.grand_total_paid),
            "grand_total_pending": _money(self.grand_total_pending),
            "total_orders": self.total_orders,
            "customer_statements": [cs.to_dict() for cs in self.customer_statements],
        }


def build_statement(
    orders: list[DailyOrder],
    customers: list[Customer],
    start_date: date | str,
    end_date: date | str,
    customer_filter: str = ALL_CUSTOMERS,
) -> Statement:
    """Summarize orders between two dates (inclusive), grouped by customer.

    Args:
        orders: All known orders; they are not modified.
        customers: Customer records, used for the name of a single-customer
            statement.
        start_date: First day included.
        end_date: Last day included.
        customer_filter: A customer id, or "all".

    Returns:
        A Statement whose groups are sorted by customer name and whose
        orders are sorted by date. Empty when nothing matches.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)

    filtered = [
        o for o in orders
        if start <= parse_date(o.date) <= end
        and (customer_filter == ALL_CUSTOMERS or o.customer_id == customer_filter)
    ]

    grouped: dict[str, list[DailyOrder]] = {}
    for order in filtered:
        grouped.setdefault(order.customer_id, []).append(order)

    names = {c.id: c.name for c in customers}
    statements = []
    for customer_id, customer_orders in grouped.items():
        if customer_filter == ALL_CUSTOMERS:
            name = customer_orders[0].customer_name or UNKNOWN_CUSTOMER
        else:
            name = (
                names.get(customer_id)
                or customer_orders[0].customer_name
                or UNKNOWN_CUSTOMER
            )
        statements.append(
            CustomerStatement(
                customer_id=customer_id,
                customer_name=name,
                orders=tuple(sorted(customer_orders, key=lambda o: parse_date(o.date))),
                total_amount=sum((o.total_amount for o in customer_orders), ZERO),
                total_paid=sum((o.paid for o in customer_orders), ZERO),
            )
        )

    statements.sort(key=lambda cs: cs.customer_name)
    return Statement(
        start_date=start,
        end_date=end,
        customer_filter=customer_filter,
        customer_statements=tuple(statements),
        total_orders=len(filtered),
    )
