"""Today's overview: collection, pending amount and product totals."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..models import DELIVERED, ZERO, Customer, DailyOrder, Product, parse_date, utc_today
from ..pricing.units import unit_label


@dataclass(frozen=True)
class ProductSummaryLine:
    """Quantity of one product ordered today."""

    product_name: str
    unit_label: str
    quantity: Decimal

    @property
    def label(self) -> str:
        if not self.unit_label:
            return self.product_name
        return f"{self.product_name} ({self.unit_label})"


@dataclass(frozen=True)
class DashboardSummary:
    day: date
    total_amount: Decimal = ZERO
    total_collected: Decimal = ZERO
    order_count: int = 0
    delivered_count: int = 0
    product_count: int = 0
    customer_count: int = 0
    product_summary: tuple[ProductSummaryLine, ...] = field(default_factory=tuple)

    @property
    def total_pending(self) -> Decimal:
        return self.total_amount - self.total_collected

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "total_amount": round(float(self.total_amount), 2),
            "total_collected": round(float(self.total_collected), 2),
            "total_pending": round(float(self.total_pending), 2),
            "order_count": self.order_count,
            "delivered_count": self.delivered_count,
            "product_count": self.product_count,
            "customer_count": self.customer_count,
            "product_summary": [
                {"label": line.label, "quantity": float(line.quantity)}
                for line in self.product_summary
            ],
        }


def build_dashboard(
    orders: list[DailyOrder],
    products: list[Product],
    customers: list[Customer],
    today: date | None = None,
) -> DashboardSummary:
    """Summarize the orders dated ``today`` (current UTC date by default)."""
    day = today or utc_today()
    todays = [o for o in orders if parse_date(o.date) == day]

    units = {p.id: p.unit for p in products}
    quantities: dict[tuple[str, str], Decimal] = {}
    for order in todays:
        for item in order.items:
            key = (item.product_name, unit_label(units.get(item.product_id)))
            quantities[key] = quantities.get(key, ZERO) + item.quantity

    summary = sorted(
        (ProductSummaryLine(name, label, qty) for (name, label), qty in quantities.items()),
        key=lambda line: line.quantity,
        reverse=True,
    )

    return DashboardSummary(
        day=day,
        total_amount=sum((o.total_amount for o in todays), ZERO),
        total_collected=sum((o.paid for o in todays), ZERO),
        order_count=len(todays),
        delivered_count=sum(1 for o in todays if o.status == DELIVERED),
        product_count=len(products),
        customer_count=len(customers),
        product_summary=tuple(summary),
    )
