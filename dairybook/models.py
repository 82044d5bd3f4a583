"""Record types for products, customers and daily orders."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

UNITS: tuple[str, ...] = ("ml", "L", "gm", "kg", "piece")

PENDING = "pending"
DELIVERED = "delivered"
STATUSES: tuple[str, ...] = (PENDING, DELIVERED)

ZERO = Decimal("0")

# Largest accepted power of ten for amounts and quantities.
_MAX_EXPONENT = 12


def parse_decimal(value) -> Decimal | None:
    """Parse a number the way a form field would.

    Accepts ints, floats, Decimals and numeric strings. Returns None for
    anything that is not a finite number (empty strings, "abc", NaN, inf)
    or whose magnitude is beyond 10**12.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    if not result.is_finite():
        return None
    if result and result.adjusted() > _MAX_EXPONENT:
        return None
    return result


def parse_date(value) -> date:
    """Coerce a date, datetime or ISO string to a UTC calendar date.

    Timezone-aware datetimes are converted to UTC before the time of day is
    dropped; naive datetimes are taken as UTC already.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return parse_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    raise TypeError(f"cannot interpret {value!r} as a date")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class Product:
    """A product for sale: ``price`` buys ``quantity`` of ``unit``."""

    id: str
    name: str
    price: Decimal
    quantity: Decimal
    unit: str
    photo: str | None = None
    created_at: str = ""


@dataclass
class Customer:
    id: str
    name: str
    address: str = ""
    contact_number: str = ""
    created_at: str = ""


@dataclass(frozen=True)
class OrderItem:
    """A line of an order, copied from the product when the order was made."""

    product_id: str
    product_name: str
    quantity: Decimal
    unit: str
    price: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": str(self.quantity),
            "unit": self.unit,
            "price": str(self.price),
            "total": str(self.total),
        }

    @classmethod
    def from_dict(cls, data: dict) -> OrderItem:
        return cls(
            product_id=data["product_id"],
            product_name=data["product_name"],
            quantity=Decimal(str(data["quantity"])),
            unit=data["unit"],
            price=Decimal(str(data["price"])),
            total=Decimal(str(data["total"])),
        )


@dataclass(frozen=True)
class DailyOrder:
    """One customer's order for one day.

    Items and the customer name are snapshots; only ``status`` and
    ``amount_paid`` change after creation.
    """

    id: str
    customer_id: str
    customer_name: str
    date: date
    items: tuple[OrderItem, ...] = field(default_factory=tuple)
    total_amount: Decimal = ZERO
    amount_paid: Decimal | None = ZERO
    status: str = PENDING
    created_at: str = ""

    @property
    def paid(self) -> Decimal:
        return self.amount_paid or ZERO

    @property
    def balance(self) -> Decimal:
        return self.total_amount - self.paid
