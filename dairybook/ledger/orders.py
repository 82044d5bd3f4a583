"""Order construction, payments and delivery status changes."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date

from ..errors import ConfirmationRequired, InvalidAmountError, InvalidInputError
from ..models import (
    DELIVERED,
    PENDING,
    STATUSES,
    ZERO,
    Customer,
    DailyOrder,
    OrderItem,
    Product,
    parse_date,
    parse_decimal,
)

logger = logging.getLogger(__name__)


def make_order_item(product: Product, quantity) -> OrderItem:
    """Snapshot a product into an order line.

    Raises:
        InvalidAmountError: If ``quantity`` is not a positive number.
    """
    amount = parse_decimal(quantity)
    if amount is None or amount <= 0:
        raise InvalidAmountError(f"Invalid quantity for {product.name}: {quantity!r}")
    return OrderItem(
        product_id=product.id,
        product_name=product.name,
        quantity=amount,
        unit=product.unit,
        price=product.price,
        total=amount * product.price,
    )


def new_order(customer: Customer, items: list[OrderItem], day: date | str) -> DailyOrder:
    """Build an unsaved pending order; the store assigns its id."""
    if not items:
        raise InvalidInputError("An order needs at least one item")
    return DailyOrder(
        id="",
        customer_id=customer.id,
        customer_name=customer.name,
        date=parse_date(day),
        items=tuple(items),
        total_amount=sum((item.total for item in items), ZERO),
        amount_paid=ZERO,
        status=PENDING,
    )


def record_payment(
    order: DailyOrder, amount, confirm_overpayment: bool = False
) -> DailyOrder:
    """Add a payment to an order.

    Payments accumulate: the returned order's ``amount_paid`` is the old
    value plus ``amount``. The input order is not modified.

    Raises:
        InvalidAmountError: If ``amount`` is not a positive number.
        ConfirmationRequired: If ``amount`` exceeds the balance and the
            overpayment has not been confirmed.
    """
    payment = parse_decimal(amount)
    if payment is None or payment <= 0:
        logger.warning("Rejected payment for order %s: %r", order.id, amount)
        raise InvalidAmountError(f"Invalid payment amount: {amount!r}")

    balance = order.balance
    if payment > balance and not confirm_overpayment:
        raise ConfirmationRequired(
            f"Payment ({payment:.2f}) is more than the balance ({balance:.2f}). "
            "Record as overpayment?",
            amount=payment,
            balance=balance,
        )

    updated = dataclasses.replace(order, amount_paid=order.paid + payment)
    logger.info(
        "Payment of %s recorded for order %s (paid %s of %s)",
        payment, order.id, updated.amount_paid, order.total_amount,
    )
    return updated


def set_status(order: DailyOrder, status: str, confirmed: bool = False) -> DailyOrder:
    """Move an order between pending and delivered.

    Marking an order delivered must be confirmed; reverting to pending
    does not.

    Raises:
        InvalidInputError: For an unknown status.
        ConfirmationRequired: When delivering without confirmation.
    """
    if status not in STATUSES:
        raise InvalidInputError(f"Unknown order status: {status!r}")
    if status == order.status:
        return order
    if status == DELIVERED and not confirmed:
        raise ConfirmationRequired(
            f"Mark order for {order.customer_name} "
            f"({order.total_amount:.2f}) as delivered?",
            customer_name=order.customer_name,
            total_amount=order.total_amount,
        )
    logger.info("Order %s: %s -> %s", order.id, order.status, status)
    return dataclasses.replace(order, status=status)
