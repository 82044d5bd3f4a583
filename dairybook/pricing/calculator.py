"""Price a product for an arbitrary quantity."""

from __future__ import annotations

import logging
from decimal import Decimal

from ..models import Product, parse_decimal
from .units import convert, convertible_units

logger = logging.getLogger(__name__)


def price_for_quantity(product: Product, quantity, unit: str | None = None) -> Decimal | None:
    """Calculate what ``quantity`` of ``unit`` costs for a product.

    Args:
        product: Product whose ``price`` buys ``product.quantity`` of
            ``product.unit``.
        quantity: Entered amount; strings are parsed like a form field.
        unit: Unit of the entered amount. Defaults to the product's unit.

    Returns:
        The price as a Decimal, or None when no price is available (the
        amount is not a positive number, the product has no usable quantity,
        or the unit cannot be used with this product).
    """
    unit = unit or product.unit
    amount = parse_decimal(quantity)
    if amount is None or amount <= 0:
        logger.warning("Rejected quantity for %s: %r", product.name, quantity)
        return None
    if product.quantity <= 0:
        return None
    if unit not in convertible_units(product.unit):
        logger.warning(
            "Unit %s cannot be used with %s (sold per %s)",
            unit, product.name, product.unit,
        )
        return None

    converted = convert(amount, unit, product.unit)
    per_unit = Decimal(product.price) / Decimal(product.quantity)
    return converted * per_unit
