"""Product CRUD operations."""

from __future__ import annotations

import logging
import sqlite3
from decimal import Decimal

from ..errors import InvalidInputError, RecordNotFoundError
from ..models import UNITS, Product, parse_decimal
from .base import AccountDB

logger = logging.getLogger(__name__)

_EDITABLE = ("name", "price", "quantity", "unit", "photo")


def _row_to_product(row: sqlite3.Row) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        price=Decimal(row["price"]),
        quantity=Decimal(row["quantity"]),
        unit=row["unit"],
        photo=row["photo"],
        created_at=row["created_at"],
    )


def _clean(field: str, value):
    """Validate one editable product field and return its stored form."""
    if field == "name":
        name = (value or "").strip()
        if not name:
            raise InvalidInputError("Product name is required")
        return name
    if field == "price":
        price = parse_decimal(value)
        if price is None or price < 0:
            raise InvalidInputError(f"Invalid price: {value!r}")
        return str(price)
    if field == "quantity":
        quantity = parse_decimal(value)
        if quantity is None or quantity <= 0:
            raise InvalidInputError(f"Invalid quantity: {value!r}")
        return str(quantity)
    if field == "unit":
        if value not in UNITS:
            raise InvalidInputError(f"Unknown unit: {value!r}")
        return value
    return value or None


class ProductDB(AccountDB):
    """Manages the products table."""

    table = "products"

    def add(self, name: str, price, quantity, unit: str, photo: str | None = None) -> Product:
        """Insert a product and return the stored record."""
        values = {
            "name": _clean("name", name),
            "price": _clean("price", price),
            "quantity": _clean("quantity", quantity),
            "unit": _clean("unit", unit),
            "photo": _clean("photo", photo),
        }
        product_id = self._new_id()
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO products (id, user_id, name, price, quantity, unit, photo)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (
                product_id,
                self._account_id,
                values["name"],
                values["price"],
                values["quantity"],
                values["unit"],
                values["photo"],
            ),
        )
        conn.commit()
        logger.debug("Added product %s (%s)", product_id, values["name"])
        return self.get(product_id)

    def get(self, product_id: str) -> Product:
        row = self._fetch_row(product_id)
        if row is None:
            raise RecordNotFoundError(self.table, product_id)
        return _row_to_product(row)

    def list(self) -> list[Product]:
        """Return the account's products, oldest first."""
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM products WHERE user_id = ? ORDER BY created_at, rowid",
            (self._account_id,),
        ).fetchall()
        return [_row_to_product(r) for r in rows]

    def update(self, product_id: str, **changes) -> Product:
        """Change some of a product's fields.

        Existing orders keep their own copies of name, unit and price.
        """
        unknown = set(changes) - set(_EDITABLE)
        if unknown:
            raise InvalidInputError(f"Cannot update product fields: {sorted(unknown)}")
        values = {k: _clean(k, v) for k, v in changes.items()}
        if not values:
            return self.get(product_id)

        assignments = ", ".join(f"{k} = ?" for k in values)
        conn = self._get_conn()
        cur = conn.execute(
            f"UPDATE products SET {assignments} WHERE id = ? AND user_id = ?",
            (*values.values(), product_id, self._account_id),
        )
        conn.commit()
        if cur.rowcount == 0:
            raise RecordNotFoundError(self.table, product_id)
        logger.debug("Updated product %s: %s", product_id, sorted(values))
        return self.get(product_id)

    def delete(self, product_id: str) -> None:
        if not self._delete_row(product_id):
            raise RecordNotFoundError(self.table, product_id)
        logger.debug("Deleted product %s", product_id)
