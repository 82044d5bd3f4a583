"""Customer CRUD operations."""

from __future__ import annotations

import logging
import sqlite3

from ..errors import InvalidInputError, RecordNotFoundError
from ..models import Customer
from .base import AccountDB

logger = logging.getLogger(__name__)

_EDITABLE = ("name", "address", "contact_number")


def _row_to_customer(row: sqlite3.Row) -> Customer:
    return Customer(
        id=row["id"],
        name=row["name"],
        address=row["address"],
        contact_number=row["contact_number"],
        created_at=row["created_at"],
    )


class CustomerDB(AccountDB):
    """Manages the customers table."""

    table = "customers"

    def add(self, name: str, address: str = "", contact_number: str = "") -> Customer:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Customer name is required")
        customer_id = self._new_id()
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO customers (id, user_id, name, address, contact_number)
               VALUES (?, ?, ?, ?, ?)""",
            (customer_id, self._account_id, name, address or "", contact_number or ""),
        )
        conn.commit()
        logger.debug("Added customer %s (%s)", customer_id, name)
        return self.get(customer_id)

    def get(self, customer_id: str) -> Customer:
        row = self._fetch_row(customer_id)
        if row is None:
            raise RecordNotFoundError(self.table, customer_id)
        return _row_to_customer(row)

    def list(self) -> list[Customer]:
        """Return the account's customers sorted by name."""
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM customers WHERE user_id = ? ORDER BY name, rowid",
            (self._account_id,),
        ).fetchall()
        return [_row_to_customer(r) for r in rows]

    def update(self, customer_id: str, **changes) -> Customer:
        """Change some of a customer's fields; past orders keep the old name."""
        unknown = set(changes) - set(_EDITABLE)
        if unknown:
            raise InvalidInputError(f"Cannot update customer fields: {sorted(unknown)}")
        if "name" in changes:
            changes["name"] = (changes["name"] or "").strip()
            if not changes["name"]:
                raise InvalidInputError("Customer name is required")
        if not changes:
            return self.get(customer_id)

        assignments = ", ".join(f"{k} = ?" for k in changes)
        conn = self._get_conn()
        cur = conn.execute(
            f"UPDATE customers SET {assignments} WHERE id = ? AND user_id = ?",
            (*(v or "" for v in changes.values()), customer_id, self._account_id),
        )
        conn.commit()
        if cur.rowcount == 0:
            raise RecordNotFoundError(self.table, customer_id)
        logger.debug("Updated customer %s: %s", customer_id, sorted(changes))
        return self.get(customer_id)

    def delete(self, customer_id: str) -> None:
        """Delete a customer. Their orders are left in place."""
        if not self._delete_row(customer_id):
            raise RecordNotFoundError(self.table, customer_id)
        logger.debug("Deleted customer %s", customer_id)
