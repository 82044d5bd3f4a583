"""Daily order storage.

Items are written once as a JSON array and never rewritten; only the
order's status and amount paid can change afterwards.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import date
from decimal import Decimal

from ..errors import InvalidInputError, RecordNotFoundError
from ..models import STATUSES, DailyOrder, OrderItem, parse_date, parse_decimal
from .base import AccountDB

logger = logging.getLogger(__name__)


def _row_to_order(row: sqlite3.Row) -> DailyOrder:
    return DailyOrder(
        id=row["id"],
        customer_id=row["customer_id"],
        customer_name=row["customer_name"],
        date=date.fromisoformat(row["date"]),
        items=tuple(OrderItem.from_dict(i) for i in json.loads(row["items"])),
        total_amount=Decimal(row["total_amount"]),
        amount_paid=Decimal(row["amount_paid"]),
        status=row["status"],
        created_at=row["created_at"],
    )


class OrderDB(AccountDB):
    """Manages the daily_orders table."""

    table = "daily_orders"

    def add(self, order: DailyOrder) -> DailyOrder:
        """Insert an order built by ``new_order`` and return it with its id."""
        if not order.items:
            raise InvalidInputError("An order needs at least one item")
        order_id = order.id or self._new_id()
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO daily_orders
               (id, user_id, customer_id, customer_name, date, items,
                total_amount, amount_paid, status)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                order_id,
                self._account_id,
                order.customer_id,
                order.customer_name,
                parse_date(order.date).isoformat(),
                json.dumps([i.to_dict() for i in order.items], ensure_ascii=False),
                str(order.total_amount),
                str(order.paid),
                order.status,
            ),
        )
        conn.commit()
        logger.debug("Added order %s for %s", order_id, order.customer_name)
        return self.get(order_id)

    def get(self, order_id: str) -> DailyOrder:
        row = self._fetch_row(order_id)
        if row is None:
            raise RecordNotFoundError(self.table, order_id)
        return _row_to_order(row)

    def list(
        self,
        day: date | str | None = None,
        customer_id: str | None = None,
    ) -> list[DailyOrder]:
        """Return the account's orders by date, then by creation order."""
        query = "SELECT * FROM daily_orders WHERE user_id = ?"
        params: list = [self._account_id]
        if day is not None:
            query += " AND date = ?"
            params.append(parse_date(day).isoformat())
        if customer_id is not None:
            query += " AND customer_id = ?"
            params.append(customer_id)
        query += " ORDER BY date, rowid"

        conn = self._get_conn()
        rows = conn.execute(query, params).fetchall()
        return [_row_to_order(r) for r in rows]

    def update(
        self,
        order_id: str,
        *,
        status: str | None = None,
        amount_paid=None,
    ) -> DailyOrder:
        """Persist a new status and/or amount paid.

        Use ``record_payment`` and ``set_status`` to compute the new values;
        this method only stores them.
        """
        values: dict[str, str] = {}
        if status is not None:
            if status not in STATUSES:
                raise InvalidInputError(f"Unknown order status: {status!r}")
            values["status"] = status
        if amount_paid is not None:
            paid = parse_decimal(amount_paid)
            if paid is None or paid < 0:
                raise InvalidInputError(f"Invalid amount paid: {amount_paid!r}")
            values["amount_paid"] = str(paid)
        if not values:
            return self.get(order_id)

        assignments = ", ".join(f"{k} = ?" for k in values)
        conn = self._get_conn()
        cur = conn.execute(
            f"UPDATE daily_orders SET {assignments} WHERE id = ? AND user_id = ?",
            (*values.values(), order_id, self._account_id),
        )
        conn.commit()
        if cur.rowcount == 0:
            raise RecordNotFoundError(self.table, order_id)
        logger.debug("Updated order %s: %s", order_id, values)
        return self.get(order_id)

    def save(self, order: DailyOrder) -> DailyOrder:
        """Persist the mutable fields of an order returned by a transition."""
        return self.update(order.id, status=order.status, amount_paid=order.paid)

    def delete(self, order_id: str) -> None:
        if not self._delete_row(order_id):
            raise RecordNotFoundError(self.table, order_id)
        logger.debug("Deleted order %s", order_id)
