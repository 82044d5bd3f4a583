"""Account-scoped access to all record collections."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..models import Customer, DailyOrder, Product
from .base import DEFAULT_DB_PATH
from .customers import CustomerDB
from .orders import OrderDB
from .products import ProductDB


@dataclass(frozen=True)
class Snapshot:
    """Records fetched together for the statement and dashboard views."""

    products: list[Product]
    customers: list[Customer]
    orders: list[DailyOrder]


class DataStore:
    """Products, customers and orders of one account.

    Passed explicitly to whatever needs records; there is no global store.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH, account_id: str = "local") -> None:
        self.products = ProductDB(db_path, account_id)
        self.customers = CustomerDB(db_path, account_id)
        self.orders = OrderDB(db_path, account_id)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            products=self.products.list(),
            customers=self.customers.list(),
            orders=self.orders.list(),
        )

    def close(self) -> None:
        self.products.close()
        self.customers.close()
        self.orders.close()

    def __enter__(self) -> DataStore:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
