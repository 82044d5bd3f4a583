"""SQLite storage for products, customers and daily orders."""

from .customers import CustomerDB
from .orders import OrderDB
from .products import ProductDB
from .schema import ensure_schema
from .store import DataStore, Snapshot

__all__ = [
    "ProductDB",
    "CustomerDB",
    "OrderDB",
    "DataStore",
    "Snapshot",
    "ensure_schema",
]
