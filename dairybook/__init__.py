"""Record keeping for a dairy delivery round."""

from .config import (
    AccountConfig,
    BusinessConfig,
    DairyConfig,
    DatabaseConfig,
    LoggingConfig,
    load_config,
)
from .db import DataStore
from .errors import (
    ConfirmationRequired,
    DairyBookError,
    InvalidAmountError,
    InvalidInputError,
    RecordNotFoundError,
)
from .ledger import (
    Statement,
    build_dashboard,
    build_statement,
    record_payment,
    set_status,
)
from .models import Customer, DailyOrder, OrderItem, Product
from .pricing import convert, price_for_quantity

__all__ = [
    "Product",
    "Customer",
    "OrderItem",
    "DailyOrder",
    "convert",
    "price_for_quantity",
    "Statement",
    "build_statement",
    "build_dashboard",
    "record_payment",
    "set_status",
    "DataStore",
    "DairyBookError",
    "InvalidInputError",
    "InvalidAmountError",
    "RecordNotFoundError",
    "ConfirmationRequired",
    "DairyConfig",
    "DatabaseConfig",
    "AccountConfig",
    "BusinessConfig",
    "LoggingConfig",
    "load_config",
]
