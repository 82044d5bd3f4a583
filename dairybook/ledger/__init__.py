"""Order bookkeeping: statements, dashboard, payments and delivery status."""

from .customers import CustomerSummary, DayGroup, customer_summary, orders_for_day
from .dashboard import DashboardSummary, ProductSummaryLine, build_dashboard
from .orders import make_order_item, new_order, record_payment, set_status
from .statement import ALL_CUSTOMERS, CustomerStatement, Statement, build_statement

__all__ = [
    "ALL_CUSTOMERS",
    "Statement",
    "CustomerStatement",
    "build_statement",
    "DashboardSummary",
    "ProductSummaryLine",
    "build_dashboard",
    "make_order_item",
    "new_order",
    "record_payment",
    "set_status",
    "DayGroup",
    "CustomerSummary",
    "orders_for_day",
    "customer_summary",
]
