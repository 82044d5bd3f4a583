"""CLI entry point."""

from __future__ import annotations

import argparse
import json
import logging
import sqlite3
import sys

from dotenv import load_dotenv

from .config import DairyConfig, load_config
from .db import DataStore
from .errors import ConfirmationRequired, DairyBookError
from .ledger import (
    ALL_CUSTOMERS,
    build_dashboard,
    build_statement,
    customer_summary,
    make_order_item,
    new_order,
    orders_for_day,
    record_payment,
    set_status,
)
from .models import DELIVERED, PENDING, parse_date, utc_today
from .pricing import price_for_quantity, preset_quantities

logger = logging.getLogger(__name__)


def _date_arg(value: str):
    try:
        return parse_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r} (use YYYY-MM-DD)")


def _item_arg(value: str) -> tuple[str, str]:
    product_id, sep, quantity = value.rpartition(":")
    if not sep or not product_id:
        raise argparse.ArgumentTypeError(f"expected PRODUCT_ID:QUANTITY, got {value!r}")
    return product_id, quantity


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dairybook",
        description="Products, customers, daily orders and statements for a dairy round",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="path to a TOML config file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="log debug output"
    )
    sub = parser.add_subparsers(dest="command")

    # products
    products = sub.add_parser("products", help="manage products")
    psub = products.add_subparsers(dest="action", required=True)
    psub.add_parser("list", help="list products")
    p_add = psub.add_parser("add", help="add a product")
    p_add.add_argument("name")
    p_add.add_argument("price", help="price of QUANTITY UNIT")
    p_add.add_argument("quantity")
    p_add.add_argument("unit", choices=["ml", "L", "gm", "kg", "piece"])
    p_add.add_argument("--photo", default=None, help="photo URL")
    p_edit = psub.add_parser("edit", help="change a product")
    p_edit.add_argument("id")
    p_edit.add_argument("--name")
    p_edit.add_argument("--price")
    p_edit.add_argument("--quantity")
    p_edit.add_argument("--unit", choices=["ml", "L", "gm", "kg", "piece"])
    p_edit.add_argument("--photo")
    p_del = psub.add_parser("delete", help="delete a product")
    p_del.add_argument("id")
    p_del.add_argument("--yes", "-y", action="store_true", help="do not ask")
    p_price = psub.add_parser("price", help="price a product for some quantity")
    p_price.add_argument("id")
    p_price.add_argument("quantity", nargs="?", default=None,
                         help="omit to price the preset quantities")
    p_price.add_argument("--unit", default=None)

    # customers
    customers = sub.add_parser("customers", help="manage customers")
    csub = customers.add_subparsers(dest="action", required=True)
    csub.add_parser("list", help="list customers")
    c_add = csub.add_parser("add", help="add a customer")
    c_add.add_argument("name")
    c_add.add_argument("--address", default="")
    c_add.add_argument("--contact", default="", help="contact number")
    c_edit = csub.add_parser("edit", help="change a customer")
    c_edit.add_argument("id")
    c_edit.add_argument("--name")
    c_edit.add_argument("--address")
    c_edit.add_argument("--contact")
    c_del = csub.add_parser("delete", help="delete a customer")
    c_del.add_argument("id")
    c_del.add_argument("--yes", "-y", action="store_true", help="do not ask")
    c_show = csub.add_parser("show", help="show a customer's orders and balance")
    c_show.add_argument("id")

    # orders
    orders = sub.add_parser("orders", help="manage daily orders")
    osub = orders.add_subparsers(dest="action", required=True)
    o_list = osub.add_parser("list", help="list one day's orders")
    o_list.add_argument("--date", type=_date_arg, default=None)
    o_add = osub.add_parser("add", help="create an order")
    o_add.add_argument("--customer", required=True, help="customer id")
    o_add.add_argument("--item", type=_item_arg, action="append", required=True,
                       metavar="PRODUCT_ID:QTY", help="repeat for each line")
    o_add.add_argument("--date", type=_date_arg, default=None)
    o_pay = osub.add_parser("pay", help="record a payment")
    o_pay.add_argument("id")
    o_pay.add_argument("amount")
    o_pay.add_argument("--yes", "-y", action="store_true",
                       help="accept an overpayment without asking")
    o_deliver = osub.add_parser("deliver", help="mark an order delivered")
    o_deliver.add_argument("id")
    o_deliver.add_argument("--yes", "-y", action="store_true", help="do not ask")
    o_undeliver = osub.add_parser("undeliver", help="mark an order pending again")
    o_undeliver.add_argument("id")
    o_del = osub.add_parser("delete", help="delete an order")
    o_del.add_argument("id")
    o_del.add_argument("--yes", "-y", action="store_true", help="do not ask")

    # statement
    st = sub.add_parser("statement", help="totals for a date range")
    st.add_argument("--from", dest="start", type=_date_arg, default=None)
    st.add_argument("--to", dest="end", type=_date_arg, default=None)
    st.add_argument("--customer", default=ALL_CUSTOMERS, help="customer id or 'all'")
    st.add_argument("--json", action="store_true", help="output JSON")

    # dashboard
    dash = sub.add_parser("dashboard", help="today's overview")
    dash.add_argument("--json", action="store_true", help="output JSON")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = load_config(args.config)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.logging.level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug(
        "Using database %s (account %s)", config.database.path, config.account.id
    )

    with DataStore(config.database.path, config.account.id) as store:
        try:
            match args.command:
                case "products":
                    _cmd_products(store, config, args)
                case "customers":
                    _cmd_customers(store, config, args)
                case "orders":
                    _cmd_orders(store, config, args)
                case "statement":
                    _cmd_statement(store, config, args)
                case "dashboard":
                    _cmd_dashboard(store, config, args)
        except DairyBookError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)
        except sqlite3.Error as e:
            logger.debug("Database error", exc_info=True)
            print(f"Database error: {e}", file=sys.stderr)
            sys.exit(1)


def _confirm(message: str, assume_yes: bool = False) -> bool:
    if assume_yes:
        return True
    try:
        answer = input(f"{message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _money(config: DairyConfig, amount) -> str:
    return f"{config.business.currency}{amount:.2f}"


def _qty(value) -> str:
    return f"{value.normalize():f}"


def _cmd_products(store: DataStore, config: DairyConfig, args) -> None:
    match args.action:
        case "list":
            products = store.products.list()
            if not products:
                print("No products yet.")
                return
            for p in products:
                print(
                    f"{p.id}  {p.name:<20} "
                    f"{_money(config, p.price)} / {_qty(p.quantity)} {p.unit}"
                )
        case "add":
            product = store.products.add(
                args.name, args.price, args.quantity, args.unit, photo=args.photo
            )
            print(f"Added product {product.name} ({product.id})")
        case "edit":
            changes = {
                k: v for k, v in {
                    "name": args.name,
                    "price": args.price,
                    "quantity": args.quantity,
                    "unit": args.unit,
                    "photo": args.photo,
                }.items() if v is not None
            }
            product = store.products.update(args.id, **changes)
            print(f"Updated product {product.name}")
        case "delete":
            product = store.products.get(args.id)
            if not _confirm(f"Delete product {product.name}?", args.yes):
                print("Cancelled.")
                return
            store.products.delete(args.id)
            print(f"Deleted product {product.name}")
        case "price":
            product = store.products.get(args.id)
            if args.quantity is None:
                for preset in preset_quantities(product.unit):
                    price = price_for_quantity(product, preset.quantity, preset.unit)
                    print(f"  {preset.label:<10} {_money(config, price)}")
                return
            price = price_for_quantity(product, args.quantity, args.unit)
            if price is None:
                print("Please enter a valid quantity.", file=sys.stderr)
                sys.exit(1)
            unit = args.unit or product.unit
            print(f"{product.name} {args.quantity} {unit}: {_money(config, price)}")


def _cmd_customers(store: DataStore, config: DairyConfig, args) -> None:
    match args.action:
        case "list":
            customers = store.customers.list()
            if not customers:
                print("No customers yet.")
                return
            for c in customers:
                print(f"{c.id}  {c.name:<20} {c.contact_number:<14} {c.address}")
        case "add":
            customer = store.customers.add(
                args.name, address=args.address, contact_number=args.contact
            )
            print(f"Added customer {customer.name} ({customer.id})")
        case "edit":
            changes = {
                k: v for k, v in {
                    "name": args.name,
                    "address": args.address,
                    "contact_number": args.contact,
                }.items() if v is not None
            }
            customer = store.customers.update(args.id, **changes)
            print(f"Updated customer {customer.name}")
        case "delete":
            customer = store.customers.get(args.id)
            if not _confirm(
                f"Delete {customer.name}? This action cannot be undone.", args.yes
            ):
                print("Cancelled.")
                return
            store.customers.delete(args.id)
            print(f"Deleted customer {customer.name}")
        case "show":
            customer = store.customers.get(args.id)
            summary = customer_summary(store.orders.list(customer_id=customer.id), customer.id)
            print(f"{customer.name}  {customer.contact_number}  {customer.address}")
            print(f"  Total orders:   {summary.order_count}")
            print(f"  Total paid:     {_money(config, summary.total_paid)}")
            print(f"  Pending amount: {_money(config, summary.pending_amount)}")
            for o in summary.orders:
                print(
                    f"  {o.date.isoformat()}  {o.id}  {o.status:<9} "
                    f"total {_money(config, o.total_amount)}  "
                    f"paid {_money(config, o.paid)}  "
                    f"balance {_money(config, o.balance)}"
                )


def _cmd_orders(store: DataStore, config: DairyConfig, args) -> None:
    match args.action:
        case "list":
            day = args.date or utc_today()
            groups = orders_for_day(store.orders.list(day=day), day)
            if not groups:
                print(f"No orders for {day.isoformat()}.")
                return
            for group in groups:
                print(group.customer_name)
                for o in group.orders:
                    print(f"  {o.id}  {o.status:<9} {_money(config, o.total_amount)}")
                    for item in o.items:
                        print(
                            f"    {item.product_name} {_qty(item.quantity)} {item.unit}"
                            f" x {_money(config, item.price)}"
                            f" = {_money(config, item.total)}"
                        )
        case "add":
            customer = store.customers.get(args.customer)
            items = [
                make_order_item(store.products.get(product_id), quantity)
                for product_id, quantity in args.item
            ]
            order = store.orders.add(new_order(customer, items, args.date or utc_today()))
            print(
                f"Created order {order.id} for {order.customer_name}: "
                f"{_money(config, order.total_amount)}"
            )
        case "pay":
            order = store.orders.get(args.id)
            try:
                updated = record_payment(order, args.amount, confirm_overpayment=args.yes)
            except ConfirmationRequired as e:
                if not _confirm(e.message):
                    print("Payment not recorded.")
                    return
                updated = record_payment(order, args.amount, confirm_overpayment=True)
            saved = store.orders.save(updated)
            print(
                f"Recorded payment. Paid {_money(config, saved.paid)} of "
                f"{_money(config, saved.total_amount)}, "
                f"balance {_money(config, saved.balance)}"
            )
        case "deliver":
            order = store.orders.get(args.id)
            try:
                updated = set_status(order, DELIVERED, confirmed=args.yes)
            except ConfirmationRequired as e:
                if not _confirm(e.message):
                    print("Order left pending.")
                    return
                updated = set_status(order, DELIVERED, confirmed=True)
            store.orders.save(updated)
            print(f"Order for {order.customer_name} marked delivered")
        case "undeliver":
            order = store.orders.get(args.id)
            store.orders.save(set_status(order, PENDING))
            print(f"Order for {order.customer_name} marked pending")
        case "delete":
            order = store.orders.get(args.id)
            if not _confirm("Are you sure you want to delete this order?", args.yes):
                print("Cancelled.")
                return
            store.orders.delete(args.id)
            print(f"Deleted order {order.id}")


def _cmd_statement(store: DataStore, config: DairyConfig, args) -> None:
    today = utc_today()
    snap = store.snapshot()
    statement = build_statement(
        snap.orders,
        snap.customers,
        args.start or today,
        args.end or today,
        args.customer,
    )

    if args.json:
        print(json.dumps(statement.to_dict(), ensure_ascii=False, indent=2))
        return

    print(f"{config.business.name} - Statement")
    print(f"Period: {statement.start_date.isoformat()} to {statement.end_date.isoformat()}")
    print()
    print(f"Grand Total Value: {_money(config, statement.grand_total_amount)}")
    print(f"Grand Total Paid:  {_money(config, statement.grand_total_paid)}")
    print(f"Grand Pending:     {_money(config, statement.grand_total_pending)}")
    print(f"Total Orders:      {statement.total_orders}")

    if not statement.customer_statements:
        print("\nNo orders found for the selected criteria.")
        return

    for cs in statement.customer_statements:
        print()
        print(f"Customer: {cs.customer_name}")
        print(
            f"  Total: {_money(config, cs.total_amount)} | "
            f"Paid: {_money(config, cs.total_paid)} | "
            f"Pending: {_money(config, cs.pending_amount)}"
        )
        for o in cs.orders:
            items = ", ".join(f"{i.product_name} x{_qty(i.quantity)}" for i in o.items)
            print(
                f"  {o.date.isoformat()}  {items:<30} "
                f"{_money(config, o.total_amount)}  {_money(config, o.paid)}  "
                f"{_money(config, o.balance)}  {o.status}"
            )


def _cmd_dashboard(store: DataStore, config: DairyConfig, args) -> None:
    snap = store.snapshot()
    summary = build_dashboard(snap.orders, snap.products, snap.customers)

    if args.json:
        print(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))
        return

    print(f"Today's Overview ({summary.day.isoformat()})")
    print(f"  Today's Collection: {_money(config, summary.total_collected)}")
    print(f"  Today's Pending:    {_money(config, summary.total_pending)}")
    print(f"  Total Orders Today: {summary.order_count}")
    print(f"  Delivered Today:    {summary.delivered_count}")
    print(f"  Total Products:     {summary.product_count}")
    print(f"  Total Customers:    {summary.customer_count}")
    if summary.product_summary:
        print()
        print("Today's Product Summary")
        for line in summary.product_summary:
            print(f"  {line.label:<30} {_qty(line.quantity)}")
