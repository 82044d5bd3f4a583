"""Tests for the command-line interface."""

import json
import sqlite3
from datetime import date

import pytest

from dairybook import cli
from dairybook.db import DataStore, ProductDB


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "cli.db"
    monkeypatch.setenv("DAIRYBOOK_DB_PATH", str(path))
    monkeypatch.setenv("DAIRYBOOK_ACCOUNT", "cli-test")
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    return path


@pytest.fixture
def seeded(db_path):
    with DataStore(db_path, "cli-test") as store:
        milk = store.products.add("Milk", "60", "1", "L")
        asha = store.customers.add("Asha")
    return milk, asha


def _run(*argv):
    cli.main(list(argv))


def _orders(db_path):
    with DataStore(db_path, "cli-test") as store:
        return store.orders.list()


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 1
    assert "dairybook" in capsys.readouterr().out


def test_products_add_and_list(db_path, capsys):
    _run("products", "add", "Curd", "45", "500", "gm")
    _run("products", "list")
    out = capsys.readouterr().out
    assert "Added product Curd" in out
    assert "₹45.00 / 500 gm" in out


def test_products_price(seeded, capsys):
    milk, _ = seeded
    _run("products", "price", milk.id, "500", "--unit", "ml")
    assert "₹30.00" in capsys.readouterr().out


def test_products_price_presets(seeded, capsys):
    milk, _ = seeded
    _run("products", "price", milk.id)
    out = capsys.readouterr().out
    assert "500 ml" in out
    assert "₹120.00" in out


def test_products_price_invalid(seeded, capsys):
    milk, _ = seeded
    with pytest.raises(SystemExit) as exc_info:
        _run("products", "price", milk.id, "-2")
    assert exc_info.value.code == 1
    assert "valid quantity" in capsys.readouterr().err


def test_order_add_and_pay(seeded, db_path, capsys):
    milk, asha = seeded
    _run("orders", "add", "--customer", asha.id, "--item", f"{milk.id}:2",
         "--date", "2025-03-01")
    (order,) = _orders(db_path)
    assert order.total_amount == 120

    _run("orders", "pay", order.id, "50")
    _run("orders", "pay", order.id, "20")
    (order,) = _orders(db_path)
    assert order.amount_paid == 70
    assert "balance ₹50.00" in capsys.readouterr().out


def test_overpayment_declined(seeded, db_path, monkeypatch, capsys):
    milk, asha = seeded
    _run("orders", "add", "--customer", asha.id, "--item", f"{milk.id}:1")
    (order,) = _orders(db_path)

    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    _run("orders", "pay", order.id, "100")
    assert _orders(db_path)[0].amount_paid == 0
    assert "Payment not recorded" in capsys.readouterr().out


def test_overpayment_confirmed(seeded, db_path, monkeypatch):
    milk, asha = seeded
    _run("orders", "add", "--customer", asha.id, "--item", f"{milk.id}:1")
    (order,) = _orders(db_path)

    prompts = []
    monkeypatch.setattr("builtins.input", lambda prompt: prompts.append(prompt) or "y")
    _run("orders", "pay", order.id, "100")
    assert _orders(db_path)[0].amount_paid == 100
    assert "overpayment" in prompts[0]


def test_invalid_payment(seeded, db_path, capsys):
    milk, asha = seeded
    _run("orders", "add", "--customer", asha.id, "--item", f"{milk.id}:1")
    (order,) = _orders(db_path)
    with pytest.raises(SystemExit):
        _run("orders", "pay", order.id, "0")
    assert "Invalid payment amount" in capsys.readouterr().err


def test_deliver_and_undeliver(seeded, db_path, monkeypatch):
    milk, asha = seeded
    _run("orders", "add", "--customer", asha.id, "--item", f"{milk.id}:1")
    (order,) = _orders(db_path)

    monkeypatch.setattr("builtins.input", lambda prompt: "")
    _run("orders", "deliver", order.id)
    assert _orders(db_path)[0].status == "pending"

    _run("orders", "deliver", order.id, "--yes")
    assert _orders(db_path)[0].status == "delivered"

    _run("orders", "undeliver", order.id)
    assert _orders(db_path)[0].status == "pending"


def test_missing_record(db_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        _run("customers", "show", "nope")
    assert exc_info.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_statement_json(seeded, capsys):
    milk, asha = seeded
    _run("orders", "add", "--customer", asha.id, "--item", f"{milk.id}:1.5",
         "--date", "2025-03-01")
    capsys.readouterr()
    _run("statement", "--from", "2025-03-01", "--to", "2025-03-31", "--json")
    data = json.loads(capsys.readouterr().out)
    assert data["total_orders"] == 1
    assert data["grand_total_pending"] == 90.0
    assert data["customer_statements"][0]["customer_name"] == "Asha"


def test_dashboard_text(seeded, monkeypatch, capsys):
    milk, asha = seeded
    monkeypatch.setattr(cli, "utc_today", lambda: date(2025, 3, 1))
    monkeypatch.setattr("dairybook.ledger.dashboard.utc_today", lambda: date(2025, 3, 1))
    _run("orders", "add", "--customer", asha.id, "--item", f"{milk.id}:2")
    _run("dashboard")
    out = capsys.readouterr().out
    assert "Total Orders Today: 1" in out
    assert "Milk (L)" in out


def test_database_error_exits_nonzero(db_path, monkeypatch, capsys):
    def locked(self):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(ProductDB, "list", locked)
    with pytest.raises(SystemExit) as exc_info:
        _run("products", "list")
    assert exc_info.value.code == 1
    assert "Database error: database is locked" in capsys.readouterr().err
