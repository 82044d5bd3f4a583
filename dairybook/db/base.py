"""Connection handling shared by the per-table stores."""

from __future__ import annotations

import sqlite3
import uuid
from pathlib import Path

from .schema import ensure_schema

DEFAULT_DB_PATH = "~/.config/dairybook/dairybook.db"


class AccountDB:
    """Base for tables whose rows belong to one account (``user_id``)."""

    table = ""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH, account_id: str = "local") -> None:
        self._db_path = db_path
        self._account_id = account_id
        self._conn: sqlite3.Connection | None = None

    @property
    def account_id(self) -> str:
        return self._account_id

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _fetch_row(self, record_id: str) -> sqlite3.Row | None:
        conn = self._get_conn()
        return conn.execute(
            f"SELECT * FROM {self.table} WHERE id = ? AND user_id = ?",
            (record_id, self._account_id),
        ).fetchone()

    def _delete_row(self, record_id: str) -> bool:
        conn = self._get_conn()
        cur = conn.execute(
            f"DELETE FROM {self.table} WHERE id = ? AND user_id = ?",
            (record_id, self._account_id),
        )
        conn.commit()
        return cur.rowcount > 0

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())
