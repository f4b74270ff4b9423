"""
RecordStore - Relational tables backing the customer query and webhook log.
"""

import asyncio
import json
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from treestore.models.exceptions import RecordStoreError

logger = logging.getLogger(__name__)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS Customers (
        CustomerId INTEGER PRIMARY KEY,
        CompanyName TEXT,
        ContactName TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS BlockchainWebhooks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        data TEXT NOT NULL,
        timestamp TEXT NOT NULL
    )
    """,
)

_SELECT_CUSTOMERS_BY_COMPANY = (
    "SELECT CustomerId, CompanyName, ContactName FROM Customers WHERE CompanyName = ?"
)
_INSERT_CUSTOMER = (
    "INSERT INTO Customers (CustomerId, CompanyName, ContactName) VALUES (?, ?, ?)"
)
_INSERT_WEBHOOK = "INSERT INTO BlockchainWebhooks (data, timestamp) VALUES (?, ?)"
_SELECT_WEBHOOK = "SELECT id, data, timestamp FROM BlockchainWebhooks WHERE id = ?"


class RecordStore:
    """
    SQLite-backed record store.

    Blocking sqlite3 calls run in the default executor. A threading lock
    serialises access to the shared connection across executor threads.
    """

    MEMORY = ":memory:"

    def __init__(self, path: str = MEMORY) -> None:
        """
        Open the database and create missing tables.

        Args:
            path: Database file path, or ":memory:".
        """
        if not path or not path.strip():
            raise ValueError("path cannot be empty")

        if path != self.MEMORY:
            Path(path).parent.mkdir(parents=True, exist_ok=True)

        self._path = path
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = sqlite3.connect(
            path, check_same_thread=False
        )
        self._conn.row_factory = sqlite3.Row
        self._execute_sync("initialize", self._create_tables)

    @classmethod
    async def create(cls, path: str = MEMORY) -> "RecordStore":
        """Async factory: opens the database off the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, cls, path)

    @property
    def path(self) -> str:
        return self._path

    async def add_customer(
        self, customer_id: int, company_name: str, contact_name: str
    ) -> None:
        await self._run(
            "add_customer",
            self._write,
            _INSERT_CUSTOMER,
            (customer_id, company_name, contact_name),
        )

    async def customers_by_company(self, company_name: str) -> list[dict[str, Any]]:
        """
        Fetch every customer of a company.

        Args:
            company_name: Exact company name to match.

        Returns:
            List of {"CustomerId", "CompanyName", "ContactName"} dicts.
        """
        rows = await self._run(
            "customers_by_company", self._read, _SELECT_CUSTOMERS_BY_COMPANY, (company_name,)
        )
        return [dict(row) for row in rows]

    async def store_webhook(self, payload: Any) -> tuple[int, str]:
        """
        Persist a webhook payload as JSON.

        Args:
            payload: Any JSON-serializable value.

        Returns:
            (row id, ISO-8601 UTC timestamp) of the stored record.
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        data = json.dumps(payload)
        row_id = await self._run(
            "store_webhook", self._write, _INSERT_WEBHOOK, (data, timestamp)
        )
        logger.debug(f"Stored webhook {row_id} at {timestamp}")
        return row_id, timestamp

    async def get_webhook(self, webhook_id: int) -> dict[str, Any] | None:
        """Return {"id", "data", "timestamp"} with data decoded, or None."""
        rows = await self._run("get_webhook", self._read, _SELECT_WEBHOOK, (webhook_id,))
        if not rows:
            return None
        row = dict(rows[0])
        row["data"] = json.loads(row["data"])
        return row

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    async def __aenter__(self) -> "RecordStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    async def _run(self, operation: str, fn, *args) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._execute_sync, operation, fn, *args)

    def _execute_sync(self, operation: str, fn, *args) -> Any:
        """Run fn(conn, *args) under the connection lock, wrapping sqlite errors."""
        with self._lock:
            if self._conn is None:
                raise RecordStoreError(operation, RuntimeError("store is closed"))
            try:
                return fn(self._conn, *args)
            except sqlite3.Error as e:
                logger.error(f"Record store {operation} failed: {e}")
                raise RecordStoreError(operation, e) from e

    @staticmethod
    def _create_tables(conn: sqlite3.Connection) -> None:
        with conn:
            for statement in _SCHEMA:
                conn.execute(statement)

    @staticmethod
    def _read(conn: sqlite3.Connection, sql: str, params: tuple) -> list[sqlite3.Row]:
        return conn.execute(sql, params).fetchall()

    @staticmethod
    def _write(conn: sqlite3.Connection, sql: str, params: tuple) -> int:
        with conn:
            cursor = conn.execute(sql, params)
        return cursor.lastrowid
