"""
In-Memory Database Module

A single shared sqlite3 connection holding the users and orders tables.
The default path ":memory:" gives a private database that lives as long
as the Database object; every method serializes on one lock because the
connection is used from asyncio worker threads.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator, List, Sequence

from ..config.settings import settings

logger = logging.getLogger(__name__)


class Database:
    """
    sqlite3-backed store for users and orders.

    Usage:
        db = Database()
        with db.transaction() as conn:
            conn.execute("INSERT INTO users (name, email, is_active) VALUES (?, ?, ?)", row)
        rows = db.query("SELECT * FROM users")
    """

    def __init__(self, path: str = None):
        self.path = path if path is not None else settings.DATABASE_PATH
        self._lock = threading.RLock()
        # Autocommit mode; transaction() issues BEGIN/COMMIT/ROLLBACK itself
        self._conn = sqlite3.connect(self.path, check_same_thread=False, isolation_level=None)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with self._lock:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id        INTEGER PRIMARY KEY AUTOINCREMENT,
                    name      TEXT NOT NULL,
                    email     TEXT NOT NULL,
                    is_active INTEGER NOT NULL DEFAULT 1
                );

                CREATE TABLE IF NOT EXISTS orders (
                    id           INTEGER PRIMARY KEY AUTOINCREMENT,
                    product_name TEXT NOT NULL,
                    quantity     INTEGER NOT NULL,
                    user_id      INTEGER NOT NULL,
                    FOREIGN KEY(user_id) REFERENCES users(id)
                         ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_orders_user
                    ON orders (user_id);
                """
            )

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Run a block of statements atomically.

        Commits when the block finishes; on any exception rolls back and
        re-raises it.
        """
        with self._lock:
            self._conn.execute("BEGIN")
            try:
                yield self._conn
            except BaseException:
                self._rollback()
                logger.warning("Transaction rolled back")
                raise
            else:
                try:
                    self._conn.execute("COMMIT")
                except sqlite3.Error:
                    self._rollback()
                    logger.warning("Commit failed, transaction rolled back")
                    raise

    def _rollback(self) -> None:
        # SQLite may already have rolled back on its own after some errors
        if self._conn.in_transaction:
            self._conn.execute("ROLLBACK")

    def query(self, sql: str, params: Sequence = ()) -> List[sqlite3.Row]:
        """Run a read-only statement and return all rows."""
        with self._lock:
            return self._conn.execute(sql, params).fetchall()

    def count(self, table: str) -> int:
        """Count the rows of a table."""
        if table not in ("users", "orders"):
            raise ValueError(f"unknown table: {table}")
        return self.query(f"SELECT COUNT(*) FROM {table}")[0][0]

    def close(self) -> None:
        """Close the connection; an in-memory database is discarded."""
        with self._lock:
            self._conn.close()
