"""
SQLite database integration.

This module provides the ``Database`` handle wrapping the single
process‑wide SQLite connection, the ``init_db`` schema initializer and
a ``get_database`` dependency for FastAPI routes.

The handle is constructed explicitly and handed to ``create_app``; the
application stores it on ``app.state`` so tests can run each case
against a fresh ``:memory:`` database.  Query helpers are coroutines
that execute the blocking ``sqlite3`` call in the starlette threadpool,
so a slow query never stalls unrelated requests.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional, Sequence

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from .config import settings

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    telegramId TEXT UNIQUE,
    name TEXT NOT NULL,
    phone TEXT NOT NULL,
    location TEXT,
    registeredAt DATETIME DEFAULT CURRENT_TIMESTAMP,
    updatedAt DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS bookings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    userId INTEGER,
    name TEXT,
    age INTEGER,
    address TEXT,
    farmSize REAL,
    equipment TEXT,
    serviceDate DATE,
    status TEXT DEFAULT 'pending',
    createdAt DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY(userId) REFERENCES users(id)
);

CREATE TABLE IF NOT EXISTS processingGuides (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    userId INTEGER,
    question TEXT,
    response TEXT,
    type TEXT,
    createdAt DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY(userId) REFERENCES users(id)
);
"""


class StorageError(Exception):
    """A query against the store failed.

    The message is the raw text reported by SQLite (for example
    ``NOT NULL constraint failed: users.name``) and is returned to API
    clients unchanged.
    """


def get_database_path(db_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If ``db_url`` (defaulting to ``settings.database_url``) is an
    absolute path or ``:memory:``, use it directly.  Otherwise resolve
    it relative to the project root.
    """
    db_url = db_url or settings.database_url
    if db_url == MEMORY_DATABASE or Path(db_url).is_absolute():
        return db_url
    base_dir = Path(__file__).resolve().parents[3]
    return str((base_dir / db_url).resolve())


class Database:
    """Process‑wide handle on the SQLite store."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = get_database_path(path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Database is not connected. Call connect() on startup.")
        return self._conn

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        """Open the connection, creating the database directory if needed.

        The connection runs in autocommit mode: every repository
        operation is a single statement, which SQLite applies
        atomically.  ``check_same_thread`` is disabled because queries
        are executed from threadpool workers.
        """
        if self._conn is not None:
            return
        if self.path != MEMORY_DATABASE:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(self.path, check_same_thread=False, isolation_level=None)
        except sqlite3.Error:
            logger.exception("Database connection error: %s", self.path)
            raise
        # Return rows as dict‑like objects keyed by column name
        conn.row_factory = sqlite3.Row
        self._conn = conn
        logger.info("Connected to SQLite database at %s", self.path)

    def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        conn.close()
        logger.info("Database connection closed")

    def executescript(self, script: str) -> None:
        self.connection.executescript(script)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def _run(self, sql: str, params: Sequence[Any]) -> sqlite3.Cursor:
        try:
            return self.connection.execute(sql, tuple(params))
        except sqlite3.Error as exc:
            logger.error("Query failed: %s", exc)
            raise StorageError(str(exc)) from exc

    def _fetch_all(self, sql: str, params: Sequence[Any]) -> list[dict[str, Any]]:
        cursor = self._run(sql, params)
        try:
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc

    def _fetch_one(self, sql: str, params: Sequence[Any]) -> Optional[dict[str, Any]]:
        # Drain the cursor so INSERT ... RETURNING statements run to completion.
        rows = self._fetch_all(sql, params)
        return rows[0] if rows else None

    async def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[dict[str, Any]]:
        """Run a query and return a single row as a dict (or None)."""
        return await run_in_threadpool(self._fetch_one, sql, params)

    async def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Run a query and return all rows as a list of dicts."""
        return await run_in_threadpool(self._fetch_all, sql, params)


def init_db(database: Database) -> None:
    """Ensure the ``users``, ``bookings`` and ``processingGuides`` tables exist.

    Safe to call on every start: statements use ``IF NOT EXISTS`` and
    never touch existing rows.  Errors are logged and re‑raised; the
    caller must treat them as fatal.
    """
    try:
        database.executescript(SCHEMA_SQL)
    except sqlite3.Error:
        logger.exception("Failed to initialise database schema at %s", database.path)
        raise
    logger.info("Database schema initialised")


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the handle attached to the application."""
    return request.app.state.database
