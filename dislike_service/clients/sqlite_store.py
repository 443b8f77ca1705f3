"""SQLite database holding credentials, dislike toggles and the access log."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from dislike_service.core.errors import InternalError

logger = logging.getLogger(__name__)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        token TEXT NOT NULL UNIQUE,
        revoked INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS item_dislike (
        id TEXT NOT NULL,
        by_whom TEXT NOT NULL,
        username TEXT NOT NULL,
        state INTEGER NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        PRIMARY KEY (id, by_whom)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_item_dislike_state ON item_dislike (id, state)",
    """
    CREATE TABLE IF NOT EXISTS access_log (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        method TEXT NOT NULL,
        ip TEXT,
        status INTEGER NOT NULL,
        path TEXT NOT NULL,
        length INTEGER,
        user_agent TEXT,
        accept_language TEXT,
        protocol TEXT,
        user TEXT,
        created_at TEXT NOT NULL
    )
    """,
)


class SQLiteDatabase:
    """Hands out short-lived connections and write transactions."""

    def __init__(self, db_path: str, *, timeout: float = 5.0) -> None:
        self._db_path = Path(db_path)
        self._timeout = timeout
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def connect(self) -> sqlite3.Connection:
        # Autocommit mode: transactions are opened explicitly by ``transaction``.
        conn = sqlite3.connect(
            self._db_path,
            timeout=self._timeout,
            isolation_level=None,
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        conn = self.connect()
        try:
            for statement in _SCHEMA:
                conn.execute(statement)
        finally:
            conn.close()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield an autocommit connection for single statements."""
        conn = self.connect()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Run the enclosed statements in a single write transaction.

        ``BEGIN IMMEDIATE`` takes the write lock up front, so a conditional
        update and the statements depending on its outcome cannot interleave
        with another writer. Any exception rolls the transaction back.
        """
        conn = self.connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        finally:
            conn.close()


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Log ``sqlite3.Error`` raised while performing ``action`` as ``InternalError``."""
    try:
        yield
    except sqlite3.Error as exc:
        logger.exception("Storage failure while %s", action)
        raise InternalError() from exc


__all__ = ["SQLiteDatabase", "storage_errors"]
