"""Best-effort persistence of one row per handled request."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dislike_service.clients.sqlite_store import SQLiteDatabase

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AccessLogEntry:
    method: str
    path: str
    status: int
    ip: Optional[str] = None
    length: Optional[int] = None
    user_agent: Optional[str] = None
    accept_language: Optional[str] = None
    protocol: Optional[str] = None
    user: Optional[str] = None


class AccessLogStore:
    """Writes request metadata to ``access_log``; failures never reach the client."""

    def __init__(self, database: SQLiteDatabase) -> None:
        self._db = database

    def record(self, entry: AccessLogEntry) -> bool:
        values = asdict(entry)
        values["created_at"] = datetime.now(timezone.utc).isoformat()
        columns = ", ".join(values)
        placeholders = ", ".join(f":{name}" for name in values)
        try:
            with self._db.connection() as conn:
                conn.execute(
                    f"INSERT INTO access_log ({columns}) VALUES ({placeholders})",
                    values,
                )
        except sqlite3.Error:
            logger.exception("Failed to record access log entry for %s", entry.path)
            return False
        return True

    def recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        with self._db.connection() as conn:
            rows = conn.execute(
                "SELECT * FROM access_log ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [dict(row) for row in rows]


__all__ = ["AccessLogEntry", "AccessLogStore"]
