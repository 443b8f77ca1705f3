"""
Per (resource, user) dislike toggle backed by the ``item_dislike`` table.

A pair is either not disliked (no row, or ``state = 0``) or disliked
(``state = 1``). Rows are created lazily by the first ``set`` and are only
ever flipped afterwards. Transitions are conditional writes judged by their
affected row count, inside one write transaction, so two concurrent ``set``
calls for the same pair cannot both succeed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from dislike_service.clients.sqlite_store import SQLiteDatabase, storage_errors
from dislike_service.core.errors import Conflict
from dislike_service.models import DislikeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DislikeStatus:
    disliked: bool
    count: int


class DislikeService:
    """Reads and mutates dislike toggles."""

    def __init__(self, database: SQLiteDatabase) -> None:
        self._db = database

    def get(self, resource_id: str, user_id: str) -> DislikeStatus:
        with storage_errors("reading dislike status"), self._db.connection() as conn:
            row = conn.execute(
                """
                SELECT
                    COUNT(*) AS count,
                    COALESCE(SUM(by_whom = ?), 0) AS mine
                FROM item_dislike
                WHERE id = ? AND state = 1
                """,
                (user_id, resource_id),
            ).fetchone()
        return DislikeStatus(disliked=bool(row["mine"]), count=int(row["count"]))

    def set(self, resource_id: str, user_id: str, *, resource_owner: str) -> None:
        """Move the pair to disliked; raises ``Conflict`` if it already is."""
        now = datetime.now(timezone.utc).isoformat()
        with storage_errors("setting dislike"), self._db.transaction() as conn:
            inserted = conn.execute(
                """
                INSERT INTO item_dislike
                    (id, by_whom, username, state, created_at, updated_at)
                VALUES (?, ?, ?, 1, ?, ?)
                ON CONFLICT(id, by_whom) DO NOTHING
                """,
                (resource_id, user_id, resource_owner, now, now),
            ).rowcount
            if not inserted:
                updated = conn.execute(
                    """
                    UPDATE item_dislike
                    SET state = 1, username = ?, updated_at = ?
                    WHERE id = ? AND by_whom = ? AND state = 0
                    """,
                    (resource_owner, now, resource_id, user_id),
                ).rowcount
                if not updated:
                    raise Conflict("Resource is already disliked.")
        logger.info("User %s disliked resource %s", user_id, resource_id)

    def unset(self, resource_id: str, user_id: str) -> None:
        """Move the pair back to not disliked; raises ``Conflict`` otherwise."""
        now = datetime.now(timezone.utc).isoformat()
        with storage_errors("unsetting dislike"), self._db.transaction() as conn:
            updated = conn.execute(
                """
                UPDATE item_dislike
                SET state = 0, updated_at = ?
                WHERE id = ? AND by_whom = ? AND state = 1
                """,
                (now, resource_id, user_id),
            ).rowcount
            if not updated:
                raise Conflict("Resource is not disliked.")
        logger.info("User %s removed dislike from resource %s", user_id, resource_id)

    def aggregate(self, resource_id: str) -> int:
        """Number of users currently disliking ``resource_id``."""
        with storage_errors("counting dislikes"), self._db.connection() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS count FROM item_dislike WHERE id = ? AND state = 1",
                (resource_id,),
            ).fetchone()
        return int(row["count"])

    def total(self) -> int:
        """Number of active dislikes across every resource."""
        with storage_errors("counting dislikes"), self._db.connection() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS count FROM item_dislike WHERE state = 1"
            ).fetchone()
        return int(row["count"])

    def record(self, resource_id: str, user_id: str) -> Optional[DislikeRecord]:
        with storage_errors("reading dislike record"), self._db.connection() as conn:
            row = conn.execute(
                "SELECT * FROM item_dislike WHERE id = ? AND by_whom = ?",
                (resource_id, user_id),
            ).fetchone()
        if not row:
            return None
        return DislikeRecord(
            resource_id=row["id"],
            user_id=row["by_whom"],
            resource_owner=row["username"],
            state=bool(row["state"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


__all__ = ["DislikeService", "DislikeStatus"]
