"""SQLite-backed store of locally issued bearer tokens."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import uuid4

from dislike_service.clients.sqlite_store import SQLiteDatabase, storage_errors
from dislike_service.core.errors import AlreadyRevoked, NotFound
from dislike_service.models import UserCredential

logger = logging.getLogger(__name__)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_credential(row: sqlite3.Row) -> UserCredential:
    return UserCredential(
        id=row["id"],
        token=row["token"],
        revoked=bool(row["revoked"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class CredentialStore:
    """
    Maps provider identities to the bearer token this service issued them.

    A user id owns exactly one row; issuing a token always overwrites the
    previous one, so at most one active token exists per identity.
    """

    def __init__(
        self,
        database: SQLiteDatabase,
        *,
        token_factory: Callable[[], str] = lambda: str(uuid4()),
    ) -> None:
        self._db = database
        self._token_factory = token_factory

    def get(self, user_id: str) -> Optional[UserCredential]:
        with storage_errors("loading credential"), self._db.connection() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        if not row:
            return None
        return _row_to_credential(row)

    def issue(self, user_id: str) -> str:
        """Insert or rotate the credential for ``user_id`` and return the new token."""
        token = self._token_factory()
        now = _utcnow()
        with storage_errors("issuing credential"), self._db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO users (id, token, revoked, created_at, updated_at)
                VALUES (?, ?, 0, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    token = excluded.token,
                    revoked = 0,
                    updated_at = excluded.updated_at
                """,
                (user_id, token, now, now),
            )
        logger.info("Issued bearer token for user %s", user_id)
        return token

    def find_active_user(self, token: str) -> Optional[str]:
        """Return the user id owning ``token`` when it has not been revoked."""
        with storage_errors("looking up credential"), self._db.connection() as conn:
            row = conn.execute(
                "SELECT id FROM users WHERE token = ? AND revoked = 0",
                (token,),
            ).fetchone()
        return row["id"] if row else None

    def revoke(self, token: str) -> str:
        """
        Mark ``token`` inactive and return the owning user id.

        Raises ``NotFound`` for unknown tokens and ``AlreadyRevoked`` when the
        token was revoked before; a repeated call is reported, never ignored.
        """
        with storage_errors("revoking credential"), self._db.transaction() as conn:
            row = conn.execute(
                "SELECT id, revoked FROM users WHERE token = ?",
                (token,),
            ).fetchone()
            if row is None:
                raise NotFound("Unknown token.")
            if row["revoked"]:
                raise AlreadyRevoked()
            conn.execute(
                "UPDATE users SET revoked = 1, updated_at = ? WHERE id = ?",
                (_utcnow(), row["id"]),
            )
        logger.info("Revoked bearer token for user %s", row["id"])
        return row["id"]


__all__ = ["CredentialStore"]
