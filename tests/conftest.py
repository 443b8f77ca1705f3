"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from dislike_service.clients import SQLiteDatabase
from dislike_service.services import CredentialStore, DislikeService


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def database(tmp_path) -> SQLiteDatabase:
    return SQLiteDatabase(str(tmp_path / "dislike.db"))


@pytest.fixture
def credential_store(database: SQLiteDatabase) -> CredentialStore:
    return CredentialStore(database)


@pytest.fixture
def dislike_service(database: SQLiteDatabase) -> DislikeService:
    return DislikeService(database)
