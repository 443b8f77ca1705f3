from __future__ import annotations

import pytest

from dislike_service.core.errors import AlreadyRevoked, InternalError, NotFound
from dislike_service.services import CredentialStore


def test_issue_creates_active_credential(credential_store: CredentialStore) -> None:
    token = credential_store.issue("alice")

    record = credential_store.get("alice")
    assert record is not None
    assert record.token == token
    assert record.active
    assert credential_store.find_active_user(token) == "alice"


def test_issue_rotates_existing_token(credential_store: CredentialStore) -> None:
    first = credential_store.issue("alice")
    created_at = credential_store.get("alice").created_at

    second = credential_store.issue("alice")

    assert second != first
    assert credential_store.find_active_user(first) is None
    assert credential_store.find_active_user(second) == "alice"
    record = credential_store.get("alice")
    assert record.created_at == created_at
    assert record.updated_at >= created_at


def test_issue_reactivates_revoked_user(credential_store: CredentialStore) -> None:
    old = credential_store.issue("bob")
    credential_store.revoke(old)

    new = credential_store.issue("bob")

    assert credential_store.get("bob").revoked is False
    assert credential_store.find_active_user(new) == "bob"


def test_revoked_token_is_not_active(credential_store: CredentialStore) -> None:
    token = credential_store.issue("carol")

    assert credential_store.revoke(token) == "carol"

    assert credential_store.get("carol").revoked is True
    assert credential_store.find_active_user(token) is None


def test_revoke_unknown_token_raises_not_found(credential_store: CredentialStore) -> None:
    with pytest.raises(NotFound):
        credential_store.revoke("no-such-token")


def test_second_revoke_is_rejected(credential_store: CredentialStore) -> None:
    token = credential_store.issue("dave")
    credential_store.revoke(token)

    with pytest.raises(AlreadyRevoked):
        credential_store.revoke(token)


def test_uses_injected_token_factory(database) -> None:
    tokens = iter(["token-1", "token-2"])
    store = CredentialStore(database, token_factory=lambda: next(tokens))

    assert store.issue("erin") == "token-1"
    assert store.issue("erin") == "token-2"


def test_storage_failure_surfaces_as_internal_error(database, credential_store) -> None:
    with database.connection() as conn:
        conn.execute("DROP TABLE users")

    with pytest.raises(InternalError):
        credential_store.issue("frank")
