from __future__ import annotations

import pytest

from dislike_service.core.errors import Forbidden, Unauthorized
from dislike_service.services import CredentialStore, TokenAuthenticator


@pytest.fixture
def authenticator(credential_store: CredentialStore) -> TokenAuthenticator:
    return TokenAuthenticator(credential_store)


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header_is_unauthorized(authenticator, header) -> None:
    with pytest.raises(Unauthorized) as exc_info:
        authenticator.authenticate(header)

    assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}


@pytest.mark.parametrize("header", ["Bearer", "Bearer   ", "Basic abc", "token-only"])
def test_malformed_header_is_unauthorized(authenticator, header) -> None:
    with pytest.raises(Unauthorized):
        authenticator.authenticate(header)


def test_unknown_token_is_forbidden(authenticator) -> None:
    with pytest.raises(Forbidden):
        authenticator.authenticate("Bearer not-issued")


def test_revoked_token_is_forbidden(authenticator, credential_store) -> None:
    token = credential_store.issue("alice")
    credential_store.revoke(token)

    with pytest.raises(Forbidden):
        authenticator.authenticate(f"Bearer {token}")


def test_superseded_token_is_forbidden(authenticator, credential_store) -> None:
    old = credential_store.issue("alice")
    credential_store.issue("alice")

    with pytest.raises(Forbidden):
        authenticator.authenticate(f"Bearer {old}")


def test_active_token_resolves_user(authenticator, credential_store) -> None:
    token = credential_store.issue("alice")

    assert authenticator.authenticate(f"Bearer {token}") == "alice"
    assert authenticator.authenticate(f"bearer {token}") == "alice"
