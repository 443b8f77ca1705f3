"""Bearer-token gate placed in front of every dislike mutation."""

from __future__ import annotations

from typing import Optional

from dislike_service.core.errors import Forbidden, Unauthorized
from dislike_service.services.credentials import CredentialStore

_SCHEME = "bearer"


class TokenAuthenticator:
    """Resolve an ``Authorization`` header to the local user id it belongs to."""

    def __init__(self, credentials: CredentialStore) -> None:
        self._credentials = credentials

    def authenticate(self, authorization: Optional[str]) -> str:
        if not authorization:
            raise Unauthorized()
        scheme, _, token = authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != _SCHEME or not token:
            raise Unauthorized("Expected 'Authorization: Bearer <token>'.")

        user_id = self._credentials.find_active_user(token)
        if user_id is None:
            raise Forbidden()
        return user_id


__all__ = ["TokenAuthenticator"]
