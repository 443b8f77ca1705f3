"""
OAuth provider utilities.

These helpers sign handshake state and talk to the identity provider's
authorize, access-token, identity and revoke endpoints.
"""

from __future__ import annotations

import hmac
import secrets
from hashlib import sha256
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from dislike_service.core.config import ProviderSettings


class OAuthStateSigner:
    """Issue anti-forgery state tokens and verify their HMAC-SHA256 signatures."""

    STATE_BYTES = 32

    def __init__(self, secret_key: bytes) -> None:
        if not secret_key:
            raise ValueError("State signing key must not be empty.")
        self._secret_key = secret_key

    @classmethod
    def with_random_key(cls) -> "OAuthStateSigner":
        """Signer whose key lives only as long as the process."""
        return cls(secrets.token_bytes(32))

    @classmethod
    def from_secret(cls, secret: Optional[str]) -> "OAuthStateSigner":
        """
        Signer for a configured shared secret, or a random one when unset.

        A random key means restarting the process invalidates every authorize
        redirect still in flight.
        """
        if secret:
            return cls(secret.encode("utf-8"))
        return cls.with_random_key()

    def new_state(self) -> str:
        """Return a random state token (64 hex characters)."""
        return secrets.token_hex(self.STATE_BYTES)

    def sign(self, state: str) -> str:
        return hmac.new(self._secret_key, state.encode("utf-8"), sha256).hexdigest()

    def verify(self, state: str, signature: Optional[str]) -> bool:
        if not signature:
            return False
        return hmac.compare_digest(self.sign(state), signature)


class OAuthProviderError(Exception):
    """Raised when the identity provider fails or returns an unusable payload."""


class OAuthProviderClient:
    """Build authorization URLs and run the server-to-server token calls."""

    def __init__(
        self,
        settings: ProviderSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def client_id(self) -> str:
        return self._settings.client_id

    def build_authorization_url(self, state: str) -> str:
        """Construct the provider consent URL."""
        params = {
            "client_id": self._settings.client_id,
            "scope": self._settings.scope,
            "state": state,
        }
        return f"{self._settings.base_url}/oauth/authorize?{urlencode(params)}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise OAuthProviderError(f"{method} {path} failed: {exc!r}") from exc
        if response.is_error:
            raise OAuthProviderError(
                f"{method} {path} returned {response.status_code}: {response.text}"
            )
        return response

    async def exchange_authorization_code(self, code: str) -> str:
        """
        Exchange an authorization code for a provider access token.

        The token endpoint echoes the client id it issued the token for; a
        mismatch with the configured id is treated as an upstream failure.
        """
        payload = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "code": code,
        }
        response = await self._request("POST", "/access_tokens", json=payload)
        token_payload = _json(response)

        if token_payload.get("client_id") != self._settings.client_id:
            raise OAuthProviderError("Access token was issued for a different client.")
        access_token = token_payload.get("token")
        if not access_token:
            raise OAuthProviderError("Incomplete token payload returned from provider.")
        return access_token

    async def fetch_authenticated_user(self, access_token: str) -> Dict[str, Any]:
        """Return the identity owning ``access_token``."""
        response = await self._request(
            "GET",
            "/authenticated_user",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        user = _json(response)
        if not user.get("id"):
            raise OAuthProviderError("Identity payload is missing the user id.")
        return user

    async def revoke_access_token(self, access_token: str) -> None:
        """Delete ``access_token`` at the provider; it is never kept locally."""
        await self._request("DELETE", f"/access_tokens/{access_token}")


def _json(response: httpx.Response) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise OAuthProviderError("Provider returned a non-JSON body.") from exc
    if not isinstance(payload, dict):
        raise OAuthProviderError("Provider returned an unexpected payload.")
    return payload


__all__ = [
    "OAuthProviderClient",
    "OAuthProviderError",
    "OAuthStateSigner",
]
