"""
Authorize/callback handshake with the OAuth identity provider.

Correlation state never touches the server: ``authorize`` hands the client a
random state token for the provider and an HMAC of it for its cookie jar, and
``verify_callback`` recomputes that HMAC when the provider redirects back.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from dislike_service.clients.provider_auth import (
    OAuthProviderClient,
    OAuthProviderError,
    OAuthStateSigner,
)
from dislike_service.core.errors import InvalidRequest, UpstreamAuthFailure
from dislike_service.services.credentials import CredentialStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthorizationRedirect:
    """Where to send the client, and the values its cookies must carry."""

    url: str
    state: str
    signature: str


def append_token(callback_url: str, token: str) -> str:
    """Return ``callback_url`` with ``token`` added to its query string."""
    parts = urlsplit(callback_url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.append(("token", token))
    return urlunsplit(parts._replace(query=urlencode(query)))


class OAuthHandshakeService:
    """Runs the authorize, callback and revoke steps of the login flow."""

    def __init__(
        self,
        *,
        provider: OAuthProviderClient,
        signer: OAuthStateSigner,
        credentials: CredentialStore,
        callback_delay_seconds: float = 0.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._signer = signer
        self._credentials = credentials
        self._callback_delay = callback_delay_seconds
        self._sleep = sleep

    def authorize(self, callback_url: Optional[str]) -> AuthorizationRedirect:
        if not callback_url:
            raise InvalidRequest("Query parameter 'callback' is required.")
        state = self._signer.new_state()
        return AuthorizationRedirect(
            url=self._provider.build_authorization_url(state),
            state=state,
            signature=self._signer.sign(state),
        )

    def verify_callback(
        self,
        *,
        callback_url: Optional[str],
        code: Optional[str],
        state: Optional[str],
        signature: Optional[str],
    ) -> None:
        """Reject callbacks that are incomplete or whose state was not issued here."""
        if not callback_url or not code or not state:
            raise InvalidRequest("Missing callback cookie, code or state.")
        if not self._signer.verify(state, signature):
            raise InvalidRequest("State token does not match.")

    async def complete(self, code: str) -> str:
        """
        Exchange ``code`` for the caller's identity and issue a local token.

        Steps run in order and stop at the first failure: throttle, code
        exchange, identity lookup, provider token revocation, credential upsert.
        """
        if self._callback_delay > 0:
            await self._sleep(self._callback_delay)

        try:
            access_token = await self._provider.exchange_authorization_code(code)
            user = await self._provider.fetch_authenticated_user(access_token)
            await self._provider.revoke_access_token(access_token)
        except OAuthProviderError as exc:
            logger.exception("OAuth callback failed at the provider")
            raise UpstreamAuthFailure() from exc

        user_id = str(user["id"])
        token = self._credentials.issue(user_id)
        logger.info("Completed OAuth handshake for user %s", user_id)
        return token

    def revoke(self, token: str) -> None:
        self._credentials.revoke(token)


__all__ = ["AuthorizationRedirect", "OAuthHandshakeService", "append_token"]
