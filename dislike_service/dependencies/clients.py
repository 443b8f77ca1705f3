"""
Factory functions to provide shared clients and services as FastAPI dependencies.

Process-wide singletons (database handle, provider client, state signer) are
built once by ``create_app`` from its settings and kept on ``app.state``;
request-scoped services are assembled from them through ``Depends`` so tests
can swap any layer via ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from dislike_service.clients import OAuthProviderClient, OAuthStateSigner, SQLiteDatabase
from dislike_service.core.config import AppSettings
from dislike_service.dependencies.config import get_app_settings
from dislike_service.services import (
    CredentialStore,
    DislikeService,
    OAuthHandshakeService,
    TokenAuthenticator,
)


def get_database(request: Request) -> SQLiteDatabase:
    """Provide the shared SQLite database handle."""
    return request.app.state.database


def get_oauth_provider_client(request: Request) -> OAuthProviderClient:
    """Provide the application's OAuth provider client."""
    return request.app.state.provider_client


def get_state_signer(request: Request) -> OAuthStateSigner:
    """Provide the state signer whose key lives as long as the application."""
    return request.app.state.state_signer


def get_credential_store(
    database: SQLiteDatabase = Depends(get_database),
) -> CredentialStore:
    return CredentialStore(database)


def get_dislike_service(
    database: SQLiteDatabase = Depends(get_database),
) -> DislikeService:
    return DislikeService(database)


def get_token_authenticator(
    credentials: CredentialStore = Depends(get_credential_store),
) -> TokenAuthenticator:
    return TokenAuthenticator(credentials)


def get_handshake_service(
    provider: OAuthProviderClient = Depends(get_oauth_provider_client),
    signer: OAuthStateSigner = Depends(get_state_signer),
    credentials: CredentialStore = Depends(get_credential_store),
    settings: AppSettings = Depends(get_app_settings),
) -> OAuthHandshakeService:
    """Build the OAuth handshake service from the configured collaborators."""
    return OAuthHandshakeService(
        provider=provider,
        signer=signer,
        credentials=credentials,
        callback_delay_seconds=settings.oauth.callback_delay_seconds,
    )


__all__ = [
    "get_credential_store",
    "get_database",
    "get_dislike_service",
    "get_handshake_service",
    "get_oauth_provider_client",
    "get_state_signer",
    "get_token_authenticator",
]
