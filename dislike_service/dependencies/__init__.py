"""Expose dependency helpers for FastAPI routers."""

from .auth import get_current_user_id
from .clients import (
    get_credential_store,
    get_database,
    get_dislike_service,
    get_handshake_service,
    get_oauth_provider_client,
    get_state_signer,
    get_token_authenticator,
)
from .config import get_app_settings

__all__ = [
    "get_app_settings",
    "get_credential_store",
    "get_current_user_id",
    "get_database",
    "get_dislike_service",
    "get_handshake_service",
    "get_oauth_provider_client",
    "get_state_signer",
    "get_token_authenticator",
]
