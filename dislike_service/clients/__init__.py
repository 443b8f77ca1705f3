"""Expose constructed client wrappers."""

from .provider_auth import OAuthProviderClient, OAuthProviderError, OAuthStateSigner
from .sqlite_store import SQLiteDatabase

__all__ = [
    "OAuthProviderClient",
    "OAuthProviderError",
    "OAuthStateSigner",
    "SQLiteDatabase",
]
