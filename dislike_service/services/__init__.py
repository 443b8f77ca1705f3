"""Service layer exports."""

from .access_log import AccessLogEntry, AccessLogStore
from .authenticator import TokenAuthenticator
from .credentials import CredentialStore
from .dislikes import DislikeService, DislikeStatus
from .handshake import AuthorizationRedirect, OAuthHandshakeService

__all__ = [
    "AccessLogEntry",
    "AccessLogStore",
    "AuthorizationRedirect",
    "CredentialStore",
    "DislikeService",
    "DislikeStatus",
    "OAuthHandshakeService",
    "TokenAuthenticator",
]
