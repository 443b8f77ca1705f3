"""Request authentication dependency for bearer-protected routes."""

from typing import Optional

from fastapi import Depends, Header, Request

from dislike_service.dependencies.clients import get_token_authenticator
from dislike_service.services import TokenAuthenticator


def get_current_user_id(
    request: Request,
    authenticator: TokenAuthenticator = Depends(get_token_authenticator),
    authorization: Optional[str] = Header(default=None),
) -> str:
    """Resolve the bearer token and expose the user id on ``request.state``."""
    user_id = authenticator.authenticate(authorization)
    request.state.user_id = user_id
    return user_id


__all__ = ["get_current_user_id"]
