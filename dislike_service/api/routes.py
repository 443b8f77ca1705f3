"""
FastAPI routes for the dislike service.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Optional

from fastapi import APIRouter, Cookie, Depends, Query, Response
from fastapi.responses import JSONResponse, RedirectResponse

from dislike_service.core.config import AppSettings
from dislike_service.core.errors import ServiceError
from dislike_service.dependencies import (
    get_app_settings,
    get_current_user_id,
    get_dislike_service,
    get_handshake_service,
)
from dislike_service.schemas import (
    CompletionResponse,
    DislikeStatusResponse,
    DislikeTotalResponse,
)
from dislike_service.services import DislikeService, OAuthHandshakeService
from dislike_service.services.handshake import append_token

router = APIRouter()
logger = logging.getLogger(__name__)

CALLBACK_COOKIE = "callback"
STATE_COOKIE = "token"

HandshakeDependency = Annotated[OAuthHandshakeService, Depends(get_handshake_service)]
DislikeDependency = Annotated[DislikeService, Depends(get_dislike_service)]
UserDependency = Annotated[str, Depends(get_current_user_id)]


def error_response(exc: ServiceError) -> JSONResponse:
    """Render a ``ServiceError`` the same way the application handler does."""
    return JSONResponse(
        content={"error": exc.message},
        status_code=int(exc.status_code),
        headers=exc.headers,
    )


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/auth", status_code=HTTPStatus.FOUND)
async def start_oauth_flow(
    handshake: HandshakeDependency,
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    callback: Optional[str] = Query(
        default=None,
        description="URL the client wants to be sent back to with its token.",
    ),
) -> Response:
    """
    Kick off the OAuth flow.

    The client's callback URL and the signature of the state token go into two
    short-lived cookies; the state itself travels through the provider.
    """
    redirect = handshake.authorize(callback)
    response = RedirectResponse(url=redirect.url, status_code=HTTPStatus.FOUND)
    cookie_options = {
        "max_age": settings.oauth.cookie_ttl_seconds,
        "expires": settings.oauth.cookie_ttl_seconds,
        "httponly": True,
        "secure": settings.oauth.secure_cookies,
        "samesite": "lax",
    }
    response.set_cookie(CALLBACK_COOKIE, callback, **cookie_options)
    response.set_cookie(STATE_COOKIE, redirect.signature, **cookie_options)
    return response


@router.get("/auth/callback", status_code=HTTPStatus.FOUND)
async def handle_oauth_callback(
    handshake: HandshakeDependency,
    code: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    callback_cookie: Optional[str] = Cookie(default=None, alias=CALLBACK_COOKIE),
    state_cookie: Optional[str] = Cookie(default=None, alias=STATE_COOKIE),
) -> Response:
    """Complete the OAuth exchange and hand the client its bearer token."""
    handshake.verify_callback(
        callback_url=callback_cookie,
        code=code,
        state=state,
        signature=state_cookie,
    )

    try:
        token = await handshake.complete(code)
    except ServiceError as exc:
        logger.warning("OAuth callback aborted with status %s", int(exc.status_code))
        response = error_response(exc)
        response.delete_cookie(STATE_COOKIE)
        return response

    response = RedirectResponse(
        url=append_token(callback_cookie, token),
        status_code=HTTPStatus.FOUND,
    )
    response.delete_cookie(STATE_COOKIE)
    response.delete_cookie(CALLBACK_COOKIE)
    return response


@router.delete("/auth/token/{token}", response_model=CompletionResponse)
def revoke_token(token: str, handshake: HandshakeDependency) -> CompletionResponse:
    """Revoke a bearer token; revoking twice is an error."""
    handshake.revoke(token)
    return CompletionResponse()


@router.get("/statistics/dislike", response_model=DislikeTotalResponse)
def dislike_statistics(dislikes: DislikeDependency) -> DislikeTotalResponse:
    return DislikeTotalResponse(total=dislikes.total())


@router.get("/statistics/dislike/items/{item_id}", response_model=DislikeTotalResponse)
def item_dislike_statistics(
    item_id: str, dislikes: DislikeDependency
) -> DislikeTotalResponse:
    return DislikeTotalResponse(total=dislikes.aggregate(item_id))


@router.get("/{resource_owner}/items/{item_id}", response_model=DislikeStatusResponse)
def get_dislike(
    resource_owner: str,
    item_id: str,
    user_id: UserDependency,
    dislikes: DislikeDependency,
) -> DislikeStatusResponse:
    status = dislikes.get(item_id, user_id)
    return DislikeStatusResponse(disliked=status.disliked, count=status.count)


@router.post("/{resource_owner}/items/{item_id}", response_model=CompletionResponse)
def set_dislike(
    resource_owner: str,
    item_id: str,
    user_id: UserDependency,
    dislikes: DislikeDependency,
) -> CompletionResponse:
    dislikes.set(item_id, user_id, resource_owner=resource_owner)
    return CompletionResponse()


@router.delete("/{resource_owner}/items/{item_id}", response_model=CompletionResponse)
def unset_dislike(
    resource_owner: str,
    item_id: str,
    user_id: UserDependency,
    dislikes: DislikeDependency,
) -> CompletionResponse:
    dislikes.unset(item_id, user_id)
    return CompletionResponse()


__all__ = ["CALLBACK_COOKIE", "STATE_COOKIE", "error_response", "router"]
