"""
Domain-level exceptions shared by services and routes.

Each error carries the HTTP status it maps to and a message that is safe to
show to clients. The application renders them through a single exception
handler registered in ``dislike_service.main``.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Dict, Optional


class ServiceError(Exception):
    """Base class for errors that translate directly into an HTTP response."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class InvalidRequest(ServiceError):
    """Caller input is missing or malformed."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Invalid request."


class Unauthorized(ServiceError):
    """No bearer credential was presented."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Authorization header required."

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(ServiceError):
    """The presented credential is unknown or revoked."""

    status_code = HTTPStatus.FORBIDDEN
    default_message = "Token is not active."


class NotFound(ServiceError):
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Not found."


class AlreadyRevoked(ServiceError):
    """Revocation was requested for a token that is already inactive."""

    status_code = HTTPStatus.CONFLICT
    default_message = "Token has already been revoked."


class Conflict(ServiceError):
    """A dislike transition was rejected by the current toggle state."""

    status_code = HTTPStatus.METHOD_NOT_ALLOWED
    default_message = "Transition not allowed in the current state."


class UpstreamAuthFailure(ServiceError):
    """The identity provider rejected or failed the handshake."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Internal server error."


class InternalError(ServiceError):
    """Storage or unexpected failure; detail stays in the server log."""


__all__ = [
    "AlreadyRevoked",
    "Conflict",
    "Forbidden",
    "InternalError",
    "InvalidRequest",
    "NotFound",
    "ServiceError",
    "Unauthorized",
    "UpstreamAuthFailure",
]
