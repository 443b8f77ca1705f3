"""
FastAPI application entrypoint for the dislike service.
"""

from __future__ import annotations

import asyncio
import logging
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from dislike_service.api.routes import error_response, router as api_router
from dislike_service.clients import OAuthProviderClient, OAuthStateSigner, SQLiteDatabase
from dislike_service.core.config import AppSettings, get_settings
from dislike_service.core.errors import ServiceError
from dislike_service.core.logging import configure_logging
from dislike_service.services import AccessLogEntry, AccessLogStore

logger = logging.getLogger(__name__)


def _content_length(value: Optional[str]) -> Optional[int]:
    return int(value) if value and value.isdigit() else None


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            content={"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            content={"error": "Invalid request."},
            status_code=HTTPStatus.BAD_REQUEST,
        )


def _register_middleware(
    app: FastAPI, settings: AppSettings, access_log: AccessLogStore
) -> None:
    # Registration order is inside-out: the timeout wraps routing, the access
    # log sees timed-out responses, and CORS headers go on everything.
    @app.middleware("http")
    async def enforce_request_timeout(request: Request, call_next):
        try:
            return await asyncio.wait_for(
                call_next(request), timeout=settings.request_timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.error(
                "Request %s %s exceeded %.1fs",
                request.method,
                request.url.path,
                settings.request_timeout_seconds,
            )
            return JSONResponse(
                content={"error": "Request timed out."},
                status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            )

    @app.middleware("http")
    async def record_access(request: Request, call_next):
        response = await call_next(request)
        if settings.access_log_enabled:
            entry = AccessLogEntry(
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                ip=request.client.host if request.client else None,
                length=_content_length(response.headers.get("content-length")),
                user_agent=request.headers.get("user-agent"),
                accept_language=request.headers.get("accept-language"),
                protocol=request.url.scheme,
                user=getattr(request.state, "user_id", None),
            )
            await run_in_threadpool(access_log.record, entry)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_headers=["Authorization"],
        allow_methods=["GET", "POST", "DELETE"],
    )


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Factory for the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Dislike Service",
        version="0.1.0",
        description="OAuth-gated dislike toggles with aggregate counts.",
    )
    database = SQLiteDatabase(settings.database_path)
    app.state.settings = settings
    app.state.database = database
    app.state.provider_client = OAuthProviderClient(settings.provider)
    # The signing key exists for the life of the application.
    app.state.state_signer = OAuthStateSigner.from_secret(settings.oauth.state_secret)

    _register_error_handlers(app)
    _register_middleware(app, settings, AccessLogStore(database))
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()

__all__ = ["app", "create_app"]
