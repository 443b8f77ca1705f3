"""
Settings dependency shared by routes and service factories.
"""

from fastapi import Request

from dislike_service.core.config import AppSettings


def get_app_settings(request: Request) -> AppSettings:
    """FastAPI dependency returning the settings the application was built with."""
    return request.app.state.settings


__all__ = ["get_app_settings"]
