"""Pydantic schemas used by the HTTP layer."""

from .auth import CompletionResponse
from .dislike import DislikeStatusResponse, DislikeTotalResponse

__all__ = [
    "CompletionResponse",
    "DislikeStatusResponse",
    "DislikeTotalResponse",
]
