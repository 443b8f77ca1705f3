"""Schemas related to OAuth flows and token management."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CompletionResponse(BaseModel):
    """Acknowledgement returned by state-changing endpoints."""

    complete: bool = Field(True, description="Always true when the change was applied.")


__all__ = ["CompletionResponse"]
