"""Schemas describing dislike state and statistics."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DislikeStatusResponse(BaseModel):
    disliked: bool = Field(..., description="Whether the caller currently dislikes the item.")
    count: int = Field(..., ge=0, description="Number of users currently disliking the item.")


class DislikeTotalResponse(BaseModel):
    total: int = Field(..., ge=0)


__all__ = ["DislikeStatusResponse", "DislikeTotalResponse"]
