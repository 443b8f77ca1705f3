"""
Domain model for the per (resource, user) dislike toggle.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class DislikeRecord(BaseModel):
    """Represents a row of the ``item_dislike`` table."""

    resource_id: str
    user_id: str
    resource_owner: str = Field(
        ...,
        description="Owner segment of the resource path; stored as-is, never validated.",
    )
    state: bool = Field(..., description="True while the resource is disliked.")
    created_at: datetime
    updated_at: datetime


__all__ = ["DislikeRecord"]
