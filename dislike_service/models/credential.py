"""
Domain model for locally issued bearer credentials.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class UserCredential(BaseModel):
    """Represents a row of the ``users`` table."""

    id: str = Field(..., description="Identity id reported by the OAuth provider.")
    token: str = Field(..., description="Current bearer token issued to the user.")
    revoked: bool = False
    created_at: datetime
    updated_at: datetime

    @property
    def active(self) -> bool:
        return not self.revoked


__all__ = ["UserCredential"]
