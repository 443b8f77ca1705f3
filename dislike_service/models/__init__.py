"""Domain models persisted in the SQLite database."""

from .credential import UserCredential
from .dislike import DislikeRecord

__all__ = ["DislikeRecord", "UserCredential"]
