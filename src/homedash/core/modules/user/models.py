from datetime import datetime

from pydantic import Field

from homedash.core.db import CamelModel, MongoModel
from homedash.utils import now


class User(MongoModel):
    """User domain model with credentials."""

    username: str
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class UserView(CamelModel):
    """Public user profile (API representation, never carries the hash)."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    created_at: datetime = Field(..., description="Registration time")
    updated_at: datetime = Field(..., description="Last profile change")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, username=user.username, created_at=user.created_at, updated_at=user.updated_at)
