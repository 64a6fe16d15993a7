"""Session management models."""

import secrets
from datetime import datetime
from typing import NewType

from pydantic import Field

from homedash.core.db import MongoModel
from homedash.utils import now

AuthToken = NewType("AuthToken", str)


def new_auth_token() -> str:
    return secrets.token_urlsafe(32)


class Session(MongoModel):
    """User authentication session, keyed by its opaque token.

    Indexed on user_id, updated_at (TTL = session lifetime).
    """

    id: str = Field(alias="_id", serialization_alias="id", default_factory=new_auth_token)
    user_id: str
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    @property
    def auth_token(self) -> AuthToken:
        return AuthToken(self.id)
