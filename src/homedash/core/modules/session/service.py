from datetime import timedelta

import structlog
from pymongo import ReturnDocument

from homedash.core.core import Database, Service
from homedash.core.modules.session.models import AuthToken, Session
from homedash.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Service for managing user sessions."""

    def __init__(self, database: Database) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    @property
    def ttl(self) -> timedelta:
        return timedelta(days=self.core.config.session_ttl_days)

    async def on_start(self) -> None:
        """Create indexes on startup."""
        # Single index for user_id (for finding sessions by user)
        await self._collection.create_index([("user_id", 1)])
        # TTL index for automatic cleanup of idle sessions
        await self._collection.create_index([("updated_at", 1)], expireAfterSeconds=int(self.ttl.total_seconds()))

    async def create_session(self, user_id: str) -> AuthToken:
        new_session = Session(user_id=user_id)
        await self._collection.insert_one(new_session.to_mongo())
        logger.debug("session_created", user_id=user_id)
        return new_session.auth_token

    async def touch_session(self, auth_token: AuthToken) -> Session | None:
        """Refresh updated_at of a live session and return it.

        Returns None for unknown tokens and for sessions idle longer than the TTL.
        """
        timestamp = now()
        doc = await self._collection.find_one_and_update(
            {"_id": auth_token, "updated_at": {"$gte": timestamp - self.ttl}},
            {"$set": {"updated_at": timestamp}},
            return_document=ReturnDocument.AFTER,
        )
        return Session.model_validate(doc) if doc is not None else None

    async def invalidate_session(self, auth_token: AuthToken) -> None:
        """Invalidate a session by removing it from the database."""
        await self._collection.delete_one({"_id": auth_token})

    async def invalidate_user_sessions(self, user_id: str) -> int:
        result = await self._collection.delete_many({"user_id": user_id})
        return result.deleted_count
