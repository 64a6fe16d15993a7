from typing import Any

import structlog
from pymongo import ReturnDocument

from homedash.core.core import Database, Service
from homedash.core.modules.record.models import CollectionDefinition, Record
from homedash.core.modules.registry import COLLECTIONS
from homedash.errors import NotFoundError
from homedash.utils import now

logger = structlog.get_logger(__name__)


class RecordService(Service):
    """Stores records of every collection, each scoped to its owning user.

    Every query filters on ``user_id``; a record id belonging to another user
    behaves exactly like a missing one.
    """

    def __init__(self, database: Database) -> None:
        super().__init__(database)
        self._collections = {definition.name: database.get_collection(definition.name) for definition in COLLECTIONS}

    async def on_start(self) -> None:
        """Create indexes for per-user listing."""
        for collection in self._collections.values():
            await collection.create_index([("user_id", 1), ("created_at", 1)])

    async def list_records[R: Record](self, definition: CollectionDefinition[R], user_id: str) -> list[R]:
        """Get all records of the user in creation order."""
        cursor = self._collections[definition.name].find({"user_id": user_id}).sort("created_at", 1)
        return await definition.model.list_cursor(cursor)

    async def find_record[R: Record](self, definition: CollectionDefinition[R], user_id: str, record_id: str) -> R | None:
        doc = await self._collections[definition.name].find_one({"_id": record_id, "user_id": user_id})
        return definition.model.model_validate(doc) if doc is not None else None

    async def create_record[R: Record](self, definition: CollectionDefinition[R], user_id: str, fields: dict[str, Any]) -> R:
        timestamp = now()
        record = definition.model.model_validate({**fields, "created_at": timestamp, "updated_at": timestamp})
        await self._collections[definition.name].insert_one({**record.to_mongo(), "user_id": user_id})
        logger.debug("record_created", collection=definition.name, record_id=record.id, user_id=user_id)
        return record

    async def update_record[R: Record](
        self, definition: CollectionDefinition[R], user_id: str, record_id: str, updates: dict[str, Any]
    ) -> R:
        """Merge field updates into a record and refresh updated_at."""
        operations: dict[str, dict[str, Any]] = {
            "$set": {**{key: value for key, value in updates.items() if value is not None}, "updated_at": now()}
        }
        to_unset = {key: "" for key, value in updates.items() if value is None}
        if to_unset:
            operations["$unset"] = to_unset

        doc = await self._collections[definition.name].find_one_and_update(
            {"_id": record_id, "user_id": user_id}, operations, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("Record not found")
        return definition.model.model_validate(doc)

    async def delete_record[R: Record](self, definition: CollectionDefinition[R], user_id: str, record_id: str) -> R:
        """Remove a record and return it."""
        doc = await self._collections[definition.name].find_one_and_delete({"_id": record_id, "user_id": user_id})
        if doc is None:
            raise NotFoundError("Record not found")
        return definition.model.model_validate(doc)

    async def delete_records_by_user(self, user_id: str) -> int:
        """Delete every record the user owns across all collections."""
        total = 0
        for collection in self._collections.values():
            result = await collection.delete_many({"user_id": user_id})
            total += result.deleted_count
        return total
