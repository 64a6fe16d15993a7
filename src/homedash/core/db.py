from typing import Any, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pymongo.asynchronous.cursor import AsyncCursor


def new_id() -> str:
    return str(uuid4())


class CamelModel(BaseModel):
    """Base for models exposed over the API with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_serialization_defaults_required=True,
    )


class MongoModel(CamelModel):
    id: str = Field(alias="_id", serialization_alias="id", default_factory=new_id)

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over a cursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]
