from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer

from homedash.core.db import MongoModel
from homedash.utils import now

Payload = Mapping[str, Any]


class Record(MongoModel):
    """Base for per-user collection records.

    The owning user id is a storage key (``user_id`` in the document), not a model
    field, so it never reaches API responses. Optional fields left as None are
    omitted when serialized.
    """

    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    @model_serializer(mode="wrap")
    def _omit_none(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


type CreateNormalizer = Callable[[Payload], dict[str, Any]]
type UpdateNormalizer[R: Record] = Callable[[Payload, R | None], dict[str, Any]]
type ListPreparer[R: Record] = Callable[[list[R], Mapping[str, str]], list[R]]


def keep_order[R: Record](records: list[R], _params: Mapping[str, str]) -> list[R]:
    return records


@dataclass(frozen=True)
class CollectionDefinition[R: Record]:
    """Everything the generic CRUD layer needs to serve one collection.

    Normalizers shape a raw JSON body into stored field values (snake_case keys)
    and raise ValidationError with a user-facing message. The update normalizer
    also receives the stored record, or None when it does not exist. A None value
    in an update removes the field.
    """

    name: str
    model: type[R]
    normalize_create: CreateNormalizer
    normalize_update: UpdateNormalizer[R]
    prepare_list: ListPreparer[R] = keep_order
    path: str | None = None

    @property
    def base_path(self) -> str:
        return self.path or f"/{self.name}"
