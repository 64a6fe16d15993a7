"""In-process document store for development and tests.

Implements the subset of pymongo's asynchronous collection interface that the
services rely on, so the same service code runs against either backend.
Documents are deep-copied on the way in and out.
"""

import copy
from collections.abc import AsyncIterator, Callable, Iterable, Mapping
from typing import Any, Self
from uuid import uuid4

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

Document = dict[str, Any]

_COMPARISONS: dict[str, Callable[[Any, Any], bool]] = {
    "$eq": lambda a, b: a == b,
    "$ne": lambda a, b: a != b,
    "$gt": lambda a, b: a is not None and a > b,
    "$gte": lambda a, b: a is not None and a >= b,
    "$lt": lambda a, b: a is not None and a < b,
    "$lte": lambda a, b: a is not None and a <= b,
}


def _is_operator_query(condition: Any) -> bool:
    return isinstance(condition, Mapping) and bool(condition) and all(str(k).startswith("$") for k in condition)


def matches(document: Mapping[str, Any], query: Mapping[str, Any] | None) -> bool:
    """Check a document against a filter of equality and comparison conditions."""
    for field, condition in (query or {}).items():
        value = document.get(field)
        if _is_operator_query(condition):
            for operator, operand in condition.items():
                if operator not in _COMPARISONS:
                    raise ValueError(f"Unsupported query operator '{operator}'")
                if not _COMPARISONS[operator](value, operand):
                    return False
        elif value != condition:
            return False
    return True


def apply_update(document: Document, update: Mapping[str, Mapping[str, Any]]) -> Document:
    """Return a copy of the document with $set/$unset applied."""
    result = copy.deepcopy(document)
    for operator, fields in update.items():
        if operator == "$set":
            for field, value in fields.items():
                result[field] = copy.deepcopy(value)
        elif operator == "$unset":
            for field in fields:
                result.pop(field, None)
        else:
            raise ValueError(f"Unsupported update operator '{operator}'")
    return result


def _sort_key(value: Any) -> tuple[bool, Any]:
    # Missing and null values sort first, as in MongoDB
    return (value is not None, value)


class MemoryCursor:
    def __init__(self, documents: list[Document]) -> None:
        self._documents = documents

    def sort(self, key_or_list: str | list[tuple[str, int]], direction: int = ASCENDING) -> Self:
        keys = [(key_or_list, direction)] if isinstance(key_or_list, str) else list(key_or_list)
        # Stable sorts applied from the least significant key
        for key, key_direction in reversed(keys):
            self._documents.sort(key=lambda doc, k=key: _sort_key(doc.get(k)), reverse=key_direction == DESCENDING)
        return self

    def skip(self, count: int) -> Self:
        self._documents = self._documents[count:]
        return self

    def limit(self, count: int) -> Self:
        if count:
            self._documents = self._documents[:count]
        return self

    async def to_list(self, length: int | None = None) -> list[Document]:
        return self._documents[:length] if length else list(self._documents)

    async def __aiter__(self) -> AsyncIterator[Document]:
        for document in self._documents:
            yield document


class MemoryCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self._documents: dict[Any, Document] = {}
        self._unique_keys: list[tuple[str, ...]] = []

    async def create_index(self, keys: Iterable[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        fields = tuple(field for field, _ in keys)
        if unique and fields not in self._unique_keys:
            self._unique_keys.append(fields)
        return "_".join(f"{field}_1" for field in fields)

    async def insert_one(self, document: Mapping[str, Any]) -> InsertOneResult:
        stored = copy.deepcopy(dict(document))
        stored.setdefault("_id", str(uuid4()))
        if stored["_id"] in self._documents:
            raise self._duplicate_key_error(("_id",), stored)
        self._ensure_unique(stored)
        self._documents[stored["_id"]] = stored
        return InsertOneResult(stored["_id"], True)

    async def find_one(self, query: Mapping[str, Any] | None = None, sort: list[tuple[str, int]] | None = None) -> Document | None:
        cursor = self.find(query)
        if sort:
            cursor.sort(sort)
        documents = await cursor.to_list(1)
        return documents[0] if documents else None

    def find(self, query: Mapping[str, Any] | None = None) -> MemoryCursor:
        return MemoryCursor([copy.deepcopy(doc) for doc in self._documents.values() if matches(doc, query)])

    async def count_documents(self, query: Mapping[str, Any]) -> int:
        return sum(1 for doc in self._documents.values() if matches(doc, query))

    async def find_one_and_update(
        self, query: Mapping[str, Any], update: Mapping[str, Mapping[str, Any]], return_document: bool = False
    ) -> Document | None:
        current = self._first_match(query)
        if current is None:
            return None
        updated = apply_update(current, update)
        self._ensure_unique(updated)
        self._documents[current["_id"]] = updated
        return copy.deepcopy(updated if return_document else current)

    async def update_one(self, query: Mapping[str, Any], update: Mapping[str, Mapping[str, Any]]) -> UpdateResult:
        before = await self.find_one_and_update(query, update)
        if before is None:
            return UpdateResult({"n": 0, "nModified": 0}, True)
        modified = int(self._documents[before["_id"]] != before)
        return UpdateResult({"n": 1, "nModified": modified}, True)

    async def find_one_and_delete(self, query: Mapping[str, Any]) -> Document | None:
        current = self._first_match(query)
        if current is None:
            return None
        return self._documents.pop(current["_id"])

    async def delete_one(self, query: Mapping[str, Any]) -> DeleteResult:
        deleted = await self.find_one_and_delete(query)
        return DeleteResult({"n": int(deleted is not None)}, True)

    async def delete_many(self, query: Mapping[str, Any]) -> DeleteResult:
        ids = [doc_id for doc_id, doc in self._documents.items() if matches(doc, query)]
        for doc_id in ids:
            del self._documents[doc_id]
        return DeleteResult({"n": len(ids)}, True)

    def _first_match(self, query: Mapping[str, Any]) -> Document | None:
        return next((doc for doc in self._documents.values() if matches(doc, query)), None)

    def _ensure_unique(self, document: Document) -> None:
        for fields in self._unique_keys:
            key = tuple(document.get(field) for field in fields)
            for other in self._documents.values():
                if other["_id"] != document["_id"] and tuple(other.get(field) for field in fields) == key:
                    raise self._duplicate_key_error(fields, document)

    def _duplicate_key_error(self, fields: tuple[str, ...], document: Document) -> DuplicateKeyError:
        dup_key = {field: document.get(field) for field in fields}
        return DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} dup key: {dup_key}", 11000)


class MemoryDatabase:
    """Named collections held in process memory."""

    def __init__(self, name: str = "homedash") -> None:
        self.name = name
        self._collections: dict[str, MemoryCollection] = {}

    def get_collection(self, name: str) -> MemoryCollection:
        if name not in self._collections:
            self._collections[name] = MemoryCollection(name)
        return self._collections[name]

    def list_collection_names(self) -> list[str]:
        return list(self._collections)
