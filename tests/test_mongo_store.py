from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from platesnap.core.errors import DocumentNotFoundError, StoreUnavailableError
from platesnap.store.migrations import MIGRATIONS, apply_mongo_migrations
from platesnap.store.mongo import MongoDocumentStore


@dataclass
class _Result:
    inserted_id: Any = None
    matched_count: int = 0


class _Cursor(list):
    def sort(self, key: str, direction: int) -> "_Cursor":
        return _Cursor(sorted(self, key=lambda doc: doc.get(key), reverse=direction < 0))


@dataclass
class _Collection:
    docs: list[dict[str, Any]] = field(default_factory=list)
    indexes: list[Any] = field(default_factory=list)
    offline: bool = False

    def _match(self, doc: dict[str, Any], query: dict[str, Any]) -> bool:
        return all(doc.get(key) == value for key, value in query.items())

    def create_index(self, keys: Any, **kwargs: Any) -> str:
        self.indexes.append(keys)
        return str(keys)

    def insert_one(self, doc: dict[str, Any]) -> _Result:
        if self.offline:
            raise ServerSelectionTimeoutError("offline")
        stored = {"_id": ObjectId(), **doc}
        self.docs.append(stored)
        return _Result(inserted_id=stored["_id"])

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        return next((dict(doc) for doc in self.docs if self._match(doc, query)), None)

    def find(self, query: dict[str, Any]) -> _Cursor:
        if self.offline:
            raise ServerSelectionTimeoutError("offline")
        return _Cursor(dict(doc) for doc in self.docs if self._match(doc, query))

    def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> _Result:
        for doc in self.docs:
            if self._match(doc, query):
                doc.update(update["$set"])
                return _Result(matched_count=1)
        return _Result()

    def delete_one(self, query: dict[str, Any]) -> None:
        self.docs = [doc for doc in self.docs if not self._match(doc, query)]


class _Database(dict):
    def __missing__(self, name: str) -> _Collection:
        collection = _Collection()
        self[name] = collection
        return collection


def test_mongo_store_crud_uses_string_ids() -> None:
    store = MongoDocumentStore(_Database())

    document_id = store.add("blocks", {"code": "B", "_id": "ignored"})
    store.add("blocks", {"code": "A"})
    store.update("blocks", document_id, {"name": "Lotus"})

    saved = store.get("blocks", document_id)
    ordered = store.find("blocks", order_by="code")

    assert ObjectId.is_valid(document_id)
    assert saved == {"_id": document_id, "code": "B", "name": "Lotus"}
    assert [doc["code"] for doc in ordered] == ["A", "B"]
    assert all(isinstance(doc["_id"], str) for doc in ordered)

    store.delete("blocks", document_id)
    assert store.get("blocks", document_id) is None


def test_mongo_store_invalid_ids() -> None:
    store = MongoDocumentStore(_Database())

    assert store.get("blocks", "not-an-object-id") is None
    store.delete("blocks", "not-an-object-id")
    with pytest.raises(DocumentNotFoundError):
        store.update("blocks", "not-an-object-id", {"name": "x"})
    with pytest.raises(DocumentNotFoundError):
        store.update("blocks", str(ObjectId()), {"name": "x"})


def test_mongo_store_wraps_driver_errors() -> None:
    db = _Database()
    db["vehicles"].offline = True
    store = MongoDocumentStore(db)

    with pytest.raises(StoreUnavailableError):
        store.add("vehicles", {"plateNumber": "51A12345"})
    with pytest.raises(StoreUnavailableError):
        store.find("vehicles")


def test_apply_mongo_migrations_runs_once() -> None:
    db = _Database()

    first = apply_mongo_migrations(db)
    second = apply_mongo_migrations(db)

    assert first == [migration_id for migration_id, _ in MIGRATIONS]
    assert second == []
    assert "code" in db["blocks"].indexes
    assert [("plateNumber", 1), ("isActive", 1)] in db["vehicles"].indexes
