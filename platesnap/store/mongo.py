"""MongoDB document store backend."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import pymongo
from bson import ObjectId
from pymongo.errors import PyMongoError

from platesnap.core.errors import DocumentNotFoundError, StoreUnavailableError
from platesnap.store.base import Document

LOGGER = logging.getLogger(__name__)


def _to_document(raw: Mapping[str, Any]) -> Document:
    doc = dict(raw)
    doc["_id"] = str(doc.get("_id") or "")
    return doc


class MongoDocumentStore:
    """Document store over a pymongo ``Database``."""

    def __init__(self, db: Any) -> None:
        self._db = db

    @classmethod
    def connect(cls, uri: str, db_name: str) -> "MongoDocumentStore":
        """Connect and ping; raises ``PyMongoError`` when unreachable."""
        client: Any = pymongo.MongoClient(uri, serverSelectionTimeoutMS=3000)
        client.admin.command("ping")
        return cls(client[db_name])

    @property
    def db(self) -> Any:
        return self._db

    def add(self, collection: str, document: Mapping[str, Any]) -> str:
        payload = {k: v for k, v in document.items() if k != "_id"}
        try:
            result = self._db[collection].insert_one(payload)
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Insert into {collection} failed: {exc}") from exc
        return str(result.inserted_id)

    def get(self, collection: str, document_id: str) -> Document | None:
        if not ObjectId.is_valid(document_id):
            return None
        try:
            doc = self._db[collection].find_one({"_id": ObjectId(document_id)})
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Read from {collection} failed: {exc}") from exc
        return _to_document(doc) if doc else None

    def find(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
    ) -> list[Document]:
        try:
            cursor = self._db[collection].find(dict(filters or {}))
            if order_by:
                cursor = cursor.sort(order_by, pymongo.ASCENDING)
            return [_to_document(doc) for doc in cursor]
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Query on {collection} failed: {exc}") from exc

    def update(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> None:
        if not ObjectId.is_valid(document_id):
            raise DocumentNotFoundError(collection, document_id)
        payload = {k: v for k, v in fields.items() if k != "_id"}
        try:
            result = self._db[collection].update_one(
                {"_id": ObjectId(document_id)}, {"$set": payload}
            )
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Update in {collection} failed: {exc}") from exc
        if not result.matched_count:
            raise DocumentNotFoundError(collection, document_id)

    def delete(self, collection: str, document_id: str) -> None:
        if not ObjectId.is_valid(document_id):
            return
        try:
            self._db[collection].delete_one({"_id": ObjectId(document_id)})
        except PyMongoError as exc:
            raise StoreUnavailableError(f"Delete in {collection} failed: {exc}") from exc
