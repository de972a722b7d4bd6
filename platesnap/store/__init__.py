"""Document store backends and backend selection."""

from __future__ import annotations

import logging

from pymongo.errors import PyMongoError

from platesnap.core.config import StoreConfig
from platesnap.store.base import (
    COLLECTION_ADMINS,
    COLLECTION_APARTMENTS,
    COLLECTION_BLOCKS,
    COLLECTION_RESIDENTS,
    COLLECTION_VEHICLES,
    Document,
    DocumentStore,
)
from platesnap.store.file_store import JsonFileDocumentStore
from platesnap.store.migrations import apply_mongo_migrations
from platesnap.store.mongo import MongoDocumentStore

LOGGER = logging.getLogger(__name__)

__all__ = [
    "COLLECTION_ADMINS",
    "COLLECTION_APARTMENTS",
    "COLLECTION_BLOCKS",
    "COLLECTION_RESIDENTS",
    "COLLECTION_VEHICLES",
    "Document",
    "DocumentStore",
    "JsonFileDocumentStore",
    "MongoDocumentStore",
    "open_document_store",
]


def open_document_store(config: StoreConfig) -> DocumentStore:
    """Return MongoDB store when configured and reachable, else local JSON store."""
    if config.mongo_uri:
        try:
            store = MongoDocumentStore.connect(config.mongo_uri, config.mongo_db)
            apply_mongo_migrations(store.db)
            LOGGER.info("Document store using MongoDB: db=%s", config.mongo_db)
            return store
        except PyMongoError:
            LOGGER.exception("MongoDB connection failed. Falling back to local store.")
    else:
        LOGGER.warning("MONGODB_URI is not set. Using local document store fallback.")
    return JsonFileDocumentStore(config.data_dir / "store")
