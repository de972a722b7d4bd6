"""Versioned MongoDB index migrations for the registry collections."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from platesnap.core.logging import CORRELATION_ID_CTX

LOGGER = logging.getLogger(__name__)

MigrationFn = Callable[[Any], None]


def _migration_20260301_01_lookup_indexes(db: Any) -> None:
    db["blocks"].create_index("code")
    db["apartments"].create_index("code")
    db["apartments"].create_index([("blockId", 1), ("floor", 1)])
    db["residents"].create_index("fullName")
    db["residents"].create_index("apartmentId")
    db["residents"].create_index("blockId")
    db["vehicles"].create_index([("plateNumber", 1), ("isActive", 1)])
    db["vehicles"].create_index("residentId")
    db["vehicles"].create_index("apartmentId")
    db["admins"].create_index("username")


MIGRATIONS: list[tuple[str, MigrationFn]] = [
    ("20260301_01_lookup_indexes", _migration_20260301_01_lookup_indexes),
]


def apply_mongo_migrations(db: Any) -> list[str]:
    """Apply pending migrations to ``db`` and return the ids that ran."""
    migration_collection = db["schema_migrations"]
    migration_collection.create_index("migration_id", unique=True)

    applied: list[str] = []
    for migration_id, migration_fn in MIGRATIONS:
        if migration_collection.find_one({"migration_id": migration_id}):
            continue
        migration_fn(db)
        migration_collection.insert_one(
            {
                "migration_id": migration_id,
                "applied_at": datetime.now(timezone.utc),
                "correlation_id": CORRELATION_ID_CTX.get(),
            }
        )
        LOGGER.info("Applied MongoDB migration %s", migration_id)
        applied.append(migration_id)
    return applied
