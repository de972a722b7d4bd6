"""Repository for admin accounts."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from platesnap.auth.models import AdminDraft, AdminUser
from platesnap.core.security import simple_hash, verify_simple_hash
from platesnap.store.base import COLLECTION_ADMINS, Document, DocumentStore

LOGGER = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _public_user(doc: Document) -> AdminUser:
    """Strip ``passwordHash`` and map store id onto ``id``."""
    payload: dict[str, Any] = {
        k: v for k, v in doc.items() if k not in {"_id", "passwordHash"}
    }
    payload["id"] = str(doc.get("_id") or "")
    return AdminUser.model_validate(payload)


class AdminRepository:
    """Admin accounts in the ``admins`` collection."""

    def __init__(
        self, store: DocumentStore, *, clock: Callable[[], datetime] = _utc_now
    ) -> None:
        self._store = store
        self._clock = clock

    def create(self, admin: AdminDraft, password: str) -> str:
        """Create admin account storing only the password hash."""
        document = admin.model_dump(by_alias=True)
        document["passwordHash"] = simple_hash(password)
        document["createdAt"] = self._clock()
        document_id = self._store.add(COLLECTION_ADMINS, document)
        LOGGER.info(
            "Created admin account",
            extra={"username": admin.username, "document_id": document_id},
        )
        return document_id

    def get_all(self) -> list[AdminUser]:
        return [_public_user(doc) for doc in self._store.find(COLLECTION_ADMINS)]

    def get_by_id(self, admin_id: str) -> AdminUser | None:
        doc = self._store.get(COLLECTION_ADMINS, admin_id)
        return _public_user(doc) if doc else None

    def get_by_username(self, username: str) -> AdminUser | None:
        docs = self._store.find(COLLECTION_ADMINS, {"username": username})
        return _public_user(docs[0]) if docs else None

    def authenticate(self, username: str, password: str) -> AdminUser | None:
        """Return the admin when credentials match, else ``None``.

        Unknown usernames and wrong passwords are indistinguishable to the
        caller. ``lastLoginAt`` is only written on success.
        """
        docs = self._store.find(COLLECTION_ADMINS, {"username": username})
        if not docs:
            return None

        doc = docs[0]
        if not verify_simple_hash(password, str(doc.get("passwordHash") or "")):
            return None

        now = self._clock()
        admin_id = str(doc.get("_id") or "")
        self._store.update(COLLECTION_ADMINS, admin_id, {"lastLoginAt": now})
        return _public_user({**doc, "lastLoginAt": now})

    def update_password(self, admin_id: str, new_password: str) -> None:
        self._store.update(
            COLLECTION_ADMINS, admin_id, {"passwordHash": simple_hash(new_password)}
        )

    def has_any_admin(self) -> bool:
        """Return whether initial setup already created an admin."""
        return bool(self._store.find(COLLECTION_ADMINS))
