"""Generic document store contract shared by all backends."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

Document = dict[str, Any]

COLLECTION_BLOCKS = "blocks"
COLLECTION_APARTMENTS = "apartments"
COLLECTION_RESIDENTS = "residents"
COLLECTION_VEHICLES = "vehicles"
COLLECTION_ADMINS = "admins"


class DocumentStore(Protocol):
    """Key-document CRUD service used by the repositories.

    Documents come back as plain dicts with the store-assigned id as a string
    under ``_id``.
    """

    def add(self, collection: str, document: Mapping[str, Any]) -> str:
        """Insert a document and return the store-assigned id."""

    def get(self, collection: str, document_id: str) -> Document | None:
        """Return a document by id, or ``None`` when it does not exist."""

    def find(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
    ) -> list[Document]:
        """Return documents matching all equality filters, sorted ascending."""

    def update(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> None:
        """Merge ``fields`` into an existing document."""

    def delete(self, collection: str, document_id: str) -> None:
        """Delete a document; deleting a missing id is a no-op."""
