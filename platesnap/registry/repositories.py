"""Entity repositories for blocks, apartments, residents and vehicles.

Each repository owns the write-time normalization of its entity (upper-cased
codes, derived apartment codes, normalized plates). Deletes are hard deletes
and never cascade to dependent records.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, ClassVar, Generic, Iterable, TypeVar

from pydantic import BaseModel

from platesnap.registry.models import (
    Apartment,
    ApartmentDraft,
    ApartmentPatch,
    Block,
    BlockDraft,
    BlockPatch,
    PlateLookup,
    Resident,
    ResidentDraft,
    ResidentPatch,
    StoredModel,
    Vehicle,
    VehicleDraft,
    VehiclePatch,
)
from platesnap.store.base import (
    COLLECTION_APARTMENTS,
    COLLECTION_BLOCKS,
    COLLECTION_RESIDENTS,
    COLLECTION_VEHICLES,
    Document,
    DocumentStore,
)

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=StoredModel)
Clock = Callable[[], datetime]

_PLATE_SEPARATORS = re.compile(r"[\s-]")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_plate(plate: str) -> str:
    """Upper-case a plate and strip whitespace and hyphens: ``51a-123 45`` -> ``51A12345``."""
    return _PLATE_SEPARATORS.sub("", (plate or "").upper())


def apartment_code(block_code: str, room_number: str) -> str:
    return f"{(block_code or '').upper()}-{room_number}"


def _patch_fields(patch: BaseModel) -> dict[str, Any]:
    """Return only explicitly supplied patch fields, keyed by document name."""
    return patch.model_dump(by_alias=True, exclude_unset=True)


class CollectionRepository(Generic[ModelT]):
    """Shared CRUD plumbing over one store collection."""

    collection: ClassVar[str]
    model: ClassVar[type[StoredModel]]
    order_field: ClassVar[str | None] = None

    def __init__(self, store: DocumentStore, *, clock: Clock = _utc_now) -> None:
        self._store = store
        self._clock = clock

    def _to_model(self, doc: Document) -> ModelT:
        payload = {k: v for k, v in doc.items() if k != "_id"}
        payload["id"] = str(doc.get("_id") or "")
        return self.model.model_validate(payload)  # type: ignore[return-value]

    def _find(self, filters: dict[str, Any] | None = None, order_by: str | None = None) -> list[ModelT]:
        docs = self._store.find(self.collection, filters, order_by)
        return [self._to_model(doc) for doc in docs]

    def _find_one(self, filters: dict[str, Any]) -> ModelT | None:
        docs = self._store.find(self.collection, filters)
        return self._to_model(docs[0]) if docs else None

    def _insert(self, fields: dict[str, Any]) -> str:
        now = self._clock()
        document = {**fields, "createdAt": now, "updatedAt": now}
        document_id = self._store.add(self.collection, document)
        LOGGER.info(
            "Created %s document",
            self.collection,
            extra={"collection": self.collection, "document_id": document_id},
        )
        return document_id

    def _patch(self, document_id: str, fields: dict[str, Any]) -> None:
        self._store.update(self.collection, document_id, {**fields, "updatedAt": self._clock()})

    def get_all(self) -> list[ModelT]:
        """Return every record, ordered by the collection's natural key."""
        return self._find(order_by=self.order_field)

    def get_by_id(self, document_id: str) -> ModelT | None:
        doc = self._store.get(self.collection, document_id)
        return self._to_model(doc) if doc else None

    def delete(self, document_id: str) -> None:
        """Hard delete without touching dependents."""
        self._store.delete(self.collection, document_id)
        LOGGER.info(
            "Deleted %s document",
            self.collection,
            extra={"collection": self.collection, "document_id": document_id},
        )


class BlockRepository(CollectionRepository[Block]):
    collection = COLLECTION_BLOCKS
    model = Block
    order_field = "code"

    def create(self, draft: BlockDraft) -> str:
        fields = draft.model_dump(by_alias=True, exclude_none=True)
        fields["code"] = draft.code.upper()
        return self._insert(fields)

    def get_by_code(self, code: str) -> Block | None:
        return self._find_one({"code": (code or "").upper()})

    def update(self, document_id: str, patch: BlockPatch) -> None:
        fields = _patch_fields(patch)
        if fields.get("code"):
            fields["code"] = str(fields["code"]).upper()
        self._patch(document_id, fields)


class ApartmentRepository(CollectionRepository[Apartment]):
    collection = COLLECTION_APARTMENTS
    model = Apartment
    order_field = "code"

    def create(self, draft: ApartmentDraft) -> str:
        fields = draft.model_dump(by_alias=True, exclude_none=True)
        fields["blockCode"] = draft.block_code.upper()
        fields["code"] = apartment_code(draft.block_code, draft.room_number)
        return self._insert(fields)

    def get_by_code(self, code: str) -> Apartment | None:
        return self._find_one({"code": (code or "").upper()})

    def get_by_block(self, block_id: str) -> list[Apartment]:
        return self._find({"blockId": block_id}, order_by="floor")

    def update(self, document_id: str, patch: ApartmentPatch) -> None:
        """Partial update; ``code`` is recomputed only when both of its parts are supplied."""
        fields = _patch_fields(patch)
        if fields.get("blockCode"):
            fields["blockCode"] = str(fields["blockCode"]).upper()
        if fields.get("blockCode") and fields.get("roomNumber"):
            fields["code"] = apartment_code(fields["blockCode"], fields["roomNumber"])
        self._patch(document_id, fields)

    def bulk_create(self, drafts: Iterable[ApartmentDraft]) -> tuple[int, int]:
        """Create apartments one by one and return ``(success, failed)``."""
        success = 0
        failed = 0
        for draft in drafts:
            try:
                self.create(draft)
                success += 1
            except Exception:
                LOGGER.exception("Apartment bulk create failed for room %s", draft.room_number)
                failed += 1
        return success, failed


class ResidentRepository(CollectionRepository[Resident]):
    collection = COLLECTION_RESIDENTS
    model = Resident
    order_field = "fullName"

    def create(self, draft: ResidentDraft) -> str:
        return self._insert(draft.model_dump(by_alias=True, exclude_none=True))

    def get_by_apartment(self, apartment_id: str) -> list[Resident]:
        return self._find({"apartmentId": apartment_id})

    def get_by_block(self, block_id: str) -> list[Resident]:
        return self._find({"blockId": block_id})

    def search(self, term: str) -> list[Resident]:
        """Filter all residents by name, phone or apartment code."""
        needle = (term or "").lower()
        return [
            resident
            for resident in self.get_all()
            if needle in resident.full_name.lower()
            or needle in resident.phone
            or needle in resident.apartment_code.lower()
        ]

    def update(self, document_id: str, patch: ResidentPatch) -> None:
        self._patch(document_id, _patch_fields(patch))


class VehicleRepository(CollectionRepository[Vehicle]):
    collection = COLLECTION_VEHICLES
    model = Vehicle
    order_field = "plateNumber"

    def create(self, draft: VehicleDraft) -> str:
        fields = draft.model_dump(by_alias=True, exclude_none=True)
        fields["plateNumber"] = normalize_plate(draft.plate_number)
        fields["isActive"] = True if draft.is_active is None else draft.is_active
        return self._insert(fields)

    def get_by_plate(self, plate_number: str) -> Vehicle | None:
        """Return the active vehicle whose normalized plate matches."""
        return self._find_one(
            {"plateNumber": normalize_plate(plate_number), "isActive": True}
        )

    def get_by_resident(self, resident_id: str) -> list[Vehicle]:
        return self._find({"residentId": resident_id})

    def get_by_apartment(self, apartment_id: str) -> list[Vehicle]:
        return self._find({"apartmentId": apartment_id})

    def lookup_plate(self, plate_number: str) -> PlateLookup:
        """Resolve a plate together with its resident, apartment and block."""
        vehicle = self.get_by_plate(plate_number)
        if vehicle is None:
            return PlateLookup(found=False)

        resident = (
            ResidentRepository(self._store).get_by_id(vehicle.resident_id)
            if vehicle.resident_id
            else None
        )
        apartment = (
            ApartmentRepository(self._store).get_by_id(vehicle.apartment_id)
            if vehicle.apartment_id
            else None
        )
        block = (
            BlockRepository(self._store).get_by_id(vehicle.block_id)
            if vehicle.block_id
            else None
        )

        return PlateLookup(
            found=True,
            vehicle=vehicle,
            resident=resident,
            apartment=apartment,
            block=block,
        )

    def update(self, document_id: str, patch: VehiclePatch) -> None:
        fields = _patch_fields(patch)
        if fields.get("plateNumber"):
            fields["plateNumber"] = normalize_plate(str(fields["plateNumber"]))
        self._patch(document_id, fields)

    def deactivate(self, document_id: str) -> None:
        """Soft delete: keep the record but drop it from plate lookups."""
        self._patch(document_id, {"isActive": False})
