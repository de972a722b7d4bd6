"""Cached natural-key copies carried by child records.

Apartments copy their block's code, residents copy apartment and block codes,
vehicles copy resident name and apartment/block codes. The copies are
point-in-time projections: editing or deleting a parent does not touch them.
:func:`find_stale_references` reports drift on demand; nothing repairs it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from platesnap.registry.models import Apartment, Block, Resident
from platesnap.registry.snapshot import RegistrySnapshot
from platesnap.store.base import (
    COLLECTION_APARTMENTS,
    COLLECTION_BLOCKS,
    COLLECTION_RESIDENTS,
    COLLECTION_VEHICLES,
)


@dataclass(frozen=True)
class CachedKey:
    """A parent's natural key as copied onto a child at write time."""

    source_collection: str
    source_id: str
    value: str


@dataclass(frozen=True)
class StaleReference:
    """One cached copy that no longer matches its parent."""

    collection: str
    document_id: str
    field: str
    cached: CachedKey
    current_value: str | None
    reason: Literal["changed", "dangling"]


def block_ref(block: Block) -> dict[str, str]:
    """Fields copied from a block onto its children."""
    return {"block_id": block.id, "block_code": block.code}


def apartment_ref(apartment: Apartment) -> dict[str, str]:
    """Fields copied from an apartment (and its block) onto residents and vehicles."""
    return {
        "apartment_id": apartment.id,
        "apartment_code": apartment.code,
        "block_code": apartment.block_code,
    }


def resident_ref(resident: Resident) -> dict[str, str]:
    """Fields copied from a resident onto its vehicles, apartment and block included."""
    return {
        "resident_id": resident.id,
        "resident_name": resident.full_name,
        "apartment_id": resident.apartment_id,
        "apartment_code": resident.apartment_code,
        "block_id": resident.block_id,
        "block_code": resident.block_code,
    }


def _check(
    found: list[StaleReference],
    *,
    collection: str,
    document_id: str,
    field: str,
    cached: CachedKey,
    current_value: str | None,
) -> None:
    if not cached.source_id:
        return
    if current_value is None:
        found.append(
            StaleReference(collection, document_id, field, cached, None, "dangling")
        )
    elif current_value != cached.value:
        found.append(
            StaleReference(collection, document_id, field, cached, current_value, "changed")
        )


def find_stale_references(snapshot: RegistrySnapshot) -> list[StaleReference]:
    """Compare every cached copy in ``snapshot`` against its live parent."""
    found: list[StaleReference] = []

    for apartment in snapshot.apartments:
        block = snapshot.block(apartment.block_id)
        _check(
            found,
            collection=COLLECTION_APARTMENTS,
            document_id=apartment.id,
            field="blockCode",
            cached=CachedKey(COLLECTION_BLOCKS, apartment.block_id, apartment.block_code),
            current_value=block.code if block else None,
        )

    for resident in snapshot.residents:
        apartment = snapshot.apartment(resident.apartment_id)
        block = snapshot.block(resident.block_id)
        _check(
            found,
            collection=COLLECTION_RESIDENTS,
            document_id=resident.id,
            field="apartmentCode",
            cached=CachedKey(
                COLLECTION_APARTMENTS, resident.apartment_id, resident.apartment_code
            ),
            current_value=apartment.code if apartment else None,
        )
        _check(
            found,
            collection=COLLECTION_RESIDENTS,
            document_id=resident.id,
            field="blockCode",
            cached=CachedKey(COLLECTION_BLOCKS, resident.block_id, resident.block_code),
            current_value=block.code if block else None,
        )

    for vehicle in snapshot.vehicles:
        resident = snapshot.resident(vehicle.resident_id)
        apartment = snapshot.apartment(vehicle.apartment_id)
        block = snapshot.block(vehicle.block_id)
        _check(
            found,
            collection=COLLECTION_VEHICLES,
            document_id=vehicle.id,
            field="residentName",
            cached=CachedKey(
                COLLECTION_RESIDENTS, vehicle.resident_id, vehicle.resident_name
            ),
            current_value=resident.full_name if resident else None,
        )
        _check(
            found,
            collection=COLLECTION_VEHICLES,
            document_id=vehicle.id,
            field="apartmentCode",
            cached=CachedKey(
                COLLECTION_APARTMENTS, vehicle.apartment_id, vehicle.apartment_code
            ),
            current_value=apartment.code if apartment else None,
        )
        _check(
            found,
            collection=COLLECTION_VEHICLES,
            document_id=vehicle.id,
            field="blockCode",
            cached=CachedKey(COLLECTION_BLOCKS, vehicle.block_id, vehicle.block_code),
            current_value=block.code if block else None,
        )

    return found
