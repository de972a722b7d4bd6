"""Pydantic models for the condominium registry.

Attributes are snake_case in Python and camelCase in stored documents. Child
records carry ``*Code``/``residentName`` copies of their parents' natural keys;
those copies are taken at write time and never refreshed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

VehicleType = Literal["car", "motorcycle", "bicycle", "other"]
VEHICLE_TYPES: tuple[str, ...] = ("car", "motorcycle", "bicycle", "other")


class DocumentModel(BaseModel):
    """Base for models persisted as camelCase documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredModel(DocumentModel):
    """Persisted entity with store id and audit timestamps."""

    id: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Block(StoredModel):
    """Building in the complex."""

    code: str
    name: str = ""
    total_floors: int = 0
    description: str | None = None


class BlockDraft(DocumentModel):
    code: str
    name: str = ""
    total_floors: int = 0
    description: str | None = None


class BlockPatch(DocumentModel):
    code: str | None = None
    name: str | None = None
    total_floors: int | None = None
    description: str | None = None


class Apartment(StoredModel):
    """Unit inside a block, identified by ``{blockCode}-{roomNumber}``."""

    code: str = ""
    block_id: str = ""
    block_code: str = ""
    floor: int = 0
    room_number: str = ""
    type: str | None = None
    area: float | None = None


class ApartmentDraft(DocumentModel):
    block_id: str
    block_code: str
    floor: int = 1
    room_number: str
    type: str | None = None
    area: float | None = None


class ApartmentPatch(DocumentModel):
    # ``code`` is derived and deliberately not patchable.
    block_id: str | None = None
    block_code: str | None = None
    floor: int | None = None
    room_number: str | None = None
    type: str | None = None
    area: float | None = None


class Resident(StoredModel):
    """Person living in an apartment."""

    full_name: str = ""
    phone: str = ""
    email: str | None = None
    id_number: str | None = None
    apartment_id: str = ""
    apartment_code: str = ""
    block_id: str = ""
    block_code: str = ""
    is_owner: bool = False
    move_in_date: datetime | None = None
    notes: str | None = None


class ResidentDraft(DocumentModel):
    full_name: str
    phone: str = ""
    email: str | None = None
    id_number: str | None = None
    apartment_id: str = ""
    apartment_code: str = ""
    block_id: str = ""
    block_code: str = ""
    is_owner: bool = False
    move_in_date: datetime | None = None
    notes: str | None = None


class ResidentPatch(DocumentModel):
    full_name: str | None = None
    phone: str | None = None
    email: str | None = None
    id_number: str | None = None
    apartment_id: str | None = None
    apartment_code: str | None = None
    block_id: str | None = None
    block_code: str | None = None
    is_owner: bool | None = None
    move_in_date: datetime | None = None
    notes: str | None = None


class Vehicle(StoredModel):
    """Registered plate linked to a resident."""

    plate_number: str
    resident_id: str = ""
    resident_name: str = ""
    apartment_id: str = ""
    apartment_code: str = ""
    block_id: str = ""
    block_code: str = ""
    vehicle_type: VehicleType = "car"
    brand: str | None = None
    model: str | None = None
    color: str | None = None
    registration_date: datetime | None = None
    parking_slot: str | None = None
    notes: str | None = None
    is_active: bool = True


class VehicleDraft(DocumentModel):
    plate_number: str
    resident_id: str = ""
    resident_name: str = ""
    apartment_id: str = ""
    apartment_code: str = ""
    block_id: str = ""
    block_code: str = ""
    vehicle_type: VehicleType = "car"
    brand: str | None = None
    model: str | None = None
    color: str | None = None
    registration_date: datetime | None = None
    parking_slot: str | None = None
    notes: str | None = None
    is_active: bool | None = None


class VehiclePatch(DocumentModel):
    plate_number: str | None = None
    resident_id: str | None = None
    resident_name: str | None = None
    apartment_id: str | None = None
    apartment_code: str | None = None
    block_id: str | None = None
    block_code: str | None = None
    vehicle_type: VehicleType | None = None
    brand: str | None = None
    model: str | None = None
    color: str | None = None
    registration_date: datetime | None = None
    parking_slot: str | None = None
    notes: str | None = None
    is_active: bool | None = None


class PlateLookup(BaseModel):
    """Result of looking up one plate with its linked records."""

    found: bool
    vehicle: Vehicle | None = None
    resident: Resident | None = None
    apartment: Apartment | None = None
    block: Block | None = None


class RegistryStats(BaseModel):
    """Record counts per collection."""

    blocks: int = Field(ge=0)
    apartments: int = Field(ge=0)
    residents: int = Field(ge=0)
    vehicles: int = Field(ge=0)
