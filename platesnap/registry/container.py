"""Repositories bundled over one document store."""

from __future__ import annotations

from dataclasses import dataclass

from platesnap.auth.repository import AdminRepository
from platesnap.registry.repositories import (
    ApartmentRepository,
    BlockRepository,
    ResidentRepository,
    VehicleRepository,
)
from platesnap.store.base import DocumentStore


@dataclass(frozen=True)
class Registry:
    """The entity repositories sharing one document store."""

    blocks: BlockRepository
    apartments: ApartmentRepository
    residents: ResidentRepository
    vehicles: VehicleRepository
    admins: AdminRepository

    @classmethod
    def from_store(cls, store: DocumentStore) -> "Registry":
        return cls(
            blocks=BlockRepository(store),
            apartments=ApartmentRepository(store),
            residents=ResidentRepository(store),
            vehicles=VehicleRepository(store),
            admins=AdminRepository(store),
        )
