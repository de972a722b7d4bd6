"""Lookup search over vehicles joined with residents, apartments and blocks."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from pydantic import BaseModel

from platesnap.registry.models import Apartment, Block, Resident, Vehicle
from platesnap.registry.repositories import (
    ApartmentRepository,
    BlockRepository,
    ResidentRepository,
    VehicleRepository,
)
from platesnap.registry.snapshot import RegistrySnapshot

LOGGER = logging.getLogger(__name__)


class SearchResult(BaseModel):
    """A matched vehicle with whatever linked records still resolve."""

    vehicle: Vehicle
    resident: Resident | None = None
    apartment: Apartment | None = None
    block: Block | None = None

    @property
    def resident_name(self) -> str:
        return self.resident.full_name if self.resident else self.vehicle.resident_name

    @property
    def apartment_code(self) -> str:
        return self.apartment.code if self.apartment else self.vehicle.apartment_code

    @property
    def block_code(self) -> str:
        return self.block.code if self.block else self.vehicle.block_code


def normalize_query(query: str) -> str:
    return (query or "").strip().lower()


def _vehicle_matches(vehicle: Vehicle, resident: Resident | None, term: str) -> bool:
    if term in vehicle.plate_number.lower():
        return True
    if resident is None:
        return term in vehicle.resident_name.lower()
    # Phones are digits, so the raw value is compared.
    return term in resident.full_name.lower() or term in resident.phone


def search_snapshot(snapshot: RegistrySnapshot, query: str) -> list[SearchResult]:
    """Filter vehicles in stored order against plate, resident name or phone."""
    term = normalize_query(query)
    if not term:
        return []

    results: list[SearchResult] = []
    for vehicle in snapshot.vehicles:
        resident = snapshot.resident(vehicle.resident_id)
        if not _vehicle_matches(vehicle, resident, term):
            continue
        results.append(
            SearchResult(
                vehicle=vehicle,
                resident=resident,
                apartment=snapshot.apartment(vehicle.apartment_id),
                block=snapshot.block(vehicle.block_id),
            )
        )
    return results


class SearchEngine:
    """Holds the last full load of the registry and answers queries from it."""

    def __init__(
        self,
        *,
        blocks: BlockRepository,
        apartments: ApartmentRepository,
        residents: ResidentRepository,
        vehicles: VehicleRepository,
    ) -> None:
        self._blocks = blocks
        self._apartments = apartments
        self._residents = residents
        self._vehicles = vehicles
        self._snapshot = RegistrySnapshot()

    @property
    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    def reload(self) -> RegistrySnapshot:
        """Read all four collections in parallel and replace the snapshot."""
        with ThreadPoolExecutor(max_workers=4, thread_name_prefix="registry-load") as pool:
            vehicles = pool.submit(self._vehicles.get_all)
            residents = pool.submit(self._residents.get_all)
            blocks = pool.submit(self._blocks.get_all)
            apartments = pool.submit(self._apartments.get_all)
            snapshot = RegistrySnapshot(
                blocks=blocks.result(),
                apartments=apartments.result(),
                residents=residents.result(),
                vehicles=vehicles.result(),
            )
        self._snapshot = snapshot
        LOGGER.info(
            "Search data loaded: %d vehicles, %d residents",
            len(snapshot.vehicles),
            len(snapshot.residents),
        )
        return snapshot

    def search(self, query: str) -> list[SearchResult]:
        return search_snapshot(self._snapshot, query)
