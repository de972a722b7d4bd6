"""In-memory copy of all registry collections with id lookups."""

from __future__ import annotations

from dataclasses import dataclass, field

from platesnap.registry.models import Apartment, Block, Resident, Vehicle


@dataclass(frozen=True)
class RegistrySnapshot:
    """Full load of the four collections, indexed by id on construction.

    The maps are bounded by the loaded lists and are rebuilt with every new
    snapshot; nothing is kept between reloads.
    """

    blocks: list[Block] = field(default_factory=list)
    apartments: list[Apartment] = field(default_factory=list)
    residents: list[Resident] = field(default_factory=list)
    vehicles: list[Vehicle] = field(default_factory=list)
    blocks_by_id: dict[str, Block] = field(init=False, repr=False)
    apartments_by_id: dict[str, Apartment] = field(init=False, repr=False)
    residents_by_id: dict[str, Resident] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks_by_id", {b.id: b for b in self.blocks})
        object.__setattr__(self, "apartments_by_id", {a.id: a for a in self.apartments})
        object.__setattr__(self, "residents_by_id", {r.id: r for r in self.residents})

    def block(self, block_id: str) -> Block | None:
        return self.blocks_by_id.get(block_id) if block_id else None

    def apartment(self, apartment_id: str) -> Apartment | None:
        return self.apartments_by_id.get(apartment_id) if apartment_id else None

    def resident(self, resident_id: str) -> Resident | None:
        return self.residents_by_id.get(resident_id) if resident_id else None
