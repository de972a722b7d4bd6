from __future__ import annotations

from pathlib import Path

import pytest

from platesnap.core.errors import DocumentNotFoundError
from platesnap.registry.denormalized import block_ref
from platesnap.registry.models import (
    ApartmentDraft,
    ApartmentPatch,
    BlockDraft,
    BlockPatch,
    ResidentPatch,
    VehicleDraft,
    VehiclePatch,
)
from platesnap.registry.repositories import apartment_code, normalize_plate
from tests.registry_fixtures import add_household, build_registry


def test_normalize_plate_strips_separators_and_uppercases() -> None:
    assert normalize_plate("51a-123 45") == "51A12345"
    assert normalize_plate(" 51A\t12345 ") == "51A12345"
    assert normalize_plate("") == ""


def test_apartment_code_uppercases_block_code() -> None:
    assert apartment_code("a", "101") == "A-101"


def test_block_code_is_uppercased_on_create_and_update(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)

    block_id = registry.blocks.create(BlockDraft(code="a", name="Block A", total_floors=30))
    created = registry.blocks.get_by_id(block_id)
    registry.blocks.update(block_id, BlockPatch(code="z"))
    updated = registry.blocks.get_by_id(block_id)

    assert created is not None and created.code == "A"
    assert created.created_at is not None
    assert updated is not None and updated.code == "Z"
    assert updated.name == "Block A"
    assert registry.blocks.get_by_code("z") is not None


def test_block_get_all_orders_by_code(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    for code in ("C", "A", "B"):
        registry.blocks.create(BlockDraft(code=code))

    assert [block.code for block in registry.blocks.get_all()] == ["A", "B", "C"]


def test_apartment_code_is_derived_on_create(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    block_id = registry.blocks.create(BlockDraft(code="b"))
    block = registry.blocks.get_by_id(block_id)
    assert block is not None

    apartment_id = registry.apartments.create(
        ApartmentDraft(**block_ref(block), floor=2, room_number="201")
    )
    apartment = registry.apartments.get_by_id(apartment_id)

    assert apartment is not None
    assert apartment.code == "B-201"
    assert apartment.block_code == "B"
    assert registry.apartments.get_by_code("b-201") is not None


def test_apartment_code_recomputed_only_when_both_parts_supplied(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    ids = add_household(registry, block_code="A", room_number="101")
    apartment_id = ids["apartment_id"]

    registry.apartments.update(apartment_id, ApartmentPatch(room_number="102"))
    partial = registry.apartments.get_by_id(apartment_id)
    registry.apartments.update(apartment_id, ApartmentPatch(block_code="c", room_number="305"))
    full = registry.apartments.get_by_id(apartment_id)

    assert partial is not None
    assert partial.room_number == "102"
    assert partial.code == "A-101"
    assert full is not None
    assert full.code == "C-305"
    assert full.block_code == "C"


def test_apartments_by_block_are_ordered_by_floor(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    block_id = registry.blocks.create(BlockDraft(code="A"))
    block = registry.blocks.get_by_id(block_id)
    assert block is not None

    success, failed = registry.apartments.bulk_create(
        [
            ApartmentDraft(**block_ref(block), floor=3, room_number="301"),
            ApartmentDraft(**block_ref(block), floor=1, room_number="101"),
            ApartmentDraft(**block_ref(block), floor=2, room_number="201"),
        ]
    )

    assert (success, failed) == (3, 0)
    assert [a.floor for a in registry.apartments.get_by_block(block_id)] == [1, 2, 3]


def test_plate_lookup_ignores_formatting(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    add_household(registry, plate="51a-123 45")

    first = registry.vehicles.get_by_plate("51A-12345")
    second = registry.vehicles.get_by_plate("51a12345")

    assert first is not None and second is not None
    assert first.id == second.id
    assert first.plate_number == "51A12345"
    assert first.is_active is True


def test_vehicle_update_normalizes_plate(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    ids = add_household(registry)

    registry.vehicles.update(ids["vehicle_id"], VehiclePatch(plate_number="30k-999.99"))
    vehicle = registry.vehicles.get_by_id(ids["vehicle_id"])

    assert vehicle is not None
    assert vehicle.plate_number == "30K999.99"


def test_deactivated_vehicle_is_hidden_from_plate_lookup(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    ids = add_household(registry)

    registry.vehicles.deactivate(ids["vehicle_id"])

    assert registry.vehicles.get_by_plate("51A-12345") is None
    assert registry.vehicles.lookup_plate("51A-12345").found is False
    vehicle = registry.vehicles.get_by_id(ids["vehicle_id"])
    assert vehicle is not None and vehicle.is_active is False


def test_vehicle_created_inactive_keeps_flag(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)

    vehicle_id = registry.vehicles.create(VehicleDraft(plate_number="59C1-00001", is_active=False))

    vehicle = registry.vehicles.get_by_id(vehicle_id)
    assert vehicle is not None and vehicle.is_active is False


def test_lookup_plate_resolves_linked_records(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    add_household(registry, full_name="Le Minh Cuong")

    lookup = registry.vehicles.lookup_plate("51a 12345")

    assert lookup.found is True
    assert lookup.resident is not None and lookup.resident.full_name == "Le Minh Cuong"
    assert lookup.apartment is not None and lookup.apartment.code == "A-101"
    assert lookup.block is not None and lookup.block.code == "A"


def test_deleting_block_does_not_cascade(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    ids = add_household(registry)

    registry.blocks.delete(ids["block_id"])

    apartment = registry.apartments.get_by_id(ids["apartment_id"])
    lookup = registry.vehicles.lookup_plate("51A-12345")
    assert apartment is not None
    assert apartment.block_id == ids["block_id"]
    assert lookup.found is True
    assert lookup.block is None
    assert lookup.apartment is not None


def test_resident_queries_and_search(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    first = add_household(registry, full_name="Tran Thi Bich", phone="0912345678")
    add_household(
        registry,
        block_code="B",
        room_number="202",
        full_name="Hoang Van Em",
        phone="0945678901",
        plate="51D-33333",
    )

    assert [r.full_name for r in registry.residents.get_all()] == ["Hoang Van Em", "Tran Thi Bich"]
    assert len(registry.residents.get_by_apartment(first["apartment_id"])) == 1
    assert len(registry.residents.get_by_block(first["block_id"])) == 1
    assert [r.full_name for r in registry.residents.search("bich")] == ["Tran Thi Bich"]
    assert [r.full_name for r in registry.residents.search("0945")] == ["Hoang Van Em"]
    assert [r.full_name for r in registry.residents.search("b-202")] == ["Hoang Van Em"]


def test_resident_update_applies_only_supplied_fields(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    ids = add_household(registry, full_name="Vo Thi Phuong", phone="0956789012")

    registry.residents.update(ids["resident_id"], ResidentPatch(phone="0999999999"))
    resident = registry.residents.get_by_id(ids["resident_id"])

    assert resident is not None
    assert resident.phone == "0999999999"
    assert resident.full_name == "Vo Thi Phuong"
    assert resident.updated_at is not None


def test_vehicle_queries_by_resident_and_apartment(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)
    ids = add_household(registry)

    assert len(registry.vehicles.get_by_resident(ids["resident_id"])) == 1
    assert len(registry.vehicles.get_by_apartment(ids["apartment_id"])) == 1
    assert registry.vehicles.get_by_resident("other") == []


def test_update_of_missing_record_raises(tmp_path: Path) -> None:
    registry = build_registry(tmp_path)

    with pytest.raises(DocumentNotFoundError):
        registry.blocks.update("missing", BlockPatch(name="x"))
