"""Demo data seeding and collection statistics."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from pydantic import BaseModel

from platesnap.auth.models import AdminDraft
from platesnap.registry.container import Registry
from platesnap.registry.denormalized import apartment_ref, block_ref, resident_ref
from platesnap.registry.models import (
    ApartmentDraft,
    BlockDraft,
    RegistryStats,
    ResidentDraft,
    VehicleDraft,
)

LOGGER = logging.getLogger(__name__)

DEMO_ADMINS = [
    (
        AdminDraft(
            username="admin",
            email="admin@platesnap.com",
            display_name="Administrator",
            role="superadmin",
        ),
        "admin123",
    ),
    (
        AdminDraft(
            username="manager",
            email="manager@platesnap.com",
            display_name="Manager",
            role="admin",
        ),
        "manager123",
    ),
]

DEMO_BLOCKS = [
    BlockDraft(code="A", name="Block A - Orchid Tower", total_floors=30, description="East tower"),
    BlockDraft(code="B", name="Block B - Lotus Tower", total_floors=25, description="West tower"),
    BlockDraft(code="C", name="Block C - Jasmine Tower", total_floors=20, description="South tower"),
]

DEMO_FLOORS = 5
DEMO_ROOM_LAYOUT = [("Studio", 45.0), ("1BR", 65.0), ("2BR", 85.0), ("3BR", 120.0)]

# (full name, phone, apartment code, owner)
DEMO_RESIDENTS = [
    ("Nguyễn Văn An", "0901234567", "A-101", True),
    ("Trần Thị Bích", "0912345678", "A-101", False),
    ("Lê Minh Cường", "0923456789", "A-102", True),
    ("Phạm Thị Dung", "0934567890", "B-101", True),
    ("Hoàng Văn Em", "0945678901", "B-102", True),
    ("Võ Thị Phương", "0956789012", "B-103", True),
    ("Đặng Quốc Gia", "0967890123", "C-101", True),
    ("Bùi Thị Hoa", "0978901234", "C-102", True),
    ("Đỗ Văn Inh", "0989012345", "C-103", True),
    ("Ngô Thị Kim", "0990123456", "A-201", True),
]

# (plate, resident name, type, brand, model, color)
DEMO_VEHICLES = [
    ("51A-12345", "Nguyễn Văn An", "car", "Toyota", "Camry", "White"),
    ("51A-67890", "Nguyễn Văn An", "motorcycle", "Honda", "SH", "Black"),
    ("51B-11111", "Lê Minh Cường", "car", "Honda", "CRV", "Black"),
    ("51C-22222", "Phạm Thị Dung", "car", "Mazda", "CX5", "Red"),
    ("51D-33333", "Hoàng Văn Em", "motorcycle", "Yamaha", "Exciter", "Blue"),
    ("51E-44444", "Võ Thị Phương", "car", "VinFast", "VF8", "Grey"),
    ("51F-55555", "Đặng Quốc Gia", "car", "Mercedes", "C200", "Silver"),
    ("51G-66666", "Bùi Thị Hoa", "motorcycle", "Honda", "Vision", "White"),
    ("51H-77777", "Đỗ Văn Inh", "car", "Hyundai", "Tucson", "Blue"),
    ("51K-88888", "Ngô Thị Kim", "car", "Kia", "Seltos", "Yellow"),
]


class SeedResult(BaseModel):
    success: bool
    message: str


def seed_database(registry: Registry) -> SeedResult:
    """Create demo admins, blocks, apartments, residents and vehicles on an empty registry."""
    try:
        if registry.blocks.get_all():
            return SeedResult(success=False, message="Data already exists. Nothing to seed.")

        LOGGER.info("Seeding database")
        if not registry.admins.has_any_admin():
            for draft, password in DEMO_ADMINS:
                registry.admins.create(draft, password)

        blocks = {}
        for block_draft in DEMO_BLOCKS:
            block_id = registry.blocks.create(block_draft)
            blocks[block_draft.code] = registry.blocks.get_by_id(block_id)

        apartments = {}
        for code, block in blocks.items():
            for floor in range(1, DEMO_FLOORS + 1):
                for room, (apartment_type, area) in enumerate(DEMO_ROOM_LAYOUT, start=1):
                    apartment_id = registry.apartments.create(
                        ApartmentDraft(
                            **block_ref(block),
                            floor=floor,
                            room_number=f"{floor}0{room}",
                            type=apartment_type,
                            area=area,
                        )
                    )
                    apartments[f"{code}-{floor}0{room}"] = registry.apartments.get_by_id(apartment_id)

        residents = {}
        for full_name, phone, apartment_code, is_owner in DEMO_RESIDENTS:
            apartment = apartments[apartment_code]
            resident_id = registry.residents.create(
                ResidentDraft(
                    **apartment_ref(apartment),
                    block_id=apartment.block_id,
                    full_name=full_name,
                    phone=phone,
                    is_owner=is_owner,
                )
            )
            residents[full_name] = registry.residents.get_by_id(resident_id)

        for plate, resident_name, vehicle_type, brand, model, color in DEMO_VEHICLES:
            registry.vehicles.create(
                VehicleDraft(
                    **resident_ref(residents[resident_name]),
                    plate_number=plate,
                    vehicle_type=vehicle_type,
                    brand=brand,
                    model=model,
                    color=color,
                    is_active=True,
                )
            )

        LOGGER.info("Seeding finished")
        return SeedResult(success=True, message="Demo data created.")
    except Exception as exc:
        LOGGER.exception("Seed error")
        return SeedResult(success=False, message=f"Error: {exc}")


def get_stats(registry: Registry) -> RegistryStats:
    """Count records per collection from four parallel full reads."""
    with ThreadPoolExecutor(max_workers=4, thread_name_prefix="registry-stats") as pool:
        blocks = pool.submit(registry.blocks.get_all)
        apartments = pool.submit(registry.apartments.get_all)
        residents = pool.submit(registry.residents.get_all)
        vehicles = pool.submit(registry.vehicles.get_all)
        return RegistryStats(
            blocks=len(blocks.result()),
            apartments=len(apartments.result()),
            residents=len(residents.result()),
            vehicles=len(vehicles.result()),
        )
