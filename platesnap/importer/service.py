"""Bulk import of blocks, apartments, residents and vehicles.

One run imports one entity type. Block and apartment lookups are captured once
before the first row, so a row can only reference parents that existed when
the batch started; import blocks, apartments, residents and vehicles as
separate batches, in that order.
"""

from __future__ import annotations

import logging
import math
from enum import StrEnum
from typing import Any, Iterable

from pydantic import BaseModel, Field

from platesnap.core.errors import PlateSnapError, ReferenceNotFoundError, to_error_payload
from platesnap.core.logging import correlation_scope
from platesnap.importer.parsers import Row, parse_payload
from platesnap.registry.denormalized import apartment_ref, block_ref
from platesnap.registry.models import (
    VEHICLE_TYPES,
    Apartment,
    ApartmentDraft,
    Block,
    BlockDraft,
    ResidentDraft,
    VehicleDraft,
)
from platesnap.registry.repositories import (
    ApartmentRepository,
    BlockRepository,
    ResidentRepository,
    VehicleRepository,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_TOTAL_FLOORS = 20


class ImportTarget(StrEnum):
    BLOCKS = "blocks"
    APARTMENTS = "apartments"
    RESIDENTS = "residents"
    VEHICLES = "vehicles"


class ImportResult(BaseModel):
    """Per-batch counters and row error messages."""

    success: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)


def _text(value: Any) -> str:
    """Cast a cell to string; empty, zero and false-like cells become ``""``."""
    if not value:
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _number(value: Any, default: float) -> float:
    """Cast a cell to a number, using ``default`` for blank, zero or unparsable cells."""
    if isinstance(value, bool):
        parsed = float(value)
    elif isinstance(value, (int, float)):
        parsed = float(value)
    elif isinstance(value, str):
        raw = value.strip()
        try:
            parsed = float(raw) if raw else 0.0
        except ValueError:
            parsed = math.nan
    else:
        parsed = math.nan
    if math.isnan(parsed) or parsed == 0:
        return default
    return parsed


def _flag(value: Any) -> bool:
    return value == "true" or value is True


def _vehicle_type(value: Any) -> str:
    raw = _text(value)
    return raw if raw in VEHICLE_TYPES else "car"


class BulkImporter:
    """Replays create operations row by row with per-row error isolation."""

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

    def import_file(self, target: ImportTarget | str, filename: str, text: str) -> ImportResult:
        """Parse an uploaded payload and import it; parse failures yield an empty result."""
        try:
            rows = parse_payload(filename, text)
        except PlateSnapError as exc:
            LOGGER.warning(
                "Import payload rejected: %s",
                exc.message,
                extra={"target": str(target), "error_code": str(exc.error_code)},
            )
            return ImportResult(errors=[f"Error: {exc.message}"])
        return self.import_rows(target, rows)

    def import_rows(self, target: ImportTarget | str, rows: Iterable[Any]) -> ImportResult:
        """Import rows sequentially in input order into one entity type."""
        kind = ImportTarget(target)
        with correlation_scope():
            return self._import_batch(kind, rows)

    def _import_batch(self, kind: ImportTarget, rows: Iterable[Any]) -> ImportResult:
        block_map: dict[str, Block] = {
            block.code.upper(): block for block in self._blocks.get_all()
        }
        apartment_map: dict[str, Apartment] = {
            apartment.code.upper(): apartment for apartment in self._apartments.get_all()
        }

        result = ImportResult()
        for row in rows:
            try:
                if not isinstance(row, dict):
                    raise ValueError("Row is not an object")
                self._import_row(kind, row, block_map, apartment_map)
                result.success += 1
            except Exception as exc:
                result.failed += 1
                row_number = result.success + result.failed
                payload = to_error_payload(exc)
                message = f"Row {row_number}: {payload['message']}"
                result.errors.append(message)
                LOGGER.warning(
                    message,
                    extra={
                        "target": str(kind),
                        "row": row_number,
                        "error_code": payload["error_code"],
                    },
                )

        LOGGER.info(
            "Import finished: %d succeeded, %d failed",
            result.success,
            result.failed,
            extra={"target": str(kind)},
        )
        return result

    def _import_row(
        self,
        kind: ImportTarget,
        row: Row,
        block_map: dict[str, Block],
        apartment_map: dict[str, Apartment],
    ) -> None:
        if kind is ImportTarget.BLOCKS:
            self._blocks.create(
                BlockDraft(
                    code=_text(row.get("code")),
                    name=_text(row.get("name")),
                    total_floors=int(_number(row.get("totalFloors"), DEFAULT_TOTAL_FLOORS)),
                    description=_text(row.get("description")),
                )
            )
            return

        if kind is ImportTarget.APARTMENTS:
            block_code = _text(row.get("blockCode"))
            block = block_map.get(block_code.upper())
            if block is None:
                raise ReferenceNotFoundError(f"Block {block_code} does not exist")
            self._apartments.create(
                ApartmentDraft(
                    **block_ref(block),
                    floor=int(_number(row.get("floor"), 1)),
                    room_number=_text(row.get("roomNumber")),
                    type=_text(row.get("type")),
                    area=_number(row.get("area"), 0),
                )
            )
            return

        apartment_code = _text(row.get("apartmentCode"))
        apartment = apartment_map.get(apartment_code.upper())
        if apartment is None:
            raise ReferenceNotFoundError(f"Apartment {apartment_code} does not exist")
        block = block_map.get(apartment.block_code.upper())
        block_id = block.id if block else ""

        if kind is ImportTarget.RESIDENTS:
            self._residents.create(
                ResidentDraft(
                    **apartment_ref(apartment),
                    block_id=block_id,
                    full_name=_text(row.get("fullName")),
                    phone=_text(row.get("phone")),
                    email=_text(row.get("email")),
                    id_number=_text(row.get("idNumber")),
                    is_owner=_flag(row.get("isOwner")),
                    notes=_text(row.get("notes")),
                )
            )
            return

        self._vehicles.create(
            VehicleDraft(
                **apartment_ref(apartment),
                block_id=block_id,
                plate_number=_text(row.get("plateNumber")),
                resident_id=_text(row.get("residentId")),
                resident_name=_text(row.get("residentName")),
                vehicle_type=_vehicle_type(row.get("vehicleType")),
                brand=_text(row.get("brand")),
                model=_text(row.get("model")),
                color=_text(row.get("color")),
                parking_slot=_text(row.get("parkingSlot")),
                notes=_text(row.get("notes")),
                is_active=row.get("isActive") != "false" and row.get("isActive") is not False,
            )
        )
