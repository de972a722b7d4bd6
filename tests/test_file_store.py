from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from platesnap.core.errors import DocumentNotFoundError, ErrorCode
from platesnap.store.file_store import JsonFileDocumentStore


def test_file_store_add_get_update_delete(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)

    document_id = store.add("blocks", {"code": "A", "name": "Block A"})
    store.update("blocks", document_id, {"name": "Orchid Tower"})
    saved = store.get("blocks", document_id)
    store.delete("blocks", document_id)

    assert saved == {"code": "A", "name": "Orchid Tower", "_id": document_id}
    assert store.get("blocks", document_id) is None


def test_file_store_find_filters_by_equality_and_sorts(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)
    store.add("apartments", {"blockId": "b1", "floor": 3, "code": "A-301"})
    store.add("apartments", {"blockId": "b2", "floor": 1, "code": "B-101"})
    store.add("apartments", {"blockId": "b1", "floor": 1, "code": "A-101"})

    rows = store.find("apartments", {"blockId": "b1"}, order_by="floor")

    assert [row["code"] for row in rows] == ["A-101", "A-301"]


def test_file_store_sorts_missing_values_first(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)
    store.add("residents", {"fullName": "Binh"})
    store.add("residents", {"phone": "0900"})
    store.add("residents", {"fullName": "An"})

    rows = store.find("residents", order_by="fullName")

    assert [row.get("fullName") for row in rows] == [None, "An", "Binh"]


def test_file_store_update_missing_document_raises(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)

    with pytest.raises(DocumentNotFoundError) as exc:
        store.update("vehicles", "missing", {"isActive": False})

    assert exc.value.error_code == ErrorCode.DOCUMENT_NOT_FOUND
    assert exc.value.collection == "vehicles"


def test_file_store_delete_missing_document_is_noop(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)
    store.add("blocks", {"code": "A"})

    store.delete("blocks", "missing")

    assert len(store.find("blocks")) == 1


def test_file_store_serializes_datetimes(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)
    created = datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc)

    document_id = store.add("blocks", {"code": "A", "createdAt": created})

    assert store.get("blocks", document_id)["createdAt"] == created.isoformat()


def test_file_store_handles_corrupted_collection_file(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)
    (tmp_path / "blocks.json").write_text("{not json", encoding="utf-8")

    assert store.find("blocks") == []
    document_id = store.add("blocks", {"code": "A"})
    assert store.get("blocks", document_id) is not None
