"""Local JSON-file document store used when MongoDB is not configured."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import date, datetime
from pathlib import Path
from threading import RLock
from typing import Any, Mapping

from platesnap.core.errors import DocumentNotFoundError
from platesnap.store.base import Document

LOGGER = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _sort_key(value: Any) -> tuple[int, Any]:
    # MongoDB type order: null < numbers < strings.
    if value is None:
        return 0, 0
    if isinstance(value, bool):
        return 3, int(value)
    if isinstance(value, (int, float)):
        return 1, value
    return 2, str(value)


class JsonFileDocumentStore:
    """One JSON list file per collection under ``root``."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)
        self._lock = RLock()

    def _collection_file(self, collection: str) -> Path:
        return self._root / f"{collection}.json"

    def _read_json_file(self, path: Path) -> list[dict[str, Any]]:
        """Read list payload from JSON file with empty fallback."""
        if not path.exists():
            return []
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except Exception:
            LOGGER.exception("Failed reading local store file: %s", path)
            return []
        if not isinstance(payload, list):
            return []
        return [row for row in payload if isinstance(row, dict)]

    def _write_json_file(self, path: Path, items: list[dict[str, Any]]) -> None:
        path.write_text(
            json.dumps(items, ensure_ascii=False, indent=2, default=_json_default),
            encoding="utf-8",
        )

    def add(self, collection: str, document: Mapping[str, Any]) -> str:
        document_id = uuid.uuid4().hex
        path = self._collection_file(collection)
        with self._lock:
            items = self._read_json_file(path)
            items.append({**dict(document), "_id": document_id})
            self._write_json_file(path, items)
        return document_id

    def get(self, collection: str, document_id: str) -> Document | None:
        with self._lock:
            items = self._read_json_file(self._collection_file(collection))
        for row in items:
            if str(row.get("_id") or "") == document_id:
                return dict(row)
        return None

    def find(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
    ) -> list[Document]:
        with self._lock:
            items = self._read_json_file(self._collection_file(collection))
        criteria = dict(filters or {})
        rows = [
            dict(row)
            for row in items
            if all(row.get(key) == value for key, value in criteria.items())
        ]
        if order_by:
            rows.sort(key=lambda row: _sort_key(row.get(order_by)))
        return rows

    def update(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> None:
        path = self._collection_file(collection)
        with self._lock:
            items = self._read_json_file(path)
            for row in items:
                if str(row.get("_id") or "") == document_id:
                    row.update({k: v for k, v in fields.items() if k != "_id"})
                    break
            else:
                raise DocumentNotFoundError(collection, document_id)
            self._write_json_file(path, items)

    def delete(self, collection: str, document_id: str) -> None:
        path = self._collection_file(collection)
        with self._lock:
            items = self._read_json_file(path)
            next_items = [row for row in items if str(row.get("_id") or "") != document_id]
            if len(next_items) != len(items):
                self._write_json_file(path, next_items)
