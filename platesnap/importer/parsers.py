"""CSV/JSON payload parsing for bulk import."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from platesnap.core.errors import ErrorCode, ImportFormatError

Row = dict[str, Any]


def _clean_cell(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_csv(text: str) -> list[Row]:
    """Parse header + data lines with a plain comma split.

    Quotes are not an escaping mechanism here: each cell is trimmed and loses
    one leading and one trailing double quote, and embedded commas always
    split. Missing trailing cells become ``""``.
    """
    lines = [line.split(",") for line in text.strip().split("\n")]
    if len(lines) < 2:
        return []

    headers = [_clean_cell(cell) for cell in lines[0]]
    rows: list[Row] = []
    for line in lines[1:]:
        values = [_clean_cell(cell) for cell in line]
        rows.append(
            {
                header: (values[index] if index < len(values) else "") or ""
                for index, header in enumerate(headers)
            }
        )
    return rows


def parse_json(text: str) -> list[Row]:
    """Parse a JSON array of flat objects."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportFormatError(
            error_code=ErrorCode.IMPORT_PAYLOAD_INVALID,
            message=f"Invalid JSON: {exc.msg}",
        ) from exc
    if not isinstance(payload, list):
        raise ImportFormatError(
            error_code=ErrorCode.IMPORT_PAYLOAD_INVALID,
            message="JSON payload must be an array of objects",
        )
    return payload


def parse_payload(filename: str, text: str) -> list[Row]:
    """Dispatch on file suffix; only ``.csv`` and ``.json`` are accepted."""
    suffix = Path(filename or "").suffix.lower()
    if suffix == ".json":
        return parse_json(text)
    if suffix == ".csv":
        return parse_csv(text)
    raise ImportFormatError(
        error_code=ErrorCode.IMPORT_FORMAT_UNSUPPORTED,
        message="Only CSV or JSON files are supported",
    )
