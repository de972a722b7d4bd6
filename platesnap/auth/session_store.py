"""Persistent storage for the local dashboard session."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

LOGGER = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Load/save/clear contract for the single local session payload."""

    def load(self) -> dict[str, Any] | None:
        """Return stored session payload, or ``None`` when absent or unreadable."""

    def save(self, payload: dict[str, Any]) -> None:
        """Persist session payload, replacing any previous one."""

    def clear(self) -> None:
        """Remove stored session payload."""


class FileSessionStore:
    """Session payload kept in one JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> dict[str, Any] | None:
        if not self._path.exists():
            return None
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except Exception:
            LOGGER.exception("Failed reading session file: %s", self._path)
            return None
        return payload if isinstance(payload, dict) else None

    def save(self, payload: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
        )

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
