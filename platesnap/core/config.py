"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class StoreConfig:
    """Document store connection settings."""

    mongo_uri: str
    mongo_db: str
    data_dir: Path


@dataclass(frozen=True)
class SessionConfig:
    """Local admin session settings."""

    ttl_seconds: int = 24 * 60 * 60
    file_name: str = "session.json"


@dataclass(frozen=True)
class SearchConfig:
    """Lookup search settings."""

    debounce_seconds: float = 0.3


@dataclass(frozen=True)
class LoggingConfig:
    """Structured logging configuration."""

    level: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    store: StoreConfig
    logging: LoggingConfig
    session: SessionConfig = field(default_factory=SessionConfig)
    search: SearchConfig = field(default_factory=SearchConfig)

    @property
    def session_path(self) -> Path:
        """Return the file that holds the local admin session."""
        return self.store.data_dir / self.session.file_name

    @staticmethod
    def from_env() -> "AppConfig":
        """Build app config from process environment."""
        mongo_uri = os.getenv("MONGODB_URI", "").strip()
        mongo_db = os.getenv("MONGODB_DB", "platesnap").strip() or "platesnap"
        data_dir = os.getenv("PLATESNAP_DATA_DIR", "runtime").strip() or "runtime"
        log_level = os.getenv("LOG_LEVEL", "INFO").strip() or "INFO"

        return AppConfig(
            store=StoreConfig(
                mongo_uri=mongo_uri,
                mongo_db=mongo_db,
                data_dir=Path(data_dir),
            ),
            logging=LoggingConfig(level=log_level),
        )
