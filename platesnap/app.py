"""Composition root wiring the store, repositories and services."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dotenv import load_dotenv

from platesnap.auth.service import AuthService
from platesnap.auth.session_store import FileSessionStore
from platesnap.core.config import AppConfig
from platesnap.core.logging import setup_logging
from platesnap.importer.service import BulkImporter
from platesnap.registry.container import Registry
from platesnap.search.debounce import DebouncedSearch, ResultsCallback
from platesnap.search.engine import SearchEngine
from platesnap.store import DocumentStore, open_document_store

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlateSnapApp:
    config: AppConfig
    store: DocumentStore
    registry: Registry
    auth: AuthService
    search: SearchEngine
    importer: BulkImporter

    def debounced_search(self, on_results: ResultsCallback) -> DebouncedSearch:
        """Type-ahead search over :attr:`search` with the configured delay."""
        return DebouncedSearch(
            self.search,
            on_results,
            delay_seconds=self.config.search.debounce_seconds,
        )


def create_app(config: AppConfig | None = None) -> PlateSnapApp:
    """Wire store, repositories and services; restores any stored session."""
    if config is None:
        load_dotenv()
        config = AppConfig.from_env()
        setup_logging(config.logging.level)

    store = open_document_store(config.store)
    registry = Registry.from_store(store)

    auth = AuthService(
        registry.admins,
        FileSessionStore(config.session_path),
        config.session,
    )
    auth.restore()

    search = SearchEngine(
        blocks=registry.blocks,
        apartments=registry.apartments,
        residents=registry.residents,
        vehicles=registry.vehicles,
    )
    importer = BulkImporter(
        blocks=registry.blocks,
        apartments=registry.apartments,
        residents=registry.residents,
        vehicles=registry.vehicles,
    )
    LOGGER.info("PlateSnap services ready")
    return PlateSnapApp(
        config=config,
        store=store,
        registry=registry,
        auth=auth,
        search=search,
        importer=importer,
    )
