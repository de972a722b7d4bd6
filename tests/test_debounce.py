from __future__ import annotations

import asyncio
from pathlib import Path

from platesnap.search.debounce import DebouncedSearch
from platesnap.search.engine import SearchEngine, SearchResult
from tests.registry_fixtures import add_household, build_registry


def _build_engine(tmp_path: Path) -> SearchEngine:
    registry = build_registry(tmp_path)
    add_household(registry, plate="51A-12345")
    add_household(registry, room_number="102", full_name="Le Minh Cuong", plate="51B-11111")
    engine = SearchEngine(
        blocks=registry.blocks,
        apartments=registry.apartments,
        residents=registry.residents,
        vehicles=registry.vehicles,
    )
    engine.reload()
    return engine


def test_debounced_search_runs_only_last_query(tmp_path: Path) -> None:
    engine = _build_engine(tmp_path)
    calls: list[tuple[str, list[SearchResult]]] = []

    async def scenario() -> None:
        debounced = DebouncedSearch(
            engine, lambda query, results: calls.append((query, results)), delay_seconds=0.05
        )
        debounced.submit("5")
        debounced.submit("51")
        debounced.submit("51b")
        assert debounced.pending is True
        await debounced.wait()
        assert debounced.pending is False

    asyncio.run(scenario())

    assert len(calls) == 1
    query, results = calls[0]
    assert query == "51b"
    assert [r.vehicle.plate_number for r in results] == ["51B11111"]


def test_debounced_search_cancel_drops_pending_pass(tmp_path: Path) -> None:
    engine = _build_engine(tmp_path)
    calls: list[str] = []

    async def scenario() -> None:
        debounced = DebouncedSearch(
            engine, lambda query, results: calls.append(query), delay_seconds=0.05
        )
        debounced.submit("51a")
        debounced.cancel()
        await asyncio.sleep(0.1)
        await debounced.wait()

    asyncio.run(scenario())

    assert calls == []
