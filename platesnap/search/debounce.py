"""Debounced search passes for type-ahead lookups."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from platesnap.search.engine import SearchEngine, SearchResult

LOGGER = logging.getLogger(__name__)

ResultsCallback = Callable[[str, list[SearchResult]], None]


class DebouncedSearch:
    """Run a search pass only after ``delay_seconds`` without a newer query.

    Each :meth:`submit` cancels the pending pass, so only the last query of a
    burst reaches the callback. Passes read the engine's loaded snapshot and
    keep no state between runs.
    """

    def __init__(
        self,
        engine: SearchEngine,
        on_results: ResultsCallback,
        *,
        delay_seconds: float = 0.3,
    ) -> None:
        self._engine = engine
        self._on_results = on_results
        self._delay_seconds = delay_seconds
        self._pending: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit(self, query: str) -> None:
        """Schedule a pass for ``query``; must be called from a running event loop."""
        self.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._run(query))

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def wait(self) -> None:
        """Wait for the pending pass, if any, to finish or be cancelled."""
        task = self._pending
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self, query: str) -> None:
        await asyncio.sleep(self._delay_seconds)
        results = self._engine.search(query)
        self._on_results(query, results)
