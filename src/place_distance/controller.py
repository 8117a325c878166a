"""UI-side controller: debounced triggers, stale-result discarding, map updates."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from place_distance.map_presenter import DeckMapPresenter, MapPoint, MapSession
from place_distance.models import SearchOutcome, Success
from place_distance.orchestrator import SearchOrchestrator, validate_queries

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.5


class Debouncer:
    """Coalesces rapid triggers into one call after a quiet period.

    Only the quiet period can be cancelled. Once the callback has started it
    runs to completion, even if a newer trigger arrives.
    """

    def __init__(self, delay: float, callback: Callable[..., Awaitable[Any]]):
        self.delay = delay
        self.callback = callback
        self._pending: asyncio.Task | None = None
        self._waiting: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    @property
    def waiting(self) -> bool:
        """True while the latest trigger is still in its quiet period."""
        return self._pending is not None and self._pending in self._waiting

    def trigger(self, *args: Any) -> asyncio.Task:
        """(Re)start the quiet period; only the last trigger's args are used."""
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._fire(args))
        self._waiting.add(task)
        self._pending = task
        return task

    async def _fire(self, args: tuple) -> Any:
        await asyncio.sleep(self.delay)
        self._waiting.discard(asyncio.current_task())
        return await self.callback(*args)

    def cancel(self) -> None:
        """Drop a trigger that is still waiting; a running callback is left alone."""
        if self.waiting:
            self._waiting.discard(self._pending)
            self._pending.cancel()

    async def flush(self) -> Any:
        """Wait for the pending call, if any, and return its result."""
        if self._pending is None:
            return None
        try:
            return await self._pending
        except asyncio.CancelledError:
            return None


class SearchController:
    """Runs searches for the UI and keeps the displayed result consistent.

    Every search takes a sequence token; an outcome is only displayed if no
    newer search was started while it was in flight. Superseded searches
    run to completion but their outcome is dropped.
    """

    def __init__(
        self,
        orchestrator: SearchOrchestrator,
        presenter: DeckMapPresenter | None = None,
        session: MapSession | None = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
    ):
        self.orchestrator = orchestrator
        self.presenter = presenter or DeckMapPresenter()
        self.session = session or MapSession()
        self.current: Optional[SearchOutcome] = None
        self.current_labels: Optional[tuple[str, str]] = None
        self._sequence = 0
        self._in_flight = 0
        self._debouncer = Debouncer(debounce_seconds, self.calculate)

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    @property
    def latest_token(self) -> int:
        return self._sequence

    async def calculate(self, query_a: str, query_b: str) -> SearchOutcome | None:
        """Run one search; returns None if a newer search superseded it.

        Raises:
            InvalidQueryError: Either query is empty; nothing is displayed
                or cleared.
        """
        query_a, query_b = validate_queries(query_a, query_b)
        self._sequence += 1
        token = self._sequence
        self._in_flight += 1
        try:
            outcome = await self.orchestrator.search(query_a, query_b)
        finally:
            self._in_flight -= 1

        if token != self._sequence:
            logger.info("Discarding stale search #%d (latest is #%d)", token, self._sequence)
            return None

        self.current = outcome
        self.current_labels = (query_a, query_b)
        if isinstance(outcome, Success):
            self.presenter.plot(
                self.session,
                MapPoint.from_result(query_a, outcome.a),
                MapPoint.from_result(query_b, outcome.b),
            )
        else:
            self.presenter.clear(self.session)
        return outcome

    def request(self, query_a: str, query_b: str) -> asyncio.Task:
        """Debounced calculate(); rapid repeated requests collapse into the last one."""
        return self._debouncer.trigger(query_a, query_b)

    async def settle(self) -> SearchOutcome | None:
        """Wait for a debounced request to finish."""
        return await self._debouncer.flush()

    def reset(self) -> None:
        """Forget the displayed outcome and clear the map."""
        self._debouncer.cancel()
        # Any search still in flight becomes stale
        self._sequence += 1
        self.current = None
        self.current_labels = None
        self.presenter.clear(self.session)
