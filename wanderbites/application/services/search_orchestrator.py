"""Incremental search orchestration for one search surface.

Turns a stream of filter changes (arriving faster than network round-trips)
into a single authoritative SearchResultState:

- Debounce: every change restarts one timer task; only the filter set alive
  when the timer fires is searched.
- Cancellation: issuing a request cancels the previous in-flight request task.
- Last request wins: every change bumps a generation counter and a request
  carries the generation that issued it. A completion (success or failure)
  whose sequence is not the current generation is dropped, so a late answer
  can never overwrite newer state, even if the search callable ignores
  cancellation.

State machine: idle -> loading -> success | error, any -> loading on a new
non-empty filter set, any -> idle on an empty one. There is no terminal
state; aclose() tears the surface down.

Everything runs on one asyncio event loop; no locks are needed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from wanderbites.application.dtos.search import (
    SearchFilterSet,
    SearchPage,
    SearchRequest,
    SearchResultState,
)
from wanderbites.application.services.query_normalizer import normalize
from wanderbites.domain.exceptions import TransportFailure

logger = logging.getLogger(__name__)

SearchCallable = Callable[[SearchFilterSet], Awaitable[SearchPage]]
StateListener = Callable[[SearchResultState], None]

DEFAULT_DEBOUNCE_SECONDS = 0.3


class SearchOrchestrator:
    """Owns debounce timing, in-flight cancellation, and result-state transitions.

    One instance per search surface. Create it inside a running event loop;
    use it as an async context manager (or call aclose()) so pending timers
    and requests are cancelled on teardown.
    """

    def __init__(
        self,
        search: SearchCallable,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: StateListener | None = None,
    ) -> None:
        """Initialize with the search callable and debounce delay.

        Args:
            search: Async callable returning a SearchPage for a filter set;
                expected to raise TransportFailure on store/network errors.
            debounce_seconds: Quiet interval before a change is searched.
            on_change: Optional listener called with every new state.
        """
        if debounce_seconds < 0:
            raise ValueError("debounce_seconds must be >= 0")
        self._search = search
        self._debounce_seconds = debounce_seconds
        self._on_change = on_change
        self._state = SearchResultState.idle()
        self._generation = 0
        self._timer: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def state(self) -> SearchResultState:
        return self._state

    @property
    def generation(self) -> int:
        """Number of filter changes submitted so far."""
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> SearchOrchestrator:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def update(
        self,
        text: object = None,
        region: object = None,
        rating: object = None,
        tag: object = None,
        category: object = None,
        *,
        immediate: bool = False,
    ) -> SearchFilterSet:
        """Normalize raw input and submit it. Returns the normalized filter set."""
        filters = normalize(text, region, rating, tag, category)
        self.submit(filters, immediate=immediate)
        return filters

    def submit(self, filters: SearchFilterSet, *, immediate: bool = False) -> None:
        """Register a filter change and (re)start the debounce timer.

        Args:
            filters: Normalized filter set.
            immediate: Skip the debounce delay (e.g. explicit submit).

        Raises:
            RuntimeError: If the orchestrator has been closed.
        """
        if self._closed:
            raise RuntimeError("SearchOrchestrator is closed")
        self._generation += 1
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        delay = 0.0 if immediate else self._debounce_seconds
        request = SearchRequest(filters=filters, sequence=self._generation)
        self._timer = asyncio.get_running_loop().create_task(
            self._fire_after(delay, request)
        )

    async def settle(self) -> SearchResultState:
        """Wait until no timer or request is pending, then return the state.

        Cancelling the caller does not cancel the orchestrator's own tasks.
        """
        while True:
            pending = [
                t for t in (self._timer, self._inflight) if t is not None and not t.done()
            ]
            if not pending:
                return self._state
            await asyncio.wait(pending)

    async def aclose(self) -> None:
        """Cancel the pending timer and in-flight request; reject later submits."""
        if self._closed:
            return
        self._closed = True
        pending = [
            t for t in (self._timer, self._inflight) if t is not None and not t.done()
        ]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)
        self._timer = None
        self._inflight = None
        logger.debug("Search orchestrator closed after %s changes", self._generation)

    async def _fire_after(self, delay: float, request: SearchRequest) -> None:
        if delay > 0:
            await asyncio.sleep(delay)
        self._issue(request)

    def _issue(self, request: SearchRequest) -> None:
        """Cancel the previous request and start this one (timer has fired)."""
        if self._inflight is not None and not self._inflight.done():
            logger.debug("Cancelling superseded search request")
            self._inflight.cancel()
        self._inflight = None
        if request.filters.is_empty():
            self._set_state(SearchResultState.idle(request.filters, request.sequence))
            return
        logger.debug("Issuing search request %s: %s", request.sequence, request.filters.to_dict())
        self._set_state(self._state.loading(request))
        self._inflight = asyncio.get_running_loop().create_task(self._execute(request))

    async def _execute(self, request: SearchRequest) -> None:
        try:
            page = await self._search(request.filters)
        except TransportFailure as exc:
            if self._is_stale(request):
                logger.debug("Dropping stale failure of search request %s", request.sequence)
                return
            logger.warning("Search request %s failed: %s", request.sequence, exc.message)
            self._set_state(self._state.failed(request))
            return
        except Exception:
            if self._is_stale(request):
                logger.debug("Dropping stale failure of search request %s", request.sequence)
                return
            logger.exception("Unexpected error in search request %s", request.sequence)
            self._set_state(self._state.failed(request))
            return
        if self._is_stale(request):
            logger.debug("Dropping stale result of search request %s", request.sequence)
            return
        self._set_state(self._state.succeeded(request, page))

    def _is_stale(self, request: SearchRequest) -> bool:
        return self._closed or request.sequence != self._generation

    def _set_state(self, state: SearchResultState) -> None:
        self._state = state
        if self._on_change is None:
            return
        try:
            self._on_change(state)
        except Exception:
            logger.exception("Search state listener failed")
