"""One live search surface over a WebSocket connection.

A SearchSession owns exactly one SearchOrchestrator. Client frames are
filter changes; every orchestrator state change is presented and pushed
back. All outbound frames go through one queue and one sender task so
frames leave in the order the states were produced.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from wanderbites.application.dtos.search import SearchResultState
from wanderbites.application.services.result_presenter import present
from wanderbites.application.services.search_orchestrator import (
    SearchCallable,
    SearchOrchestrator,
)
from wanderbites.schemas.search import SearchMessage

logger = logging.getLogger(__name__)

INVALID_MESSAGE_FRAME = {"error": "INVALID_MESSAGE"}


def state_frame(state: SearchResultState) -> dict[str, Any]:
    """Presented view of a state plus its status and sequence."""
    query = state.last_filters.text if state.last_filters is not None else None
    frame = present(state, query).to_dict()
    frame["status"] = state.status.value
    frame["sequence"] = state.sequence
    return frame


class SearchSession:
    """Bridges a WebSocket to a SearchOrchestrator for the life of the connection."""

    def __init__(
        self,
        websocket: WebSocket,
        search: SearchCallable,
        *,
        debounce_seconds: float,
    ) -> None:
        self.websocket = websocket
        self._outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.orchestrator = SearchOrchestrator(
            search,
            debounce_seconds=debounce_seconds,
            on_change=self._on_state,
        )

    def _on_state(self, state: SearchResultState) -> None:
        self._outbox.put_nowait(state_frame(state))

    def _reject(self, frame: object) -> None:
        logger.debug("Rejected search frame: %.100r", frame)
        self._outbox.put_nowait(dict(INVALID_MESSAGE_FRAME))

    def handle_text(self, text: str) -> None:
        """Apply one client frame; malformed frames get an error frame back."""
        try:
            message = SearchMessage.model_validate_json(text)
        except ValidationError:
            self._reject(text)
            return
        self.orchestrator.update(
            message.q,
            message.region,
            message.rating,
            message.tag,
            message.category,
            immediate=message.immediate,
        )

    async def _send_loop(self) -> None:
        while True:
            frame = await self._outbox.get()
            await self.websocket.send_json(frame)

    async def run(self) -> None:
        """Serve until the client disconnects, then tear the orchestrator down."""
        self._on_state(self.orchestrator.state)
        sender = asyncio.create_task(self._send_loop())
        try:
            while True:
                message = await self.websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                text = message.get("text")
                if text is None:
                    # binary frames never carry a filter set
                    self._reject(message.get("bytes"))
                    continue
                self.handle_text(text)
        except WebSocketDisconnect:
            logger.debug("Search socket disconnected")
        finally:
            await self.close()
            sender.cancel()
            await asyncio.gather(sender, return_exceptions=True)

    async def close(self) -> None:
        """Abort any pending debounce timer and in-flight request."""
        await self.orchestrator.aclose()
