"""Live fan-out of post change events to connected WebSocket listeners."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from postboard.schemas.post import PostEvent

logger = logging.getLogger(__name__)

__all__ = ["PostBroadcaster", "get_broadcaster"]


class PostBroadcaster:
    """Registry of live listeners with an explicit start/close lifecycle.

    The application starts the broadcaster on startup and closes it on
    shutdown; publishing outside that window is a programming error.
    """

    def __init__(self, send_timeout: float = 5.0) -> None:
        self._listeners: set[WebSocket] = set()
        self._running = False
        self._send_timeout = send_timeout

    @property
    def running(self) -> bool:
        return self._running

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def start(self) -> None:
        """Allow listeners to connect and events to be published."""
        self._running = True
        logger.info("Post broadcaster started")

    async def close(self) -> None:
        """Disconnect every listener and stop accepting events."""
        self._running = False
        listeners = list(self._listeners)
        self._listeners.clear()
        for websocket in listeners:
            if websocket.application_state == WebSocketState.CONNECTED:
                try:
                    await websocket.close()
                except RuntimeError as exc:
                    logger.warning("Failed to close listener during shutdown: %s", exc)
        logger.info("Post broadcaster closed (%d listeners dropped)", len(listeners))

    async def connect(self, websocket: WebSocket) -> None:
        """Accept ``websocket`` and register it as a listener."""
        self._ensure_running()
        await websocket.accept()
        self._listeners.add(websocket)
        logger.debug("Listener connected (%d total)", len(self._listeners))

    async def disconnect(self, websocket: WebSocket) -> None:
        self._listeners.discard(websocket)
        logger.debug("Listener disconnected (%d total)", len(self._listeners))

    async def publish(self, event: PostEvent) -> int:
        """Send ``event`` to every listener.

        All listeners are sent to concurrently, each send bounded by
        ``send_timeout``, so a stalled client cannot hold up the caller.

        Returns:
            Number of listeners the event was delivered to. Listeners whose
            send fails or times out are dropped from the registry.
        """
        self._ensure_running()
        message: dict[str, Any] = event.model_dump(mode="json", by_alias=True)
        listeners = list(self._listeners)

        results = await asyncio.gather(
            *(
                asyncio.wait_for(websocket.send_json(message), self._send_timeout)
                for websocket in listeners
            ),
            return_exceptions=True,
        )

        delivered = 0
        for websocket, result in zip(listeners, results):
            if isinstance(result, BaseException):
                logger.warning("Dropping listener after failed send: %r", result)
                self._listeners.discard(websocket)
            else:
                delivered += 1

        logger.debug("Published %s event to %d listeners", event.action, delivered)
        return delivered

    def _ensure_running(self) -> None:
        if not self._running:
            raise RuntimeError("Post broadcaster has not been started")


_broadcaster = PostBroadcaster()


def get_broadcaster() -> PostBroadcaster:
    """Return the process-wide broadcaster instance."""
    return _broadcaster
