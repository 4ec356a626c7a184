# src/postboard/api/v1/endpoints/realtime.py
"""WebSocket channel pushing post change events."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from postboard.services.broadcast import get_broadcaster

router = APIRouter(tags=["realtime"])

logger = logging.getLogger(__name__)


@router.websocket("/ws/posts")
async def posts_channel(websocket: WebSocket) -> None:
    """Keep a listener registered until the client disconnects.

    Incoming messages are ignored; the channel is server-to-client only.
    """
    broadcaster = get_broadcaster()
    await broadcaster.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Listener %s went away", websocket.client)
    finally:
        await broadcaster.disconnect(websocket)
