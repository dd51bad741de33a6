"""Display socket handler (/display): snapshot on connect, then live updates."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from fastapi import WebSocket, WebSocketDisconnect

from src.state.runtime import RuntimeDeps
from src.board.service import MSG_BOARD_STATE
from src.handlers.websocket.errors import safe_send_text

from .hub import DisplayQueue

logger = logging.getLogger(__name__)


async def _pump(ws: WebSocket, queue: DisplayQueue) -> None:
    while True:
        text = await queue.get()
        if text is None:
            return
        if not await safe_send_text(ws, text):
            return


async def _drain_inbound(ws: WebSocket) -> None:
    # Displays only listen; inbound frames are read to notice the disconnect.
    with contextlib.suppress(WebSocketDisconnect):
        while True:
            await ws.receive_text()


async def handle_display_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    hub = runtime_deps.hub
    await ws.accept()
    queue = hub.subscribe()
    logger.info("display connected. Displays: %s", hub.subscriber_count())
    tasks: list[asyncio.Task] = []
    try:
        initial = hub.encode(MSG_BOARD_STATE, runtime_deps.board.snapshot())
        if not await safe_send_text(ws, initial):
            return
        tasks = [asyncio.create_task(_pump(ws, queue)), asyncio.create_task(_drain_inbound(ws))]
        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        hub.unsubscribe(queue)
        logger.info("display disconnected. Displays: %s", hub.subscriber_count())
        with contextlib.suppress(Exception):
            await ws.close()


__all__ = ["handle_display_connection"]
