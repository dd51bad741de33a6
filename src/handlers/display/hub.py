"""Fan-out of board updates to display sockets."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from src.config.limits import DISPLAY_QUEUE_MAX
from src.handlers.websocket.errors import encode_envelope

logger = logging.getLogger(__name__)

DISPLAY_SESSION_ID = "board"

DisplayQueue = asyncio.Queue[str | None]


def _put_dropping_oldest(queue: DisplayQueue, item: str | None) -> bool:
    dropped = False
    if queue.full():
        queue.get_nowait()
        dropped = True
    queue.put_nowait(item)
    return dropped


class DisplayHub:
    """Each subscriber owns a bounded queue; a slow display loses its oldest frames.

    `None` in a queue means the hub has closed.
    """

    def __init__(self, *, queue_max: int = DISPLAY_QUEUE_MAX) -> None:
        self._queue_max = max(1, int(queue_max))
        self._subscribers: set[DisplayQueue] = set()
        self._seq = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> DisplayQueue:
        queue: DisplayQueue = asyncio.Queue(maxsize=self._queue_max)
        if self._closed:
            queue.put_nowait(None)
            return queue
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: DisplayQueue) -> None:
        self._subscribers.discard(queue)

    def encode(self, msg_type: str, payload: dict[str, Any]) -> str:
        self._seq += 1
        return encode_envelope(msg_type, DISPLAY_SESSION_ID, str(self._seq), payload)

    def publish(self, msg_type: str, payload: dict[str, Any]) -> None:
        if self._closed or not self._subscribers:
            return
        text = self.encode(msg_type, payload)
        for queue in list(self._subscribers):
            if _put_dropping_oldest(queue, text):
                logger.debug("display queue full; dropped oldest frame type=%s", msg_type)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for queue in self._subscribers:
            _put_dropping_oldest(queue, None)
        self._subscribers.clear()


__all__ = ["DISPLAY_SESSION_ID", "DisplayHub", "DisplayQueue"]
