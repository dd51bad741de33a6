"""Per-connection lifecycle for agent sockets (idle and max-age enforcement)."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from src.state.settings import WebSocketSettings
from src.config.websocket import (
    WS_IDLE_TIMEOUT_S,
    WS_CLOSE_IDLE_CODE,
    WS_WATCHDOG_TICK_S,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
    WS_MAX_CONNECTION_DURATION_S,
)

logger = logging.getLogger(__name__)

_DEFAULT_SETTINGS = WebSocketSettings(
    idle_timeout_s=WS_IDLE_TIMEOUT_S,
    watchdog_tick_s=WS_WATCHDOG_TICK_S,
    max_connection_duration_s=WS_MAX_CONNECTION_DURATION_S,
)


class AgentLifecycle:
    """Closes an agent socket that stays idle, or outlives its maximum age.

    A connection with in-flight work (`is_busy_fn`) is never considered idle.
    """

    def __init__(
        self,
        websocket: Any,
        settings: WebSocketSettings | None = None,
        *,
        is_busy_fn: Callable[[], bool] | None = None,
    ) -> None:
        cfg = settings or _DEFAULT_SETTINGS
        self._ws = websocket
        self._is_busy_fn = is_busy_fn or (lambda: False)
        self._idle_timeout_s = float(cfg.idle_timeout_s)
        self._tick_s = max(0.001, float(cfg.watchdog_tick_s))
        self._max_age_s = float(cfg.max_connection_duration_s)
        self._started_at = time.monotonic()
        self._last_activity = self._started_at
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None
        self.close_code: int | None = None

    @property
    def tick_s(self) -> float:
        return self._tick_s

    def touch(self) -> None:
        self._last_activity = time.monotonic()

    def idle_for(self) -> float:
        return time.monotonic() - self._last_activity

    def should_close(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    def _expired_reason(self) -> tuple[int, str] | None:
        if self._max_age_s > 0 and (time.monotonic() - self._started_at) >= self._max_age_s:
            return WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON
        if self._is_busy_fn():
            return None
        if self._idle_timeout_s > 0 and self.idle_for() >= self._idle_timeout_s:
            return WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON
        return None

    async def _watchdog_loop(self) -> None:
        while not self._stop_event.is_set():
            await asyncio.sleep(self._tick_s)
            if self._stop_event.is_set():
                return
            expired = self._expired_reason()
            if expired is None:
                continue
            code, reason = expired
            logger.info("agent connection closing: %s", reason)
            self.close_code = code
            self._stop_event.set()
            try:
                await self._ws.close(code=code, reason=reason)
            except Exception:
                logger.debug("close after %s failed", reason, exc_info=True)
            return


__all__ = ["AgentLifecycle"]
