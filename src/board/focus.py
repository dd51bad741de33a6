"""Single cancelable auto-clear timer for the focused student."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

logger = logging.getLogger(__name__)


class FocusTimer:
    def __init__(self, delay_s: float, on_expire: Callable[[str], None]) -> None:
        self._delay_s = float(delay_s)
        self._on_expire = on_expire
        self._task: asyncio.Task | None = None
        self._target: str | None = None

    @property
    def delay_s(self) -> float:
        return self._delay_s

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def target(self) -> str | None:
        return self._target if self.pending else None

    def schedule(self, target: str, *, loop: asyncio.AbstractEventLoop | None = None) -> None:
        loop = loop if loop is not None else asyncio.get_running_loop()
        # A newer focus always supersedes the pending auto-clear.
        self.cancel()
        self._target = target
        self._task = loop.create_task(self._run(target))

    def cancel(self) -> None:
        task, self._task = self._task, None
        self._target = None
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        task = self._task
        self.cancel()
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task

    async def _run(self, target: str) -> None:
        try:
            await asyncio.sleep(self._delay_s)
        except asyncio.CancelledError:
            return
        if self._task is asyncio.current_task():
            self._task = None
            self._target = None
        try:
            self._on_expire(target)
        except Exception:
            logger.exception("focus auto-clear failed target=%s", target)


__all__ = ["FocusTimer"]
