"""Apply decoded board calls to the shared display state."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable

from src.rpc import Handler
from src.state.display import DisplayState
from src.errors import UnsupportedMethodError
from src.config.board import FOCUS_CLEAR_DELAY_S

from .rules import RULES
from .focus import FocusTimer
from .payloads import ShowStudentFocus, decode_call

logger = logging.getLogger(__name__)

StateListener = Callable[[DisplayState], None]
CueListener = Callable[[str], None]


class BoardReconciler:
    """Sole writer of `DisplayState`.

    Calls for the same field are applied in arrival order, last write wins.
    Listeners are notified synchronously after each change; a failing
    listener is logged and never fails the call.
    """

    def __init__(self, *, focus_clear_delay_s: float = FOCUS_CLEAR_DELAY_S, state: DisplayState | None = None) -> None:
        self._state = state if state is not None else DisplayState()
        self._focus_timer = FocusTimer(focus_clear_delay_s, self._expire_focus)
        self._state_listeners: list[StateListener] = []
        self._cue_listeners: list[CueListener] = []
        self._version = 0

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def version(self) -> int:
        return self._version

    @property
    def focus_timer(self) -> FocusTimer:
        return self._focus_timer

    def add_state_listener(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def add_cue_listener(self, listener: CueListener) -> None:
        self._cue_listeners.append(listener)

    def apply(self, method: str, value: Any) -> dict[str, Any]:
        rule = RULES.get(method)
        if rule is None:
            raise UnsupportedMethodError(f"method '{method}' is not supported", method=method)

        call = decode_call(method, value)
        loop = None
        if isinstance(call, ShowStudentFocus) and call.student_name is not None:
            # The auto-clear needs a running loop; fail before the state is touched.
            loop = asyncio.get_running_loop()

        outcome = rule(self._state, call)
        if outcome.focus_target is not None:
            self._focus_timer.schedule(outcome.focus_target, loop=loop)
        if outcome.changed:
            self._changed()
        else:
            logger.debug("[board] %s left state unchanged", method)
        if outcome.cue is not None:
            self._emit_cue(outcome.cue)
        return {"success": True}

    def handler_for(self, method: str) -> Handler:
        async def _handle(payload: Any) -> dict[str, Any]:
            return self.apply(method, payload)

        return _handle

    async def aclose(self) -> None:
        await self._focus_timer.aclose()

    def _expire_focus(self, target: str) -> None:
        if self._state.focused_student != target:
            return
        self._state.focused_student = None
        logger.debug("[board] focus auto-cleared for %s", target)
        self._changed()

    def _changed(self) -> None:
        self._version += 1
        for listener in list(self._state_listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("[board] state listener failed")

    def _emit_cue(self, cue: str) -> None:
        for listener in list(self._cue_listeners):
            try:
                listener(cue)
            except Exception:
                logger.exception("[board] cue listener failed cue=%s", cue)


__all__ = ["BoardReconciler", "CueListener", "StateListener"]
