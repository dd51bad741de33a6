"""Agent socket message loop (/agent)."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from typing import Literal

from fastapi import WebSocket, WebSocketDisconnect

from src.state.envelope import EnvelopeState
from src.state.runtime import RuntimeDeps
from src.config.websocket import WS_ERROR_INVALID_MESSAGE, WS_CLOSE_CLIENT_REQUEST_CODE

from .dispatch import HANDLERS
from .lifecycle import AgentLifecycle
from .parser import parse_agent_message
from .errors import send_error, safe_send_envelope

logger = logging.getLogger(__name__)


async def _recv_text_with_watchdog(ws: WebSocket, lifecycle: AgentLifecycle) -> tuple[str | None, bool]:
    try:
        message = await asyncio.wait_for(ws.receive_text(), timeout=lifecycle.tick_s * 2)
        return message, False
    except TimeoutError:
        return None, lifecycle.should_close()


async def _handle_control_message(
    ws: WebSocket,
    msg_type: str,
    *,
    session_id: str,
    request_id: str,
) -> Literal["none", "continue", "close"]:
    if msg_type == "ping":
        await safe_send_envelope(ws, msg_type="pong", session_id=session_id, request_id=request_id, payload={})
        return "continue"
    if msg_type == "pong":
        return "continue"
    if msg_type == "end":
        await safe_send_envelope(ws, msg_type="session_end", session_id=session_id, request_id=request_id, payload={})
        with contextlib.suppress(Exception):
            await ws.close(code=WS_CLOSE_CLIENT_REQUEST_CODE)
        return "close"
    return "none"


async def _parse_or_send_error(ws: WebSocket, raw: str, state: EnvelopeState) -> dict[str, Any] | None:
    try:
        return parse_agent_message(raw)
    except ValueError as exc:
        await send_error(
            ws,
            session_id=state.session_id,
            request_id=state.request_id,
            error_code=WS_ERROR_INVALID_MESSAGE,
            message=str(exc),
            reason_code="invalid_message",
        )
        return None


async def run_message_loop(
    ws: WebSocket,
    lifecycle: AgentLifecycle,
    state: EnvelopeState,
    runtime_deps: RuntimeDeps,
) -> None:
    """Read envelopes until the agent leaves, ends the session or is timed out.

    In-flight `rpc.invoke` tasks are cancelled when the loop exits.
    """
    try:
        while True:
            raw, should_exit = await _recv_text_with_watchdog(ws, lifecycle)
            if should_exit:
                return
            if raw is None:
                continue

            lifecycle.touch()

            msg = await _parse_or_send_error(ws, raw, state)
            if msg is None:
                continue

            msg_type = msg["type"]
            request_id = msg["request_id"]
            payload = msg["payload"] or {}

            state.session_id = msg["session_id"]
            state.request_id = request_id

            control = await _handle_control_message(
                ws, msg_type, session_id=state.session_id, request_id=request_id
            )
            if control == "close":
                return
            if control == "continue":
                continue

            handler = HANDLERS.get(msg_type)
            if handler is not None:
                await handler(ws, runtime_deps, state, request_id, payload)
                continue

            await send_error(
                ws,
                session_id=state.session_id,
                request_id=request_id,
                error_code=WS_ERROR_INVALID_MESSAGE,
                message=f"message type '{msg_type}' is not supported",
                reason_code="unknown_message_type",
            )
    except WebSocketDisconnect:
        return
    finally:
        await state.cancel_inflight()


__all__ = ["run_message_loop"]
