"""Agent WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from src.rpc import RpcSession
from src.state.envelope import EnvelopeState
from src.state.runtime import RuntimeDeps
from src.config.websocket import (
    WS_CLOSE_BUSY_CODE,
    WS_ERROR_AUTH_FAILED,
    WS_CLOSE_UNAUTHORIZED_CODE,
    WS_ERROR_SERVER_AT_CAPACITY,
)

from .errors import reject_connection
from .lifecycle import AgentLifecycle
from .auth import authenticate_websocket
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> bool:
    if not await authenticate_websocket(ws, expected_api_key=runtime_deps.settings.auth.api_key):
        await reject_connection(
            ws,
            error_code=WS_ERROR_AUTH_FAILED,
            message=(
                "Authentication required. Provide valid API key via 'api_key' query parameter or 'X-API-Key' header."
            ),
            close_code=WS_CLOSE_UNAUTHORIZED_CODE,
        )
        return False

    if not await runtime_deps.connections.connect(ws):
        await reject_connection(
            ws,
            error_code=WS_ERROR_SERVER_AT_CAPACITY,
            message="Board cannot accept another agent connection. Please try again later.",
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(ws)
        raise
    return True


async def handle_agent_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    if not await _prepare_connection(ws, runtime_deps):
        return

    session = RpcSession()
    state = EnvelopeState(session=session)
    lifecycle = AgentLifecycle(ws, runtime_deps.settings.websocket, is_busy_fn=state.is_busy)
    board = runtime_deps.board
    try:
        session.mark_connected()
        board.attach_session(session)
        lifecycle.start()
        logger.info(
            "agent connected session=%s. Active: %s",
            session.session_id,
            runtime_deps.connections.get_connection_count(),
        )
        await run_message_loop(ws, lifecycle, state, runtime_deps)
    finally:
        await lifecycle.stop()
        try:
            await board.detach_session(session)
        except Exception:
            logger.exception("board detach failed session=%s", session.session_id)
        session.close()
        await runtime_deps.connections.disconnect(ws)
        logger.info(
            "agent disconnected session=%s envelope_session_id=%s. Active: %s",
            session.session_id,
            state.session_id,
            runtime_deps.connections.get_connection_count(),
        )


__all__ = ["handle_agent_connection"]
