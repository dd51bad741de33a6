"""Dispatch handlers for agent envelope messages."""

from __future__ import annotations

import base64
import asyncio
import logging
import binascii
from typing import Any
from collections.abc import Callable, Awaitable

from fastapi import WebSocket

from src.errors import RpcError
from src.state.envelope import EnvelopeState
from src.state.runtime import RuntimeDeps
from src.board.transcript import SENDERS
from src.config.websocket import WS_ERROR_INVALID_PAYLOAD

from .errors import send_error, send_rpc_error, safe_send_envelope

logger = logging.getLogger(__name__)

HandlerFn = Callable[[WebSocket, RuntimeDeps, EnvelopeState, str, dict[str, Any]], Awaitable[None]]


def _estimate_b64_decoded_bytes(s: str) -> int:
    """Estimate decoded byte length of a base64 string without decoding it."""
    s = (s or "").strip()
    if not s:
        return 0

    padding = 0
    if s.endswith("=="):
        padding = 2
    elif s.endswith("="):
        padding = 1

    # base64 expands 3 bytes -> 4 chars
    return max(0, (len(s) * 3) // 4 - padding)


def _timeout_seconds(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool) or not isinstance(raw, int | float):
        return None
    if raw <= 0:
        return None
    return float(raw) / 1000.0


async def _invalid_payload(ws: WebSocket, state: EnvelopeState, request_id: str, message: str, reason: str) -> None:
    await send_error(
        ws,
        session_id=state.session_id,
        request_id=request_id,
        error_code=WS_ERROR_INVALID_PAYLOAD,
        message=message,
        reason_code=reason,
    )


async def _perform(
    ws: WebSocket,
    state: EnvelopeState,
    *,
    session_id: str,
    request_id: str,
    method: str,
    value: Any,
    timeout_s: float | None,
) -> None:
    try:
        response = await state.session.perform(method, value, request_id=request_id, response_timeout_s=timeout_s)
    except RpcError as exc:
        logger.info("rpc.invoke failed method=%s code=%s: %s", method, exc.code, exc.message)
        await send_rpc_error(ws, exc, session_id=session_id, request_id=request_id)
        return
    await safe_send_envelope(
        ws,
        msg_type="rpc.result",
        session_id=session_id,
        request_id=request_id,
        payload={"method": method, "response": response},
    )


async def _handle_invoke(
    ws: WebSocket,
    _runtime_deps: RuntimeDeps,
    state: EnvelopeState,
    request_id: str,
    payload: dict[str, Any],
) -> None:
    method = payload.get("method")
    if not isinstance(method, str) or not method.strip():
        await _invalid_payload(ws, state, request_id, "payload.method is required", "missing_method")
        return

    task = asyncio.create_task(
        _perform(
            ws,
            state,
            session_id=state.session_id,
            request_id=request_id,
            method=method.strip(),
            value=payload.get("payload"),
            timeout_s=_timeout_seconds(payload.get("response_timeout_ms")),
        )
    )
    state.track(task)


async def _handle_append(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    state: EnvelopeState,
    request_id: str,
    payload: dict[str, Any],
) -> None:
    audio = payload.get("audio")
    if not isinstance(audio, str) or not audio.strip():
        await _invalid_payload(ws, state, request_id, "payload.audio (base64 pcm16) is required", "missing_audio")
        return

    max_bytes = runtime_deps.settings.limits.max_audio_chunk_bytes
    if max_bytes > 0 and _estimate_b64_decoded_bytes(audio) > max_bytes:
        await send_error(
            ws,
            session_id=state.session_id,
            request_id=request_id,
            error_code=WS_ERROR_INVALID_PAYLOAD,
            message="audio chunk exceeds the maximum size",
            reason_code="audio_chunk_too_large",
            details={"max_audio_chunk_bytes": int(max_bytes)},
        )
        return

    try:
        pcm = base64.b64decode(audio.strip(), validate=True)
    except (binascii.Error, ValueError):
        await _invalid_payload(ws, state, request_id, "payload.audio is not valid base64", "invalid_audio")
        return

    await runtime_deps.board.feed_audio(state.session, pcm)
    state.audio_bytes_received += len(pcm)


async def _handle_audio_end(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    state: EnvelopeState,
    request_id: str,
    _payload: dict[str, Any],
) -> None:
    await runtime_deps.board.end_audio(state.session)
    received = state.audio_bytes_received
    state.audio_bytes_received = 0
    await safe_send_envelope(
        ws,
        msg_type="audio.ended",
        session_id=state.session_id,
        request_id=request_id,
        payload={"audio_bytes_received": received},
    )


async def _handle_transcript(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    state: EnvelopeState,
    request_id: str,
    payload: dict[str, Any],
) -> None:
    sender = payload.get("sender")
    text = payload.get("text")
    if sender not in SENDERS:
        await _invalid_payload(ws, state, request_id, "payload.sender must be 'agent' or 'user'", "invalid_sender")
        return
    if not isinstance(text, str):
        await _invalid_payload(ws, state, request_id, "payload.text must be a string", "invalid_text")
        return
    final = payload.get("final", False)
    if not isinstance(final, bool):
        await _invalid_payload(ws, state, request_id, "payload.final must be a boolean", "invalid_final")
        return
    runtime_deps.board.record_transcript(sender, text, final=final)


HANDLERS: dict[str, HandlerFn] = {
    "rpc.invoke": _handle_invoke,
    "audio.append": _handle_append,
    "audio.end": _handle_audio_end,
    "transcript.segment": _handle_transcript,
}

__all__ = ["HANDLERS", "HandlerFn"]
