"""Agent message parsing/validation for the JSON envelope."""

from __future__ import annotations

import json
from typing import Any

from src.config.websocket import WS_KEY_TYPE, WS_KEY_PAYLOAD, WS_KEY_REQUEST_ID, WS_KEY_SESSION_ID


def _require_text(msg: dict[str, Any], key: str) -> str:
    value = msg.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"message missing non-empty '{key}'")
    return value.strip()


def parse_agent_message(raw: str) -> dict[str, Any]:
    try:
        msg = json.loads(raw)
    except Exception as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    msg[WS_KEY_TYPE] = _require_text(msg, WS_KEY_TYPE)
    msg[WS_KEY_SESSION_ID] = _require_text(msg, WS_KEY_SESSION_ID)
    msg[WS_KEY_REQUEST_ID] = _require_text(msg, WS_KEY_REQUEST_ID)

    payload = msg.get(WS_KEY_PAYLOAD, {})
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValueError("message 'payload' must be an object")
    msg[WS_KEY_PAYLOAD] = payload
    return msg


__all__ = ["parse_agent_message"]
