"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

AGENT_ENDPOINT_PATH = "/agent"
DISPLAY_ENDPOINT_PATH = "/display"

# Envelope keys
WS_KEY_TYPE = "type"
WS_KEY_SESSION_ID = "session_id"
WS_KEY_REQUEST_ID = "request_id"
WS_KEY_PAYLOAD = "payload"

WS_UNKNOWN_SESSION_ID = "unknown"
WS_UNKNOWN_REQUEST_ID = "unknown"

# Close codes
WS_CLOSE_CLIENT_REQUEST_CODE = 1000
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_UNAUTHORIZED_CODE = 4001
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration"


def _get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    try:
        return float(raw)
    except Exception:
        return float(default)


# Idle watchdog
WS_IDLE_TIMEOUT_S: float = _get_float("WS_IDLE_TIMEOUT_S", 150.0)
WS_WATCHDOG_TICK_S: float = max(0.01, _get_float("WS_WATCHDOG_TICK_S", 5.0))
# 0 disables the hard cap on connection age.
WS_MAX_CONNECTION_DURATION_S: float = max(0.0, _get_float("WS_MAX_CONNECTION_DURATION_S", 0.0))

# Errors (payload.code values)
WS_ERROR_AUTH_FAILED = "authentication_failed"
WS_ERROR_SERVER_AT_CAPACITY = "server_at_capacity"
WS_ERROR_INVALID_MESSAGE = "invalid_message"
WS_ERROR_INVALID_PAYLOAD = "invalid_payload"
WS_ERROR_UNSUPPORTED_METHOD = "unsupported_method"
WS_ERROR_APPLICATION = "application_error"
WS_ERROR_RESPONSE_TIMEOUT = "response_timeout"
WS_ERROR_INTERNAL = "internal_error"

__all__ = [
    "AGENT_ENDPOINT_PATH",
    "DISPLAY_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "WS_KEY_SESSION_ID",
    "WS_KEY_REQUEST_ID",
    "WS_KEY_PAYLOAD",
    "WS_UNKNOWN_SESSION_ID",
    "WS_UNKNOWN_REQUEST_ID",
    "WS_CLOSE_CLIENT_REQUEST_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_IDLE_TIMEOUT_S",
    "WS_WATCHDOG_TICK_S",
    "WS_MAX_CONNECTION_DURATION_S",
    "WS_ERROR_AUTH_FAILED",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_ERROR_INVALID_MESSAGE",
    "WS_ERROR_INVALID_PAYLOAD",
    "WS_ERROR_UNSUPPORTED_METHOD",
    "WS_ERROR_APPLICATION",
    "WS_ERROR_RESPONSE_TIMEOUT",
    "WS_ERROR_INTERNAL",
]
