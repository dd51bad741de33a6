"""Shared error types for the classroom board server."""

from __future__ import annotations

from src.config.websocket import (
    WS_ERROR_APPLICATION,
    WS_ERROR_RESPONSE_TIMEOUT,
    WS_ERROR_UNSUPPORTED_METHOD,
)


class RpcError(Exception):
    """A remote procedure call that did not take effect.

    `code` is reported to the caller as the error envelope's payload.code.
    """

    code: str = WS_ERROR_APPLICATION

    def __init__(self, message: str, *, method: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.method = method


class UnsupportedMethodError(RpcError):
    code = WS_ERROR_UNSUPPORTED_METHOD


class RpcApplicationError(RpcError):
    code = WS_ERROR_APPLICATION


class RpcResponseTimeoutError(RpcError):
    code = WS_ERROR_RESPONSE_TIMEOUT


class AudioPlatformUnavailableError(RuntimeError):
    """Raised when no audio analysis platform can be constructed."""


class MediaStreamEndedError(Exception):
    """Raised by a track's `recv()` once the stream has ended."""


__all__ = [
    "AudioPlatformUnavailableError",
    "MediaStreamEndedError",
    "RpcApplicationError",
    "RpcError",
    "RpcResponseTimeoutError",
    "UnsupportedMethodError",
]
