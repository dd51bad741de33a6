"""Session-scoped RPC transport handle.

One `RpcSession` exists per live agent connection. It maps method names to
transport-level callables and performs inbound calls against them. The
surrounding connection handler owns its lifecycle; the registry only observes
it.
"""

from __future__ import annotations

import uuid
import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

from src.errors import (
    RpcError,
    RpcApplicationError,
    UnsupportedMethodError,
    RpcResponseTimeoutError,
)

from .invocation import RpcInvocationData

logger = logging.getLogger(__name__)

RpcMethod = Callable[[RpcInvocationData], Awaitable[str]]
ReadyListener = Callable[["RpcSession"], None]


class RpcSession:
    def __init__(self, session_id: str | None = None, *, caller_identity: str = "agent") -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.caller_identity = caller_identity
        self._methods: dict[str, RpcMethod] = {}
        self._connected = False
        self._closed = False
        self._ready_listeners: list[ReadyListener] = []

    def __repr__(self) -> str:
        return f"RpcSession(session_id={self.session_id!r}, connected={self._connected})"

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def closed(self) -> bool:
        return self._closed

    def add_ready_listener(self, listener: ReadyListener) -> None:
        self._ready_listeners.append(listener)

    def mark_connected(self) -> None:
        if self._closed or self._connected:
            return
        self._connected = True
        for listener in list(self._ready_listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("session ready listener failed session_id=%s", self.session_id)

    def close(self) -> None:
        self._connected = False
        self._closed = True
        self._methods.clear()
        self._ready_listeners.clear()

    def register_rpc_method(self, method: str, fn: RpcMethod) -> Callable[[], None]:
        if not self._connected:
            raise RuntimeError(f"session {self.session_id} is not connected")
        if method in self._methods:
            raise ValueError(f"RPC method {method!r} is already registered")
        self._methods[method] = fn

        def _unregister() -> None:
            if self._methods.get(method) is fn:
                del self._methods[method]

        return _unregister

    def unregister_rpc_method(self, method: str) -> None:
        self._methods.pop(method, None)

    def is_registered(self, method: str) -> bool:
        return method in self._methods

    def registered_methods(self) -> list[str]:
        return sorted(self._methods)

    async def perform(
        self,
        method: str,
        payload: Any,
        *,
        request_id: str,
        response_timeout_s: float | None = None,
    ) -> str:
        fn = self._methods.get(method)
        if fn is None:
            raise UnsupportedMethodError(f"method '{method}' is not supported", method=method)

        data = RpcInvocationData(
            request_id=request_id,
            caller_identity=self.caller_identity,
            payload=payload,
            response_timeout_s=response_timeout_s,
        )
        try:
            if response_timeout_s is not None and response_timeout_s > 0:
                return await asyncio.wait_for(fn(data), timeout=response_timeout_s)
            return await fn(data)
        except TimeoutError as exc:
            raise RpcResponseTimeoutError(
                f"method '{method}' did not respond within {response_timeout_s:.3f}s",
                method=method,
            ) from exc
        except RpcError:
            raise
        except Exception as exc:
            raise RpcApplicationError(str(exc) or exc.__class__.__name__, method=method) from exc


__all__ = ["ReadyListener", "RpcMethod", "RpcSession"]
