"""Idempotent registration of remote procedure handlers per session."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .session import RpcMethod, RpcSession
from .invocation import RpcInvocationData
from .decoder import decode_payload, encode_response
from .binding import Handler, HandlerCell, ProcedureBinding

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


class ProcedureRegistry:
    """Bind named handlers to sessions exactly once per (session, method).

    The transport binding is created once and always calls through a
    `HandlerCell`, so later `register` calls with a new handler only swap the
    cell contents. Bindings on a session that is not connected yet are kept
    and retried when the session reports ready.
    """

    def __init__(self) -> None:
        self._cells: dict[str, HandlerCell] = {}
        self._bindings: dict[tuple[RpcSession, str], ProcedureBinding] = {}
        self._watched: set[RpcSession] = set()

    def register(self, session: RpcSession | None, method: str, handler: Handler) -> Callable[[], None]:
        cell = self._cells.get(method)
        if cell is None:
            cell = HandlerCell(handler)
            self._cells[method] = cell
        else:
            cell.handler = handler

        if session is None:
            logger.warning('[rpc] cannot register "%s" - session not ready', method)
            return _noop

        key = (session, method)
        binding = self._bindings.get(key)
        if binding is not None and binding.registered:
            logger.debug('[rpc] "%s" already registered, skipping re-registration', method)
            return self._unregister_fn(session, method)

        if binding is None:
            binding = ProcedureBinding(method=method, cell=cell)
            self._bindings[key] = binding

        if not session.connected:
            logger.warning(
                '[rpc] cannot register "%s" yet - session %s not connected; deferring',
                method,
                session.session_id,
            )
            self._watch(session)
            return self._unregister_fn(session, method)

        self._bind(session, binding)
        return self._unregister_fn(session, method)

    def binding(self, session: RpcSession, method: str) -> ProcedureBinding | None:
        return self._bindings.get((session, method))

    def active_bindings(self, session: RpcSession) -> list[ProcedureBinding]:
        return [b for (s, _m), b in self._bindings.items() if s is session and b.registered]

    def sync(self, session: RpcSession) -> None:
        """Retry every deferred binding for `session`."""
        if not session.connected:
            return
        for (owner, _method), binding in list(self._bindings.items()):
            if owner is session and not binding.registered:
                self._bind(session, binding)

    def teardown(self, session: RpcSession) -> None:
        for owner, method in [key for key in self._bindings if key[0] is session]:
            self._unregister(owner, method)
        self._watched.discard(session)

    def _watch(self, session: RpcSession) -> None:
        if session in self._watched:
            return
        self._watched.add(session)
        session.add_ready_listener(self.sync)

    def _bind(self, session: RpcSession, binding: ProcedureBinding) -> None:
        try:
            binding.unregister = session.register_rpc_method(binding.method, self._entry(binding.method, binding.cell))
        except Exception:
            logger.exception('[rpc] failed to register method "%s"', binding.method)
            binding.registered = False
            return
        binding.registered = True
        logger.info("[rpc] method registered: %s session_id=%s", binding.method, session.session_id)

    def _unregister_fn(self, session: RpcSession, method: str) -> Callable[[], None]:
        def _unregister() -> None:
            self._unregister(session, method)

        return _unregister

    def _unregister(self, session: RpcSession, method: str) -> None:
        binding = self._bindings.pop((session, method), None)
        if binding is None:
            return
        if binding.registered and binding.unregister is not None:
            try:
                binding.unregister()
                logger.info("[rpc] method unregistered: %s session_id=%s", method, session.session_id)
            except Exception:
                logger.exception('[rpc] failed to unregister method "%s"', method)
        binding.registered = False
        binding.unregister = None

    @staticmethod
    def _entry(method: str, cell: HandlerCell) -> RpcMethod:
        async def _invoke(data: RpcInvocationData) -> str:
            logger.info('[rpc] "%s" called request_id=%s', method, data.request_id)
            logger.debug('[rpc] "%s" payload: %r', method, data.payload)
            payload = decode_payload(data.payload)
            try:
                response = await cell.handler(payload)
            except Exception:
                logger.exception('[rpc] "%s" handler error', method)
                raise
            result = encode_response(response)
            logger.info('[rpc] "%s" completed successfully', method)
            return result

        return _invoke


__all__ = ["ProcedureRegistry"]
