from __future__ import annotations

import asyncio

import pytest

from src.rpc import RpcSession
from src.rpc.invocation import RpcInvocationData
from src.errors import RpcApplicationError, UnsupportedMethodError, RpcResponseTimeoutError


async def _echo(data: RpcInvocationData) -> str:
    return f"{data.caller_identity}:{data.payload}"


def test_register_requires_connected_session() -> None:
    session = RpcSession("s1")
    with pytest.raises(RuntimeError):
        session.register_rpc_method("m", _echo)


def test_register_rejects_duplicates() -> None:
    session = RpcSession("s1")
    session.mark_connected()
    session.register_rpc_method("m", _echo)
    with pytest.raises(ValueError):
        session.register_rpc_method("m", _echo)


def test_ready_listeners_fire_once_on_connect() -> None:
    session = RpcSession()
    seen: list[RpcSession] = []
    session.add_ready_listener(seen.append)
    session.mark_connected()
    session.mark_connected()
    assert seen == [session]


@pytest.mark.asyncio
async def test_perform_calls_registered_method() -> None:
    session = RpcSession("s1", caller_identity="tutor")
    session.mark_connected()
    unregister = session.register_rpc_method("m", _echo)

    assert await session.perform("m", "x", request_id="r1") == "tutor:x"

    unregister()
    assert not session.is_registered("m")
    with pytest.raises(UnsupportedMethodError):
        await session.perform("m", "x", request_id="r2")


@pytest.mark.asyncio
async def test_perform_wraps_handler_errors() -> None:
    async def _boom(_data: RpcInvocationData) -> str:
        raise KeyError("missing")

    session = RpcSession()
    session.mark_connected()
    session.register_rpc_method("m", _boom)

    with pytest.raises(RpcApplicationError) as exc_info:
        await session.perform("m", None, request_id="r1")
    assert exc_info.value.method == "m"


@pytest.mark.asyncio
async def test_perform_times_out() -> None:
    async def _slow(_data: RpcInvocationData) -> str:
        await asyncio.sleep(1.0)
        return "late"

    session = RpcSession()
    session.mark_connected()
    session.register_rpc_method("m", _slow)

    with pytest.raises(RpcResponseTimeoutError):
        await session.perform("m", None, request_id="r1", response_timeout_s=0.01)


def test_close_drops_methods() -> None:
    session = RpcSession()
    session.mark_connected()
    session.register_rpc_method("m", _echo)
    session.close()
    assert session.closed
    assert not session.connected
    assert session.registered_methods() == []
