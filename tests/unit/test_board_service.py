from __future__ import annotations

import json
import asyncio
from typing import Any

import pytest

from src.rpc import RpcSession
from src.board import BoardService
from src.config.board import BOARD_METHODS
from src.board.service import MSG_BOARD_CUE, MSG_BOARD_STATE, MSG_AUDIO_LEVELS
from tests.fakes.audio import FakePlatform


class _Published:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, msg_type: str, payload: dict[str, Any]) -> None:
        self.events.append((msg_type, payload))

    def of_type(self, msg_type: str) -> list[dict[str, Any]]:
        return [p for t, p in self.events if t == msg_type]


def _service(platform: FakePlatform | None = None) -> tuple[BoardService, _Published]:
    published = _Published()
    service = BoardService(publish=published, context_factory=platform or FakePlatform())
    return service, published


def _session() -> RpcSession:
    session = RpcSession("s1")
    session.mark_connected()
    return session


@pytest.mark.asyncio
async def test_attach_session_registers_every_board_method() -> None:
    service, _ = _service()
    session = _session()

    service.attach_session(session)
    service.attach_session(session)

    assert session.registered_methods() == sorted(BOARD_METHODS)


@pytest.mark.asyncio
async def test_calls_publish_state_and_cues() -> None:
    service, published = _service()
    session = _session()
    service.attach_session(session)

    raw = await session.perform("update_content", json.dumps({"text": "Photosynthesis"}), request_id="r1")
    await session.perform("show_error_buzzer", "{}", request_id="r2")

    assert json.loads(raw) == {"success": True}
    states = published.of_type(MSG_BOARD_STATE)
    assert states[-1]["content"] == "Photosynthesis"
    assert states[-1]["version"] == 1
    assert published.of_type(MSG_BOARD_CUE) == [{"name": "buzzer"}]
    assert service.snapshot()["content"] == "Photosynthesis"


@pytest.mark.asyncio
async def test_record_transcript_publishes_only_changes() -> None:
    service, published = _service()

    assert service.record_transcript("agent", "Hello class", final=True)
    assert not service.record_transcript("agent", "", final=True)

    states = published.of_type(MSG_BOARD_STATE)
    assert len(states) == 1
    assert states[0]["transcript"]["entries"] == [{"text": "Hello class", "sender": "agent", "id": "agent-0"}]


@pytest.mark.asyncio
async def test_audio_levels_flow_and_release() -> None:
    platform = FakePlatform(level=255)
    service, published = _service(platform)
    session = _session()

    assert await service.feed_audio(session, b"\x00\x00" * 8) == 8
    await service.feed_audio(session, b"\x00\x00" * 8)
    for _ in range(100):
        if published.of_type(MSG_AUDIO_LEVELS):
            break
        await asyncio.sleep(0.005)

    levels = published.of_type(MSG_AUDIO_LEVELS)
    assert levels[0]["session_id"] == "s1"
    assert levels[0]["levels"] == [1.0] * 32
    assert len(platform.contexts) == 1

    await service.end_audio(session)
    assert platform.closes == 1
    assert published.of_type(MSG_AUDIO_LEVELS)[-1]["levels"] == [0.0] * 32


@pytest.mark.asyncio
async def test_detach_session_tears_down_bindings_and_audio() -> None:
    platform = FakePlatform()
    service, _ = _service(platform)
    session = _session()
    service.attach_session(session)
    await service.feed_audio(session, b"\x00\x00")

    await service.detach_session(session)

    assert session.registered_methods() == []
    assert service.registry.active_bindings(session) == []
    assert platform.closes == 1
    assert platform.disconnects == 1


@pytest.mark.asyncio
async def test_shutdown_releases_everything() -> None:
    platform = FakePlatform()
    service = BoardService(focus_clear_delay_s=0.05, context_factory=platform)
    first, second = RpcSession("a"), RpcSession("b")
    await service.feed_audio(first, b"\x00\x00")
    await service.feed_audio(second, b"\x00\x00")
    service.reconciler.apply("show_student_focus", "Karan")

    await service.shutdown()
    await asyncio.sleep(0.1)

    assert platform.closes == 2
    assert service.state.focused_student == "Karan"
