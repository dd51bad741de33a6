"""Runtime dependency builders for handler tests."""

from __future__ import annotations

from src.state import RuntimeDeps
from src.board import BoardService
from src.handlers.display.hub import DisplayHub
from src.handlers.connections import ConnectionManager
from src.state.settings import (
    AppSettings,
    AuthSettings,
    AudioSettings,
    BoardSettings,
    LimitsSettings,
    WebSocketSettings,
)

from .audio import FakePlatform

API_KEY = "test-key"


def make_settings(
    *,
    api_key: str = API_KEY,
    max_agent_connections: int = 4,
    max_audio_chunk_bytes: int = 96000,
    idle_timeout_s: float = 60.0,
    focus_clear_delay_s: float = 5.0,
) -> AppSettings:
    return AppSettings(
        auth=AuthSettings(api_key=api_key),
        limits=LimitsSettings(
            max_agent_connections=max_agent_connections,
            max_audio_chunk_bytes=max_audio_chunk_bytes,
            display_queue_max=64,
        ),
        websocket=WebSocketSettings(idle_timeout_s=idle_timeout_s, watchdog_tick_s=0.05, max_connection_duration_s=0.0),
        board=BoardSettings(focus_clear_delay_s=focus_clear_delay_s),
        audio=AudioSettings(fft_size=64, smoothing=0.75, sample_rate_hz=48000, refresh_hz=100.0),
    )


def make_runtime(settings: AppSettings | None = None, *, platform: FakePlatform | None = None) -> RuntimeDeps:
    settings = settings or make_settings()
    hub = DisplayHub(queue_max=settings.limits.display_queue_max)
    board = BoardService(
        focus_clear_delay_s=settings.board.focus_clear_delay_s,
        audio=settings.audio,
        publish=hub.publish,
        context_factory=platform if platform is not None else FakePlatform(),
    )
    return RuntimeDeps(
        connections=ConnectionManager(max_connections=settings.limits.max_agent_connections),
        board=board,
        hub=hub,
        settings=settings,
    )


__all__ = ["API_KEY", "make_runtime", "make_settings"]
