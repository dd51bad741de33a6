"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    api_key: str


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_agent_connections: int
    max_audio_chunk_bytes: int
    display_queue_max: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class BoardSettings:
    focus_clear_delay_s: float


@dataclass(frozen=True, slots=True)
class AudioSettings:
    fft_size: int
    smoothing: float
    sample_rate_hz: int
    refresh_hz: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    board: BoardSettings
    audio: AudioSettings


__all__ = [
    "AppSettings",
    "AudioSettings",
    "AuthSettings",
    "BoardSettings",
    "LimitsSettings",
    "WebSocketSettings",
]
