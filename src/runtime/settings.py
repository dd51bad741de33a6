"""Load runtime settings.

Configuration values are resolved from the environment in `src/config/*` and
exposed here as structured dataclasses for the rest of the server.
"""

from __future__ import annotations

from src.config.board import FOCUS_CLEAR_DELAY_S
from src.config.secrets import get_board_api_key
from src.config.websocket import (
    WS_IDLE_TIMEOUT_S,
    WS_WATCHDOG_TICK_S,
    WS_MAX_CONNECTION_DURATION_S,
)
from src.state.settings import (
    AppSettings,
    AuthSettings,
    AudioSettings,
    BoardSettings,
    LimitsSettings,
    WebSocketSettings,
)
from src.config.limits import (
    DISPLAY_QUEUE_MAX,
    MAX_AUDIO_CHUNK_BYTES,
    MAX_AGENT_CONNECTIONS,
)
from src.config.audio import (
    AUDIO_FFT_SIZE,
    AUDIO_SMOOTHING,
    AUDIO_REFRESH_HZ,
    AUDIO_SAMPLE_RATE_HZ,
)


def load_settings() -> AppSettings:
    return AppSettings(
        auth=AuthSettings(api_key=get_board_api_key()),
        limits=LimitsSettings(
            max_agent_connections=MAX_AGENT_CONNECTIONS,
            max_audio_chunk_bytes=MAX_AUDIO_CHUNK_BYTES,
            display_queue_max=DISPLAY_QUEUE_MAX,
        ),
        websocket=WebSocketSettings(
            idle_timeout_s=WS_IDLE_TIMEOUT_S,
            watchdog_tick_s=WS_WATCHDOG_TICK_S,
            max_connection_duration_s=WS_MAX_CONNECTION_DURATION_S,
        ),
        board=BoardSettings(focus_clear_delay_s=FOCUS_CLEAR_DELAY_S),
        audio=AudioSettings(
            fft_size=AUDIO_FFT_SIZE,
            smoothing=AUDIO_SMOOTHING,
            sample_rate_hz=AUDIO_SAMPLE_RATE_HZ,
            refresh_hz=AUDIO_REFRESH_HZ,
        ),
    )


__all__ = ["load_settings"]
