"""Admission control and payload limits (env-resolved constants only)."""

from __future__ import annotations

import os

_MAX_AGENT_CONNECTIONS_RAW = (os.getenv("MAX_AGENT_CONNECTIONS") or "").strip()
try:
    MAX_AGENT_CONNECTIONS: int = int(_MAX_AGENT_CONNECTIONS_RAW) if _MAX_AGENT_CONNECTIONS_RAW else 4
except Exception:
    MAX_AGENT_CONNECTIONS = 4
MAX_AGENT_CONNECTIONS = max(1, int(MAX_AGENT_CONNECTIONS))

# A single audio.append chunk. 1s of 48kHz PCM16 mono is 96000 bytes.
_MAX_AUDIO_CHUNK_BYTES_RAW = (os.getenv("MAX_AUDIO_CHUNK_BYTES") or "").strip()
try:
    MAX_AUDIO_CHUNK_BYTES: int = int(_MAX_AUDIO_CHUNK_BYTES_RAW) if _MAX_AUDIO_CHUNK_BYTES_RAW else 96000
except Exception:
    MAX_AUDIO_CHUNK_BYTES = 96000
MAX_AUDIO_CHUNK_BYTES = max(0, int(MAX_AUDIO_CHUNK_BYTES))

_DISPLAY_QUEUE_MAX_RAW = (os.getenv("DISPLAY_QUEUE_MAX") or "").strip()
try:
    DISPLAY_QUEUE_MAX: int = int(_DISPLAY_QUEUE_MAX_RAW) if _DISPLAY_QUEUE_MAX_RAW else 256
except Exception:
    DISPLAY_QUEUE_MAX = 256
DISPLAY_QUEUE_MAX = max(1, int(DISPLAY_QUEUE_MAX))

__all__ = [
    "DISPLAY_QUEUE_MAX",
    "MAX_AGENT_CONNECTIONS",
    "MAX_AUDIO_CHUNK_BYTES",
]
