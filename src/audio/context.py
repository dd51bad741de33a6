"""Analysis context: factory and owner of analysis nodes."""

from __future__ import annotations

import logging
from typing import Any

from src.config.audio import AUDIO_FFT_SIZE, AUDIO_SMOOTHING, AUDIO_SAMPLE_RATE_HZ

from .analyser import AnalyserNode
from .stream_source import MediaStreamSource

logger = logging.getLogger(__name__)

STATE_RUNNING = "running"
STATE_SUSPENDED = "suspended"
STATE_CLOSED = "closed"


class AudioContext:
    def __init__(self, *, sample_rate: int = AUDIO_SAMPLE_RATE_HZ) -> None:
        self.sample_rate = int(sample_rate)
        self._state = STATE_RUNNING
        self._sources: list[MediaStreamSource] = []

    @property
    def state(self) -> str:
        return self._state

    def _ensure_open(self) -> None:
        if self._state == STATE_CLOSED:
            raise RuntimeError("AudioContext is closed")

    def create_analyser(self) -> AnalyserNode:
        self._ensure_open()
        return AnalyserNode(fft_size=AUDIO_FFT_SIZE, smoothing_time_constant=AUDIO_SMOOTHING)

    def create_media_stream_source(self, track: Any) -> MediaStreamSource:
        self._ensure_open()
        source = MediaStreamSource(track)
        self._sources.append(source)
        return source

    def suspend(self) -> None:
        self._ensure_open()
        self._state = STATE_SUSPENDED

    def resume(self) -> None:
        self._ensure_open()
        self._state = STATE_RUNNING

    def _mark_closed(self) -> list[MediaStreamSource]:
        if self._state == STATE_CLOSED:
            raise RuntimeError("AudioContext is already closed")
        self._state = STATE_CLOSED
        logger.debug("audio context closed sample_rate=%s", self.sample_rate)
        sources, self._sources = self._sources, []
        return sources

    def close(self) -> None:
        for source in self._mark_closed():
            source.disconnect()

    async def aclose(self) -> None:
        """Close and wait until every source has stopped pumping."""
        for source in self._mark_closed():
            await source.aclose()


__all__ = ["STATE_CLOSED", "STATE_RUNNING", "STATE_SUSPENDED", "AudioContext"]
