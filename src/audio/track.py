"""In-memory PCM16 audio track fed from the agent transport."""

from __future__ import annotations

import asyncio
import logging

import numpy as np

from src.errors import MediaStreamEndedError
from src.config.audio import AUDIO_SAMPLE_RATE_HZ

logger = logging.getLogger(__name__)


class PcmTrack:
    """Mono PCM16 track exposing `recv()` like a live media track.

    When the buffer is full the oldest chunk is dropped so the track stays
    live instead of lagging behind the speaker.
    """

    kind = "audio"

    def __init__(self, *, sample_rate: int = AUDIO_SAMPLE_RATE_HZ, max_chunks: int = 64) -> None:
        self.sample_rate = int(sample_rate)
        self._queue: asyncio.Queue[np.ndarray] = asyncio.Queue(maxsize=max(1, int(max_chunks)))
        self._ended = False
        self._dropped_chunks = 0
        self._wakeup = asyncio.Event()

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def dropped_chunks(self) -> int:
        return self._dropped_chunks

    def push_pcm16(self, data: bytes) -> int:
        if self._ended:
            raise MediaStreamEndedError("track has ended")
        usable = len(data) - (len(data) % 2)
        if usable <= 0:
            return 0
        samples = np.frombuffer(data[:usable], dtype="<i2").copy()
        if self._queue.full():
            self._queue.get_nowait()
            self._dropped_chunks += 1
        self._queue.put_nowait(samples)
        self._wakeup.set()
        return int(samples.size)

    def stop(self) -> None:
        if self._ended:
            return
        self._ended = True
        self._wakeup.set()

    async def recv(self) -> np.ndarray:
        while True:
            if not self._queue.empty():
                return self._queue.get_nowait()
            if self._ended:
                raise MediaStreamEndedError("track has ended")
            self._wakeup.clear()
            await self._wakeup.wait()


__all__ = ["PcmTrack"]
