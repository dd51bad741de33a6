"""Live frequency levels for the board's audio visualizer."""

from __future__ import annotations

import asyncio
import inspect
import logging
import contextlib
from typing import Any
from collections.abc import Callable

import numpy as np

from src.config.audio import (
    AUDIO_FFT_SIZE,
    AUDIO_SMOOTHING,
    AUDIO_REFRESH_HZ,
    BYTE_MAGNITUDE_MAX,
    is_valid_fft_size,
)

from .context import AudioContext
from .sources import resolve_media_track

logger = logging.getLogger(__name__)

ContextFactory = Callable[[], Any]
SampleListener = Callable[[list[float]], None]


async def _close_context(context: Any) -> None:
    if getattr(context, "state", None) == "closed":
        return
    try:
        closer = getattr(context, "aclose", None)
        if closer is not None:
            await closer()
        else:
            context.close()
    except Exception:
        logger.debug("audio context close failed", exc_info=True)


class SignalExtractor:
    """Sample normalized frequency-bin magnitudes from a live audio source.

    Each `attach` builds a fresh context, stream source and analyser; all of
    them are released together, exactly once, on `detach`, on a failed setup
    or when leaving `async with`. Without a usable source or platform the
    levels stay at zero.
    """

    def __init__(
        self,
        *,
        fft_size: int = AUDIO_FFT_SIZE,
        smoothing: float = AUDIO_SMOOTHING,
        refresh_hz: float = AUDIO_REFRESH_HZ,
        context_factory: ContextFactory | None = AudioContext,
        on_sample: SampleListener | None = None,
    ) -> None:
        if not is_valid_fft_size(int(fft_size)):
            raise ValueError(f"fft_size must be a power of two between 32 and 32768, got {fft_size}")
        if refresh_hz <= 0:
            raise ValueError("refresh_hz must be positive")
        self._fft_size = int(fft_size)
        self._bin_count = self._fft_size // 2
        self._smoothing = float(smoothing)
        self._interval_s = 1.0 / float(refresh_hz)
        self._context_factory = context_factory
        self._on_sample = on_sample
        self._levels: list[float] = [0.0] * self._bin_count
        self._resources: contextlib.AsyncExitStack | None = None
        self._task: asyncio.Task | None = None

    @property
    def bin_count(self) -> int:
        return self._bin_count

    @property
    def levels(self) -> list[float]:
        return list(self._levels)

    @property
    def attached(self) -> bool:
        return self._resources is not None

    async def __aenter__(self) -> SignalExtractor:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.detach()

    async def attach(self, source: Any) -> bool:
        await self.detach()

        track = resolve_media_track(source)
        if track is None:
            return False
        if self._context_factory is None:
            logger.error("[audio] analysis platform unavailable; levels stay at zero")
            return False

        stack = contextlib.AsyncExitStack()
        try:
            context = self._context_factory()
            stack.push_async_callback(_close_context, context)
            if getattr(context, "state", None) == "suspended":
                resumed = context.resume()
                if inspect.isawaitable(resumed):
                    await resumed

            # The context owns its sources and stops them when it closes.
            source_node = context.create_media_stream_source(track)

            analyser = context.create_analyser()
            analyser.fft_size = self._fft_size
            analyser.smoothing_time_constant = self._smoothing
            # Not routed to any output, only analysed.
            source_node.connect(analyser)

            task = asyncio.create_task(self._sample_loop(analyser))
            stack.callback(task.cancel)
        except Exception:
            logger.error("[audio] analyser setup failed; levels stay at zero", exc_info=True)
            await stack.aclose()
            return False

        self._task = task
        self._resources = stack.pop_all()
        logger.debug("[audio] extractor attached bins=%s", self._bin_count)
        return True

    async def detach(self) -> None:
        resources, self._resources = self._resources, None
        task, self._task = self._task, None
        if resources is not None:
            await resources.aclose()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        self._reset()

    def _reset(self) -> None:
        if not any(self._levels):
            return
        self._levels = [0.0] * self._bin_count
        self._publish()

    def _publish(self) -> None:
        if self._on_sample is None:
            return
        try:
            self._on_sample(list(self._levels))
        except Exception:
            logger.exception("[audio] sample listener failed")

    async def _sample_loop(self, analyser: Any) -> None:
        buffer = np.zeros(self._bin_count, dtype=np.uint8)
        try:
            while True:
                analyser.get_byte_frequency_data(buffer)
                self._levels = (buffer.astype(np.float64) / BYTE_MAGNITUDE_MAX).tolist()
                self._publish()
                await asyncio.sleep(self._interval_s)
        except asyncio.CancelledError:
            return
        except Exception:
            logger.error("[audio] sampling stopped", exc_info=True)


__all__ = ["ContextFactory", "SampleListener", "SignalExtractor"]
