"""Pump frames from a live track into connected analysis nodes."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

import numpy as np

from src.errors import MediaStreamEndedError

from .analyser import AnalyserNode

logger = logging.getLogger(__name__)


def frame_to_mono(frame: Any) -> np.ndarray:
    """Convert a frame (ndarray, PCM16 bytes or an object with `to_ndarray()`) to mono float samples."""
    if isinstance(frame, (bytes, bytearray, memoryview)):
        raw = bytes(frame)
        array = np.frombuffer(raw[: len(raw) - (len(raw) % 2)], dtype="<i2")
    elif callable(getattr(frame, "to_ndarray", None)):
        array = np.asarray(frame.to_ndarray())
    else:
        array = np.asarray(frame)

    if array.dtype.kind in "iu":
        info = np.iinfo(array.dtype)
        samples = array.astype(np.float64) / float(max(abs(info.min), info.max))
    else:
        samples = array.astype(np.float64)

    if samples.ndim > 1:
        # Planar frames put channels first; interleaved frames put them last.
        axis = 0 if samples.shape[0] <= samples.shape[-1] else -1
        samples = samples.mean(axis=axis)
    return samples.reshape(-1)


class MediaStreamSource:
    def __init__(self, track: Any) -> None:
        self._track = track
        self._targets: list[AnalyserNode] = []
        self._task: asyncio.Task | None = None

    @property
    def track(self) -> Any:
        return self._track

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def connect(self, node: AnalyserNode) -> None:
        if node not in self._targets:
            self._targets.append(node)
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._pump())

    def disconnect(self) -> None:
        self._targets.clear()
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        """Disconnect and wait for the pump to exit."""
        task = self._task
        self.disconnect()
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _pump(self) -> None:
        try:
            while True:
                frame = await self._track.recv()
                samples = frame_to_mono(frame)
                if samples.size == 0:
                    continue
                for node in list(self._targets):
                    node.receive(samples)
        except asyncio.CancelledError:
            return
        except MediaStreamEndedError:
            logger.debug("media stream ended")
        except Exception:
            logger.debug("media stream pump exiting due to unexpected error", exc_info=True)


__all__ = ["MediaStreamSource", "frame_to_mono"]
