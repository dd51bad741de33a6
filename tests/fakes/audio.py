"""Counting in-memory audio platform for extractor tests."""

from __future__ import annotations

import asyncio
from typing import Any

import numpy as np


class FakeTrack:
    kind = "audio"

    async def recv(self) -> np.ndarray:
        await asyncio.sleep(3600)
        return np.zeros(0)


class FakeAnalyser:
    def __init__(self, level: int) -> None:
        self.level = level
        self.fft_size = 2048
        self.smoothing_time_constant = 0.8

    def get_byte_frequency_data(self, out: np.ndarray) -> np.ndarray:
        out[:] = self.level
        return out


class FakeSource:
    def __init__(self, platform: FakePlatform) -> None:
        self._platform = platform
        self.connected: list[Any] = []

    def connect(self, node: Any) -> None:
        self.connected.append(node)

    def disconnect(self) -> None:
        self._platform.disconnects += 1


class FakeContext:
    def __init__(self, platform: FakePlatform) -> None:
        self._platform = platform
        self.state = platform.initial_state
        self.resumed = False
        self.sources: list[FakeSource] = []

    def resume(self) -> None:
        self.resumed = True
        self.state = "running"

    def create_media_stream_source(self, _track: Any) -> FakeSource:
        source = FakeSource(self._platform)
        self.sources.append(source)
        return source

    def create_analyser(self) -> FakeAnalyser:
        if self._platform.fail_analyser:
            raise RuntimeError("no analyser")
        analyser = FakeAnalyser(self._platform.level)
        self._platform.analysers.append(analyser)
        return analyser

    def close(self) -> None:
        if self.state == "closed":
            raise RuntimeError("already closed")
        self.state = "closed"
        self._platform.closes += 1
        sources, self.sources = self.sources, []
        for source in sources:
            source.disconnect()


class FakePlatform:
    """Context factory that counts what it hands out and what gets released."""

    def __init__(self, *, level: int = 255, fail_analyser: bool = False, initial_state: str = "running") -> None:
        self.level = level
        self.fail_analyser = fail_analyser
        self.initial_state = initial_state
        self.contexts: list[FakeContext] = []
        self.analysers: list[FakeAnalyser] = []
        self.closes = 0
        self.disconnects = 0

    def __call__(self) -> FakeContext:
        context = FakeContext(self)
        self.contexts.append(context)
        return context


__all__ = ["FakeAnalyser", "FakeContext", "FakePlatform", "FakeSource", "FakeTrack"]
