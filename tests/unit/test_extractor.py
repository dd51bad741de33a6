from __future__ import annotations

import asyncio

import numpy as np
import pytest

from src.audio import PcmTrack, AudioContext, SignalExtractor
from tests.fakes.audio import FakeTrack, FakePlatform


class _IdleTrack:
    kind = "audio"

    def __init__(self) -> None:
        self.stopped = False

    async def recv(self) -> np.ndarray:
        try:
            await asyncio.sleep(3600)
        finally:
            self.stopped = True
        return np.zeros(0)


async def _wait_for_levels(extractor: SignalExtractor) -> None:
    for _ in range(100):
        if any(extractor.levels):
            return
        await asyncio.sleep(0.005)
    raise AssertionError("extractor never sampled")


@pytest.mark.asyncio
async def test_no_source_keeps_levels_at_zero() -> None:
    platform = FakePlatform()
    extractor = SignalExtractor(context_factory=platform)

    assert await extractor.attach(None) is False
    assert await extractor.attach({"track": None}) is False

    assert extractor.levels == [0.0] * extractor.bin_count
    assert platform.contexts == []


@pytest.mark.asyncio
async def test_missing_platform_keeps_levels_at_zero() -> None:
    extractor = SignalExtractor(context_factory=None)
    assert await extractor.attach(FakeTrack()) is False
    assert not extractor.attached
    assert not any(extractor.levels)


def test_invalid_fft_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        SignalExtractor(fft_size=48)


@pytest.mark.asyncio
async def test_levels_are_normalized_bytes() -> None:
    platform = FakePlatform(level=51)
    samples: list[list[float]] = []
    extractor = SignalExtractor(fft_size=64, smoothing=0.75, refresh_hz=200, context_factory=platform, on_sample=samples.append)

    assert await extractor.attach({"publication": {"track": {"media_stream_track": FakeTrack()}}})
    await _wait_for_levels(extractor)

    assert extractor.bin_count == 32
    assert extractor.levels == [0.2] * 32
    analyser = platform.analysers[0]
    assert analyser.fft_size == 64
    assert analyser.smoothing_time_constant == 0.75
    assert samples and samples[-1] == [0.2] * 32

    await extractor.detach()


@pytest.mark.asyncio
async def test_resources_released_exactly_once() -> None:
    platform = FakePlatform()
    samples: list[list[float]] = []
    extractor = SignalExtractor(refresh_hz=200, context_factory=platform, on_sample=samples.append)

    await extractor.attach(FakeTrack())
    await _wait_for_levels(extractor)
    await extractor.detach()
    await extractor.detach()

    assert platform.closes == 1
    assert platform.disconnects == 1
    assert not extractor.attached
    assert extractor.levels == [0.0] * extractor.bin_count
    assert samples[-1] == [0.0] * extractor.bin_count


@pytest.mark.asyncio
async def test_reattach_releases_previous_resources() -> None:
    platform = FakePlatform()
    extractor = SignalExtractor(context_factory=platform)

    await extractor.attach(FakeTrack())
    await extractor.attach(FakeTrack())

    assert len(platform.contexts) == 2
    assert platform.closes == 1
    assert platform.disconnects == 1

    await extractor.detach()
    assert platform.closes == 2
    assert platform.disconnects == 2


@pytest.mark.asyncio
async def test_failed_setup_releases_partial_resources() -> None:
    platform = FakePlatform(fail_analyser=True)
    extractor = SignalExtractor(context_factory=platform)

    assert await extractor.attach(FakeTrack()) is False

    assert platform.closes == 1
    assert platform.disconnects == 1
    assert not extractor.attached
    assert not any(extractor.levels)


@pytest.mark.asyncio
async def test_suspended_context_is_resumed() -> None:
    platform = FakePlatform(initial_state="suspended")
    extractor = SignalExtractor(context_factory=platform)

    await extractor.attach(FakeTrack())
    assert platform.contexts[0].resumed

    await extractor.detach()


@pytest.mark.asyncio
async def test_context_manager_detaches_on_exit() -> None:
    platform = FakePlatform()
    async with SignalExtractor(context_factory=platform) as extractor:
        await extractor.attach(FakeTrack())
        assert extractor.attached
    assert platform.closes == 1
    assert not extractor.attached


@pytest.mark.asyncio
async def test_default_platform_reports_tone_levels() -> None:
    track = PcmTrack(sample_rate=48000)
    extractor = SignalExtractor(refresh_hz=200)
    assert await extractor.attach(track)

    t = np.arange(4800) / 48000
    track.push_pcm16((0.5 * np.sin(2 * np.pi * 3000.0 * t) * 32767).astype("<i2").tobytes())
    await _wait_for_levels(extractor)

    levels = extractor.levels
    assert all(0.0 <= v <= 1.0 for v in levels)
    # 48000 / 64 = 750 Hz per bin.
    assert levels[4] == max(levels)
    await extractor.detach()


@pytest.mark.asyncio
async def test_detach_waits_for_audio_context_pump() -> None:
    contexts: list[AudioContext] = []

    def _factory() -> AudioContext:
        contexts.append(AudioContext())
        return contexts[-1]

    track = _IdleTrack()
    extractor = SignalExtractor(context_factory=_factory)
    assert await extractor.attach(track)
    await asyncio.sleep(0.01)

    await extractor.detach()

    assert track.stopped
    assert contexts[0].state == "closed"
