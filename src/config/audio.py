"""Audio analysis configuration (env-resolved constants only)."""

from __future__ import annotations

import os

# Analyser limits mirror the Web Audio AnalyserNode contract.
FFT_SIZE_MIN = 32
FFT_SIZE_MAX = 32768

ANALYSER_MIN_DECIBELS: float = -100.0
ANALYSER_MAX_DECIBELS: float = -30.0

# Largest value get_byte_frequency_data can produce.
BYTE_MAGNITUDE_MAX = 255


def _get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    try:
        return float(raw)
    except Exception:
        return float(default)


def _get_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except Exception:
        return int(default)


def is_valid_fft_size(value: int) -> bool:
    return FFT_SIZE_MIN <= value <= FFT_SIZE_MAX and (value & (value - 1)) == 0


AUDIO_FFT_SIZE: int = _get_int("AUDIO_FFT_SIZE", 64)
if not is_valid_fft_size(AUDIO_FFT_SIZE):
    AUDIO_FFT_SIZE = 64

AUDIO_SMOOTHING: float = _get_float("AUDIO_SMOOTHING", 0.75)
if AUDIO_SMOOTHING < 0.0 or AUDIO_SMOOTHING > 1.0:
    AUDIO_SMOOTHING = 0.75

AUDIO_SAMPLE_RATE_HZ: int = max(8000, _get_int("AUDIO_SAMPLE_RATE_HZ", 48000))

# One sample per display frame.
AUDIO_REFRESH_HZ: float = _get_float("AUDIO_REFRESH_HZ", 60.0)
if AUDIO_REFRESH_HZ <= 0:
    AUDIO_REFRESH_HZ = 60.0

__all__ = [
    "ANALYSER_MAX_DECIBELS",
    "ANALYSER_MIN_DECIBELS",
    "AUDIO_FFT_SIZE",
    "AUDIO_REFRESH_HZ",
    "AUDIO_SAMPLE_RATE_HZ",
    "AUDIO_SMOOTHING",
    "BYTE_MAGNITUDE_MAX",
    "FFT_SIZE_MAX",
    "FFT_SIZE_MIN",
    "is_valid_fft_size",
]
