"""Spectrum analyser node with Web Audio AnalyserNode semantics.

Keeps the last `fft_size` samples, applies a Blackman window, smooths the
magnitude spectrum over time and maps it to decibels or bytes.
"""

from __future__ import annotations

import numpy as np

from src.config.audio import (
    BYTE_MAGNITUDE_MAX,
    ANALYSER_MAX_DECIBELS,
    ANALYSER_MIN_DECIBELS,
    is_valid_fft_size,
)


def _blackman(size: int) -> np.ndarray:
    n = np.arange(size, dtype=np.float64)
    return 0.42 - 0.5 * np.cos(2.0 * np.pi * n / size) + 0.08 * np.cos(4.0 * np.pi * n / size)


class AnalyserNode:
    def __init__(
        self,
        *,
        fft_size: int = 2048,
        smoothing_time_constant: float = 0.8,
        min_decibels: float = ANALYSER_MIN_DECIBELS,
        max_decibels: float = ANALYSER_MAX_DECIBELS,
    ) -> None:
        if min_decibels >= max_decibels:
            raise ValueError("min_decibels must be lower than max_decibels")
        self.min_decibels = float(min_decibels)
        self.max_decibels = float(max_decibels)
        self.smoothing_time_constant = smoothing_time_constant
        self.fft_size = fft_size

    @property
    def fft_size(self) -> int:
        return self._fft_size

    @fft_size.setter
    def fft_size(self, value: int) -> None:
        value = int(value)
        if not is_valid_fft_size(value):
            raise ValueError(f"fft_size must be a power of two between 32 and 32768, got {value}")
        self._fft_size = value
        self._samples = np.zeros(value, dtype=np.float64)
        self._window = _blackman(value)
        self._smoothed = np.zeros(value // 2, dtype=np.float64)

    @property
    def frequency_bin_count(self) -> int:
        return self._fft_size // 2

    @property
    def smoothing_time_constant(self) -> float:
        return self._smoothing

    @smoothing_time_constant.setter
    def smoothing_time_constant(self, value: float) -> None:
        value = float(value)
        if value < 0.0 or value > 1.0:
            raise ValueError("smoothing_time_constant must be within [0, 1]")
        self._smoothing = value

    def receive(self, samples: np.ndarray) -> None:
        samples = np.asarray(samples, dtype=np.float64).reshape(-1)
        if samples.size >= self._fft_size:
            self._samples = samples[-self._fft_size :].copy()
            return
        self._samples = np.concatenate((self._samples[samples.size :], samples))

    def _update_spectrum(self) -> np.ndarray:
        spectrum = np.fft.rfft(self._samples * self._window)[: self.frequency_bin_count]
        magnitude = np.abs(spectrum) / self._fft_size
        tau = self._smoothing
        smoothed = tau * self._smoothed + (1.0 - tau) * magnitude
        smoothed[~np.isfinite(smoothed)] = 0.0
        self._smoothed = smoothed
        return smoothed

    def get_float_frequency_data(self, out: np.ndarray | None = None) -> np.ndarray:
        with np.errstate(divide="ignore"):
            decibels = 20.0 * np.log10(self._update_spectrum())
        if out is None:
            return decibels
        count = min(out.size, decibels.size)
        out[:count] = decibels[:count]
        return out

    def get_byte_frequency_data(self, out: np.ndarray | None = None) -> np.ndarray:
        decibels = self.get_float_frequency_data()
        span = self.max_decibels - self.min_decibels
        scaled = np.floor((BYTE_MAGNITUDE_MAX / span) * (decibels - self.min_decibels))
        scaled = np.clip(np.nan_to_num(scaled, nan=0.0, neginf=0.0, posinf=BYTE_MAGNITUDE_MAX), 0, BYTE_MAGNITUDE_MAX)
        data = scaled.astype(np.uint8)
        if out is None:
            return data
        count = min(out.size, data.size)
        out[:count] = data[:count]
        return out


__all__ = ["AnalyserNode"]
