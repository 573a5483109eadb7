"""Streaming spectrum analyser feeding the live renderers.

Mirrors the byte-oriented contract of a browser ``AnalyserNode``: after
every :meth:`StreamingAnalyser.process` call the two public arrays hold the
latest frequency magnitudes (0-255) and time-domain samples (0-255, centred
at 128).  Both arrays are overwritten in place; readers that need the
values beyond the current frame take a :meth:`snapshot`.
"""

from __future__ import annotations

import logging
import threading

import numpy as np
from scipy.signal import get_window

from .models import FrequencySnapshot

log = logging.getLogger(__name__)

FFT_SIZE = 1024
SMOOTHING_TIME_CONSTANT = 0.8
MIN_DECIBELS = -90.0
MAX_DECIBELS = -10.0


class AnalyserError(Exception):
    """Raised for invalid analyser parameters."""
    pass


class StreamingAnalyser:
    """Blackman-windowed FFT over the last ``fft_size`` mono samples."""

    def __init__(self, fft_size: int = FFT_SIZE, *,
                 smoothing: float = SMOOTHING_TIME_CONSTANT,
                 min_decibels: float = MIN_DECIBELS,
                 max_decibels: float = MAX_DECIBELS):
        if fft_size < 32 or fft_size & (fft_size - 1):
            raise AnalyserError(
                f"FFT size must be a power of two >= 32, got {fft_size}")
        if not 0.0 <= smoothing <= 1.0:
            raise AnalyserError(
                f"Smoothing must be within [0, 1], got {smoothing}")
        if min_decibels >= max_decibels:
            raise AnalyserError(
                f"min_decibels ({min_decibels}) must be below "
                f"max_decibels ({max_decibels})")
        self.fft_size = fft_size
        self.smoothing = smoothing
        self.min_decibels = float(min_decibels)
        self.max_decibels = float(max_decibels)
        self._window = get_window("blackman", fft_size, fftbins=True)
        self._ring = np.zeros(fft_size, dtype=np.float64)
        self._smoothed = np.zeros(fft_size // 2, dtype=np.float64)
        self._lock = threading.Lock()
        self.frequency_data = np.zeros(fft_size // 2, dtype=np.uint8)
        self.time_domain_data = np.full(fft_size, 128, dtype=np.uint8)

    @property
    def frequency_bin_count(self) -> int:
        return self.fft_size // 2

    def reset(self) -> None:
        """Back to silence: zero magnitudes, flat time-domain line."""
        with self._lock:
            self._ring[:] = 0.0
            self._smoothed[:] = 0.0
            self.frequency_data[:] = 0
            self.time_domain_data[:] = 128

    def process(self, samples: np.ndarray) -> None:
        """Push a block of samples (``(n,)`` or ``(n, ch)``) and refresh the arrays."""
        block = np.asarray(samples, dtype=np.float64)
        if block.ndim > 1:
            block = block.mean(axis=1)
        n = len(block)
        if n == 0:
            return
        with self._lock:
            if n >= self.fft_size:
                self._ring[:] = block[-self.fft_size:]
            else:
                self._ring = np.roll(self._ring, -n)
                self._ring[-n:] = block

            self.time_domain_data[:] = np.clip(
                128.0 * (1.0 + self._ring), 0, 255).astype(np.uint8)

            spectrum = np.fft.rfft(self._ring * self._window)[:self.fft_size // 2]
            mag = np.abs(spectrum) / self.fft_size
            tau = self.smoothing
            self._smoothed = tau * self._smoothed + (1.0 - tau) * mag
            db = 20.0 * np.log10(np.maximum(self._smoothed, 1e-12))
            span = self.max_decibels - self.min_decibels
            scaled = (255.0 / span) * (db - self.min_decibels)
            self.frequency_data[:] = np.clip(np.floor(scaled), 0, 255).astype(np.uint8)

    def snapshot(self) -> FrequencySnapshot:
        """Detached copy of the current arrays."""
        with self._lock:
            return FrequencySnapshot(self.frequency_data.copy(),
                                     self.time_domain_data.copy())
