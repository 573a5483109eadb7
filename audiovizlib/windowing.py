"""Hann windowing of per-frame frequency snapshots."""

from __future__ import annotations

import numpy as np


def hann_window(n: int) -> np.ndarray:
    """Hann multipliers ``0.5 * (1 - cos(2*pi*i / (N - 1)))`` for N samples.

    ``N == 1`` has no defined taper; it returns ``[1.0]`` so the single
    value passes through unchanged.
    """
    if n <= 0:
        return np.zeros(0, dtype=np.float64)
    if n == 1:
        return np.ones(1, dtype=np.float64)
    i = np.arange(n, dtype=np.float64)
    return 0.5 * (1.0 - np.cos(2.0 * np.pi * i / (n - 1)))


def apply_hann_window(values) -> np.ndarray:
    """Return a new float64 array of *values* multiplied by the Hann window.

    The input is only read, never modified.
    """
    data = np.asarray(values, dtype=np.float64)
    return data * hann_window(len(data))


def normalize_bytes(values) -> np.ndarray:
    """Map 0-255 byte magnitudes to [0, 1]."""
    return np.clip(np.asarray(values, dtype=np.float64) / 255.0, 0.0, 1.0)
