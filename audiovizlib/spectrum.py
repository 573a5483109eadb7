"""Bar mapping and geometry for the live spectrum renderers.

Everything here is a pure function of the current frame's values and the
surface size, so one frame costs O(bar count) or O(snapshot length).
"""

from __future__ import annotations

import math
from typing import NamedTuple, Sequence

import numpy as np

from .animation import idle_wave


class BarRect(NamedTuple):
    x: float
    y: float
    w: float
    h: float
    reflection_h: float


class RadialBar(NamedTuple):
    angle: float
    inner: float
    outer: float
    value: float


# ---------------------------------------------------------------------------
# Snapshot -> bars
# ---------------------------------------------------------------------------

def bar_stride(length: int, bar_count: int) -> int:
    """Integer stride between sampled bins; the remainder bins are unused."""
    if bar_count <= 0 or length <= 0:
        return 0
    return length // bar_count


def bar_indices(length: int, bar_count: int) -> list[int]:
    """Snapshot index sampled by each bar (``stride * i``)."""
    stride = bar_stride(length, bar_count)
    return [i * stride for i in range(max(bar_count, 0))]


def sample_bars(values, bar_count: int, *, scale: float = 255.0) -> np.ndarray:
    """Pick one value per bar at the fixed stride and normalise by *scale*.

    A snapshot shorter than *bar_count* has stride 0, so every bar reads
    index 0.  An empty snapshot gives all-zero bars.
    """
    data = np.asarray(values, dtype=np.float64)
    if bar_count <= 0:
        return np.zeros(0, dtype=np.float64)
    if data.size == 0:
        return np.zeros(bar_count, dtype=np.float64)
    idx = np.asarray(bar_indices(len(data), bar_count), dtype=np.intp)
    return np.clip(data[idx] / scale, 0.0, 1.0)


def idle_bar_heights(t: float, bar_count: int, base: float,
                     span: float) -> list[float]:
    """Synthetic heights ``base + idle_wave(t, i) * span``; never reads a snapshot."""
    return [base + idle_wave(t, i) * span for i in range(bar_count)]


# ---------------------------------------------------------------------------
# Vertical bars
# ---------------------------------------------------------------------------

def bar_width(width: float, bar_count: int, spacing: float) -> float:
    if bar_count <= 0:
        return 0.0
    return max(0.0, (width - (bar_count - 1) * spacing) / bar_count)


def spectrum_bar_geometry(heights: Sequence[float], width: float,
                          height: float, *, spacing: float = 2.0,
                          reflection: float = 0.3) -> list[BarRect]:
    """Bottom-aligned rectangles for pixel *heights*."""
    n = len(heights)
    bw = bar_width(width, n, spacing)
    rects = []
    for i, bh in enumerate(heights):
        bh = max(0.0, float(bh))
        x = i * (bw + spacing)
        rects.append(BarRect(x, height - bh, bw, bh, bh * reflection))
    return rects


def active_bar_heights(values: Sequence[float], height: float,
                       fraction: float = 0.9) -> list[float]:
    return [float(v) * height * fraction for v in values]


# ---------------------------------------------------------------------------
# Radial bars and waveform ring
# ---------------------------------------------------------------------------

def inner_radius(size: float) -> float:
    return size * 0.15


def radial_segments(heights: Sequence[float], size: float, rotation: float,
                    values: Sequence[float] | None = None) -> list[RadialBar]:
    """Radial bars starting at the inner radius, angle ``(i/n)*2pi + rotation``."""
    n = len(heights)
    r0 = inner_radius(size)
    bars = []
    for i, bh in enumerate(heights):
        angle = (i / n) * 2.0 * math.pi + rotation
        value = float(values[i]) if values is not None else 0.0
        bars.append(RadialBar(angle, r0, r0 + max(0.0, float(bh)), value))
    return bars


def circular_bar_heights(values: Sequence[float], size: float, *,
                         min_height: float = 5.0,
                         max_height: float = 150.0) -> list[float]:
    """``min + value * max * (size / 500)`` for each normalised value."""
    scale = max_height * (size / 500.0)
    return [min_height + float(v) * scale for v in values]


def polar_point(cx: float, cy: float, angle: float,
                radius: float) -> tuple[float, float]:
    return cx + math.cos(angle) * radius, cy + math.sin(angle) * radius


def polar_waveform(time_domain, cx: float, cy: float,
                   radius: float) -> list[tuple[float, float]]:
    """Closed ring of time-domain samples around (cx, cy).

    Sample ``v`` maps to ``radius * (0.8 + (v/128 - 1) * 0.2)``; sample
    ``i`` sits at angle ``i * 2pi / len``.  The first point is repeated at
    the end to close the loop.
    """
    data = np.asarray(time_domain, dtype=np.float64)
    n = len(data)
    if n == 0:
        return []
    angles = np.arange(n, dtype=np.float64) * (2.0 * np.pi / n)
    radii = radius * (0.8 + (data / 128.0 - 1.0) * 0.2)
    xs = cx + np.cos(angles) * radii
    ys = cy + np.sin(angles) * radii
    pts = [(float(x), float(y)) for x, y in zip(xs, ys)]
    pts.append(pts[0])
    return pts
