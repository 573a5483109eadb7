"""Amplitude profile: windowed RMS levels of a whole decoded track."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .models import AmplitudePoint, AudioSampleBuffer

log = logging.getLogger(__name__)

DB_MIN = -90.0
DB_MAX = 3.0
AMPLITUDE_WINDOW_SEC = 0.5
_EPS = 1e-10


def calculate_amplitude(buffer: AudioSampleBuffer | None, *,
                        window_sec: float = AMPLITUDE_WINDOW_SEC,
                        db_min: float = DB_MIN,
                        db_max: float = DB_MAX) -> list[AmplitudePoint]:
    """Return one :class:`AmplitudePoint` per window of channel 0.

    Channel 0 is split into contiguous windows of ``floor(sr * window_sec)``
    samples; the last window may be shorter.  Each window's RMS is
    converted to ``20 * log10(max(rms, 1e-10))`` and clamped to
    ``[db_min, db_max]``.  An empty buffer yields an empty list.
    """
    if buffer is None or buffer.is_empty or buffer.samplerate <= 0:
        return []
    sr = buffer.samplerate
    samples = np.asarray(buffer.channels[0], dtype=np.float64)
    n = len(samples)
    win = max(1, int(math.floor(sr * window_sec)))

    # Windowed mean of squares from one cumulative sum
    cs = np.empty(n + 1, dtype=np.float64)
    cs[0] = 0.0
    np.cumsum(samples * samples, out=cs[1:])
    starts = np.arange(0, n, win, dtype=np.int64)
    ends = np.minimum(starts + win, n)
    mean_sq = (cs[ends] - cs[starts]) / (ends - starts)
    rms = np.sqrt(np.maximum(mean_sq, 0.0))

    db = 20.0 * np.log10(np.maximum(rms, _EPS))
    db = np.clip(db, db_min, db_max)
    amp = np.clip(rms, 0.0, 1.0)
    times = starts / float(sr)

    log.debug("amplitude profile: %d windows of %d samples", len(starts), win)
    return [
        AmplitudePoint(float(t), float(a), float(d))
        for t, a, d in zip(times, amp, db)
    ]


@dataclass(frozen=True)
class AmplitudeSummary:
    peak_db: float
    mean_db: float
    peak_time: float


def amplitude_summary(points: list[AmplitudePoint]) -> AmplitudeSummary | None:
    """Loudest window, mean level and where the loudest window starts."""
    if not points:
        return None
    loudest = max(points, key=lambda p: p.decibels)
    mean_db = sum(p.decibels for p in points) / len(points)
    return AmplitudeSummary(loudest.decibels, mean_db, loudest.time)
