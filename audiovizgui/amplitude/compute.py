"""Amplitude background computation: RMS profile plus the cached chart image."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from PySide6.QtCore import QThread, Signal
from PySide6.QtGui import QImage

from audiovizlib.amplitude import AMPLITUDE_WINDOW_SEC, calculate_amplitude
from audiovizlib.chart import ChartLayout
from audiovizlib.models import AmplitudePoint, AudioSampleBuffer

from ..log import dbg
from .renderer import render_amplitude_cache


@dataclass
class AmplitudeCache:
    """Everything the chart widget needs after a load completes."""
    points: list[AmplitudePoint] = field(default_factory=list)
    duration: float = 0.0
    image: QImage | None = None


def build_amplitude_cache(buffer: AudioSampleBuffer | None,
                          layout: ChartLayout, *,
                          window_sec: float = AMPLITUDE_WINDOW_SEC,
                          dpr: float = 1.0) -> AmplitudeCache:
    """Compute the amplitude profile of *buffer* and draw it once."""
    t0 = time.perf_counter()
    points = calculate_amplitude(buffer, window_sec=window_sec,
                                 db_min=layout.db_min, db_max=layout.db_max)
    duration = buffer.duration if buffer is not None else 0.0
    image = render_amplitude_cache(points, duration, layout, dpr=dpr)
    dbg(f"amplitude cache: {len(points)} points, "
        f"{(time.perf_counter() - t0) * 1000:.1f} ms")
    return AmplitudeCache(points, duration, image)


# ---------------------------------------------------------------------------
# Background worker
# ---------------------------------------------------------------------------

class AmplitudeCacheWorker(QThread):
    """Build an :class:`AmplitudeCache` off the main thread.

    Results carry the *generation* the worker was created for, so the
    receiver can drop results from a load that has since been replaced.
    """

    finished = Signal(int, object)   # generation, AmplitudeCache
    error = Signal(int, str)         # generation, message

    def __init__(self, generation: int, buffer: AudioSampleBuffer | None,
                 layout: ChartLayout, *,
                 window_sec: float = AMPLITUDE_WINDOW_SEC,
                 dpr: float = 1.0, parent=None):
        super().__init__(parent)
        self._generation = generation
        self._buffer = buffer
        self._layout = layout
        self._window_sec = window_sec
        self._dpr = dpr
        self._cancelled = threading.Event()

    @property
    def generation(self) -> int:
        return self._generation

    def cancel(self):
        """Request early termination; no signal is emitted afterwards."""
        self._cancelled.set()

    def run(self):
        try:
            cache = build_amplitude_cache(
                self._buffer, self._layout,
                window_sec=self._window_sec, dpr=self._dpr,
            )
        except Exception as exc:
            if not self._cancelled.is_set():
                self.error.emit(self._generation, str(exc))
            return
        if self._cancelled.is_set():
            return
        self.finished.emit(self._generation, cache)
