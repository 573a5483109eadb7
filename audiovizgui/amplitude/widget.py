"""Amplitude chart widget: cached chart image, stretched blit, hover readout."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QPoint, QPointF, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QImage, QPainter, QPen
from PySide6.QtWidgets import QToolTip, QWidget

from audiovizlib.amplitude import AMPLITUDE_WINDOW_SEC
from audiovizlib.chart import ChartLayout, hit_test
from audiovizlib.models import AmplitudePoint, AudioSampleBuffer, TooltipState

from ..log import dbg
from ..theme import COLORS
from .compute import AmplitudeCache, AmplitudeCacheWorker
from .renderer import present

WorkerFactory = Callable[..., AmplitudeCacheWorker]


class AmplitudeChartWidget(QWidget):
    """Shows the amplitude profile of the loaded track.

    The chart is drawn once per load into a fixed-size image; resizing only
    rescales that image.  Hover readouts are debounced and looked up
    against the loaded points.  When loads overlap, the most recent one
    wins no matter which build finishes first.
    """

    tooltip_changed = Signal(object)   # TooltipState | None
    cache_ready = Signal()

    def __init__(self, parent=None, *, layout: ChartLayout | None = None,
                 window_sec: float = AMPLITUDE_WINDOW_SEC,
                 debounce_ms: int = 50,
                 worker_factory: WorkerFactory | None = None):
        super().__init__(parent)
        self._layout = layout or ChartLayout()
        self._window_sec = window_sec
        self._worker_factory = worker_factory or AmplitudeCacheWorker
        # Load state
        self._generation: int = 0
        self._worker = None
        self._retired: list = []
        self._loading: bool = False
        self._error: str | None = None
        # Cached chart
        self._points: list[AmplitudePoint] = []
        self._duration: float = 0.0
        self._cache: QImage | None = None
        self._presented: QImage | None = None
        # Hover
        self._tooltip: TooltipState | None = None
        self._pending_pos: QPointF | None = None
        self._pending_global: QPoint | None = None
        self._hover_timer = QTimer(self)
        self._hover_timer.setSingleShot(True)
        self._hover_timer.setInterval(debounce_ms)
        self._hover_timer.timeout.connect(self._flush_tooltip)

        self.setMinimumHeight(160)
        self.setMouseTracking(True)

    # ── Accessors ──────────────────────────────────────────────────────────

    @property
    def chart_layout(self) -> ChartLayout:
        return self._layout

    @property
    def cache_image(self) -> QImage | None:
        return self._cache

    @property
    def presented_image(self) -> QImage | None:
        return self._presented

    @property
    def points(self) -> list[AmplitudePoint]:
        return list(self._points)

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def tooltip(self) -> TooltipState | None:
        return self._tooltip

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def generation(self) -> int:
        return self._generation

    # ── Data management ────────────────────────────────────────────────────

    def set_buffer(self, buffer: AudioSampleBuffer | None):
        """Start building the chart for *buffer*; ``None`` clears it."""
        self._generation += 1
        self._retire_worker()
        self._hover_timer.stop()
        self._pending_pos = None
        self._set_tooltip(None)
        self._error = None
        self._points = []
        self._duration = 0.0
        self._cache = None
        self._presented = None

        if buffer is None:
            self._loading = False
            self.update()
            return

        self._loading = True
        worker = self._worker_factory(
            self._generation, buffer, self._layout,
            window_sec=self._window_sec,
            dpr=self.devicePixelRatioF(), parent=self,
        )
        worker.finished.connect(self._on_cache_ready)
        worker.error.connect(self._on_cache_error)
        self._worker = worker
        dbg(f"amplitude build #{self._generation} started")
        worker.start()
        self.update()

    def clear(self):
        self.set_buffer(None)

    def shutdown(self, timeout_ms: int = 2000):
        """Cancel the build in flight and wait for worker threads to exit."""
        self._retire_worker()
        for worker in self._retired:
            worker.wait(timeout_ms)
        self._retired = []

    def _retire_worker(self):
        worker = self._worker
        self._worker = None
        if worker is not None:
            worker.cancel()
            self._retired.append(worker)
        self._retired = [w for w in self._retired if _still_running(w)]

    def _on_cache_ready(self, generation: int, cache: AmplitudeCache):
        if generation != self._generation:
            dbg(f"dropping stale amplitude build #{generation}")
            return
        self._worker = None
        self._loading = False
        self._points = list(cache.points)
        self._duration = cache.duration
        self._cache = cache.image
        self._present()
        self.update()
        self.cache_ready.emit()

    def _on_cache_error(self, generation: int, message: str):
        if generation != self._generation:
            return
        self._worker = None
        self._loading = False
        self._error = message
        dbg(f"amplitude build #{generation} failed: {message}")
        self.update()

    # ── Presentation ───────────────────────────────────────────────────────

    def _present(self):
        self._presented = present(self._cache, self.width(), self.height(),
                                  self.devicePixelRatioF())

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(COLORS["bg"]))

        if self._presented is not None:
            painter.drawImage(0, 0, self._presented)
            painter.end()
            return

        painter.setPen(QPen(QColor(COLORS["dim"])))
        if self._loading:
            text = "Building amplitude chart…"
        elif self._error:
            text = f"Amplitude chart unavailable: {self._error}"
        else:
            text = "Amplitude chart will appear here"
        painter.drawText(self.rect(), Qt.AlignCenter, text)
        painter.end()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self._cache is None:
            return
        self._present()
        self.update()

    # ── Hover readout ──────────────────────────────────────────────────────

    def mouseMoveEvent(self, event):
        self._pending_pos = event.position()
        self._pending_global = event.globalPosition().toPoint()
        if not self._hover_timer.isActive():
            self._hover_timer.start()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        self._hover_timer.stop()
        self._pending_pos = None
        self._set_tooltip(None)
        super().leaveEvent(event)

    def hover_at(self, x: float, y: float) -> TooltipState | None:
        """Evaluate the readout for a pointer at (x, y) right away."""
        state = hit_test(self._points, self._duration, self._layout,
                         x, y, self.width(), self.height())
        self._set_tooltip(state)
        return state

    def _flush_tooltip(self):
        pos = self._pending_pos
        if pos is None:
            return
        state = self.hover_at(pos.x(), pos.y())
        if state is None or self._pending_global is None:
            return
        QToolTip.showText(self._pending_global,
                          f"{state.label}\n{state.value} dB", self)

    def _set_tooltip(self, state: TooltipState | None):
        if state is None and self._tooltip is not None:
            QToolTip.hideText()
        if state == self._tooltip:
            return
        self._tooltip = state
        self.tooltip_changed.emit(state)


def _still_running(worker) -> bool:
    is_running = getattr(worker, "isRunning", None)
    return bool(is_running()) if callable(is_running) else False
