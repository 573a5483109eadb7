"""Animated drawing surface shared by the live spectrum renderers."""

from __future__ import annotations

import math
import time
from typing import Any, Callable

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QImage, QPainter, QPen
from PySide6.QtWidgets import QWidget

from audiovizlib.animation import FrameScheduler
from audiovizlib.events import Subscription
from audiovizlib.models import FrequencySnapshot

from ..log import dbg
from ..scheduler import QtFrameScheduler, watch_resize
from ..theme import COLORS, rgba

# Each frame fades the previous one instead of clearing it
_TRAIL_ALPHA = 0.3


def take_snapshot(source) -> FrequencySnapshot | None:
    """Copy the current frame out of *source*.

    *source* is either a :class:`FrequencySnapshot` that a producer
    overwrites in place, or an object with a ``snapshot()`` method such as
    :class:`~audiovizlib.analyser.StreamingAnalyser`.
    """
    if source is None:
        return None
    if isinstance(source, FrequencySnapshot):
        return source.copy()
    return source.snapshot()


def glow_color(color: QColor, alpha: float) -> QColor:
    c = QColor(color)
    c.setAlphaF(max(0.0, min(1.0, c.alphaF() * alpha)))
    return c


def draw_glow_line(painter: QPainter, p1: QPointF, p2: QPointF,
                   color: QColor, width: float, blur: float):
    """Line with a soft halo of roughly *blur* pixels."""
    if blur > 0:
        for spread, alpha in ((blur, 0.12), (blur * 0.5, 0.25)):
            painter.setPen(QPen(glow_color(color, alpha), width + spread,
                                Qt.SolidLine, Qt.RoundCap))
            painter.drawLine(p1, p2)
    painter.setPen(QPen(color, width, Qt.SolidLine, Qt.RoundCap))
    painter.drawLine(p1, p2)


def draw_glow_ring(painter: QPainter, cx: float, cy: float, radius: float,
                   color: QColor, width: float, blur: float):
    if radius <= 0:
        return
    painter.setBrush(Qt.NoBrush)
    if blur > 0:
        painter.setPen(QPen(glow_color(color, 0.2), width + blur))
        painter.drawEllipse(QPointF(cx, cy), radius, radius)
    painter.setPen(QPen(color, width))
    painter.drawEllipse(QPointF(cx, cy), radius, radius)


class AnimatedCanvas(QWidget):
    """Widget that redraws itself every frame into a device-pixel backbuffer.

    Subclasses implement :meth:`draw_active` (live snapshot available and
    playing) and :meth:`draw_idle` (anything else).  The idle path is never
    handed the source.
    """

    activity_changed = Signal(bool)

    placeholder_text = "Load an audio file to start the visualiser"

    def __init__(self, params: dict[str, Any] | None = None, parent=None, *,
                 scheduler: FrameScheduler | None = None,
                 clock: Callable[[], float] | None = None,
                 fps: int = 60):
        super().__init__(parent)
        self._params: dict[str, Any] = dict(params or {})
        self._scheduler = scheduler or QtFrameScheduler(self, fps)
        self._clock = clock or time.time
        self._source = None
        self._playing: bool = False
        self._surface: QImage | None = None
        self._resize_sub: Subscription | None = None
        self.frame_count: int = 0
        self.last_geometry: list = []
        self.setMinimumSize(200, 150)
        self.setAttribute(Qt.WA_OpaquePaintEvent, True)

    # ── State ──────────────────────────────────────────────────────────────

    @property
    def params(self) -> dict[str, Any]:
        return dict(self._params)

    def param(self, key: str, default=None):
        return self._params.get(key, default)

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def source(self):
        return self._source

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_active(self) -> bool:
        return self._playing and self._source is not None

    def set_source(self, source):
        was_active = self.is_active
        self._source = source
        self._notify_activity(was_active)
        self.update()

    def set_playing(self, playing: bool):
        was_active = self.is_active
        self._playing = bool(playing)
        self._notify_activity(was_active)

    def _notify_activity(self, was_active: bool):
        if self.is_active != was_active:
            self.activity_changed.emit(self.is_active)

    # ── Drawing surface ────────────────────────────────────────────────────

    @property
    def surface(self) -> QImage | None:
        return self._surface

    def sync_surface(self):
        """Match the backbuffer to the widget size times the device pixel ratio."""
        dpr = self.devicePixelRatioF() or 1.0
        w = max(1, math.ceil(self.width() * dpr))
        h = max(1, math.ceil(self.height() * dpr))
        if (self._surface is not None and self._surface.width() == w
                and self._surface.height() == h
                and self._surface.devicePixelRatio() == dpr):
            return
        self._surface = QImage(w, h, QImage.Format_ARGB32_Premultiplied)
        self._surface.setDevicePixelRatio(dpr)
        self._surface.fill(QColor(COLORS["bg"]))

    # ── Frame loop ─────────────────────────────────────────────────────────

    def start(self):
        self._scheduler.start(self.tick)

    def stop(self):
        self._scheduler.cancel()

    def tick(self) -> bool:
        """Draw one frame; always asks for the next one."""
        if self._surface is None:
            self.sync_surface()
        w = float(self.width())
        h = float(self.height())

        painter = QPainter(self._surface)
        painter.setRenderHint(QPainter.Antialiasing, True)
        try:
            painter.fillRect(QRectF(0, 0, w, h), rgba("bg", _TRAIL_ALPHA))
            snapshot = take_snapshot(self._source) if self.is_active else None
            if snapshot is not None:
                self.draw_active(painter, snapshot, w, h)
            else:
                self.draw_idle(painter, self._clock(), w, h)
        finally:
            painter.end()

        self.frame_count += 1
        self.update()
        return True

    def draw_active(self, painter: QPainter, snapshot: FrequencySnapshot,
                    width: float, height: float):
        raise NotImplementedError

    def draw_idle(self, painter: QPainter, t: float, width: float,
                  height: float):
        raise NotImplementedError

    # ── Qt events ──────────────────────────────────────────────────────────

    def paintEvent(self, event):
        painter = QPainter(self)
        if self._surface is not None:
            painter.drawImage(0, 0, self._surface)
        else:
            painter.fillRect(self.rect(), QColor(COLORS["bg"]))
        if self._source is None:
            painter.setPen(QPen(QColor(COLORS["dim"])))
            painter.drawText(self.rect(), Qt.AlignCenter, self.placeholder_text)
        painter.end()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.sync_surface()

    def showEvent(self, event):
        super().showEvent(event)
        self.sync_surface()
        container = self.parentWidget()
        if container is not None and self._resize_sub is None:
            self._resize_sub = watch_resize(container, self.sync_surface)
        self.start()
        dbg(f"{type(self).__name__} shown")

    def hideEvent(self, event):
        self._teardown()
        super().hideEvent(event)

    def closeEvent(self, event):
        self._teardown()
        super().closeEvent(event)

    def _teardown(self):
        self.stop()
        if self._resize_sub is not None:
            self._resize_sub.release()
            self._resize_sub = None
