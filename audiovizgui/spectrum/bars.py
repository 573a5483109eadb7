"""Vertical frequency bars with glow, colour bands and a faint reflection."""

from __future__ import annotations

from PySide6.QtCore import QRectF
from PySide6.QtGui import QBrush, QColor, QLinearGradient, QPainter

from audiovizlib.animation import band_index
from audiovizlib.spectrum import (BarRect, active_bar_heights, idle_bar_heights,
                                  sample_bars, spectrum_bar_geometry)
from audiovizlib.windowing import apply_hann_window

from ..theme import BAND_COLORS
from .canvas import AnimatedCanvas, glow_color

_REFLECTION_ALPHA = 0.2
_IDLE_BASE = 20.0
_IDLE_SPAN = 30.0
_IDLE_GLOW = 10.0


class FrequencySpectrumWidget(AnimatedCanvas):
    """Classic bar spectrum of the live frequency snapshot."""

    placeholder_text = "Frequency spectrum will appear here"

    @property
    def bar_count(self) -> int:
        return int(self.param("bar_count", 64))

    def draw_active(self, painter, snapshot, width, height):
        windowed = apply_hann_window(snapshot.magnitudes)
        values = sample_bars(windowed, self.bar_count)
        heights = active_bar_heights(values, height,
                                     self.param("height_fraction", 0.9))
        rects = spectrum_bar_geometry(heights, width, height,
                                      spacing=self.param("bar_spacing", 2.0))
        n = len(rects)
        glow = float(self.param("glow_blur", 15.0))
        for i, rect in enumerate(rects):
            color = QColor(BAND_COLORS[band_index(i, n)])
            self._draw_bar(painter, rect, height, color, glow)
            self._draw_reflection(painter, rect, height, color)
        self.last_geometry = rects

    def draw_idle(self, painter, t, width, height):
        heights = idle_bar_heights(t, self.bar_count, _IDLE_BASE, _IDLE_SPAN)
        rects = spectrum_bar_geometry(heights, width, height,
                                      spacing=self.param("bar_spacing", 2.0))
        n = len(rects)
        alpha = float(self.param("idle_alpha", 0.4))
        for i, rect in enumerate(rects):
            color = QColor(BAND_COLORS[band_index(i, n)])
            color.setAlphaF(alpha)
            self._draw_bar(painter, rect, height, color, _IDLE_GLOW)
        self.last_geometry = rects

    # ── Internal helpers ───────────────────────────────────────────────────

    @staticmethod
    def _draw_bar(painter: QPainter, rect: BarRect, height: float,
                  color: QColor, glow: float):
        if rect.h <= 0 or rect.w <= 0:
            return
        body = QRectF(rect.x, rect.y, rect.w, rect.h)
        if glow > 0:
            halo = body.adjusted(-glow * 0.25, -glow * 0.25,
                                 glow * 0.25, 0)
            painter.fillRect(halo, glow_color(color, 0.2))
        grad = QLinearGradient(0, rect.y, 0, height)
        grad.setColorAt(0.0, color)
        grad.setColorAt(1.0, glow_color(color, 0.35))
        painter.fillRect(body, QBrush(grad))

    @staticmethod
    def _draw_reflection(painter: QPainter, rect: BarRect, height: float,
                         color: QColor):
        if rect.reflection_h <= 0:
            return
        painter.fillRect(
            QRectF(rect.x, height - rect.reflection_h, rect.w, rect.reflection_h),
            glow_color(color, _REFLECTION_ALPHA),
        )
