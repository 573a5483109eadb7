"""Rotating radial spectrum with centre rings and a polar waveform trace."""

from __future__ import annotations

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QPainter, QPainterPath, QPen

from audiovizlib.animation import RotationState, band_index
from audiovizlib.spectrum import (RadialBar, circular_bar_heights,
                                  idle_bar_heights, inner_radius, polar_point,
                                  polar_waveform, radial_segments, sample_bars)

from ..theme import BAND_COLORS, COLORS, rgba
from .canvas import AnimatedCanvas, draw_glow_line, draw_glow_ring, glow_color

_IDLE_BASE = 10.0
_IDLE_SPAN = 20.0
_IDLE_ALPHA = 0.4
_IDLE_GLOW = 10.0
_OUTER_RING = 0.8
_INNER_RING = 0.7
_WAVEFORM_RADIUS = 0.6
_DOT_RADIUS = 2.0


class CircularSpectrumWidget(AnimatedCanvas):
    """Radial bars around a glowing centre, slowly rotating.

    Each instance owns its :class:`RotationState`; idle frames turn at half
    the live rate and skip the waveform trace.
    """

    placeholder_text = "Circular spectrum will appear here"

    def __init__(self, params=None, parent=None, **kwargs):
        super().__init__(params, parent, **kwargs)
        self.rotation = RotationState.create()
        self.last_waveform: list[tuple[float, float]] = []

    @property
    def bar_count(self) -> int:
        return int(self.param("bar_count", 128))

    @property
    def rotation_speed(self) -> float:
        return float(self.param("rotation_speed", 0.001))

    @staticmethod
    def drawing_area(width: float, height: float) -> tuple[float, float, float]:
        """Centre and edge length of the square the circle is drawn in."""
        return width / 2.0, height / 2.0, min(width, height)

    def draw_active(self, painter, snapshot, width, height):
        angle = self.rotation.advance(self.rotation_speed)
        cx, cy, size = self.drawing_area(width, height)
        values = sample_bars(snapshot.magnitudes, self.bar_count)
        heights = circular_bar_heights(
            values, size,
            min_height=self.param("min_bar_height", 5.0),
            max_height=self.param("max_bar_height", 150.0),
        )
        bars = radial_segments(heights, size, angle, values)

        self._draw_rings(painter, cx, cy, size)
        threshold = float(self.param("peak_threshold", 0.5))
        for i, bar in enumerate(bars):
            color = QColor(BAND_COLORS[band_index(i, len(bars))])
            self._draw_radial_bar(painter, cx, cy, bar, color,
                                  float(self.param("glow_blur", 20.0)))
            if bar.value > threshold:
                self._draw_peak_dot(painter, cx, cy, bar, color)
        self.last_geometry = bars

        ring = polar_waveform(snapshot.time_domain, cx, cy,
                              inner_radius(size) * _WAVEFORM_RADIUS)
        self._draw_waveform(painter, ring)
        self.last_waveform = ring

    def draw_idle(self, painter, t, width, height):
        angle = self.rotation.advance(self.rotation_speed * 0.5)
        cx, cy, size = self.drawing_area(width, height)
        n = self.bar_count
        heights = idle_bar_heights(t, n, _IDLE_BASE, _IDLE_SPAN)
        bars = radial_segments(heights, size, angle)

        self._draw_rings(painter, cx, cy, size)
        for i, bar in enumerate(bars):
            color = QColor(BAND_COLORS[band_index(i, n)])
            color.setAlphaF(_IDLE_ALPHA)
            self._draw_radial_bar(painter, cx, cy, bar, color, _IDLE_GLOW)
        self.last_geometry = bars
        self.last_waveform = []

    # ── Internal helpers ───────────────────────────────────────────────────

    def _draw_radial_bar(self, painter: QPainter, cx: float, cy: float,
                         bar: RadialBar, color: QColor, glow: float):
        p1 = QPointF(*polar_point(cx, cy, bar.angle, bar.inner))
        p2 = QPointF(*polar_point(cx, cy, bar.angle, bar.outer))
        draw_glow_line(painter, p1, p2, color,
                       float(self.param("bar_width", 4.0)), glow)

    @staticmethod
    def _draw_peak_dot(painter: QPainter, cx: float, cy: float,
                       bar: RadialBar, color: QColor):
        x, y = polar_point(cx, cy, bar.angle, bar.outer)
        painter.setPen(Qt.NoPen)
        painter.setBrush(glow_color(color, 0.35))
        painter.drawEllipse(QPointF(x, y), _DOT_RADIUS * 3, _DOT_RADIUS * 3)
        painter.setBrush(QColor(COLORS["text"]))
        painter.drawEllipse(QPointF(x, y), _DOT_RADIUS, _DOT_RADIUS)
        painter.setBrush(Qt.NoBrush)

    @staticmethod
    def _draw_rings(painter: QPainter, cx: float, cy: float, size: float):
        outer = inner_radius(size) * _OUTER_RING
        draw_glow_ring(painter, cx, cy, outer, rgba("cyan", 0.6), 2, 30)
        draw_glow_ring(painter, cx, cy, outer * _INNER_RING,
                       rgba("purple", 0.3), 2, 15)

    @staticmethod
    def _draw_waveform(painter: QPainter, ring: list[tuple[float, float]]):
        if len(ring) < 2:
            return
        path = QPainterPath()
        path.moveTo(QPointF(*ring[0]))
        for x, y in ring[1:]:
            path.lineTo(QPointF(x, y))
        path.closeSubpath()
        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(rgba("cyan", 0.2), 8))
        painter.drawPath(path)
        painter.setPen(QPen(rgba("cyan", 0.8), 2))
        painter.drawPath(path)
