"""Amplitude chart renderer: build the high-resolution cache, present it scaled."""

from __future__ import annotations

import math

from PySide6.QtCore import QPointF, QRectF, QSize, Qt
from PySide6.QtGui import (QBrush, QColor, QFont, QImage, QLinearGradient,
                           QPainter, QPen)

from audiovizlib.chart import ChartLayout, format_axis_time

from ..curve import smooth_path
from ..theme import COLORS, rgba

_LABEL_PX = 24
_TITLE_PX = 28


def _font(pixel_size: int, weight=QFont.Normal) -> QFont:
    font = QFont()
    font.setPixelSize(pixel_size)
    font.setWeight(weight)
    return font


def render_amplitude_cache(points, duration: float, layout: ChartLayout, *,
                           dpr: float = 1.0) -> QImage:
    """Draw the full chart once into a ``layout.width`` x ``layout.height`` image.

    The image is independent of any widget size.  With no points the
    background, grid and axes are still drawn.
    """
    dpr = dpr if dpr > 0 else 1.0
    image = QImage(int(math.ceil(layout.width * dpr)),
                   int(math.ceil(layout.height * dpr)),
                   QImage.Format_ARGB32_Premultiplied)
    image.setDevicePixelRatio(dpr)
    image.fill(QColor(COLORS["bg"]))

    painter = QPainter(image)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setRenderHint(QPainter.TextAntialiasing, True)
    try:
        _draw_background(painter, layout)
        _draw_db_grid(painter, layout)
        _draw_time_grid(painter, layout, duration)
        _draw_axes(painter, layout)
        coords = layout.point_coords(points, duration) if duration > 0 else []
        if coords:
            _draw_curve(painter, layout, coords)
        _draw_titles(painter, layout)
    finally:
        painter.end()
    return image


def present(cache: QImage | None, width: int, height: int,
            dpr: float = 1.0) -> QImage | None:
    """Scale *cache* to a ``width`` x ``height`` surface; the cache is not touched."""
    if cache is None or cache.isNull() or width <= 0 or height <= 0:
        return None
    dpr = dpr if dpr > 0 else 1.0
    target = QSize(max(1, round(width * dpr)), max(1, round(height * dpr)))
    scaled = cache.scaled(target, Qt.IgnoreAspectRatio, Qt.SmoothTransformation)
    scaled.setDevicePixelRatio(dpr)
    return scaled


# ── Internal helpers ───────────────────────────────────────────────────────

def _draw_background(painter: QPainter, layout: ChartLayout):
    painter.fillRect(QRectF(0, 0, layout.width, layout.height),
                     rgba("bg", 0.5))


def _draw_db_grid(painter: QPainter, layout: ChartLayout):
    grid_pen = QPen(QColor(255, 255, 255, 13), 1)
    x0 = layout.pad_left
    x1 = layout.pad_left + layout.chart_width
    painter.setFont(_font(_LABEL_PX))
    for db in layout.db_ticks():
        y = layout.db_to_y(db)
        painter.setPen(grid_pen)
        painter.drawLine(QPointF(x0, y), QPointF(x1, y))
        painter.setPen(rgba("dim", 0.7))
        painter.drawText(QRectF(0, y - 20, x0 - 15, 40),
                         Qt.AlignRight | Qt.AlignVCenter, f"{db:g} dB")


def _draw_time_grid(painter: QPainter, layout: ChartLayout, duration: float):
    grid_pen = QPen(QColor(255, 255, 255, 13), 1)
    top = layout.pad_top
    bottom = layout.baseline_y
    painter.setFont(_font(_LABEL_PX))
    for t in layout.time_ticks(duration):
        x = layout.time_to_x(t, duration)
        painter.setPen(grid_pen)
        painter.drawLine(QPointF(x, top), QPointF(x, bottom))
        painter.setPen(rgba("dim", 0.7))
        painter.drawText(QRectF(x - 60, bottom + 15, 120, 32),
                         Qt.AlignHCenter | Qt.AlignTop, format_axis_time(t))


def _draw_axes(painter: QPainter, layout: ChartLayout):
    painter.setPen(QPen(QColor(255, 255, 255, 26), 2))
    left = layout.pad_left
    right = layout.pad_left + layout.chart_width
    painter.drawLine(QPointF(left, layout.pad_top),
                     QPointF(left, layout.baseline_y))
    painter.drawLine(QPointF(left, layout.baseline_y),
                     QPointF(right, layout.baseline_y))


def _draw_curve(painter: QPainter, layout: ChartLayout, coords):
    baseline = layout.baseline_y
    fill = smooth_path(coords, start=(layout.pad_left, baseline),
                       close_to=baseline)
    grad = QLinearGradient(0, layout.pad_top, 0, baseline)
    grad.setColorAt(0.0, rgba("cyan", 0.6))
    grad.setColorAt(0.5, rgba("purple", 0.4))
    grad.setColorAt(1.0, rgba("orange", 0.2))
    painter.setPen(Qt.NoPen)
    painter.fillPath(fill, QBrush(grad))

    line = smooth_path(coords)
    painter.setBrush(Qt.NoBrush)
    # Glow underlay, then the crisp line on top
    painter.setPen(QPen(rgba("cyan", 0.15), 10, Qt.SolidLine, Qt.RoundCap,
                        Qt.RoundJoin))
    painter.drawPath(line)
    painter.setPen(QPen(QColor(COLORS["cyan"]), 2, Qt.SolidLine, Qt.RoundCap,
                        Qt.RoundJoin))
    painter.drawPath(line)


def _draw_titles(painter: QPainter, layout: ChartLayout):
    painter.setFont(_font(_TITLE_PX, QFont.DemiBold))
    painter.setPen(rgba("dim", 0.7))

    painter.save()
    painter.translate(30, layout.pad_top + layout.chart_height / 2)
    painter.rotate(-90)
    painter.drawText(QRectF(-200, -20, 400, 40), Qt.AlignCenter,
                     "Amplitude (dB)")
    painter.restore()

    painter.drawText(QRectF(layout.pad_left, layout.height - 45,
                            layout.chart_width, 40),
                     Qt.AlignCenter, "Time (seconds)")
