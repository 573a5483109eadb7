"""Smooth chart curves as QPainterPaths.

The fill region and the stroked outline are both built here from the same
Catmull-Rom segments, so the two always line up.
"""

from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import QPointF
from PySide6.QtGui import QPainterPath

from audiovizlib.spline import catmull_rom_segments


def smooth_path(points: Sequence[tuple[float, float]], *,
                start: tuple[float, float] | None = None,
                close_to: float | None = None) -> QPainterPath:
    """Path through *points* using cubic Bezier segments.

    *start* prepends a straight edge from a baseline point; *close_to*
    drops the end to that y and closes the region for filling.  Zero
    points give an empty path, one point a path holding just that point.
    """
    path = QPainterPath()
    if not points:
        return path
    first = QPointF(points[0][0], points[0][1])
    if start is not None:
        path.moveTo(QPointF(start[0], start[1]))
        path.lineTo(first)
    else:
        path.moveTo(first)
    for seg in catmull_rom_segments(points):
        path.cubicTo(QPointF(*seg.cp1), QPointF(*seg.cp2), QPointF(*seg.end))
    if close_to is not None:
        path.lineTo(QPointF(points[-1][0], close_to))
        path.closeSubpath()
    return path
