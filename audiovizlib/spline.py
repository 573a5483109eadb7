"""Catmull-Rom to cubic Bezier conversion for smooth chart curves."""

from __future__ import annotations

from typing import NamedTuple, Sequence

Point = tuple[float, float]


class BezierSegment(NamedTuple):
    cp1: Point
    cp2: Point
    end: Point


def catmull_rom_segments(points: Sequence[Point]) -> list[BezierSegment]:
    """One cubic segment per consecutive pair of *points*.

    For the segment ``p1 -> p2`` the control points come from the flanking
    points ``p0`` and ``p3`` (clamped to the first/last point)::

        cp1 = p1 + (p2 - p0) / 6
        cp2 = p2 - (p3 - p1) / 6

    Fewer than two points produce no segments.
    """
    n = len(points)
    segments: list[BezierSegment] = []
    for i in range(n - 1):
        p0 = points[max(0, i - 1)]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[min(n - 1, i + 2)]
        cp1 = (p1[0] + (p2[0] - p0[0]) / 6.0, p1[1] + (p2[1] - p0[1]) / 6.0)
        cp2 = (p2[0] - (p3[0] - p1[0]) / 6.0, p2[1] - (p3[1] - p1[1]) / 6.0)
        segments.append(BezierSegment(cp1, cp2, (float(p2[0]), float(p2[1]))))
    return segments


def evaluate_segments(start: Point, segments: Sequence[BezierSegment],
                      steps: int = 8) -> list[Point]:
    """Flatten *segments* into a polyline beginning at *start*."""
    out: list[Point] = [(float(start[0]), float(start[1]))]
    steps = max(1, steps)
    x0, y0 = out[0]
    for seg in segments:
        (x1, y1), (x2, y2), (x3, y3) = seg
        for k in range(1, steps + 1):
            t = k / steps
            mt = 1.0 - t
            a, b, c, d = mt * mt * mt, 3 * mt * mt * t, 3 * mt * t * t, t * t * t
            out.append((a * x0 + b * x1 + c * x2 + d * x3,
                        a * y0 + b * y1 + c * y2 + d * y3))
        x0, y0 = x3, y3
    return out
