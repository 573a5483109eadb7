"""Amplitude chart layout, axis policy, formatting and hover hit-testing.

The chart is drawn once into a fixed-size reference canvas
(:attr:`ChartLayout.width` x :attr:`ChartLayout.height` logical pixels)
and then stretched onto the visible widget.  All coordinate maths lives
here so the renderer and the hit-tester agree on one coordinate space.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .amplitude import DB_MAX, DB_MIN
from .models import AmplitudePoint, TooltipState

# Slack for the round trip visible -> reference coordinates
_TOL = 1e-6


@dataclass(frozen=True)
class ChartLayout:
    width: int = 2000
    height: int = 600
    pad_left: int = 100
    pad_right: int = 30
    pad_top: int = 60
    pad_bottom: int = 80
    db_min: float = DB_MIN
    db_max: float = DB_MAX
    db_step: float = 20.0

    @property
    def chart_width(self) -> float:
        return float(self.width - self.pad_left - self.pad_right)

    @property
    def chart_height(self) -> float:
        return float(self.height - self.pad_top - self.pad_bottom)

    @property
    def baseline_y(self) -> float:
        return self.pad_top + self.chart_height

    def time_to_x(self, t: float, duration: float) -> float:
        if duration <= 0:
            return float(self.pad_left)
        return self.pad_left + (t / duration) * self.chart_width

    def db_to_y(self, db: float) -> float:
        db_range = self.db_max - self.db_min
        if db_range <= 0:
            return self.baseline_y
        return self.baseline_y - ((db - self.db_min) / db_range) * self.chart_height

    def db_ticks(self) -> list[float]:
        """Gridline levels from ``db_min`` upwards in ``db_step`` steps."""
        if self.db_step <= 0:
            return [self.db_min]
        ticks = []
        db = self.db_min
        while db <= self.db_max:
            ticks.append(db)
            db += self.db_step
        return ticks

    def time_ticks(self, duration: float) -> list[float]:
        if duration <= 0 or not math.isfinite(duration):
            return []
        step = time_step_for(duration)
        count = int(duration // step)
        return [i * step for i in range(count + 1)]

    def point_coords(self, points: Sequence[AmplitudePoint],
                     duration: float) -> list[tuple[float, float]]:
        return [(self.time_to_x(p.time, duration), self.db_to_y(p.decibels))
                for p in points]

    def scale_for(self, view_width: float, view_height: float
                  ) -> tuple[float, float]:
        """(sx, sy) factors from the reference canvas to a visible size."""
        # Independent per axis: the cache is blitted with IgnoreAspectRatio.
        sx = view_width / self.width if self.width > 0 else 0.0
        sy = view_height / self.height if self.height > 0 else 0.0
        return sx, sy

    def content_rect(self, view_width: float, view_height: float
                     ) -> tuple[float, float, float, float]:
        """Plot area (x, y, w, h) in visible-surface coordinates."""
        sx, sy = self.scale_for(view_width, view_height)
        return (self.pad_left * sx, self.pad_top * sy,
                self.chart_width * sx, self.chart_height * sy)


def time_step_for(duration: float) -> int:
    """Seconds between vertical gridlines: coarser for longer tracks."""
    if duration > 60:
        return 10
    if duration > 30:
        return 5
    return 2


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_axis_time(seconds: float) -> str:
    """``"1:05"`` from one minute on, ``"12s"`` below."""
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}" if mins > 0 else f"{secs}s"


def format_clock(seconds: float) -> str:
    """``M:SS`` for tooltips."""
    if not math.isfinite(seconds) or seconds < 0:
        seconds = 0.0
    return f"{int(seconds // 60)}:{int(seconds % 60):02d}"


def format_time(seconds: float) -> str:
    """``MM:SS`` for the transport label; ``00:00`` for bogus input."""
    if not math.isfinite(seconds) or seconds < 0:
        return "00:00"
    return f"{int(seconds // 60):02d}:{int(seconds % 60):02d}"


# ---------------------------------------------------------------------------
# Hit testing
# ---------------------------------------------------------------------------

def nearest_point(points: Sequence[AmplitudePoint],
                  t: float) -> AmplitudePoint | None:
    """Point with the smallest ``|time - t|``; the earlier one wins ties."""
    if not points:
        return None
    best = points[0]
    best_diff = abs(best.time - t)
    for p in points:
        diff = abs(p.time - t)
        if diff < best_diff:
            best_diff = diff
            best = p
    return best


def hit_test(points: Sequence[AmplitudePoint], duration: float,
             layout: ChartLayout, x: float, y: float,
             view_width: float, view_height: float) -> TooltipState | None:
    """Tooltip for a pointer at (x, y) on a ``view_width`` x ``view_height`` surface.

    The pointer is mapped back into the reference canvas, rejected when it
    falls outside the plot area, converted to a time and matched against
    the nearest amplitude point.
    """
    if not points or duration <= 0 or view_width <= 0 or view_height <= 0:
        return None
    sx, sy = layout.scale_for(view_width, view_height)
    lx = x / sx
    ly = y / sy
    left = layout.pad_left
    right = layout.pad_left + layout.chart_width
    top = layout.pad_top
    bottom = layout.baseline_y
    if not (left - _TOL <= lx <= right + _TOL and top - _TOL <= ly <= bottom + _TOL):
        return None
    frac = min(max((lx - left) / layout.chart_width, 0.0), 1.0)
    t = frac * duration
    point = nearest_point(points, t)
    if point is None:
        return None
    return TooltipState(x, y, format_clock(point.time), f"{point.decibels:.2f}")
