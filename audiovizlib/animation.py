"""Frame loop primitives shared by the live renderers.

The renderers never talk to a timer directly.  They hand a ``tick``
callable to a :class:`FrameScheduler`; the host (a Qt timer in the GUI,
:class:`ManualScheduler` in tests) decides when the next frame runs.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

log = logging.getLogger(__name__)

Tick = Callable[[], bool]


# ---------------------------------------------------------------------------
# Rotation state
# ---------------------------------------------------------------------------

@dataclass
class RotationState:
    """Angle of the circular renderer, owned by exactly one renderer."""
    angle: float = 0.0

    @classmethod
    def create(cls, angle: float = 0.0) -> RotationState:
        return cls(float(angle))

    def advance(self, step: float) -> float:
        self.angle += step
        return self.angle

    def reset(self) -> None:
        self.angle = 0.0


# ---------------------------------------------------------------------------
# Idle animation and colour banding
# ---------------------------------------------------------------------------

def idle_wave(t: float, index: int) -> float:
    """Breathing value in [0, 1] for bar *index* at wall-clock time *t*."""
    return math.sin(t * 2.0 + index * 0.1) * 0.5 + 0.5


def band_index(index: int, count: int) -> int:
    """0, 1 or 2 for the first, middle and last third of *count* bars."""
    if count <= 0:
        return 0
    if index < count / 3.0:
        return 0
    if index < 2.0 * count / 3.0:
        return 1
    return 2


# ---------------------------------------------------------------------------
# Schedulers
# ---------------------------------------------------------------------------

class FrameScheduler(ABC):
    """Runs a self-rescheduling draw step: tick, request next frame, tick.

    ``tick`` returns True to keep going.  Only one frame request is ever
    pending; :meth:`start` on a running scheduler replaces the old loop.
    """

    @abstractmethod
    def start(self, tick: Tick) -> None:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...

    @property
    @abstractmethod
    def is_running(self) -> bool:
        ...


class ManualScheduler(FrameScheduler):
    """Scheduler pumped explicitly by the host (or a test)."""

    def __init__(self) -> None:
        self._tick: Tick | None = None
        self.frames = 0

    def start(self, tick: Tick) -> None:
        self.cancel()
        self._tick = tick

    def cancel(self) -> None:
        self._tick = None

    @property
    def is_running(self) -> bool:
        return self._tick is not None

    def pump(self, n: int = 1) -> int:
        """Run up to *n* pending frames; return how many ran."""
        ran = 0
        for _ in range(n):
            tick = self._tick
            if tick is None:
                break
            keep_going = tick()
            ran += 1
            self.frames += 1
            if not keep_going and self._tick is tick:
                self._tick = None
        return ran
