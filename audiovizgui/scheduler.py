"""Qt hosts for the frame loop and for container resize subscriptions."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QEvent, QObject, Qt, QTimer

from audiovizlib.animation import FrameScheduler, Tick
from audiovizlib.events import Subscription

from .log import dbg


class QtFrameScheduler(FrameScheduler):
    """Frame loop driven by a single-shot ``QTimer``.

    Each frame runs the tick and, if it asks to continue, re-arms the
    timer.  At most one frame request is pending at any time.
    """

    def __init__(self, parent: QObject | None = None, fps: int = 60):
        self._tick: Tick | None = None
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.setInterval(max(1, round(1000 / max(fps, 1))))
        self._timer.timeout.connect(self._on_frame)

    @property
    def interval(self) -> int:
        return self._timer.interval()

    @property
    def is_running(self) -> bool:
        return self._tick is not None

    def start(self, tick: Tick) -> None:
        self.cancel()
        self._tick = tick
        self._timer.start()
        dbg(f"frame loop started ({self._timer.interval()} ms)")

    def cancel(self) -> None:
        self._timer.stop()
        if self._tick is not None:
            dbg("frame loop cancelled")
        self._tick = None

    def _on_frame(self):
        tick = self._tick
        if tick is None:
            return
        keep_going = tick()
        if self._tick is not tick:
            return  # restarted or cancelled from inside the tick
        if keep_going:
            self._timer.start()
        else:
            self._tick = None


class _ResizeFilter(QObject):
    def __init__(self, callback: Callable[[], None], parent: QObject):
        super().__init__(parent)
        self._callback = callback

    def eventFilter(self, obj, event):
        if event.type() == QEvent.Resize:
            self._callback()
        return False


def watch_resize(widget: QObject, callback: Callable[[], None]) -> Subscription:
    """Call *callback* whenever *widget* is resized until the handle is released."""
    event_filter = _ResizeFilter(callback, widget)
    widget.installEventFilter(event_filter)

    def release():
        widget.removeEventFilter(event_filter)
        event_filter.deleteLater()

    return Subscription(release)
