"""Tests for the Qt frame loop host and container resize subscriptions."""

import pytest
from PySide6.QtWidgets import QWidget

from audiovizgui.scheduler import QtFrameScheduler, watch_resize


@pytest.fixture(autouse=True)
def _app(qt):
    return qt


class TestQtFrameScheduler:

    def test_interval_from_fps(self):
        assert QtFrameScheduler(fps=60).interval == 17
        assert QtFrameScheduler(fps=30).interval == 33

    def test_start_arms_single_frame(self):
        sched = QtFrameScheduler()
        sched.start(lambda: True)
        assert sched.is_running
        assert sched._timer.isActive()
        sched.cancel()
        assert not sched.is_running
        assert not sched._timer.isActive()

    def test_frame_rearms_while_tick_continues(self):
        sched = QtFrameScheduler()
        calls = []
        sched.start(lambda: calls.append(1) or True)
        sched._on_frame()
        sched._on_frame()
        assert calls == [1, 1]
        assert sched._timer.isActive()
        sched.cancel()

    def test_tick_returning_false_stops(self):
        sched = QtFrameScheduler()
        sched.start(lambda: False)
        sched._timer.stop()
        sched._on_frame()
        assert not sched.is_running
        assert not sched._timer.isActive()

    def test_cancel_inside_tick(self):
        sched = QtFrameScheduler()

        def tick():
            sched.cancel()
            return True

        sched.start(tick)
        sched._timer.stop()
        sched._on_frame()
        assert not sched.is_running
        assert not sched._timer.isActive()

    def test_frame_after_cancel_is_a_no_op(self):
        sched = QtFrameScheduler()
        calls = []
        sched.start(lambda: calls.append(1) or True)
        sched.cancel()
        sched._on_frame()
        assert calls == []


class TestWatchResize:

    def test_callback_until_released(self):
        container = QWidget()
        container.show()
        calls = []
        sub = watch_resize(container, lambda: calls.append(container.width()))
        container.resize(321, 100)
        assert calls and calls[-1] == 321
        sub.release()
        count = len(calls)
        container.resize(400, 100)
        assert len(calls) == count
        container.hide()
