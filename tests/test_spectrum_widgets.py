"""Tests for the animated bar and circular spectrum widgets."""

import numpy as np
import pytest

from audiovizgui.spectrum import (CircularSpectrumWidget,
                                  FrequencySpectrumWidget, VisualizerPanel,
                                  take_snapshot)
from audiovizlib.animation import ManualScheduler
from audiovizlib.config import section
from audiovizlib.models import FrequencySnapshot
from audiovizlib.spectrum import idle_bar_heights
from audiovizlib.windowing import hann_window


@pytest.fixture(autouse=True)
def _app(qt):
    return qt


class PoisonSource:
    """Fails loudly if anything reads it."""

    reads = 0

    def snapshot(self):
        PoisonSource.reads += 1
        raise AssertionError("idle frame read the live snapshot")


def _snapshot(level=255, n=1024):
    return FrequencySnapshot(np.full(n // 2, level, dtype=np.uint8),
                             np.full(n, 128, dtype=np.uint8))


def _make(cls, name, width=640, height=240):
    w = cls(section({}, name), scheduler=ManualScheduler(), clock=lambda: 1.0)
    w.resize(width, height)
    w.sync_surface()
    return w


class TestFrequencySpectrumIdle:

    def test_idle_never_reads_source(self):
        PoisonSource.reads = 0
        w = _make(FrequencySpectrumWidget, "spectrum")
        w.set_source(PoisonSource())
        w.set_playing(False)
        assert w.tick() is True
        assert PoisonSource.reads == 0

    def test_idle_geometry_ignores_snapshot_values(self):
        a = _make(FrequencySpectrumWidget, "spectrum")
        b = _make(FrequencySpectrumWidget, "spectrum")
        a.set_source(_snapshot(255))
        b.set_source(_snapshot(0))
        a.tick()
        b.tick()
        assert a.last_geometry == b.last_geometry
        heights = [r.h for r in a.last_geometry]
        assert heights == pytest.approx(idle_bar_heights(1.0, 64, 20.0, 30.0))

    def test_playing_without_source_is_idle(self):
        w = _make(FrequencySpectrumWidget, "spectrum")
        w.set_playing(True)
        assert not w.is_active
        w.tick()
        assert len(w.last_geometry) == 64


class TestFrequencySpectrumActive:

    def test_bars_follow_windowed_snapshot(self):
        w = _make(FrequencySpectrumWidget, "spectrum", 640, 200)
        w.set_source(_snapshot(255))
        w.set_playing(True)
        w.tick()
        rects = w.last_geometry
        assert len(rects) == 64
        window = hann_window(512)
        for i in (0, 16, 40):
            expected = window[8 * i] * 200 * 0.9
            assert rects[i].h == pytest.approx(expected, rel=1e-6)
            assert rects[i].y + rects[i].h == pytest.approx(200)

    def test_snapshot_not_mutated(self):
        snap = _snapshot(200)
        w = _make(FrequencySpectrumWidget, "spectrum")
        w.set_source(snap)
        w.set_playing(True)
        w.tick()
        assert (snap.magnitudes == 200).all()

    def test_activity_signal(self):
        w = _make(FrequencySpectrumWidget, "spectrum")
        seen = []
        w.activity_changed.connect(seen.append)
        w.set_source(_snapshot())
        w.set_playing(True)
        w.set_playing(False)
        assert seen == [True, False]


class TestCircularSpectrum:

    def test_active_rotation_step(self):
        w = _make(CircularSpectrumWidget, "circular")
        w.set_source(_snapshot(255))
        w.set_playing(True)
        w.tick()
        w.tick()
        assert w.rotation.angle == pytest.approx(0.002)

    def test_idle_rotates_at_half_rate(self):
        w = _make(CircularSpectrumWidget, "circular")
        for _ in range(4):
            w.tick()
        assert w.rotation.angle == pytest.approx(0.002)

    def test_idle_skips_waveform_and_source(self):
        PoisonSource.reads = 0
        w = _make(CircularSpectrumWidget, "circular")
        w.set_source(PoisonSource())
        w.tick()
        assert w.last_waveform == []
        assert PoisonSource.reads == 0
        assert len(w.last_geometry) == 128

    def test_idle_heights_follow_shared_wave(self):
        w = _make(CircularSpectrumWidget, "circular")
        w.tick()
        lengths = [bar.outer - bar.inner for bar in w.last_geometry]
        assert lengths == pytest.approx(idle_bar_heights(1.0, 128, 10.0, 20.0))

    def test_active_waveform_is_closed(self):
        w = _make(CircularSpectrumWidget, "circular", 400, 400)
        w.set_source(_snapshot(255))
        w.set_playing(True)
        w.tick()
        ring = w.last_waveform
        assert len(ring) == 1025
        assert ring[0] == ring[-1]

    def test_bar_lengths_scale_with_square_area(self):
        w = _make(CircularSpectrumWidget, "circular", 800, 500)
        w.set_source(_snapshot(255))
        w.set_playing(True)
        w.tick()
        bar = w.last_geometry[0]
        assert bar.inner == pytest.approx(75.0)
        assert bar.outer - bar.inner == pytest.approx(5.0 + 150.0)
        assert bar.value == pytest.approx(1.0)

    def test_rotation_not_shared(self):
        a = _make(CircularSpectrumWidget, "circular")
        b = _make(CircularSpectrumWidget, "circular")
        a.tick()
        assert b.rotation.angle == 0.0
        assert a.rotation is not b.rotation


class TestSurfaceAndLoop:

    def test_surface_tracks_size(self):
        w = _make(FrequencySpectrumWidget, "spectrum", 300, 120)
        dpr = w.devicePixelRatioF()
        assert w.surface.width() == round(300 * dpr)
        w.resize(500, 200)
        w.sync_surface()
        assert w.surface.height() == round(200 * dpr)

    def test_manual_pumping(self):
        w = _make(FrequencySpectrumWidget, "spectrum")
        w.start()
        assert w.scheduler.pump(3) == 3
        assert w.frame_count == 3
        w.stop()
        assert not w.scheduler.is_running

    def test_show_starts_and_hide_cancels(self):
        w = _make(CircularSpectrumWidget, "circular")
        w.show()
        assert w.scheduler.is_running
        w.hide()
        assert not w.scheduler.is_running

    def test_resize_while_hidden_still_syncs(self):
        w = _make(FrequencySpectrumWidget, "spectrum", 300, 120)
        w.show()
        w.hide()
        w.resize(420, 160)
        w.sync_surface()
        assert w.surface.width() == round(420 * w.devicePixelRatioF())


class TestTakeSnapshot:

    def test_copies_borrowed_arrays(self):
        snap = _snapshot(10)
        copy = take_snapshot(snap)
        snap.magnitudes[:] = 99
        assert (copy.magnitudes == 10).all()

    def test_none(self):
        assert take_snapshot(None) is None


class TestVisualizerPanel:

    def test_status_follows_canvas(self):
        canvas = _make(FrequencySpectrumWidget, "spectrum")
        panel = VisualizerPanel("Frequency Spectrum", canvas)
        assert "Idle" in panel.status_text
        canvas.set_source(_snapshot())
        canvas.set_playing(True)
        assert "Live" in panel.status_text
