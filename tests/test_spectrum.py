"""Tests for snapshot-to-bar mapping and bar geometry."""

import math

import numpy as np
import pytest

from audiovizlib.animation import idle_wave
from audiovizlib.spectrum import (bar_indices, bar_stride, bar_width,
                                  circular_bar_heights, idle_bar_heights,
                                  inner_radius, polar_waveform,
                                  radial_segments, sample_bars,
                                  spectrum_bar_geometry)


class TestBarMapping:

    def test_stride_for_1024_bins_and_64_bars(self):
        assert bar_stride(1024, 64) == 16
        assert bar_indices(1024, 64) == [16 * i for i in range(64)]

    def test_remainder_bins_unused(self):
        assert bar_stride(1000, 64) == 15
        assert bar_indices(1000, 64)[-1] == 945

    def test_sample_bars_reads_strided_values(self):
        values = np.zeros(1024)
        for i in range(64):
            values[16 * i] = i * 4
        bars = sample_bars(values, 64)
        np.testing.assert_allclose(bars, [i * 4 / 255.0 for i in range(64)])

    def test_short_snapshot_reads_index_zero(self):
        values = np.arange(10, dtype=np.float64) + 100
        bars = sample_bars(values, 64)
        assert len(bars) == 64
        assert (bars == 100 / 255.0).all()

    def test_empty_snapshot_gives_zero_bars(self):
        assert (sample_bars([], 8) == 0).all()
        assert len(sample_bars([1, 2, 3], 0)) == 0

    def test_input_not_mutated(self):
        values = np.full(128, 255, dtype=np.uint8)
        sample_bars(values, 8)
        assert (values == 255).all()

    def test_idle_heights_stay_in_band(self):
        heights = idle_bar_heights(3.7, 64, 20.0, 30.0)
        assert len(heights) == 64
        assert all(20.0 <= h <= 50.0 for h in heights)
        assert heights[5] == pytest.approx(20.0 + idle_wave(3.7, 5) * 30.0)


class TestVerticalGeometry:

    def test_bars_are_bottom_aligned(self):
        rects = spectrum_bar_geometry([10, 0, 55.5], 300, 200)
        for r in rects:
            assert r.y + r.h == pytest.approx(200)

    def test_width_and_spacing(self):
        rects = spectrum_bar_geometry([1] * 64, 1000, 100, spacing=2)
        bw = (1000 - 63 * 2) / 64
        assert rects[0].w == pytest.approx(bw)
        assert rects[1].x == pytest.approx(bw + 2)
        assert rects[-1].x + rects[-1].w == pytest.approx(1000)

    def test_reflection_is_thirty_percent(self):
        (rect,) = spectrum_bar_geometry([40.0], 100, 100)
        assert rect.reflection_h == pytest.approx(12.0)

    def test_negative_height_clamped(self):
        (rect,) = spectrum_bar_geometry([-5.0], 100, 100)
        assert rect.h == 0.0

    def test_bar_width_never_negative(self):
        assert bar_width(10, 64, 2) == 0.0
        assert bar_width(100, 0, 2) == 0.0


class TestRadialGeometry:

    def test_inner_radius(self):
        assert inner_radius(400) == pytest.approx(60.0)

    def test_angles_include_rotation(self):
        bars = radial_segments([10, 10, 10, 10], 400, 0.25)
        for i, bar in enumerate(bars):
            assert bar.angle == pytest.approx(i / 4 * 2 * math.pi + 0.25)
            assert bar.inner == pytest.approx(60.0)
            assert bar.outer == pytest.approx(70.0)

    def test_heights_scale_with_size(self):
        assert circular_bar_heights([0.0, 1.0], 500) == pytest.approx([5.0, 155.0])
        assert circular_bar_heights([1.0], 250) == pytest.approx([80.0])

    def test_polar_waveform_closes(self):
        ring = polar_waveform(np.full(16, 128, dtype=np.uint8), 100, 100, 50)
        assert len(ring) == 17
        assert ring[0] == ring[-1]
        for x, y in ring:
            assert math.hypot(x - 100, y - 100) == pytest.approx(40.0)

    def test_polar_waveform_empty(self):
        assert polar_waveform([], 0, 0, 10) == []
