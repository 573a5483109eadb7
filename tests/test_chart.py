"""Tests for the amplitude chart layout, formatting and hover hit-testing."""

import math

import pytest

from audiovizlib.chart import (ChartLayout, format_axis_time, format_clock,
                               format_time, hit_test, nearest_point,
                               time_step_for)
from audiovizlib.models import AmplitudePoint


@pytest.fixture
def points():
    return [AmplitudePoint(0.0, 0.1, -20.0),
            AmplitudePoint(0.5, 0.3, -10.5),
            AmplitudePoint(1.0, 0.2, -14.0),
            AmplitudePoint(1.5, 0.05, -26.25)]


class TestTimeStep:

    @pytest.mark.parametrize("duration,step", [
        (180, 10), (61, 10), (60, 5), (31, 5), (30, 2), (3, 2),
    ])
    def test_policy(self, duration, step):
        assert time_step_for(duration) == step


class TestLayout:

    def test_default_geometry(self):
        layout = ChartLayout()
        assert layout.chart_width == 1870
        assert layout.chart_height == 460
        assert layout.baseline_y == 520

    def test_db_mapping(self):
        layout = ChartLayout()
        assert layout.db_to_y(layout.db_min) == pytest.approx(520)
        assert layout.db_to_y(layout.db_max) == pytest.approx(60)

    def test_db_ticks(self):
        assert ChartLayout().db_ticks() == [-90, -70, -50, -30, -10]

    def test_time_ticks(self):
        ticks = ChartLayout().time_ticks(25)
        assert ticks[0] == 0 and ticks[-1] == 24
        assert len(ticks) == 13
        assert ChartLayout().time_ticks(0) == []

    def test_scale_for(self):
        assert ChartLayout().scale_for(1000, 300) == (0.5, 0.5)


class TestFormatting:

    def test_axis_time(self):
        assert format_axis_time(12) == "12s"
        assert format_axis_time(65) == "1:05"

    def test_clock(self):
        assert format_clock(0) == "0:00"
        assert format_clock(65.4) == "1:05"
        assert format_clock(float("nan")) == "0:00"

    def test_time(self):
        assert format_time(125) == "02:05"
        assert format_time(-1) == "00:00"
        assert format_time(math.inf) == "00:00"


class TestHitTest:

    def test_top_left_content_corner_shows_first_point(self, points):
        layout = ChartLayout()
        sx, sy = layout.scale_for(1000, 300)
        state = hit_test(points, 2.0, layout, layout.pad_left * sx,
                         layout.pad_top * sy, 1000, 300)
        assert state is not None
        assert state.label == "0:00"
        assert state.value == "-20.00"

    def test_right_edge_maps_to_end_of_track(self, points):
        layout = ChartLayout()
        x = (layout.pad_left + layout.chart_width) * 0.5
        state = hit_test(points, 2.0, layout, x, 200, 1000, 300)
        assert state.value == "-26.25"
        assert state.label == "0:01"

    def test_stretched_view_uses_both_scales(self, points):
        layout = ChartLayout()
        # 4x wider, same height: y stays in reference pixels
        state = hit_test(points, 2.0, layout, 4140, 300, 8000, 600)
        assert state is not None
        assert state.value == "-14.00"

    @pytest.mark.parametrize("x,y", [(10, 10), (990, 150), (500, 5), (500, 295)])
    def test_outside_plot_area(self, points, x, y):
        assert hit_test(points, 2.0, ChartLayout(), x, y, 1000, 300) is None

    def test_no_points_or_size(self, points):
        layout = ChartLayout()
        assert hit_test([], 2.0, layout, 500, 150, 1000, 300) is None
        assert hit_test(points, 0.0, layout, 500, 150, 1000, 300) is None
        assert hit_test(points, 2.0, layout, 500, 150, 0, 300) is None

    def test_screen_position_echoed(self, points):
        state = hit_test(points, 2.0, ChartLayout(), 500, 150, 1000, 300)
        assert (state.screen_x, state.screen_y) == (500, 150)


class TestNearestPoint:

    def test_tie_goes_to_earlier_point(self, points):
        assert nearest_point(points, 0.25).time == 0.0

    def test_beyond_end(self, points):
        assert nearest_point(points, 99).time == 1.5

    def test_empty(self):
        assert nearest_point([], 1.0) is None
