"""Tests for Catmull-Rom to Bezier conversion."""

import pytest

from audiovizlib.spline import catmull_rom_segments, evaluate_segments


class TestCatmullRom:

    def test_no_segments_for_zero_or_one_point(self):
        assert catmull_rom_segments([]) == []
        assert catmull_rom_segments([(1.0, 2.0)]) == []

    def test_segment_count(self):
        pts = [(0, 0), (1, 2), (2, 1), (3, 3)]
        assert len(catmull_rom_segments(pts)) == 3

    def test_segment_ends_hit_points(self):
        pts = [(0, 0), (10, 5), (20, -5), (30, 0)]
        segs = catmull_rom_segments(pts)
        assert [s.end for s in segs] == [(10.0, 5.0), (20.0, -5.0), (30.0, 0.0)]

    def test_one_sixth_tangents_with_clamped_flanks(self):
        pts = [(0, 0), (6, 6), (12, 0)]
        first, second = catmull_rom_segments(pts)
        # p0 clamps to p1 for the first segment
        assert first.cp1 == pytest.approx((1.0, 1.0))
        assert first.cp2 == pytest.approx((4.0, 6.0))
        # p3 clamps to p2 for the last segment
        assert second.cp2 == pytest.approx((11.0, 1.0))

    def test_collinear_points_stay_on_the_line(self):
        pts = [(0, 0), (1, 1), (2, 2), (3, 3)]
        for seg in catmull_rom_segments(pts):
            for x, y in (seg.cp1, seg.cp2):
                assert x == pytest.approx(y)

    def test_deterministic(self):
        pts = [(0, 3), (1, 7), (2, 1), (5, 4)]
        assert catmull_rom_segments(pts) == catmull_rom_segments(list(pts))


class TestEvaluateSegments:

    def test_endpoints_exact(self):
        pts = [(0, 0), (10, 5), (20, -5), (30, 0)]
        line = evaluate_segments(pts[0], catmull_rom_segments(pts), steps=5)
        assert line[0] == (0.0, 0.0)
        assert line[-1] == pytest.approx((30.0, 0.0))
        assert len(line) == 1 + 3 * 5

    def test_single_point(self):
        assert evaluate_segments((4, 2), []) == [(4.0, 2.0)]
