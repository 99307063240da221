"""Tests for trendline hit-testing geometry."""

import math

from hypothesis import given, settings
from hypothesis import strategies as st

from chartfeed.core.common.geometry import Point, calculate_slope, distance_to_line
from chartfeed.core.domain.entities.trendline_entity import TrendPoint

coords = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
points = st.builds(Point, coords, coords)


class TestDistanceToLine:
    def test_perpendicular_foot_on_segment(self):
        assert distance_to_line(Point(0, 1), Point(0, 0), Point(2, 0)) == 1

    def test_beyond_endpoint_measures_to_endpoint(self):
        assert distance_to_line(Point(5, 4), Point(0, 0), Point(2, 0)) == 5

    def test_point_on_segment(self):
        assert distance_to_line(Point(1, 1), Point(0, 0), Point(2, 2)) == 0

    @given(p=points, a=points)
    @settings(max_examples=100)
    def test_degenerate_segment_is_point_distance(self, p: Point, a: Point):
        assert distance_to_line(p, a, a) == math.hypot(p.x - a.x, p.y - a.y)

    @given(p=points, a=points, b=points)
    @settings(max_examples=200)
    def test_never_exceeds_distance_to_endpoints(self, p: Point, a: Point, b: Point):
        d = distance_to_line(p, a, b)
        to_a = math.hypot(p.x - a.x, p.y - a.y)
        to_b = math.hypot(p.x - b.x, p.y - b.y)
        assert d >= 0
        assert d <= min(to_a, to_b) + 1e-6 * max(1.0, to_a, to_b)


class TestSlope:
    def test_price_per_second(self):
        start = TrendPoint(time=1_000, price=100.0)
        end = TrendPoint(time=1_010, price=150.0)
        assert calculate_slope(start, end) == 5.0

    def test_same_time_is_flat(self):
        point = TrendPoint(time=1_000, price=100.0)
        assert calculate_slope(point, point) == 0.0
