"""
Tests for shared geographic functions.

Tests the haversine distance, incremental distance and route bounds.
"""

import pytest

from stridelog.shared.geo import (
    GeoPoint,
    haversine,
    haversine_m,
    incremental_distance_km,
    calculate_total_distance,
    route_bounds,
    EARTH_RADIUS_M,
)


# =============================================================================
# Test Haversine Distance
# =============================================================================

class TestHaversine:
    """Tests for haversine functions."""

    def test_same_point(self):
        """Distance between same point should be 0."""
        assert haversine_m(43.0, 76.0, 43.0, 76.0) == 0.0

    def test_known_distance_almaty_astana(self):
        """Test with known distance (Almaty to Astana ~974km)."""
        dist = haversine(43.238949, 76.945465, 51.169392, 71.449074)
        assert 950 < dist < 1000

    def test_small_distance_in_meters(self):
        """0.001 degree latitude is about 111 meters."""
        dist = haversine_m(43.0, 76.0, 43.001, 76.0)
        assert 110 < dist < 112

    def test_km_is_meters_divided_by_1000(self):
        meters = haversine_m(55.75, 37.61, 59.93, 30.33)
        assert haversine(55.75, 37.61, 59.93, 30.33) == pytest.approx(meters / 1000)

    def test_symmetry(self):
        """Distance A->B should equal B->A."""
        dist_ab = haversine_m(43.0, 76.0, 44.0, 77.0)
        dist_ba = haversine_m(44.0, 77.0, 43.0, 76.0)
        assert dist_ab == pytest.approx(dist_ba, rel=0.0001)

    def test_east_west_distance(self):
        """At equator, 1 degree longitude is about 111 km."""
        assert 110 < haversine(0.0, 0.0, 0.0, 1.0) < 112

    def test_earth_radius_constant(self):
        assert EARTH_RADIUS_M == 6_371_000.0

    def test_cross_hemisphere(self):
        """90 degrees of latitude is a quarter meridian (~10,000 km)."""
        dist = haversine(45.0, 0.0, -45.0, 0.0)
        assert 9900 < dist < 10100


# =============================================================================
# Test Incremental Distance
# =============================================================================

class TestIncrementalDistance:
    """Tests for incremental_distance_km."""

    def test_no_previous_point(self):
        assert incremental_distance_km(None, GeoPoint(10.0, 10.0)) == 0.0

    def test_step_in_kilometers(self):
        step = incremental_distance_km(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
        assert 110 < step < 112

    def test_never_negative(self):
        points = [GeoPoint(1.0, 1.0), GeoPoint(-3.0, 2.5), GeoPoint(1.0, 1.0)]
        for a, b in zip(points, points[1:]):
            assert incremental_distance_km(a, b) >= 0.0

    def test_total_distance_is_sum_of_steps(self):
        points = [GeoPoint(1.0, 1.0), GeoPoint(2.0, 2.0), GeoPoint(3.0, 3.0)]
        expected = (
            incremental_distance_km(points[0], points[1])
            + incremental_distance_km(points[1], points[2])
        )
        assert calculate_total_distance(points) == pytest.approx(expected)

    def test_total_distance_short_route(self):
        assert calculate_total_distance([]) == 0.0
        assert calculate_total_distance([GeoPoint(1.0, 1.0)]) == 0.0


# =============================================================================
# Test Route Bounds
# =============================================================================

class TestRouteBounds:
    """Tests for route_bounds."""

    def test_empty_route(self):
        assert route_bounds([]) is None
        assert route_bounds([[]]) is None

    def test_bounds_span_all_segments(self):
        segments = [
            [GeoPoint(1.0, 5.0), GeoPoint(2.0, 6.0)],
            [GeoPoint(-1.0, 7.0)],
        ]
        bounds = route_bounds(segments)
        assert bounds.min_lat == -1.0
        assert bounds.max_lat == 2.0
        assert bounds.min_lon == 5.0
        assert bounds.max_lon == 7.0
        assert bounds.center == GeoPoint(0.5, 6.0)
