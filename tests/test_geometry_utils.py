"""Geodesic helper tests."""

import pytest

from utils.geometry_utils import (
    cardinal_direction,
    destination_point,
    ground_distance,
    meters_to_degrees_latitude,
    meters_to_degrees_longitude,
    normalize_degrees,
    reciprocal_bearing,
)

ORIGIN = (4.4626, 51.9244)


class TestAngles:
    @pytest.mark.parametrize(
        "angle, expected",
        [(0.0, 0.0), (360.0, 0.0), (-90.0, 270.0), (405.0, 45.0)],
    )
    def test_normalize_degrees(self, angle, expected):
        assert normalize_degrees(angle) == pytest.approx(expected)

    def test_reciprocal_bearing(self):
        assert reciprocal_bearing(0.0) == 180.0
        assert reciprocal_bearing(270.0) == 90.0
        assert reciprocal_bearing(200.0) == 20.0

    @pytest.mark.parametrize(
        "bearing, expected",
        [
            (0.0, 'North'),
            (350.0, 'North'),
            (22.4, 'North'),
            (22.5, 'Northeast'),
            (90.0, 'East'),
            (180.0, 'South'),
            (225.0, 'Southwest'),
            (300.0, 'Northwest'),
            (-45.0, 'Northwest'),
        ],
    )
    def test_cardinal_direction(self, bearing, expected):
        assert cardinal_direction(bearing) == expected


class TestGeodesy:
    def test_destination_and_distance_agree(self):
        end = destination_point(ORIGIN, 123.0, 750.0)
        assert ground_distance(ORIGIN, end) == pytest.approx(750.0, rel=1e-9)

    def test_destination_north(self):
        lng, lat = destination_point(ORIGIN, 0.0, 1000.0)
        assert lng == pytest.approx(ORIGIN[0])
        assert lat > ORIGIN[1]

    def test_zero_distance(self):
        assert ground_distance(ORIGIN, ORIGIN) == 0.0

    def test_degree_conversions(self):
        assert meters_to_degrees_latitude(111320.0) == pytest.approx(1.0)
        assert meters_to_degrees_longitude(111320.0, 0.0) == pytest.approx(1.0)
        assert meters_to_degrees_longitude(111320.0, 60.0) == pytest.approx(2.0)
