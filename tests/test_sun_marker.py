"""Sun marker placement tests."""

import math

import pytest

from core.sun_marker import compute_marker_state, marker_style_band
from models.building import GroundPoint
from models.solar import SolarPosition

CENTER = GroundPoint(latitude=51.9244, longitude=4.4626)
SPAN = (0.02, 0.01)


class TestComputeMarkerState:
    def test_hidden_below_horizon(self):
        state = compute_marker_state(SolarPosition.from_degrees(-2.0, 0.0), CENTER, SPAN)
        assert not state.visible
        assert state.position is None

    def test_southern_sun_is_below_center(self):
        state = compute_marker_state(SolarPosition.from_degrees(30.0, 0.0), CENTER, SPAN)
        lng, lat = state.position
        assert lng == pytest.approx(CENTER.longitude)
        assert lat == pytest.approx(CENTER.latitude - math.cos(math.radians(30.0)) * 0.005)

    def test_eastern_sun_is_right_of_center(self):
        # south-referenced 270 is east
        state = compute_marker_state(SolarPosition.from_degrees(10.0, 270.0), CENTER, SPAN)
        lng, lat = state.position
        assert lng > CENTER.longitude
        assert lat == pytest.approx(CENTER.latitude)

    def test_high_sun_stays_near_center(self):
        low = compute_marker_state(SolarPosition.from_degrees(5.0, 0.0), CENTER, SPAN)
        high = compute_marker_state(SolarPosition.from_degrees(80.0, 0.0), CENTER, SPAN)
        assert abs(high.position[1] - CENTER.latitude) < abs(low.position[1] - CENTER.latitude)

    def test_styles(self):
        horizon = compute_marker_state(SolarPosition.from_radians(0.05, 0.0), CENTER, SPAN)
        high = compute_marker_state(SolarPosition.from_radians(1.0, 0.0), CENTER, SPAN)
        assert horizon.style_band == 'horizon'
        assert horizon.color == '#FF8C00'
        assert horizon.size_px == 24
        assert high.style_band == 'high'
        assert high.color == '#FFFF00'


class TestMarkerStyleBand:
    @pytest.mark.parametrize(
        "altitude, expected",
        [(0.01, 'horizon'), (0.1, 'low'), (0.29, 'low'), (0.3, 'high'), (1.2, 'high')],
    )
    def test_thresholds(self, altitude, expected):
        assert marker_style_band(altitude) == expected
