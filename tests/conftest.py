"""Shared fixtures: a point in Rotterdam, its summer noon and buildings around it."""

from datetime import datetime

import pytest

from core.sun_position import compute_sun_times
from importers import StaticBuildingSource
from models.building import GroundPoint
from tests.helpers import AMSTERDAM, SUMMER_DAY, square_building


@pytest.fixture
def rotterdam():
    return GroundPoint(latitude=51.9244, longitude=4.4626)


@pytest.fixture
def summer_noon(rotterdam):
    times = compute_sun_times(SUMMER_DAY, rotterdam.latitude, rotterdam.longitude, tzinfo=AMSTERDAM)
    return times.solar_noon


@pytest.fixture
def local_midnight():
    return AMSTERDAM.localize(datetime(2024, 6, 21, 0, 0))


@pytest.fixture
def make_building(rotterdam):
    def factory(bearing, distance_m, height, **kwargs):
        return square_building(rotterdam, bearing, distance_m, height, **kwargs)
    return factory


@pytest.fixture
def empty_source():
    return StaticBuildingSource([])
