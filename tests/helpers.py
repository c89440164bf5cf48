"""Test helpers: reference dates, building fixtures and fake building sources."""

from datetime import date

import pytz

from models.building import BuildingFootprint
from utils.geometry_utils import destination_point, meters_to_degrees_latitude, meters_to_degrees_longitude

AMSTERDAM = pytz.timezone('Europe/Amsterdam')
SUMMER_DAY = date(2024, 6, 21)
WINTER_DAY = date(2024, 12, 21)


def square_building(point, bearing, distance_m, height, half_size_m=5.0, building_id='b1'):
    """Square footprint centered distance_m from point along a compass bearing."""
    lng, lat = destination_point(point.lng_lat, bearing, distance_m)
    dlng = meters_to_degrees_longitude(half_size_m, lat)
    dlat = meters_to_degrees_latitude(half_size_m)
    ring = [
        (lng - dlng, lat - dlat),
        (lng + dlng, lat - dlat),
        (lng + dlng, lat + dlat),
        (lng - dlng, lat + dlat),
    ]
    return BuildingFootprint.from_ring(building_id, ring, height=height)


class ListSource:
    """Building source returning a fixed list, recording the queries it receives."""

    def __init__(self, buildings=()):
        self.buildings = list(buildings)
        self.queries = []

    def query_buildings(self, center, radius_m):
        self.queries.append((center, radius_m))
        return list(self.buildings)


class FailingSource:
    def query_buildings(self, center, radius_m):
        raise RuntimeError("building layer not loaded")
