"""Building occlusion tests."""

import pytest

from core.occlusion import (
    angular_height,
    build_sun_ray,
    building_blocks_sun,
    is_occluded,
    is_point_in_building_shadow,
)
from models.building import BuildingFootprint
from models.solar import SolarPosition
from tests.helpers import FailingSource, ListSource

# Sun due south at the altitude of a Rotterdam summer noon
SOUTH_SUN = SolarPosition.from_degrees(61.5, 0.0)


class TestAngularHeight:
    def test_known_values(self):
        assert angular_height(50.0, 10.0) == pytest.approx(78.69, abs=0.01)
        assert angular_height(10.0, 10.0) == pytest.approx(45.0)

    def test_zero_distance(self):
        assert angular_height(10.0, 0.0) == pytest.approx(90.0)


class TestBuildSunRay:
    def test_ray_points_toward_sun(self, rotterdam):
        ray = build_sun_ray(rotterdam, SOUTH_SUN, 2.0)
        start, end = ray.coords
        assert start == pytest.approx(rotterdam.lng_lat)
        assert end[1] < start[1]


class TestIsOccluded:
    def test_no_buildings(self, rotterdam):
        assert not is_occluded(rotterdam, SOUTH_SUN, [])

    def test_sun_below_horizon(self, rotterdam):
        assert is_occluded(rotterdam, SolarPosition.from_degrees(-5.0, 0.0), [])

    def test_sun_on_horizon_counts_as_below(self, rotterdam):
        assert is_occluded(rotterdam, SolarPosition.from_degrees(0.0, 0.0), [])

    def test_tall_building_toward_sun_blocks(self, rotterdam, make_building):
        building = make_building(180.0, 10.0, 50.0)
        assert is_occluded(rotterdam, SOUTH_SUN, [building])

    def test_low_building_toward_sun_does_not_block(self, rotterdam, make_building):
        building = make_building(180.0, 100.0, 20.0)
        assert not is_occluded(rotterdam, SOUTH_SUN, [building])

    def test_building_behind_point_does_not_block(self, rotterdam, make_building):
        building = make_building(0.0, 10.0, 200.0)
        assert not is_occluded(rotterdam, SOUTH_SUN, [building])

    def test_building_beside_ray_does_not_block(self, rotterdam, make_building):
        building = make_building(90.0, 50.0, 200.0)
        assert not is_occluded(rotterdam, SOUTH_SUN, [building])

    def test_building_beyond_ray_length_does_not_block(self, rotterdam, make_building):
        building = make_building(180.0, 3000.0, 10000.0)
        assert not is_occluded(rotterdam, SOUTH_SUN, [building], ray_length_km=2.0)

    @pytest.mark.parametrize("height", [None, 0, -5.0, 'tall', True])
    def test_buildings_without_valid_height_are_skipped(self, rotterdam, make_building, height):
        building = make_building(180.0, 10.0, 50.0)
        building = BuildingFootprint(id='h', geometry=building.geometry, height=height)
        assert not is_occluded(rotterdam, SOUTH_SUN, [building])

    def test_non_polygon_is_skipped(self, rotterdam, make_building):
        polygon = make_building(180.0, 10.0, 50.0)
        multi = BuildingFootprint(
            id='m',
            geometry={'type': 'MultiPolygon', 'coordinates': [polygon.geometry['coordinates']]},
            height=50.0
        )
        assert not is_occluded(rotterdam, SOUTH_SUN, [multi])

    def test_broken_building_is_skipped(self, rotterdam, make_building):
        broken = BuildingFootprint(id='x', geometry={'type': 'Polygon', 'coordinates': 'garbage'}, height=50.0)
        blocker = make_building(180.0, 10.0, 50.0, building_id='blocker')
        assert not is_occluded(rotterdam, SOUTH_SUN, [broken])
        assert is_occluded(rotterdam, SOUTH_SUN, [broken, blocker])

    def test_candidate_iterable_errors_propagate(self, rotterdam):
        def candidates():
            raise RuntimeError("feature query failed")
            yield

        with pytest.raises(RuntimeError):
            is_occluded(rotterdam, SOUTH_SUN, candidates())

    def test_stops_at_first_blocker(self, rotterdam, make_building):
        seen = []

        def candidates():
            for building in (
                make_building(180.0, 10.0, 50.0, building_id='first'),
                make_building(180.0, 40.0, 500.0, building_id='second'),
            ):
                seen.append(building.id)
                yield building

        assert is_occluded(rotterdam, SOUTH_SUN, candidates())
        assert seen == ['first']

    def test_raising_height_never_removes_shadow(self, rotterdam, make_building):
        results = [
            is_occluded(rotterdam, SOUTH_SUN, [make_building(180.0, 30.0, height)])
            for height in (5.0, 20.0, 50.0, 60.0, 100.0, 300.0)
        ]
        assert results == sorted(results)
        assert results[0] is False
        assert results[-1] is True

    def test_lowering_sun_never_removes_shadow(self, rotterdam, make_building):
        building = make_building(180.0, 30.0, 40.0)
        results = [
            is_occluded(rotterdam, SolarPosition.from_degrees(altitude, 0.0), [building])
            for altitude in (80.0, 60.0, 50.0, 40.0, 20.0, 5.0)
        ]
        assert results == sorted(results)
        assert results[0] is False
        assert results[-1] is True


class TestBuildingBlocksSun:
    def test_not_crossed_returns_none(self, rotterdam, make_building):
        ray = build_sun_ray(rotterdam, SOUTH_SUN)
        assert building_blocks_sun(rotterdam, SOUTH_SUN, make_building(0.0, 20.0, 50.0), ray) is None

    def test_crossed_returns_bool(self, rotterdam, make_building):
        ray = build_sun_ray(rotterdam, SOUTH_SUN)
        assert building_blocks_sun(rotterdam, SOUTH_SUN, make_building(180.0, 10.0, 50.0), ray) is True
        assert building_blocks_sun(rotterdam, SOUTH_SUN, make_building(180.0, 100.0, 10.0), ray) is False


class TestIsPointInBuildingShadow:
    def test_queries_source_with_radius(self, rotterdam, make_building):
        source = ListSource([make_building(180.0, 10.0, 50.0)])
        assert is_point_in_building_shadow(rotterdam, SOUTH_SUN, source, radius_m=250.0)
        assert source.queries == [(rotterdam, 250.0)]

    def test_fails_open(self, rotterdam):
        assert is_point_in_building_shadow(rotterdam, SOUTH_SUN, FailingSource()) is False

    def test_below_horizon_is_shadow(self, rotterdam):
        assert is_point_in_building_shadow(rotterdam, SolarPosition.from_degrees(-1.0, 0.0), FailingSource())
