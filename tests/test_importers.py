"""Building source and GeoJSON importer tests."""

import json

import pytest

from core.errors import BuildingDataError
from importers import GeoJSONImporter, StaticBuildingSource
from models.building import BuildingFootprint
from tests.helpers import square_building


def feature(building, layer='building-extrusion', **properties):
    props = {'height': building.height}
    props.update(properties)
    return {
        'type': 'Feature',
        'id': building.id,
        'layer': {'id': layer},
        'properties': props,
        'geometry': building.geometry,
    }


@pytest.fixture
def geojson_file(tmp_path, rotterdam):
    near = square_building(rotterdam, 180.0, 20.0, 30.0, building_id='near')
    far = square_building(rotterdam, 90.0, 200.0, 12.5, building_id='far')
    road = square_building(rotterdam, 0.0, 50.0, 1.0, building_id='road')
    data = {
        'type': 'FeatureCollection',
        'features': [
            feature(near),
            feature(far, height='12.5'),
            feature(road, layer='road'),
            {'type': 'Feature', 'properties': {}, 'geometry': None},
        ],
    }
    path = tmp_path / 'buildings.geojson'
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


class TestStaticBuildingSource:
    def test_radius_filter(self, rotterdam):
        near = square_building(rotterdam, 180.0, 100.0, 20.0, building_id='near')
        far = square_building(rotterdam, 180.0, 800.0, 20.0, building_id='far')
        source = StaticBuildingSource([near, far])
        assert [b.id for b in source.query_buildings(rotterdam, 500.0)] == ['near']
        assert [b.id for b in source.query_buildings(rotterdam, 1000.0)] == ['near', 'far']

    def test_distance_is_to_nearest_edge(self, rotterdam):
        # centroid 105 m away, nearest edge 55 m away
        building = square_building(rotterdam, 90.0, 105.0, 20.0, half_size_m=50.0)
        source = StaticBuildingSource([building])
        assert source.query_buildings(rotterdam, 60.0) == [building]
        assert source.query_buildings(rotterdam, 50.0) == []

    def test_point_inside_footprint(self, rotterdam):
        building = square_building(rotterdam, 0.0, 0.0, 20.0, half_size_m=10.0)
        source = StaticBuildingSource([building])
        assert source.query_buildings(rotterdam, 1.0) == [building]

    def test_index_order_is_kept(self, rotterdam):
        buildings = [
            square_building(rotterdam, bearing, 50.0, 10.0, building_id=f"b{i}")
            for i, bearing in enumerate((270.0, 0.0, 90.0, 180.0))
        ]
        source = StaticBuildingSource(buildings)
        assert [b.id for b in source.query_buildings(rotterdam, 100.0)] == ['b0', 'b1', 'b2', 'b3']

    def test_unreadable_geometry_is_not_indexed(self, rotterdam):
        good = square_building(rotterdam, 0.0, 20.0, 10.0)
        bad = BuildingFootprint(id='bad', geometry={'type': 'Polygon', 'coordinates': 'garbage'}, height=10.0)
        empty = BuildingFootprint(id='empty', geometry={'type': 'Polygon', 'coordinates': []}, height=10.0)
        source = StaticBuildingSource([bad, good, empty])
        assert len(source) == 1
        assert source.query_buildings(rotterdam, 100.0) == [good]

    def test_empty_source(self, rotterdam, empty_source):
        assert len(empty_source) == 0
        assert empty_source.query_buildings(rotterdam, 500.0) == []


class TestGeoJSONImporter:
    def test_layer_filter_and_heights(self, geojson_file):
        buildings = GeoJSONImporter(str(geojson_file), layer_id='building-extrusion').import_buildings()
        assert [b.id for b in buildings] == ['near', 'far']
        assert buildings[0].height == 30.0
        assert buildings[1].height == 12.5

    def test_no_layer_filter_keeps_all_features_with_geometry(self, geojson_file):
        buildings = GeoJSONImporter(str(geojson_file)).import_buildings()
        assert [b.id for b in buildings] == ['near', 'far', 'road']

    def test_min_height(self, geojson_file):
        buildings = GeoJSONImporter(str(geojson_file), min_height_m=15.0).import_buildings()
        assert [b.id for b in buildings] == ['near']

    def test_custom_height_property(self, rotterdam):
        building = square_building(rotterdam, 0.0, 20.0, None)
        data = {
            'type': 'FeatureCollection',
            'features': [{
                'type': 'Feature',
                'properties': {'render_height': 42, 'layer': 'buildings'},
                'geometry': building.geometry,
            }],
        }
        importer = GeoJSONImporter('unused.geojson', layer_id='buildings', height_property='render_height')
        buildings = importer.parse_feature_collection(data)
        assert len(buildings) == 1
        assert buildings[0].id == 'building-0'
        assert buildings[0].height == 42.0

    @pytest.mark.parametrize("value", [None, 'n/a', True, [3]])
    def test_unusable_height_becomes_none(self, value):
        assert GeoJSONImporter._parse_height(value) is None

    def test_not_a_feature_collection(self):
        with pytest.raises(BuildingDataError):
            GeoJSONImporter('unused.geojson').parse_feature_collection({'type': 'Feature'})

    def test_missing_file(self, tmp_path):
        with pytest.raises(BuildingDataError):
            GeoJSONImporter(str(tmp_path / 'missing.geojson')).import_buildings()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'broken.geojson'
        path.write_text('{"type": ', encoding='utf-8')
        with pytest.raises(BuildingDataError):
            GeoJSONImporter(str(path)).import_buildings()

    def test_to_source(self, geojson_file, rotterdam):
        source = GeoJSONImporter(str(geojson_file), layer_id='building-extrusion').to_source()
        assert len(source) == 2
        assert [b.id for b in source.query_buildings(rotterdam, 100.0)] == ['near']
