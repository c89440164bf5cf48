"""
Building data importers and sources for the occlusion test.
"""

from .base_importer import BaseImporter, BuildingSource
from .building_index import StaticBuildingSource
from .geojson_importer import GeoJSONImporter

__all__ = [
    'BaseImporter',
    'BuildingSource',
    'StaticBuildingSource',
    'GeoJSONImporter',
]
