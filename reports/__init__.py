"""
Exports and diagrams for sunlight calculation results.
"""

from .diagram_generator import DiagramGenerator
from .geojson_export import (
    lighting_to_dict,
    ray_to_feature,
    segments_to_feature_collection,
    write_geojson,
)

__all__ = [
    'DiagramGenerator',
    'lighting_to_dict',
    'ray_to_feature',
    'segments_to_feature_collection',
    'write_geojson',
]
