"""
GeoJSON export of ray geometry and lighting for map renderers.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from models.calculation_result import Ray3DPoint, RaySegment, SceneLighting
from models.solar import SolarPosition

logger = logging.getLogger(__name__)


def feature_collection(features: Iterable[Dict]) -> Dict:
    return {'type': 'FeatureCollection', 'features': list(features)}


def ray_to_feature(
    origin: tuple,
    ray_end: Ray3DPoint,
    solar_position: Optional[SolarPosition] = None
) -> Dict:
    """
    Flat 2D ray from the ground point to the point under the ray end.

    Args:
        origin: Ground point (lng, lat)
        ray_end: Projected ray end
        solar_position: Optional sun position stored in the feature properties

    Returns:
        GeoJSON LineString feature
    """
    properties = {'elevation': ray_end.elevation}
    if solar_position is not None:
        properties['altitude'] = solar_position.altitude_degrees
        properties['azimuth'] = solar_position.azimuth_degrees
    return {
        'type': 'Feature',
        'properties': properties,
        'geometry': {
            'type': 'LineString',
            'coordinates': [list(origin), list(ray_end.position)],
        },
    }


def segment_to_feature(segment: RaySegment) -> Dict:
    """Extrudable polygon feature: 'base' and 'height' are elevations in meters."""
    return {
        'type': 'Feature',
        'properties': {
            'base': segment.base_elevation,
            'height': segment.top_elevation,
            'segment': segment.index,
            'isRaySegment': True,
        },
        'geometry': {
            'type': 'Polygon',
            'coordinates': [[list(vertex) for vertex in segment.footprint]],
        },
    }


def segments_to_feature_collection(segments: Iterable[RaySegment]) -> Dict:
    return feature_collection(segment_to_feature(segment) for segment in segments)


def lighting_to_dict(lighting: SceneLighting) -> List[Dict]:
    """Ambient and directional light definitions for a setLights-style API."""
    return [
        {
            'id': 'ambient-light',
            'type': 'ambient',
            'properties': {
                'color': lighting.ambient.color,
                'intensity': lighting.ambient.intensity,
            },
        },
        {
            'id': 'directional-light',
            'type': 'directional',
            'properties': {
                'color': lighting.directional.color,
                'intensity': lighting.directional.intensity,
                'direction': list(lighting.directional.direction),
                'cast-shadows': lighting.directional.cast_shadows,
            },
        },
    ]


def write_geojson(data: Dict, output_path: str) -> str:
    """
    Write a GeoJSON mapping to disk.

    Returns:
        Path to the written file
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, default=str)
    logger.info(f"GeoJSON written to {path}")
    return str(path)
