"""
Core calculation engines: sun position, scene lighting, ray projection,
building occlusion and sunlight status.
"""

from .errors import BuildingDataError, InvalidInputError, SunlightError
from .insolation_calculator import InsolationCalculator
from .lighting import map_to_scene_lighting
from .occlusion import is_occluded, is_point_in_building_shadow
from .ray_projector import project_3d_ray, subdivide_ray
from .sun_marker import compute_marker_state
from .sun_position import SunPositionCalculator, compute_solar_position, compute_sun_times
from .sunlight_resolver import resolve_sunlight_status

__all__ = [
    'BuildingDataError',
    'InvalidInputError',
    'SunlightError',
    'InsolationCalculator',
    'map_to_scene_lighting',
    'is_occluded',
    'is_point_in_building_shadow',
    'project_3d_ray',
    'subdivide_ray',
    'compute_marker_state',
    'SunPositionCalculator',
    'compute_solar_position',
    'compute_sun_times',
    'resolve_sunlight_status',
]
