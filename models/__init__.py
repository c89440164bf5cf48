"""
Data models for locations, buildings, solar values and calculation results.
"""

from .building import GroundPoint, BuildingFootprint
from .solar import SolarPosition, SunTimes
from .calculation_result import (
    AmbientLight,
    DirectionalLight,
    MarkerState,
    Ray3DPoint,
    RaySegment,
    SceneLighting,
    ShadowMethod,
    ShadowResult,
    SunlightTimeline,
)

__all__ = [
    'GroundPoint',
    'BuildingFootprint',
    'SolarPosition',
    'SunTimes',
    'AmbientLight',
    'DirectionalLight',
    'MarkerState',
    'Ray3DPoint',
    'RaySegment',
    'SceneLighting',
    'ShadowMethod',
    'ShadowResult',
    'SunlightTimeline',
]
