"""
Scene lighting derived from the sun position.

Maps solar altitude onto ambient/directional light presets for a 3D map
scene. The band thresholds are visual approximations and can be replaced
by passing custom bands.
"""

from typing import Sequence, NamedTuple

from models.calculation_result import AmbientLight, DirectionalLight, SceneLighting
from models.solar import SolarPosition


class LightingBand(NamedTuple):
    """Lighting preset used while the sun altitude is below ``max_altitude``."""

    name: str
    max_altitude: float  # degrees, exclusive upper bound
    ambient_color: str
    ambient_intensity: float
    directional_color: str
    directional_intensity: float


NIGHT_THRESHOLD = 0.0
TWILIGHT_THRESHOLD = 10.0
LOW_SUN_THRESHOLD = 30.0

DEFAULT_BANDS = (
    LightingBand('night', NIGHT_THRESHOLD, '#103163', 0.1, '#000000', 0.0),
    LightingBand('twilight', TWILIGHT_THRESHOLD, '#493838', 0.15, '#ff9e57', 0.5),
    LightingBand('low_sun', LOW_SUN_THRESHOLD, '#d6d6d6', 0.2, '#ffefcc', 0.7),
    LightingBand('midday', float('inf'), '#f2f2f2', 0.25, '#ffffff', 0.9),
)


def select_band(altitude_degrees: float, bands: Sequence[LightingBand] = DEFAULT_BANDS) -> LightingBand:
    """First band whose upper bound lies above the altitude; the last band otherwise."""
    for band in bands:
        if altitude_degrees < band.max_altitude:
            return band
    return bands[-1]


def polar_angle(altitude_degrees: float) -> float:
    """Angle of the light from the zenith, clamped to [0, 90] degrees."""
    return min(90.0, max(0.0, 90.0 - altitude_degrees))


def map_to_scene_lighting(
    solar_position: SolarPosition,
    bands: Sequence[LightingBand] = DEFAULT_BANDS
) -> SceneLighting:
    """
    Convert a sun position into ambient and directional scene lights.

    Args:
        solar_position: Sun position (south-referenced azimuth)
        bands: Lighting presets ordered by increasing altitude

    Returns:
        SceneLighting whose directional light points along the compass bearing of the sun
    """
    band = select_band(solar_position.altitude_degrees, bands)

    return SceneLighting(
        band=band.name,
        ambient=AmbientLight(color=band.ambient_color, intensity=band.ambient_intensity),
        directional=DirectionalLight(
            color=band.directional_color,
            intensity=band.directional_intensity,
            direction=(solar_position.compass_bearing, polar_angle(solar_position.altitude_degrees)),
            cast_shadows=True
        )
    )
