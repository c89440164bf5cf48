"""
On-map sun marker placement and styling, as plain data for a renderer.
"""

import math
from typing import Tuple

from models.building import GroundPoint
from models.calculation_result import MarkerState
from models.solar import SolarPosition

# Altitude thresholds in radians
HORIZON_BAND_MAX = 0.1
LOW_BAND_MAX = 0.3

# Share of the viewport half-span used to place the marker
EDGE_FACTOR = 0.5

_MARKER_STYLES = {
    'horizon': ('#FF8C00', '0 0 20px 10px rgba(255, 140, 0, 0.7)', 24),
    'low': ('#FFD700', '0 0 20px 10px rgba(255, 215, 0, 0.6)', 20),
    'high': ('#FFFF00', '0 0 20px 10px rgba(255, 255, 0, 0.5)', 20),
}


def marker_style_band(altitude: float) -> str:
    if altitude < HORIZON_BAND_MAX:
        return 'horizon'
    if altitude < LOW_BAND_MAX:
        return 'low'
    return 'high'


def compute_marker_state(
    solar_position: SolarPosition,
    viewport_center: GroundPoint,
    viewport_span: Tuple[float, float]
) -> MarkerState:
    """
    Place the sun marker inside the viewport in the direction of the sun.

    The marker is offset from the viewport center along the compass bearing
    of the sun, scaled by cos(altitude) so a high sun sits near the center.

    Args:
        solar_position: Current sun position
        viewport_center: Center of the visible map area
        viewport_span: Visible (width, height) in degrees of longitude/latitude

    Returns:
        MarkerState, hidden when the sun is below the horizon
    """
    if solar_position.altitude <= 0:
        return MarkerState(visible=False)

    bearing = math.radians(solar_position.compass_bearing)
    horizontal = math.cos(solar_position.altitude)
    east = math.sin(bearing) * horizontal
    north = math.cos(bearing) * horizontal

    width, height = viewport_span
    position = (
        viewport_center.longitude + east * width * EDGE_FACTOR,
        viewport_center.latitude + north * height * EDGE_FACTOR,
    )

    band = marker_style_band(solar_position.altitude)
    color, glow, size = _MARKER_STYLES[band]
    return MarkerState(
        visible=True,
        position=position,
        style_band=band,
        color=color,
        glow=glow,
        size_px=size
    )
