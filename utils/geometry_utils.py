"""
Geodesic and angle helpers for ground-level geometry in WGS84 (lng, lat).
"""

import math
from typing import Tuple

from pyproj import Geod

# Meters per degree of latitude, also per degree of longitude at the equator
METERS_PER_DEGREE = 111320.0

_geod = Geod(ellps='WGS84')

_CARDINAL_DIRECTIONS = (
    'North', 'Northeast', 'East', 'Southeast',
    'South', 'Southwest', 'West', 'Northwest',
)


def normalize_degrees(angle: float) -> float:
    """Normalize angle to the [0, 360) degree range."""
    return (angle + 360.0) % 360.0


def reciprocal_bearing(azimuth_degrees: float) -> float:
    """
    Bearing pointing from the ground toward the sun.

    Args:
        azimuth_degrees: South-referenced solar azimuth in degrees

    Returns:
        Compass bearing in degrees (0 = North, 90 = East)
    """
    return (azimuth_degrees + 180.0) % 360.0


def destination_point(
    origin: Tuple[float, float],
    bearing_degrees: float,
    distance_meters: float
) -> Tuple[float, float]:
    """
    Point reached by travelling from origin along a compass bearing.

    Args:
        origin: Start point (lng, lat)
        bearing_degrees: Compass bearing (0 = North)
        distance_meters: Distance over the ellipsoid surface

    Returns:
        Destination (lng, lat)
    """
    lng, lat, _ = _geod.fwd(origin[0], origin[1], bearing_degrees, distance_meters)
    return (lng, lat)


def ground_distance(point1: Tuple[float, float], point2: Tuple[float, float]) -> float:
    """Geodesic distance in meters between two (lng, lat) points."""
    _, _, distance = _geod.inv(point1[0], point1[1], point2[0], point2[1])
    return distance


def meters_to_degrees_longitude(meters: float, latitude: float) -> float:
    """Convert an east-west distance to degrees of longitude at a latitude."""
    return meters / (METERS_PER_DEGREE * math.cos(math.radians(latitude)))


def meters_to_degrees_latitude(meters: float) -> float:
    return meters / METERS_PER_DEGREE


def cardinal_direction(bearing_degrees: float) -> str:
    """
    Eight-point compass name for a bearing.

    North covers 337.5-22.5 degrees; each other sector spans 45 degrees.
    """
    normalized = normalize_degrees(bearing_degrees)
    sector = int(((normalized + 22.5) % 360.0) // 45.0)
    return _CARDINAL_DIRECTIONS[sector]
