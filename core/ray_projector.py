"""
3D sun ray projection for visualization.

``project_3d_ray`` expects the south-referenced solar azimuth (as stored in
SolarPosition.azimuth_degrees) and converts it to the compass bearing of the
sun before moving over the ground.
"""

import logging
import math
from typing import List, Tuple

import numpy as np

from models.calculation_result import Ray3DPoint, RaySegment
from utils.geometry_utils import destination_point, meters_to_degrees_longitude, reciprocal_bearing
from .errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_RAY_DISTANCE_KM = 1.0
DEFAULT_SEGMENT_COUNT = 30
SEGMENT_WIDTH_METERS = 0.2


def project_3d_ray(
    origin: Tuple[float, float],
    distance_km: float,
    azimuth_degrees: float,
    altitude_degrees: float
) -> Ray3DPoint:
    """
    Calculate the end point of a ray leaving the ground toward the sun.

    The ray length is split into a horizontal part, d*cos(altitude), travelled
    over the ellipsoid, and a vertical part, d*sin(altitude), used as elevation.

    Args:
        origin: Ground point (lng, lat)
        distance_km: Ray length in kilometers
        azimuth_degrees: South-referenced solar azimuth in degrees
        altitude_degrees: Solar altitude in degrees

    Returns:
        Ray3DPoint with the ground position under the ray end and its elevation in meters
    """
    altitude_rad = math.radians(altitude_degrees)
    horizontal_km = distance_km * math.cos(altitude_rad)
    vertical_km = distance_km * math.sin(altitude_rad)

    bearing = reciprocal_bearing(azimuth_degrees)
    position = destination_point(origin, bearing, horizontal_km * 1000.0)

    return Ray3DPoint(position=position, elevation=vertical_km * 1000.0)


def _segment_quad(
    start: Tuple[float, float],
    end: Tuple[float, float],
    width_meters: float
) -> Tuple[Tuple[float, float], ...]:
    """Thin rectangle around a segment, perpendicular offsets in degrees."""
    lng1, lat1 = start
    lng2, lat2 = end

    angle = math.atan2(lat2 - lat1, lng2 - lng1)
    perpendicular = angle + math.pi / 2
    width_degrees = meters_to_degrees_longitude(width_meters, lat1)

    dx = width_degrees * math.cos(perpendicular) / 2
    dy = width_degrees * math.sin(perpendicular) / 2

    return (
        (lng1 - dx, lat1 - dy),
        (lng1 + dx, lat1 + dy),
        (lng2 + dx, lat2 + dy),
        (lng2 - dx, lat2 - dy),
        (lng1 - dx, lat1 - dy),
    )


def subdivide_ray(
    origin: Tuple[float, float],
    end: Tuple[float, float],
    base_elevation: float,
    top_elevation: float,
    segment_count: int = DEFAULT_SEGMENT_COUNT,
    width_meters: float = SEGMENT_WIDTH_METERS
) -> List[RaySegment]:
    """
    Split a 3D ray into consecutive extrudable segments.

    Args:
        origin: Ray start (lng, lat)
        end: Ray end (lng, lat)
        base_elevation: Elevation at the start in meters
        top_elevation: Elevation at the end in meters
        segment_count: Number of segments, at least 1
        width_meters: Width of each segment quad

    Returns:
        Segments ordered from the origin (index 0) to the sun end

    Raises:
        InvalidInputError: If segment_count is below 1
    """
    if isinstance(segment_count, bool) or not isinstance(segment_count, (int, np.integer)) or segment_count < 1:
        raise InvalidInputError(f"segment_count must be an integer >= 1, got {segment_count!r}")

    ratios = np.linspace(0.0, 1.0, segment_count + 1)
    lngs = origin[0] + (end[0] - origin[0]) * ratios
    lats = origin[1] + (end[1] - origin[1]) * ratios
    elevations = base_elevation + (top_elevation - base_elevation) * ratios

    segments = []
    for i in range(segment_count):
        start = (float(lngs[i]), float(lats[i]))
        stop = (float(lngs[i + 1]), float(lats[i + 1]))
        segments.append(RaySegment(
            index=i,
            start=start,
            end=stop,
            base_elevation=float(elevations[i]),
            top_elevation=float(elevations[i + 1]),
            footprint=_segment_quad(start, stop, width_meters)
        ))

    logger.debug(f"Subdivided ray into {segment_count} segment(s), top elevation {top_elevation:.1f}m")
    return segments
