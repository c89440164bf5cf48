"""
Building occlusion test: does any nearby building block the sun ray to a point?

A ray is drawn over the ground from the point toward the sun. Every building
whose footprint the ray crosses is compared by angular height, the angle its
roof subtends from the point at the distance of its centroid. A building
blocks the sun when that angle exceeds the solar altitude.
"""

import logging
import math
from typing import Iterable, Optional

from shapely.geometry import LineString

from models.building import BuildingFootprint, GroundPoint
from models.solar import SolarPosition
from utils.geometry_utils import destination_point, ground_distance

logger = logging.getLogger(__name__)

OCCLUSION_RAY_LENGTH_KM = 2.0
DEFAULT_QUERY_RADIUS_M = 500.0


def angular_height(height: float, distance: float) -> float:
    """Angle in degrees subtended by a height seen from a horizontal distance."""
    return math.degrees(math.atan2(height, distance))


def build_sun_ray(
    point: GroundPoint,
    sun_position: SolarPosition,
    ray_length_km: float = OCCLUSION_RAY_LENGTH_KM
) -> LineString:
    """Ground-level ray from the point along the compass bearing of the sun."""
    end = destination_point(point.lng_lat, sun_position.compass_bearing, ray_length_km * 1000.0)
    return LineString([point.lng_lat, end])


def building_blocks_sun(
    point: GroundPoint,
    sun_position: SolarPosition,
    building: BuildingFootprint,
    ray: LineString
) -> Optional[bool]:
    """
    Test a single building against the sun ray.

    Returns:
        None if the building is not a candidate occluder (no height, not a
        polygon or not crossed by the ray), otherwise whether it blocks the sun
    """
    if not building.has_valid_height():
        return None
    if building.geometry_type != 'Polygon':
        return None

    footprint = building.to_polygon()
    if not footprint.intersects(ray):
        return None

    centroid = footprint.centroid
    distance = ground_distance(point.lng_lat, (centroid.x, centroid.y))
    building_angle = angular_height(building.height, distance)

    logger.debug(
        f"Building {building.id}: height {building.height}m, distance {distance:.1f}m, "
        f"angular height {building_angle:.2f} deg, sun altitude {sun_position.altitude_degrees:.2f} deg"
    )
    return building_angle > sun_position.altitude_degrees


def is_occluded(
    point: GroundPoint,
    sun_position: SolarPosition,
    candidate_buildings: Iterable[BuildingFootprint],
    ray_length_km: float = OCCLUSION_RAY_LENGTH_KM
) -> bool:
    """
    Check whether any candidate building blocks the sun ray to a point.

    Buildings that fail to process are logged and skipped. Errors raised by
    the candidate iterable itself propagate to the caller.

    Args:
        point: Ground point
        sun_position: Sun position at the instant of interest
        candidate_buildings: Footprints with heights near the point
        ray_length_km: Length of the ground ray toward the sun

    Returns:
        True if the point is in shadow
    """
    if sun_position.altitude <= 0:
        logger.debug("Sun below horizon, point is in shadow")
        return True

    ray = build_sun_ray(point, sun_position, ray_length_km)
    logger.debug(
        f"Sun bearing {sun_position.compass_bearing:.2f} deg, altitude {sun_position.altitude_degrees:.2f} deg"
    )

    checked = 0
    intersecting = 0
    for building in candidate_buildings:
        checked += 1
        try:
            blocks = building_blocks_sun(point, sun_position, building, ray)
        except Exception as e:
            logger.warning(f"Skipping building {getattr(building, 'id', '?')}: {e}")
            continue

        if blocks is None:
            continue
        intersecting += 1
        if blocks:
            logger.info(f"Building {building.id} blocks the sun, point is in shadow")
            return True

    logger.debug(f"Checked {checked} building(s), {intersecting} intersecting, none block the sun")
    return False


def is_point_in_building_shadow(
    point: GroundPoint,
    sun_position: SolarPosition,
    building_source,
    radius_m: float = DEFAULT_QUERY_RADIUS_M,
    ray_length_km: float = OCCLUSION_RAY_LENGTH_KM
) -> bool:
    """
    Query nearby buildings and run the occlusion test, failing open.

    Any error while fetching or scanning candidates is logged and the point
    is reported as not shadowed, so a broken building source never prevents
    an answer.
    """
    if sun_position.altitude <= 0:
        return True
    try:
        candidates = building_source.query_buildings(point, radius_m)
        return is_occluded(point, sun_position, candidates, ray_length_km)
    except Exception as e:
        logger.error(f"Error in shadow calculation, assuming sunlight: {e}", exc_info=True)
        return False
