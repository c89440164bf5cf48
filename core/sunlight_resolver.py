"""
Sunlight status resolver.

Combines the astronomical check (is the sun above the horizon?) with the
building occlusion test. If the occlusion step fails for any reason the
resolver falls back to the astronomical check, so callers always get a
ShadowResult.
"""

import logging
import time
from datetime import datetime

from models.building import GroundPoint
from models.calculation_result import ShadowMethod, ShadowResult
from .occlusion import DEFAULT_QUERY_RADIUS_M, OCCLUSION_RAY_LENGTH_KM, is_occluded
from .sun_position import compute_solar_position

logger = logging.getLogger(__name__)

BELOW_HORIZON_DETAILS = "Sun is below horizon"
FALLBACK_DETAILS = "Ray tracing failed, using simple sun position check"


def resolve_sunlight_status(
    point: GroundPoint,
    instant: datetime,
    building_source,
    query_radius_m: float = DEFAULT_QUERY_RADIUS_M,
    ray_length_km: float = OCCLUSION_RAY_LENGTH_KM
) -> ShadowResult:
    """
    Determine whether a point is in direct sunlight at an instant.

    Args:
        point: Ground point
        instant: Timezone-aware datetime
        building_source: Object with query_buildings(center, radius_m)
        query_radius_m: Radius of the nearby building query
        ray_length_km: Length of the ground ray toward the sun

    Returns:
        ShadowResult tagged with the method that produced it

    Raises:
        InvalidInputError: On invalid coordinates or a naive instant
    """
    solar_position = compute_solar_position(instant, point.latitude, point.longitude)

    if solar_position.altitude <= 0:
        logger.info("Sun is below horizon, point is in shadow")
        return ShadowResult(
            in_sunlight=False,
            method=ShadowMethod.ASTRONOMICAL,
            details=BELOW_HORIZON_DETAILS,
            solar_position=solar_position
        )

    logger.info("Starting ray tracing calculation...")
    start_time = time.perf_counter()
    try:
        candidates = building_source.query_buildings(point, query_radius_m)
        in_shadow = is_occluded(point, solar_position, candidates, ray_length_km)
    except Exception as e:
        logger.error(f"Error in shadow calculation, falling back to simple check: {e}", exc_info=True)
        return ShadowResult(
            in_sunlight=solar_position.altitude > 0,
            method=ShadowMethod.FALLBACK,
            details=FALLBACK_DETAILS,
            solar_position=solar_position
        )

    elapsed_ms = (time.perf_counter() - start_time) * 1000.0
    logger.info(
        f"Ray tracing completed in {elapsed_ms:.2f}ms: {'in shadow' if in_shadow else 'in sunlight'}"
    )
    return ShadowResult(
        in_sunlight=not in_shadow,
        method=ShadowMethod.RAY_TRACING,
        details=f"Calculated with 3D ray tracing in {elapsed_ms:.2f}ms",
        solar_position=solar_position
    )
