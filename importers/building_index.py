"""
In-memory building source backed by a shapely STRtree.
"""

import logging
import math
from typing import Iterable, List

from shapely.geometry import Point, box, shape
from shapely.ops import nearest_points
from shapely.strtree import STRtree

from models.building import BuildingFootprint, GroundPoint
from utils.geometry_utils import METERS_PER_DEGREE, ground_distance
from .base_importer import BuildingSource

logger = logging.getLogger(__name__)

# Keeps the longitude span finite close to the poles
_MIN_COS_LATITUDE = 0.01


class StaticBuildingSource(BuildingSource):
    """
    Building source over a fixed collection of footprints.

    Candidates are prefiltered with a degree bounding box and then kept when
    the geodesic distance from the center to the nearest footprint point is
    within the radius.
    """

    def __init__(self, buildings: Iterable[BuildingFootprint]):
        self.buildings: List[BuildingFootprint] = []
        geometries = []

        for building in buildings:
            try:
                geometry = shape(building.geometry)
            except Exception as e:
                logger.warning(f"Building {building.id} has unreadable geometry, not indexed: {e}")
                continue
            if geometry.is_empty:
                logger.warning(f"Building {building.id} has empty geometry, not indexed")
                continue
            self.buildings.append(building)
            geometries.append(geometry)

        self._geometries = geometries
        self._tree = STRtree(geometries)
        logger.info(f"Indexed {len(self.buildings)} building(s)")

    def __len__(self) -> int:
        return len(self.buildings)

    def query_buildings(self, center: GroundPoint, radius_m: float) -> List[BuildingFootprint]:
        """
        Get buildings within radius_m meters of center.

        Args:
            center: Query center
            radius_m: Search radius in meters

        Returns:
            Matching building footprints in index order
        """
        if not self.buildings:
            return []

        dlat = radius_m / METERS_PER_DEGREE
        cos_lat = max(math.cos(math.radians(center.latitude)), _MIN_COS_LATITUDE)
        dlng = radius_m / (METERS_PER_DEGREE * cos_lat)
        search_box = box(
            center.longitude - dlng, center.latitude - dlat,
            center.longitude + dlng, center.latitude + dlat
        )

        center_point = Point(center.lng_lat)
        result = []
        for index in sorted(int(i) for i in self._tree.query(search_box)):
            geometry = self._geometries[index]
            if geometry.contains(center_point):
                distance = 0.0
            else:
                nearest, _ = nearest_points(geometry, center_point)
                distance = ground_distance(center.lng_lat, (nearest.x, nearest.y))
            if distance <= radius_m:
                result.append(self.buildings[index])

        logger.debug(f"Found {len(result)} building(s) within {radius_m}m of {center.lng_lat}")
        return result
