"""
Sunlight check workflow for map applications.

This module wires the core engines into application-level operations:
loading building data, checking a point and building the visualization
payload, and the placement controller that drives checks from UI events.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from core import (
    InsolationCalculator,
    map_to_scene_lighting,
    project_3d_ray,
    resolve_sunlight_status,
    subdivide_ray,
)
from importers import GeoJSONImporter, StaticBuildingSource
from models.building import GroundPoint
from models.calculation_result import Ray3DPoint, RaySegment, SceneLighting, ShadowResult, SunlightTimeline
from models.solar import SolarPosition
from utils.config_loader import get_config_value

logger = logging.getLogger(__name__)

SUNLIT_COLOR = "#FFDD00"
SHADOW_COLOR = "#3F51B5"
SUNLIT_DASH = (2, 2)
SHADOW_DASH = (1, 1)


def import_building_model(file_path: str, config: dict) -> StaticBuildingSource:
    """
    Import building footprints from file.

    Args:
        file_path: Path to building data file
        config: Configuration dictionary

    Returns:
        Queryable building source
    """
    logger.info(f"Starting import of building data: {file_path}")
    file_ext = Path(file_path).suffix.lower()

    if file_ext in ('.geojson', '.json'):
        importer = GeoJSONImporter(
            file_path,
            layer_id=get_config_value(config, 'buildings.layer_id'),
            height_property=get_config_value(config, 'buildings.height_property', 'height'),
            min_height_m=get_config_value(config, 'buildings.min_height_m', 0.0)
        )
    else:
        logger.error(f"Unsupported file format: {file_ext}")
        raise ValueError(f"Unsupported file format: {file_ext}")

    source = importer.to_source()
    logger.info(f"Import complete. Indexed {len(source)} building(s)")
    return source


@dataclass(frozen=True)
class RayVisualization:
    """Everything a renderer needs to draw the sun ray of a checked point."""

    origin: Tuple[float, float]
    ray_end: Optional[Ray3DPoint] = None
    segments: Tuple[RaySegment, ...] = ()
    color: str = SHADOW_COLOR
    dash_pattern: Tuple[int, int] = SHADOW_DASH

    @property
    def is_empty(self) -> bool:
        return self.ray_end is None


def build_ray_visualization(
    point: GroundPoint,
    solar_position: SolarPosition,
    in_sunlight: bool,
    distance_km: float = 1.0,
    segment_count: int = 30
) -> RayVisualization:
    """
    Project the sun ray of a point and split it into segments.

    Returns an empty visualization when the sun is below the horizon.
    """
    color = SUNLIT_COLOR if in_sunlight else SHADOW_COLOR
    dash = SUNLIT_DASH if in_sunlight else SHADOW_DASH

    if solar_position.altitude <= 0:
        return RayVisualization(origin=point.lng_lat, color=color, dash_pattern=dash)

    ray_end = project_3d_ray(
        point.lng_lat,
        distance_km,
        solar_position.azimuth_degrees,
        solar_position.altitude_degrees
    )
    segments = subdivide_ray(point.lng_lat, ray_end.position, 0.0, ray_end.elevation, segment_count)
    return RayVisualization(
        origin=point.lng_lat,
        ray_end=ray_end,
        segments=tuple(segments),
        color=color,
        dash_pattern=dash
    )


@dataclass(frozen=True)
class SunlightCheck:
    """Result of checking one point at one instant."""

    point: GroundPoint
    instant: datetime
    result: ShadowResult
    lighting: SceneLighting
    ray: RayVisualization


def check_sunlight(
    point: GroundPoint,
    instant: datetime,
    building_source,
    config: Optional[dict] = None
) -> SunlightCheck:
    """
    Resolve the sunlight status of a point and prepare its visualization.

    Args:
        point: Ground point
        instant: Timezone-aware datetime
        building_source: Object with query_buildings(center, radius_m)
        config: Configuration dictionary

    Returns:
        SunlightCheck
    """
    config = config or {}
    logger.info(f"Checking sunlight at {point.lng_lat} for {instant.isoformat()}")

    result = resolve_sunlight_status(
        point,
        instant,
        building_source,
        query_radius_m=get_config_value(config, 'calculation.ray_tracing.query_radius_m'),
        ray_length_km=get_config_value(config, 'calculation.ray_tracing.ray_length_km')
    )
    solar_position = result.solar_position

    ray = build_ray_visualization(
        point,
        solar_position,
        result.in_sunlight,
        distance_km=get_config_value(config, 'calculation.visualization.ray_distance_km'),
        segment_count=get_config_value(config, 'calculation.visualization.segment_count')
    )

    logger.info(f"Point {point.lng_lat}: {result.status_text()} (method: {result.method})")
    return SunlightCheck(
        point=point,
        instant=instant,
        result=result,
        lighting=map_to_scene_lighting(solar_position),
        ray=ray
    )


def calculate_sunlight_timeline(
    point: GroundPoint,
    calculation_date: date,
    building_source,
    config: Optional[dict] = None
) -> SunlightTimeline:
    """
    Calculate the sunlit periods of a point over one day.

    Args:
        point: Ground point
        calculation_date: Date for calculation
        building_source: Object with query_buildings(center, radius_m)
        config: Configuration dictionary

    Returns:
        SunlightTimeline
    """
    config = config or {}
    calculator = InsolationCalculator(
        latitude=point.latitude,
        longitude=point.longitude,
        building_source=building_source,
        timezone=get_config_value(config, 'location.timezone', 'UTC'),
        time_step_minutes=get_config_value(config, 'calculation.insolation.time_step_minutes'),
        query_radius_m=get_config_value(config, 'calculation.ray_tracing.query_radius_m'),
        ray_length_km=get_config_value(config, 'calculation.ray_tracing.ray_length_km')
    )
    return calculator.calculate_sunlight_timeline(calculation_date)


class PlacementState(str, Enum):
    IDLE = 'idle'
    PLACED = 'placed'


class PlacementEvent(str, Enum):
    CHECK_REQUESTED = 'check_requested'
    LOCATION_PICKED = 'location_picked'
    RESET_REQUESTED = 'reset_requested'
    TIME_CHANGED = 'time_changed'


@dataclass
class PlacementController:
    """
    Point placement state machine.

    idle --check_requested--> placed   (point checked at the view center)
    placed --time_changed--> placed    (point re-checked at the new time)
    any --location_picked--> idle      (view moved, selection cleared)
    any --reset_requested--> idle      (selection cleared)
    """

    building_source: object
    current_time: datetime
    view_center: GroundPoint
    config: dict = field(default_factory=dict)
    state: PlacementState = PlacementState.IDLE
    selected: Optional[SunlightCheck] = None
    history: List[Tuple[PlacementEvent, PlacementState]] = field(default_factory=list)

    def handle(self, event: PlacementEvent, **payload) -> Optional[SunlightCheck]:
        """
        Apply an event and return the current check, if a point is placed.

        Payload:
            check_requested: optional ``point`` (defaults to the view center)
            location_picked: ``point`` of the new view center
            time_changed: ``instant`` of the new time
        """
        event = PlacementEvent(event)

        if event == PlacementEvent.CHECK_REQUESTED:
            point = payload.get('point') or self.view_center
            self.selected = check_sunlight(point, self.current_time, self.building_source, self.config)
            self.state = PlacementState.PLACED
        elif event == PlacementEvent.LOCATION_PICKED:
            self.view_center = payload['point']
            self._clear()
        elif event == PlacementEvent.RESET_REQUESTED:
            self._clear()
        elif event == PlacementEvent.TIME_CHANGED:
            self.current_time = payload['instant']
            if self.state == PlacementState.PLACED and self.selected is not None:
                self.selected = check_sunlight(
                    self.selected.point, self.current_time, self.building_source, self.config
                )

        self.history.append((event, self.state))
        logger.debug(f"Placement event {event.value} -> {self.state.value}")
        return self.selected

    def _clear(self):
        self.state = PlacementState.IDLE
        self.selected = None
