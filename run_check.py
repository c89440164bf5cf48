"""
Sunlight Check - Command Line Entry Point

Checks whether a point is in direct sunlight or in the shadow of nearby
buildings at a given local time.

Usage:
    python run_check.py --lat 51.9244 --lng 4.4626 --time "2024-06-21 13:30" \
        --timezone Europe/Amsterdam --buildings buildings.geojson
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

import pytz

from core.errors import SunlightError
from models.building import GroundPoint
from reports.diagram_generator import DiagramGenerator
from reports.geojson_export import (
    feature_collection,
    ray_to_feature,
    segment_to_feature,
    write_geojson,
)
from utils.config_loader import get_config_value, load_config
from utils.geometry_utils import cardinal_direction
from utils.log_setup import setup_logging
from workflow import calculate_sunlight_timeline, check_sunlight, import_building_model
from importers import StaticBuildingSource

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check direct sunlight at a point")
    parser.add_argument('--lat', type=float, required=True, help="Latitude in decimal degrees")
    parser.add_argument('--lng', type=float, required=True, help="Longitude in decimal degrees")
    parser.add_argument('--time', required=True, help="Local time as 'YYYY-MM-DD HH:MM'")
    parser.add_argument('--timezone', help="Timezone name (default: location.timezone from config)")
    parser.add_argument('--buildings', help="GeoJSON file with building footprints")
    parser.add_argument('--config', default='config.yaml', help="Path to configuration file")
    parser.add_argument('--timeline', action='store_true', help="Also calculate the sunlight timeline of the day")
    parser.add_argument('--diagram', help="Save the timeline diagram to this path")
    parser.add_argument('--export-ray', help="Save ray line and segments as GeoJSON to this path")
    return parser.parse_args(argv)


def localize_time(value: str, timezone: str) -> datetime:
    """Parse a local time string and attach the timezone."""
    try:
        naive = datetime.strptime(value, "%Y-%m-%d %H:%M")
    except ValueError as e:
        raise SunlightError(f"Invalid time '{value}', expected 'YYYY-MM-DD HH:MM'") from e
    try:
        tz = pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError as e:
        raise SunlightError(f"Unknown timezone: {timezone}") from e
    return tz.localize(naive)


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    setup_logging(
        get_config_value(config, 'logging.level', 'INFO'),
        get_config_value(config, 'logging.file')
    )

    timezone = args.timezone or get_config_value(config, 'location.timezone', 'UTC')
    config.setdefault('location', {})['timezone'] = timezone

    point = GroundPoint(latitude=args.lat, longitude=args.lng)
    instant = localize_time(args.time, timezone)

    if args.buildings:
        source = import_building_model(args.buildings, config)
    else:
        logger.warning("No building data given, only the sun position will limit sunlight")
        source = StaticBuildingSource([])

    check = check_sunlight(point, instant, source, config)
    position = check.result.solar_position

    print("=== Sunlight Check ===")
    print(f"Location: {point.latitude:.4f}, {point.longitude:.4f}")
    print(f"Time: {instant.isoformat()}")
    print(f"Sun altitude: {position.altitude_degrees:.2f}°")
    print(f"Sun bearing: {position.compass_bearing:.2f}° ({cardinal_direction(position.compass_bearing)})")
    print(f"Status: {check.result.status_text()}")
    print(f"Method: {check.result.method}")
    if check.result.details:
        print(f"Details: {check.result.details}")
    print(f"Lighting: {check.lighting.band}")

    if args.export_ray:
        features = []
        if not check.ray.is_empty:
            features.append(ray_to_feature(check.ray.origin, check.ray.ray_end, position))
            features.extend(segment_to_feature(segment) for segment in check.ray.segments)
        write_geojson(feature_collection(features), args.export_ray)

    if args.timeline or args.diagram:
        timeline = calculate_sunlight_timeline(point, instant.date(), source, config)
        print()
        print(f"--- Sunlight on {timeline.calculation_date} ---")
        if timeline.full_day_range:
            print("No sunrise/sunset on this date, full day sampled")
        for start, end in timeline.periods:
            print(f"  {start.strftime('%H:%M')} - {end.strftime('%H:%M')}")
        print(f"Total: {timeline.duration_formatted}")

        if args.diagram and timeline.samples:
            generator = DiagramGenerator(dpi=get_config_value(config, 'reports.dpi', 150))
            generator.generate_timeline_diagram(timeline, output_path=args.diagram, close=True)
            print(f"Diagram saved to {args.diagram}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return run(args)
    except SunlightError as e:
        logger.error(f"Sunlight check failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
