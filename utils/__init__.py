"""
Utility functions and helpers.
"""

from .config_loader import load_config, get_config_value
from .geometry_utils import (
    cardinal_direction,
    destination_point,
    ground_distance,
    meters_to_degrees_longitude,
    normalize_degrees,
    reciprocal_bearing,
)
from .log_setup import setup_logging

__all__ = [
    'load_config',
    'get_config_value',
    'cardinal_direction',
    'destination_point',
    'ground_distance',
    'meters_to_degrees_longitude',
    'normalize_degrees',
    'reciprocal_bearing',
    'setup_logging',
]
