"""
Configuration loading utilities.
"""

import logging
import yaml
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'location': {
        'timezone': 'UTC',
    },
    'calculation': {
        'ray_tracing': {
            'query_radius_m': 500.0,
            'ray_length_km': 2.0,
        },
        'visualization': {
            'ray_distance_km': 1.0,
            'segment_count': 30,
        },
        'insolation': {
            'time_step_minutes': 10,
        },
    },
    'buildings': {
        'layer_id': None,
        'height_property': 'height',
        'min_height_m': 0.0,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
    'reports': {
        'dpi': 150,
    },
}


def load_config(config_path: str = 'config.yaml') -> dict:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary (empty if the file is missing or unreadable)
    """
    config_file = Path(config_path)

    if not config_file.exists():
        logger.debug(f"Config file not found: {config_file}")
        return {}

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading config {config_file}: {e}")
        return {}


def get_config_value(config: dict, key_path: str, default: Any = None) -> Any:
    """
    Get configuration value using dot-notation path.

    Falls back to DEFAULT_CONFIG before the explicit default.

    Args:
        config: Configuration dictionary
        key_path: Dot-separated path (e.g., 'calculation.insolation.time_step_minutes')
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    for source in (config, DEFAULT_CONFIG):
        value = _lookup(source, key_path)
        if value is not _MISSING:
            return value
    return default


_MISSING = object()


def _lookup(config: dict, key_path: str) -> Any:
    value = config
    for key in key_path.split('.'):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return _MISSING
    return value
