"""
GeoJSON importer for building footprints with extrusion heights.

Reads a FeatureCollection (e.g., exported from a vector tile building layer)
and keeps the features of the configured layer.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.errors import BuildingDataError
from models.building import BuildingFootprint
from .base_importer import BaseImporter

logger = logging.getLogger(__name__)


class GeoJSONImporter(BaseImporter):
    """Imports building footprints from a GeoJSON FeatureCollection."""

    def __init__(
        self,
        file_path: str,
        layer_id: Optional[str] = None,
        height_property: str = 'height',
        min_height_m: float = 0.0
    ):
        """
        Initialize GeoJSON importer.

        Args:
            file_path: Path to .geojson/.json file
            layer_id: Keep only features of this layer (None keeps all)
            height_property: Feature property holding the height in meters
            min_height_m: Drop features lower than this height
        """
        super().__init__(file_path)
        self.layer_id = layer_id
        self.height_property = height_property
        self.min_height_m = min_height_m

    def import_buildings(self) -> List[BuildingFootprint]:
        """
        Import building footprints from file.

        Returns:
            List of BuildingFootprint objects

        Raises:
            BuildingDataError: If the file cannot be read or is not a FeatureCollection
        """
        logger.info(f"Importing buildings from GeoJSON: {self.file_path}")
        try:
            with open(Path(self.file_path), 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise BuildingDataError(f"Cannot read GeoJSON file {self.file_path}: {e}") from e

        self.buildings = self.parse_feature_collection(data)
        logger.info(f"Imported {len(self.buildings)} building(s) from {self.file_path}")
        return self.buildings

    def parse_feature_collection(self, data: Dict[str, Any]) -> List[BuildingFootprint]:
        """Convert a FeatureCollection mapping into building footprints."""
        if not isinstance(data, dict) or data.get('type') != 'FeatureCollection':
            raise BuildingDataError("GeoJSON root must be a FeatureCollection")

        buildings = []
        skipped = 0
        for index, feature in enumerate(data.get('features') or []):
            if not isinstance(feature, dict) or not feature.get('geometry'):
                skipped += 1
                continue
            if self.layer_id is not None and self._feature_layer(feature) != self.layer_id:
                skipped += 1
                continue

            properties = dict(feature.get('properties') or {})
            height = self._parse_height(properties.get(self.height_property))
            if height is not None and height < self.min_height_m:
                skipped += 1
                continue

            feature_id = feature.get('id', properties.get('id', f"building-{index}"))
            buildings.append(BuildingFootprint(
                id=str(feature_id),
                geometry=feature['geometry'],
                height=height,
                properties=properties
            ))

        if skipped:
            logger.debug(f"Skipped {skipped} feature(s) (no geometry, not in layer '{self.layer_id}' or too low)")
        return buildings

    @staticmethod
    def _feature_layer(feature: Dict[str, Any]) -> Optional[str]:
        layer = feature.get('layer')
        if isinstance(layer, dict):
            return layer.get('id')
        if isinstance(layer, str):
            return layer
        return (feature.get('properties') or {}).get('layer')

    @staticmethod
    def _parse_height(value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
