"""
Base classes for building data: the query interface used by the sunlight
engine and the file importer interface.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

from models.building import BuildingFootprint, GroundPoint


class BuildingSource(ABC):
    """Provides building footprints with heights around a point."""

    @abstractmethod
    def query_buildings(self, center: GroundPoint, radius_m: float) -> Iterable[BuildingFootprint]:
        """
        Get buildings whose footprint lies within a radius of a point.

        Args:
            center: Query center
            radius_m: Search radius in meters

        Returns:
            Building footprints with heights in meters
        """
        pass


class BaseImporter(ABC):
    """Base class for all building data importers."""

    def __init__(self, file_path: str):
        """
        Initialize importer.

        Args:
            file_path: Path to building data file
        """
        self.file_path = file_path
        self.buildings: List[BuildingFootprint] = []

    @abstractmethod
    def import_buildings(self) -> List[BuildingFootprint]:
        """
        Import building footprints from file.

        Returns:
            List of BuildingFootprint objects
        """
        pass

    def to_source(self) -> BuildingSource:
        """Import (if not done yet) and wrap the buildings in a queryable source."""
        from .building_index import StaticBuildingSource

        if not self.buildings:
            self.import_buildings()
        return StaticBuildingSource(self.buildings)
