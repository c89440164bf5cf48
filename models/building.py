"""
Building data models: GroundPoint, BuildingFootprint.
Coordinates are WGS84 degrees, heights are meters above ground.
"""

from typing import Optional, Tuple, Dict, Any
from dataclasses import dataclass, field

from shapely.geometry import Polygon, shape


@dataclass(frozen=True)
class GroundPoint:
    """Location of interest on the ground (no elevation)."""

    latitude: float
    longitude: float

    @property
    def lng_lat(self) -> Tuple[float, float]:
        """Coordinates in GeoJSON (lng, lat) order."""
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class BuildingFootprint:
    """Building footprint with extrusion height, as delivered by a building source."""

    id: str
    geometry: Dict[str, Any] = field(hash=False)  # GeoJSON geometry mapping, (lng, lat) rings
    height: Optional[float] = None  # meters
    properties: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    @property
    def geometry_type(self) -> Optional[str]:
        """GeoJSON geometry type, None if the geometry is missing."""
        if not self.geometry:
            return None
        return self.geometry.get('type')

    def has_valid_height(self) -> bool:
        """True if the building has a positive numeric height."""
        if isinstance(self.height, bool) or not isinstance(self.height, (int, float)):
            return False
        return self.height > 0

    def to_polygon(self) -> Polygon:
        """Build a shapely polygon from the footprint geometry."""
        return shape(self.geometry)

    @classmethod
    def from_ring(cls, id: str, ring, height: Optional[float] = None, **properties) -> 'BuildingFootprint':
        """Create a footprint from a single exterior ring of (lng, lat) vertices."""
        coords = [list(map(float, vertex)) for vertex in ring]
        if coords and coords[0] != coords[-1]:
            coords.append(list(coords[0]))
        return cls(
            id=id,
            geometry={'type': 'Polygon', 'coordinates': [coords]},
            height=height,
            properties=dict(properties)
        )
