"""
Calculation result models for sunlight checks, ray geometry and scene lighting.
"""

from enum import Enum
from typing import List, Dict, Optional, Tuple
from dataclasses import dataclass, field
from datetime import date, datetime

from .solar import SolarPosition


class ShadowMethod(str, Enum):
    """Code path that produced a sunlight status."""

    ASTRONOMICAL = 'astronomical'
    RAY_TRACING = 'ray-tracing'
    FALLBACK = 'fallback'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ShadowResult:
    """Sunlight status of a ground point at one instant."""

    in_sunlight: bool
    method: ShadowMethod
    details: Optional[str] = None
    solar_position: Optional[SolarPosition] = None

    @property
    def is_degraded(self) -> bool:
        """True when occlusion could not be computed precisely."""
        return self.method == ShadowMethod.FALLBACK

    def status_text(self) -> str:
        return 'In Direct Sunlight' if self.in_sunlight else 'In Shadow'


@dataclass(frozen=True)
class Ray3DPoint:
    """Point along a sun ray: ground position plus height above ground."""

    position: Tuple[float, float]  # (lng, lat)
    elevation: float  # meters


@dataclass(frozen=True)
class RaySegment:
    """One extrudable piece of a discretized sun ray."""

    index: int
    start: Tuple[float, float]  # (lng, lat), origin side
    end: Tuple[float, float]  # (lng, lat), sun side
    base_elevation: float  # meters
    top_elevation: float  # meters
    footprint: Tuple[Tuple[float, float], ...]  # closed quad ring


@dataclass(frozen=True)
class AmbientLight:
    color: str
    intensity: float


@dataclass(frozen=True)
class DirectionalLight:
    color: str
    intensity: float
    direction: Tuple[float, float]  # (azimuthal, polar) degrees, azimuthal is a compass bearing
    cast_shadows: bool = True


@dataclass(frozen=True)
class SceneLighting:
    """Ambient and directional light for a 3D map scene."""

    band: str
    ambient: AmbientLight
    directional: DirectionalLight

    def as_sink(self) -> Dict:
        """Flat mapping consumed by a renderer's lighting API."""
        return {
            'ambientColor': self.ambient.color,
            'ambientIntensity': self.ambient.intensity,
            'directionalColor': self.directional.color,
            'directionalIntensity': self.directional.intensity,
            'directionAzimuth': self.directional.direction[0],
            'directionPolar': self.directional.direction[1],
        }


@dataclass(frozen=True)
class MarkerState:
    """Render-agnostic state of the on-map sun marker."""

    visible: bool
    position: Optional[Tuple[float, float]] = None  # (lng, lat)
    style_band: Optional[str] = None
    color: Optional[str] = None
    glow: Optional[str] = None
    size_px: int = 20


@dataclass
class SunlightTimeline:
    """Sampled sunlight status of a point over one day."""

    calculation_date: date
    start: datetime
    end: datetime
    time_step_minutes: float
    full_day_range: bool = False
    samples: List[Tuple[datetime, ShadowResult]] = field(default_factory=list)
    periods: List[Tuple[datetime, datetime]] = field(default_factory=list)
    duration_seconds: float = 0.0
    duration_formatted: str = "00:00:00"
    details: Dict = field(default_factory=dict)

    def sunlit_fraction(self) -> float:
        """Share of samples in direct sunlight."""
        if not self.samples:
            return 0.0
        return sum(1 for _, result in self.samples if result.in_sunlight) / len(self.samples)

    def fallback_count(self) -> int:
        return sum(1 for _, result in self.samples if result.is_degraded)
