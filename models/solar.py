"""
Solar value models: SolarPosition, SunTimes.

Azimuth convention: ``azimuth``/``azimuth_degrees`` are south-referenced
(0 = south, 90 = west, 180 = north, 270 = east), normalized into
[0, 2*pi) / [0, 360). ``compass_bearing`` converts to the map convention
(0 = north, 90 = east).
"""

import math
from dataclasses import dataclass, fields
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, Optional, Tuple

import pytz


@dataclass(frozen=True)
class SolarPosition:
    """Apparent direction of the sun for one instant and location."""

    altitude: float  # radians, > 0 above horizon
    azimuth: float  # radians, south-referenced
    altitude_degrees: float
    azimuth_degrees: float

    @classmethod
    def from_radians(cls, altitude: float, azimuth: float) -> 'SolarPosition':
        """Build a position from raw radians, normalizing the azimuth."""
        azimuth = azimuth % (2 * math.pi)
        return cls(
            altitude=altitude,
            azimuth=azimuth,
            altitude_degrees=math.degrees(altitude),
            azimuth_degrees=math.degrees(azimuth) % 360.0
        )

    @classmethod
    def from_degrees(cls, altitude_degrees: float, azimuth_degrees: float) -> 'SolarPosition':
        """Build a position from degrees (south-referenced azimuth)."""
        azimuth_degrees = azimuth_degrees % 360.0
        return cls(
            altitude=math.radians(altitude_degrees),
            azimuth=math.radians(azimuth_degrees),
            altitude_degrees=altitude_degrees,
            azimuth_degrees=azimuth_degrees
        )

    @property
    def compass_bearing(self) -> float:
        """Direction of the sun as a compass bearing in degrees (0 = north)."""
        return (self.azimuth_degrees + 180.0) % 360.0

    @property
    def is_above_horizon(self) -> bool:
        return self.altitude > 0


# Named daily events, in chronological order for a regular day
SUN_EVENT_NAMES = (
    'night_end',
    'nautical_dawn',
    'dawn',
    'sunrise',
    'sunrise_end',
    'golden_hour_end',
    'solar_noon',
    'golden_hour',
    'sunset_start',
    'sunset',
    'dusk',
    'nautical_dusk',
    'night',
)


@dataclass(frozen=True)
class SunTimes:
    """
    Named solar events for one date and location.

    Events the sun never reaches on that date (polar day or night) are None.
    """

    date: date
    tz: tzinfo
    nadir: Optional[datetime] = None  # solar midnight preceding solar_noon, may fall on the previous date
    night_end: Optional[datetime] = None  # astronomical dawn, sun at -18 deg
    nautical_dawn: Optional[datetime] = None  # sun at -12 deg
    dawn: Optional[datetime] = None  # civil dawn, sun at -6 deg
    sunrise: Optional[datetime] = None
    sunrise_end: Optional[datetime] = None  # sun at -0.3 deg, rising
    golden_hour_end: Optional[datetime] = None  # sun at +6 deg, rising
    solar_noon: Optional[datetime] = None
    golden_hour: Optional[datetime] = None  # sun at +6 deg, setting
    sunset_start: Optional[datetime] = None  # sun at -0.3 deg, setting
    sunset: Optional[datetime] = None
    dusk: Optional[datetime] = None
    nautical_dusk: Optional[datetime] = None
    night: Optional[datetime] = None

    def is_defined(self, name: str) -> bool:
        """Whether the named event happens on this date."""
        return getattr(self, name) is not None

    def undefined_events(self) -> Tuple[str, ...]:
        names = [f.name for f in fields(self) if f.name not in ('date', 'tz')]
        return tuple(name for name in names if getattr(self, name) is None)

    def as_dict(self) -> Dict[str, Optional[datetime]]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name not in ('date', 'tz')}

    def full_day_range(self) -> Tuple[datetime, datetime]:
        """Local midnight to the following midnight."""
        start = _localize(self.tz, datetime.combine(self.date, time(0, 0)))
        end = _localize(self.tz, datetime.combine(self.date + timedelta(days=1), time(0, 0)))
        return start, end

    def daylight_range(self) -> Tuple[datetime, datetime]:
        """
        Sunrise to sunset, or the full day when either event is undefined.

        Returns:
            Tuple of (start, end) timezone-aware datetimes
        """
        if self.sunrise is None or self.sunset is None or self.sunset <= self.sunrise:
            return self.full_day_range()
        return self.sunrise, self.sunset

    @property
    def has_regular_day(self) -> bool:
        """True if the sun both rises and sets on this date."""
        return self.sunrise is not None and self.sunset is not None


def _localize(tz: tzinfo, naive: datetime) -> datetime:
    # pytz zones need localize() to pick the right UTC offset
    if isinstance(tz, pytz.BaseTzInfo):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)
