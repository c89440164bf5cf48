"""
Sun position calculator for determining solar angles at any given time and location.

Positions use the low-precision solar ephemeris (Julian day, mean anomaly,
ecliptic longitude, equatorial coordinates, sidereal time). Daily events
(sunrise, dusk, golden hour, ...) come from the astral library.

Azimuths returned here are south-referenced (0 = south, 90 = west); use
``SolarPosition.compass_bearing`` wherever a map bearing is needed.
"""

import logging
import math
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Tuple

import pytz
from astral import Observer, SunDirection
from astral import sun as astral_sun

from models.solar import SolarPosition, SunTimes
from .errors import InvalidInputError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0
J1970 = 2440588.0
J2000 = 2451545.0

# Obliquity of the ecliptic
OBLIQUITY = math.radians(23.4397)

# Depression angles (degrees below the horizon) for twilight boundaries
CIVIL_DEPRESSION = 6.0
NAUTICAL_DEPRESSION = 12.0
ASTRONOMICAL_DEPRESSION = 18.0

# Geometric sun elevations (degrees) ending sunrise and starting the golden hour
SUNRISE_END_ELEVATION = -0.3
GOLDEN_HOUR_ELEVATION = 6.0


def _days_since_j2000(instant: datetime) -> float:
    julian_date = instant.timestamp() / SECONDS_PER_DAY - 0.5 + J1970
    return julian_date - J2000


def _solar_mean_anomaly(d: float) -> float:
    return math.radians(357.5291 + 0.98560028 * d)


def _ecliptic_longitude(mean_anomaly: float) -> float:
    center = math.radians(
        1.9148 * math.sin(mean_anomaly)
        + 0.02 * math.sin(2 * mean_anomaly)
        + 0.0003 * math.sin(3 * mean_anomaly)
    )
    perihelion = math.radians(102.9372)
    return mean_anomaly + center + perihelion + math.pi


def _sun_equatorial_coordinates(d: float) -> Tuple[float, float]:
    """Declination and right ascension of the sun (radians), ecliptic latitude 0."""
    longitude = _ecliptic_longitude(_solar_mean_anomaly(d))
    declination = math.asin(math.sin(OBLIQUITY) * math.sin(longitude))
    right_ascension = math.atan2(math.sin(longitude) * math.cos(OBLIQUITY), math.cos(longitude))
    return declination, right_ascension


def _sidereal_time(d: float, west_longitude: float) -> float:
    return math.radians(280.16 + 360.9856235 * d) - west_longitude


def validate_location(latitude: float, longitude: float):
    """
    Reject coordinates that cannot describe a point on Earth.

    Raises:
        InvalidInputError: On non-numeric, NaN/infinite or out-of-range values
    """
    for name, value, limit in (('latitude', latitude, 90.0), ('longitude', longitude, 180.0)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be finite, got {value!r}")
        if abs(value) > limit:
            raise InvalidInputError(f"{name} out of range [-{limit}, {limit}]: {value}")


def validate_instant(instant: datetime):
    """
    Reject instants that are not timezone-aware datetimes.

    Raises:
        InvalidInputError: On naive or non-datetime values
    """
    if not isinstance(instant, datetime):
        raise InvalidInputError(f"instant must be a datetime, got {type(instant).__name__}")
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise InvalidInputError("instant must be timezone-aware")


def compute_solar_position(instant: datetime, latitude: float, longitude: float) -> SolarPosition:
    """
    Calculate the apparent sun position for an instant and location.

    Args:
        instant: Timezone-aware datetime
        latitude: Latitude in decimal degrees (positive for North)
        longitude: Longitude in decimal degrees (positive for East)

    Returns:
        SolarPosition with south-referenced azimuth

    Raises:
        InvalidInputError: On invalid coordinates or a naive instant
    """
    validate_instant(instant)
    validate_location(latitude, longitude)

    west_longitude = math.radians(-longitude)
    phi = math.radians(latitude)
    d = _days_since_j2000(instant)

    declination, right_ascension = _sun_equatorial_coordinates(d)
    hour_angle = _sidereal_time(d, west_longitude) - right_ascension

    altitude = math.asin(
        math.sin(phi) * math.sin(declination)
        + math.cos(phi) * math.cos(declination) * math.cos(hour_angle)
    )
    azimuth = math.atan2(
        math.sin(hour_angle),
        math.cos(hour_angle) * math.sin(phi) - math.tan(declination) * math.cos(phi)
    )

    if math.isnan(altitude) or math.isnan(azimuth):
        raise InvalidInputError(
            f"Solar position undefined for {instant.isoformat()} at ({latitude}, {longitude})"
        )

    return SolarPosition.from_radians(altitude, azimuth)


def _sun_event(name: str, func: Callable, *args, **kwargs):
    try:
        return func(*args, **kwargs)
    except ValueError as e:
        # astral raises ValueError when the sun never reaches the requested elevation
        logger.debug(f"Sun event '{name}' undefined: {e}")
        return None


def compute_sun_times(
    day: date,
    latitude: float,
    longitude: float,
    tzinfo=pytz.utc
) -> SunTimes:
    """
    Calculate the named solar events of a date.

    Args:
        day: Calendar date
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        tzinfo: Timezone the date is expressed in and the results are returned in

    Returns:
        SunTimes; events the sun never reaches on that date are None
    """
    validate_location(latitude, longitude)
    if isinstance(day, datetime):
        day = day.date()

    observer = Observer(latitude=latitude, longitude=longitude)

    def crossing(name, elevation, direction):
        return _sun_event(
            name, astral_sun.time_at_elevation, observer, elevation, day,
            direction=direction, tzinfo=tzinfo, with_refraction=False
        )

    return SunTimes(
        date=day,
        tz=tzinfo,
        # solar midnight before the solar noon of the date
        nadir=_sun_event('nadir', astral_sun.midnight, observer, day, tzinfo=tzinfo),
        night_end=_sun_event(
            'night_end', astral_sun.dawn, observer, day,
            depression=ASTRONOMICAL_DEPRESSION, tzinfo=tzinfo
        ),
        nautical_dawn=_sun_event(
            'nautical_dawn', astral_sun.dawn, observer, day,
            depression=NAUTICAL_DEPRESSION, tzinfo=tzinfo
        ),
        dawn=_sun_event(
            'dawn', astral_sun.dawn, observer, day,
            depression=CIVIL_DEPRESSION, tzinfo=tzinfo
        ),
        sunrise=_sun_event('sunrise', astral_sun.sunrise, observer, day, tzinfo=tzinfo),
        sunrise_end=crossing('sunrise_end', SUNRISE_END_ELEVATION, SunDirection.RISING),
        golden_hour_end=crossing('golden_hour_end', GOLDEN_HOUR_ELEVATION, SunDirection.RISING),
        solar_noon=_sun_event('solar_noon', astral_sun.noon, observer, day, tzinfo=tzinfo),
        golden_hour=crossing('golden_hour', GOLDEN_HOUR_ELEVATION, SunDirection.SETTING),
        sunset_start=crossing('sunset_start', SUNRISE_END_ELEVATION, SunDirection.SETTING),
        sunset=_sun_event('sunset', astral_sun.sunset, observer, day, tzinfo=tzinfo),
        dusk=_sun_event(
            'dusk', astral_sun.dusk, observer, day,
            depression=CIVIL_DEPRESSION, tzinfo=tzinfo
        ),
        nautical_dusk=_sun_event(
            'nautical_dusk', astral_sun.dusk, observer, day,
            depression=NAUTICAL_DEPRESSION, tzinfo=tzinfo
        ),
        night=_sun_event(
            'night', astral_sun.dusk, observer, day,
            depression=ASTRONOMICAL_DEPRESSION, tzinfo=tzinfo
        ),
    )


class SunPositionCalculator:
    """
    Calculates sun position and daily events for a fixed location.

    Naive datetimes passed to this class are interpreted in its timezone.
    """

    def __init__(self, latitude: float, longitude: float, timezone: str = "UTC"):
        """
        Initialize sun position calculator.

        Args:
            latitude: Latitude in decimal degrees (positive for North)
            longitude: Longitude in decimal degrees (positive for East)
            timezone: Timezone name (e.g., "Europe/Amsterdam")
        """
        validate_location(latitude, longitude)
        self.latitude = latitude
        self.longitude = longitude
        self.tz = pytz.timezone(timezone)

    def localize(self, dt: datetime) -> datetime:
        """Attach the calculator timezone to naive datetimes."""
        if dt.tzinfo is None:
            return self.tz.localize(dt)
        return dt

    def get_sun_position(self, dt: datetime) -> SolarPosition:
        """
        Calculate sun position for a given datetime.

        Args:
            dt: Datetime object (naive values are taken as local time)

        Returns:
            SolarPosition
        """
        return compute_solar_position(self.localize(dt), self.latitude, self.longitude)

    def is_sun_above_horizon(self, dt: datetime) -> bool:
        return self.get_sun_position(dt).is_above_horizon

    def get_sun_times(self, date_obj: date) -> SunTimes:
        return compute_sun_times(date_obj, self.latitude, self.longitude, tzinfo=self.tz)

    def get_sunrise_sunset(self, date_obj: date) -> Tuple[Optional[datetime], Optional[datetime]]:
        """
        Get sunrise and sunset times for a given date.

        Returns:
            Tuple of (sunrise, sunset); either is None during polar day or night
        """
        times = self.get_sun_times(date_obj)
        return times.sunrise, times.sunset

    def get_time_range(self, date_obj: date) -> Tuple[datetime, datetime]:
        """Daylight range of the date, or the full day without sunrise/sunset."""
        return self.get_sun_times(date_obj).daylight_range()

    def get_daylight_hours(self, date_obj: date) -> float:
        """
        Calculate total daylight hours for a given date.

        Polar day counts as 24 hours, polar night as 0.
        """
        times = self.get_sun_times(date_obj)
        if times.has_regular_day:
            delta = times.sunset - times.sunrise
            if delta < timedelta(0):
                delta += timedelta(days=1)
            return delta.total_seconds() / 3600.0

        return 24.0 if self.is_sun_above_horizon(times.solar_noon) else 0.0
