"""
Daily sunlight timeline for a ground point.

Steps through the daylight range of a date and resolves the sunlight status
at every step, taking surrounding buildings into account.
"""

from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple
import logging

from models.building import GroundPoint
from models.calculation_result import ShadowResult, SunlightTimeline
from .occlusion import DEFAULT_QUERY_RADIUS_M, OCCLUSION_RAY_LENGTH_KM
from .sun_position import SunPositionCalculator
from .sunlight_resolver import resolve_sunlight_status

logger = logging.getLogger(__name__)


class InsolationCalculator:
    """
    Calculates how long a point receives direct sunlight during a day.
    """

    def __init__(
        self,
        latitude: float,
        longitude: float,
        building_source,
        timezone: str = "UTC",
        time_step_minutes: float = 10,
        query_radius_m: float = DEFAULT_QUERY_RADIUS_M,
        ray_length_km: float = OCCLUSION_RAY_LENGTH_KM
    ):
        """
        Initialize insolation calculator.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            building_source: Object with query_buildings(center, radius_m)
            timezone: Timezone name the calculation date is expressed in
            time_step_minutes: Sampling step in minutes
            query_radius_m: Radius of the nearby building query
            ray_length_km: Length of the ground ray toward the sun
        """
        if time_step_minutes <= 0:
            raise ValueError(f"time_step_minutes must be positive, got {time_step_minutes}")
        self.point = GroundPoint(latitude=latitude, longitude=longitude)
        self.sun_calculator = SunPositionCalculator(latitude, longitude, timezone)
        self.building_source = building_source
        self.time_step = timedelta(minutes=time_step_minutes)
        self.query_radius_m = query_radius_m
        self.ray_length_km = ray_length_km

    def calculate_sunlight_timeline(self, calculation_date: date) -> SunlightTimeline:
        """
        Calculate sunlit periods for a date.

        The daylight range runs from sunrise to sunset; during polar day or
        night the whole day is sampled.

        Args:
            calculation_date: Date for calculation

        Returns:
            SunlightTimeline with samples, sunlit periods and total duration
        """
        sun_times = self.sun_calculator.get_sun_times(calculation_date)
        start, end = sun_times.daylight_range()
        full_day = not sun_times.has_regular_day

        if full_day:
            logger.info(
                f"No regular sunrise/sunset on {calculation_date} at {self.point.lng_lat}, sampling the full day"
            )

        samples: List[Tuple[datetime, ShadowResult]] = []
        current_time = start
        while current_time < end:
            result = resolve_sunlight_status(
                self.point,
                current_time,
                self.building_source,
                query_radius_m=self.query_radius_m,
                ray_length_km=self.ray_length_km
            )
            samples.append((current_time, result))
            current_time += self.time_step

        periods = self._collect_periods(samples, end)
        total_seconds = sum((stop - begin).total_seconds() for begin, stop in periods)

        timeline = SunlightTimeline(
            calculation_date=calculation_date,
            start=start,
            end=end,
            time_step_minutes=self.time_step.total_seconds() / 60.0,
            full_day_range=full_day,
            samples=samples,
            periods=periods,
            duration_seconds=total_seconds,
            duration_formatted=self._format_duration(total_seconds),
            details={
                'sunrise': sun_times.sunrise,
                'sunset': sun_times.sunset,
                'solar_noon': sun_times.solar_noon,
                'total_daylight_hours': self.sun_calculator.get_daylight_hours(calculation_date),
            }
        )
        logger.info(
            f"Sunlight on {calculation_date}: {timeline.duration_formatted} in {len(periods)} period(s)"
        )
        return timeline

    def _collect_periods(
        self,
        samples: List[Tuple[datetime, ShadowResult]],
        end: datetime
    ) -> List[Tuple[datetime, datetime]]:
        """Merge consecutive sunlit samples into (start, end) periods clipped to the range end."""
        periods = []
        period_start: Optional[datetime] = None

        for sample_time, result in samples:
            if result.in_sunlight and period_start is None:
                period_start = sample_time
            elif not result.in_sunlight and period_start is not None:
                periods.append((period_start, sample_time))
                period_start = None

        if period_start is not None:
            last_time = samples[-1][0]
            periods.append((period_start, min(last_time + self.time_step, end)))

        return periods

    def _format_duration(self, seconds: float) -> str:
        """
        Format duration in seconds to HH:MM:SS format.
        """
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = int(seconds % 60)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
