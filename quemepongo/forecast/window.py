"""Forecast window trimming."""

import logging
from datetime import datetime, timedelta

from quemepongo.models.common import floor_hour
from quemepongo.models.weather import WeatherDataPoint

logger = logging.getLogger(__name__)


def start_hour(current_hour: int) -> int:
    return 23 if current_hour == 0 else current_hour - 1


def trim_forecast(
    points: list[WeatherDataPoint], now: datetime
) -> list[WeatherDataPoint]:
    """Drop forecast hours before one hour ahead of the current hour.

    The window starts at the point stamped exactly one hour before the
    current hour, or failing that at the first point with that hour of day.
    When neither exists the whole series is returned.
    """
    anchor = floor_hour(now) - timedelta(hours=1)
    for idx, p in enumerate(points):
        if p.time == anchor:
            return points[idx:]

    wanted = start_hour(now.hour)
    for idx, p in enumerate(points):
        if p.hour == wanted:
            return points[idx:]

    logger.warning("No forecast point at hour %02d, keeping full series", wanted)
    return list(points)
