"""Calendar-correct reconstruction of an averaged hour-of-day series.

The averaged series only knows hours of day. Reconstruction lays those
hours on the real timeline from one hour before now through
``hours_ahead`` hours after now, giving every slot its actual date.
"""

import logging
from datetime import date, datetime, time, timedelta

from quemepongo.config.schema import ProjectionFallback
from quemepongo.models.weather import WeatherDataPoint

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


def wrap_hour(base: int, offset: int) -> int:
    return ((base + offset) % HOURS_PER_DAY + HOURS_PER_DAY) % HOURS_PER_DAY


def add_hours(day: date, hour_of_day: int, offset: int) -> tuple[date, int]:
    """Shift a (date, hour) pair by ``offset`` hours across day boundaries."""
    day_shift, hour = divmod(hour_of_day + offset, HOURS_PER_DAY)
    return day + timedelta(days=day_shift), hour


def window_offsets(hours_ahead: int) -> range:
    """Offsets from the current hour: one hour back through ``hours_ahead``."""
    return range(-1, hours_ahead + 1)


def index_by_hour(points: list[WeatherDataPoint]) -> dict[int, WeatherDataPoint]:
    by_hour: dict[int, WeatherDataPoint] = {}
    for p in points:
        by_hour.setdefault(p.hour, p)
    return by_hour


def reconstruct(
    averages: list[WeatherDataPoint],
    now: datetime,
    hours_ahead: int,
    fallback: ProjectionFallback = ProjectionFallback.RAW_SERIES,
) -> list[WeatherDataPoint]:
    """Place averaged hours on the timeline ``now - 1h .. now + hours_ahead``.

    Hours of day missing from ``averages`` are skipped. If fewer than
    ``hours_ahead + 1`` points survive and the raw-series fallback is on,
    the first ``hours_ahead + 2`` averaged points are returned as they are.
    """
    by_hour = index_by_hour(averages)
    today, current_hour = now.date(), now.hour

    result: list[WeatherDataPoint] = []
    for offset in window_offsets(hours_ahead):
        day, hour = add_hours(today, current_hour, offset)
        point = by_hour.get(hour)
        if point is None:
            continue
        result.append(point.at(datetime.combine(day, time(hour))))

    if len(result) < hours_ahead + 1 and fallback == ProjectionFallback.RAW_SERIES:
        logger.warning(
            "Only %d of %d projection hours placed, using raw averaged series",
            len(result), hours_ahead + 2,
        )
        return averages[: hours_ahead + 2]
    return result
