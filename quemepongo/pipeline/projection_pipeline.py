"""Projection pipeline: multi-year archive fan-out, averaging and re-dating."""

import asyncio
import logging
from datetime import date, datetime

from quemepongo.config.schema import AppConfig
from quemepongo.ingest.hourly_parser import parse_hourly
from quemepongo.ingest.open_meteo_client import OpenMeteoClient, OpenMeteoError
from quemepongo.models.common import local_now
from quemepongo.models.weather import (
    Coordinates,
    HistoricalYearSample,
    MissingCoordinatesError,
    ProjectionUnavailableError,
    WeatherDataPoint,
)
from quemepongo.projection.averager import average_samples
from quemepongo.projection.calendar import reconstruct

logger = logging.getLogger(__name__)


def same_day_in_year(today: date, year: int) -> date:
    """Today's month/day in another year. Feb 29 becomes Feb 28 when needed."""
    try:
        return today.replace(year=year)
    except ValueError:
        return date(year, 2, 28)


def history_years(today: date, count: int) -> list[int]:
    return [today.year - 1 - i for i in range(count)]


async def fetch_year(
    client: OpenMeteoClient,
    coords: Coordinates,
    day: date,
    variables: list[str],
) -> HistoricalYearSample:
    raw = await client.get_archive_day(coords, day)
    points = parse_hourly(raw, variables)
    if not points:
        raise OpenMeteoError(f"No hourly archive data for {day.isoformat()}")
    return HistoricalYearSample(year=day.year, target_date=day, points=points)


async def fetch_samples(
    client: OpenMeteoClient,
    coords: Coordinates,
    today: date,
    config: AppConfig,
) -> list[HistoricalYearSample]:
    """Fetch one archived day per prior year, dropping the years that fail.

    Sample order follows the year order (most recent first) in both modes,
    so the first successful year is the averaging template.
    """
    variables = config.openmeteo.hourly_variables
    days = [same_day_in_year(today, y) for y in history_years(today, config.projection.years)]

    samples: list[HistoricalYearSample] = []
    if config.projection.concurrent:
        results = await asyncio.gather(
            *(fetch_year(client, coords, d, variables) for d in days),
            return_exceptions=True,
        )
        for day, result in zip(days, results):
            if isinstance(result, OpenMeteoError):
                logger.warning("Failed to retrieve data for year %d: %s", day.year, result)
            elif isinstance(result, BaseException):
                raise result
            else:
                samples.append(result)
    else:
        for day in days:
            try:
                samples.append(await fetch_year(client, coords, day, variables))
            except OpenMeteoError as e:
                logger.warning("Failed to retrieve data for year %d: %s", day.year, e)

    logger.info("Retrieved %d of %d historical years", len(samples), len(days))
    return samples


async def get_projection_data(
    client: OpenMeteoClient,
    coords: Coordinates | None,
    hours_ahead: int,
    config: AppConfig,
    now: datetime | None = None,
) -> list[WeatherDataPoint]:
    """Historical-average projection from one hour before now to ``hours_ahead``.

    Raises:
        MissingCoordinatesError: before any network call.
        ValueError: ``hours_ahead`` is not positive.
        ProjectionUnavailableError: every historical year failed.
    """
    if coords is None:
        raise MissingCoordinatesError("Missing coordinates")
    if hours_ahead is None or hours_ahead < 1:
        raise ValueError(f"hours_ahead must be positive, got {hours_ahead}")
    now = local_now(config.openmeteo.timezone, now)

    samples = await fetch_samples(client, coords, now.date(), config)
    if not samples:
        raise ProjectionUnavailableError("Failed to fetch any historical data for projection")

    averages = average_samples(samples, config.openmeteo.hourly_variables)
    projection = reconstruct(averages, now, hours_ahead, config.projection.fallback)
    if not projection:
        raise ProjectionUnavailableError("No projection hours could be built")
    return projection
