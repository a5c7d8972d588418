"""Forecast pipeline: one upstream call, parsed and trimmed to the window."""

import logging
from datetime import datetime

from quemepongo.config.schema import AppConfig
from quemepongo.forecast.window import trim_forecast
from quemepongo.ingest.hourly_parser import parse_hourly
from quemepongo.ingest.open_meteo_client import OpenMeteoClient, OpenMeteoError
from quemepongo.models.common import local_now
from quemepongo.models.weather import (
    Coordinates,
    ForecastUnavailableError,
    MissingCoordinatesError,
    WeatherDataPoint,
)

logger = logging.getLogger(__name__)


async def get_forecast_data(
    client: OpenMeteoClient,
    coords: Coordinates | None,
    config: AppConfig,
    now: datetime | None = None,
) -> list[WeatherDataPoint]:
    """Fetch the hourly forecast from one hour before now onwards.

    Raises:
        MissingCoordinatesError: before any network call.
        ForecastUnavailableError: upstream failure or no hourly points.
    """
    if coords is None:
        raise MissingCoordinatesError("Missing coordinates")
    now = local_now(config.openmeteo.timezone, now)

    # At midnight the window anchor (23:00) belongs to yesterday
    past_days = 1 if now.hour == 0 else 0
    try:
        raw = await client.get_forecast(
            coords, config.forecast.forecast_days, past_days=past_days
        )
    except OpenMeteoError as e:
        logger.error("Forecast fetch failed for %s: %s", coords, e)
        raise ForecastUnavailableError(f"Failed to fetch forecast data: {e}") from e

    points = parse_hourly(raw, config.openmeteo.hourly_variables)
    if not points:
        raise ForecastUnavailableError("No hourly forecast data received")

    window = trim_forecast(points, now)
    logger.info(
        "Forecast for %s: %d hourly points, %d in window",
        coords, len(points), len(window),
    )
    return window
