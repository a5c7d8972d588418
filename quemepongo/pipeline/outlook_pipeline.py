"""Outlook pipeline: forecast and projection side by side.

Both pipelines run concurrently. A failure in one is recorded on the
outlook and leaves the other series usable.
"""

import asyncio
import logging
from datetime import datetime

from quemepongo.alignment.aligner import align_series
from quemepongo.config.schema import AppConfig
from quemepongo.ingest.open_meteo_client import OpenMeteoClient
from quemepongo.models.common import local_now
from quemepongo.models.outlook import Outlook
from quemepongo.models.weather import Coordinates, MissingCoordinatesError, OutlookError
from quemepongo.pipeline.forecast_pipeline import get_forecast_data
from quemepongo.pipeline.projection_pipeline import get_projection_data
from quemepongo.reporting.recommendations import recommend
from quemepongo.reporting.summary import build_summary

logger = logging.getLogger(__name__)


def _unwrap(name: str, result, errors: dict[str, str]):
    if isinstance(result, OutlookError):
        logger.warning("%s pipeline failed: %s", name, result)
        errors[name] = str(result)
        return None
    if isinstance(result, Exception):
        logger.error("%s pipeline crashed", name, exc_info=result)
        errors[name] = f"Failed to load {name} data"
        return None
    if isinstance(result, BaseException):
        raise result
    return result


async def build_outlook(
    client: OpenMeteoClient,
    coords: Coordinates | None,
    hours_ahead: int,
    config: AppConfig,
    now: datetime | None = None,
    variable: str | None = None,
) -> Outlook:
    if coords is None:
        raise MissingCoordinatesError("Missing coordinates")
    now = local_now(config.openmeteo.timezone, now)
    variable = variable or config.dashboard.variable

    forecast_res, projection_res = await asyncio.gather(
        get_forecast_data(client, coords, config, now=now),
        get_projection_data(client, coords, hours_ahead, config, now=now),
        return_exceptions=True,
    )

    outlook = Outlook(generated_at=now, hours_ahead=hours_ahead)
    outlook.forecast = _unwrap("forecast", forecast_res, outlook.errors)
    outlook.projection = _unwrap("projection", projection_res, outlook.errors)

    if outlook.forecast is not None or outlook.projection is not None:
        outlook.aligned = align_series(
            outlook.forecast,
            outlook.projection,
            variable,
            now,
            hours_ahead,
            config.alignment.strategies,
        )
    if outlook.projection:
        summary_hours = min(hours_ahead, config.dashboard.summary_hours)
        outlook.summary = build_summary(
            outlook.projection, outlook.forecast, variable, summary_hours
        )
        outlook.recommendations = recommend(outlook.projection)

    logger.info(
        "Outlook for %s: forecast=%s projection=%s errors=%s",
        coords,
        len(outlook.forecast) if outlook.forecast is not None else None,
        len(outlook.projection) if outlook.projection is not None else None,
        sorted(outlook.errors),
    )
    return outlook
