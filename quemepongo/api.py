"""Weather outlook API: FastAPI endpoints over the forecast and projection pipelines."""

import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from quemepongo.config.schema import AppConfig
from quemepongo.ingest.geocoding_client import GeocodingClient, GeocodingError
from quemepongo.ingest.open_meteo_client import OpenMeteoClient, OpenMeteoError
from quemepongo.models.weather import Coordinates, MissingCoordinatesError, OutlookError
from quemepongo.pipeline.forecast_pipeline import get_forecast_data
from quemepongo.pipeline.outlook_pipeline import build_outlook
from quemepongo.pipeline.projection_pipeline import get_projection_data

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    client: OpenMeteoClient | None = None,
    geocoder: GeocodingClient | None = None,
) -> FastAPI:
    config = config or AppConfig()
    client = client or OpenMeteoClient(config.openmeteo)
    geocoder = geocoder or GeocodingClient(config.geocoding)

    app = FastAPI(title="Que me pongo? weather outlook", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _coords(latitude: float | None, longitude: float | None) -> Coordinates:
        try:
            return Coordinates.require(latitude, longitude)
        except MissingCoordinatesError as e:
            raise HTTPException(400, str(e)) from e

    def _hours(hours_ahead: int | None) -> int:
        if hours_ahead is None:
            raise HTTPException(400, "Missing hoursAhead parameter")
        if hours_ahead not in config.dashboard.hours_options:
            raise HTTPException(
                400, f"hoursAhead must be one of {config.dashboard.hours_options}"
            )
        return hours_ahead

    # ── Upstream proxies ────────────────────────────────────────────

    @app.get("/api/geocoding")
    async def geocoding(name: str | None = None):
        if not name:
            raise HTTPException(400, "Missing name query parameter")
        try:
            locations = await geocoder.search(name)
        except GeocodingError as e:
            raise HTTPException(
                e.status_code or 502, f"Failed to fetch geocoding data: {e}"
            ) from e
        return [loc.to_dict() for loc in locations]

    @app.get("/api/historical")
    async def historical(
        latitude: str | None = None,
        longitude: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        hourly: str | None = None,
    ):
        if not (latitude and longitude and start_date and end_date and hourly):
            raise HTTPException(400, "Missing required query parameters")
        try:
            return await client.get_archive(latitude, longitude, start_date, end_date, hourly)
        except OpenMeteoError as e:
            raise HTTPException(
                e.status_code or 502, f"Failed to fetch historical data: {e}"
            ) from e

    # ── Pipelines ───────────────────────────────────────────────────

    @app.get("/api/forecast")
    async def forecast(latitude: float | None = None, longitude: float | None = None):
        coords = _coords(latitude, longitude)
        try:
            points = await get_forecast_data(client, coords, config)
        except OutlookError as e:
            raise HTTPException(502, str(e)) from e
        return [p.to_dict() for p in points]

    @app.get("/api/projection")
    async def projection(
        latitude: float | None = None,
        longitude: float | None = None,
        hours_ahead: int | None = Query(default=None, alias="hoursAhead"),
    ):
        coords = _coords(latitude, longitude)
        hours = _hours(hours_ahead)
        try:
            points = await get_projection_data(client, coords, hours, config)
        except OutlookError as e:
            raise HTTPException(502, str(e)) from e
        return [p.to_dict() for p in points]

    @app.get("/api/outlook")
    async def outlook(
        latitude: float | None = None,
        longitude: float | None = None,
        hours_ahead: int | None = Query(default=None, alias="hoursAhead"),
        variable: str | None = None,
    ):
        coords = _coords(latitude, longitude)
        hours = _hours(hours_ahead if hours_ahead is not None else config.dashboard.default_hours)
        if variable is not None and variable not in config.openmeteo.hourly_variables:
            raise HTTPException(400, f"Unknown variable: {variable}")
        result = await build_outlook(client, coords, hours, config, variable=variable)
        return result.to_dict()

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    return app
