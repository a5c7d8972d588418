"""Open-Meteo forecast and archive API client with retry and rate limit handling."""

import asyncio
import logging
from datetime import date

import httpx

from quemepongo.config.schema import OpenMeteoConfig
from quemepongo.models.weather import Coordinates

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = (429, 503)


class OpenMeteoError(Exception):
    """Raised when an Open-Meteo call fails after retries."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OpenMeteoClient:
    def __init__(self, config: OpenMeteoConfig | None = None):
        self.config = config or OpenMeteoConfig()

    async def get_forecast(
        self, coords: Coordinates, forecast_days: int, past_days: int = 0
    ) -> dict:
        """Fetch the hourly forecast starting today (local midnight)."""
        params = {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "hourly": ",".join(self.config.hourly_variables),
            "timezone": self.config.timezone,
            "forecast_days": forecast_days,
        }
        if past_days:
            params["past_days"] = past_days
        return await self._get(
            self.config.forecast_url, params, self.config.forecast_timeout
        )

    async def get_archive_day(self, coords: Coordinates, day: date) -> dict:
        """Fetch one calendar day of archived hourly data."""
        iso_day = day.isoformat()
        return await self.get_archive(
            coords.latitude, coords.longitude, iso_day, iso_day,
            ",".join(self.config.hourly_variables),
        )

    async def get_archive(
        self,
        latitude: float | str,
        longitude: float | str,
        start_date: str,
        end_date: str,
        hourly: str,
    ) -> dict:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start_date,
            "end_date": end_date,
            "hourly": hourly,
            "timezone": self.config.timezone,
        }
        return await self._get(
            self.config.archive_url, params, self.config.archive_timeout
        )

    async def _get(self, url: str, params: dict, timeout: float) -> dict:
        """GET with exponential backoff on 503/429 and transport errors.

        ``timeout`` bounds the whole call, retries and backoff included.
        """
        try:
            async with asyncio.timeout(timeout):
                return await self._get_with_retries(url, params, timeout)
        except TimeoutError as e:
            raise OpenMeteoError(f"No response from {url} within {timeout:g}s") from e

    async def _get_with_retries(self, url: str, params: dict, timeout: float) -> dict:
        max_retries = self.config.max_retries
        async with httpx.AsyncClient(timeout=timeout) as http:
            for attempt in range(max_retries + 1):
                delay = self.config.retry_base_delay * (2**attempt)
                try:
                    resp = await http.get(url, params=params)
                except httpx.RequestError as e:
                    if attempt < max_retries:
                        logger.warning(
                            "Open-Meteo request error, retrying in %.1fs: %s", delay, e
                        )
                        await asyncio.sleep(delay)
                        continue
                    raise OpenMeteoError(f"Request failed: {e!r}") from e

                if resp.status_code in RETRY_STATUS_CODES and attempt < max_retries:
                    logger.warning(
                        "Open-Meteo %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        url, resp.status_code, delay, attempt + 1, max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue
                if resp.status_code >= 400:
                    raise OpenMeteoError(
                        f"HTTP {resp.status_code}: {resp.text}", resp.status_code
                    )
                try:
                    payload = resp.json()
                except ValueError as e:
                    raise OpenMeteoError("Invalid JSON response", resp.status_code) from e
                if not isinstance(payload, dict):
                    raise OpenMeteoError(
                        f"Unexpected {type(payload).__name__} response", resp.status_code
                    )
                return payload

        raise OpenMeteoError("retries exhausted")
