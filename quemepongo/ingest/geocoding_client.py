"""Nominatim geocoding client."""

import logging

import httpx

from quemepongo.config.schema import GeocodingConfig
from quemepongo.models.weather import GeoLocation

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when the geocoding service fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GeocodingClient:
    def __init__(self, config: GeocodingConfig | None = None):
        self.config = config or GeocodingConfig()

    async def search(self, name: str) -> list[GeoLocation]:
        """Search places by free text. Returns at most ``max_results`` candidates."""
        params = {"q": name, "format": "json", "limit": self.config.max_results}
        headers = {"User-Agent": self.config.user_agent}
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout) as http:
                resp = await http.get(self.config.url, params=params, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Geocoding error for name=%r: %s", name, e)
            raise GeocodingError(str(e), e.response.status_code) from e
        except httpx.RequestError as e:
            logger.error("Geocoding request failed for name=%r: %s", name, e)
            raise GeocodingError(f"Request failed: {e!r}") from e

        results = resp.json() or []
        locations = []
        for item in results[: self.config.max_results]:
            try:
                locations.append(
                    GeoLocation(
                        id=int(item["place_id"]),
                        name=item.get("display_name", ""),
                        lat=float(item["lat"]),
                        lon=float(item["lon"]),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed geocoding result: %r", item)
        return locations
