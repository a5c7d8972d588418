"""Tests for the Open-Meteo client with mocked httpx."""

import asyncio
from datetime import date
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import respx

from quemepongo.config.schema import OpenMeteoConfig
from quemepongo.ingest.open_meteo_client import OpenMeteoClient, OpenMeteoError
from quemepongo.models.weather import Coordinates

FORECAST_URL = "https://test-forecast.example.com/v1/forecast"
ARCHIVE_URL = "https://test-archive.example.com/v1/archive"


@pytest.fixture
def client() -> OpenMeteoClient:
    return OpenMeteoClient(
        OpenMeteoConfig(
            forecast_url=FORECAST_URL,
            archive_url=ARCHIVE_URL,
            max_retries=1,
            retry_base_delay=0.01,
        )
    )


@pytest.fixture
def ba() -> Coordinates:
    return Coordinates(-34.6, -58.4)


class TestGetForecast:
    @respx.mock
    def test_success_and_params(self, client, ba, hourly_payload):
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=hourly_payload(date(2026, 10, 19), days=2))
        )
        result = asyncio.run(client.get_forecast(ba, forecast_days=2))

        assert len(result["hourly"]["time"]) == 48
        params = route.calls[0].request.url.params
        assert params["latitude"] == "-34.6"
        assert params["longitude"] == "-58.4"
        assert params["hourly"] == "temperature_2m,relative_humidity_2m,precipitation,wind_speed_10m"
        assert params["timezone"] == "America/Argentina/Buenos_Aires"
        assert params["forecast_days"] == "2"
        assert "past_days" not in params

    @respx.mock
    def test_past_days_sent_when_requested(self, client, ba, hourly_payload):
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=hourly_payload(date(2026, 10, 18), days=3))
        )
        asyncio.run(client.get_forecast(ba, forecast_days=2, past_days=1))
        assert route.calls[0].request.url.params["past_days"] == "1"

    @respx.mock
    def test_retry_on_503(self, client, ba, hourly_payload):
        route = respx.get(FORECAST_URL).mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json=hourly_payload(date(2026, 10, 19))),
            ]
        )
        with patch("quemepongo.ingest.open_meteo_client.asyncio.sleep", new=AsyncMock()):
            result = asyncio.run(client.get_forecast(ba, forecast_days=1))
        assert "hourly" in result
        assert route.call_count == 2

    @respx.mock
    def test_exhausted_retries(self, client, ba):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(429))
        with patch("quemepongo.ingest.open_meteo_client.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(OpenMeteoError) as exc:
                asyncio.run(client.get_forecast(ba, forecast_days=1))
        assert exc.value.status_code == 429

    @respx.mock
    def test_client_error_not_retried(self, client, ba):
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(400, json={"error": True, "reason": "bad"})
        )
        with pytest.raises(OpenMeteoError) as exc:
            asyncio.run(client.get_forecast(ba, forecast_days=1))
        assert exc.value.status_code == 400
        assert route.call_count == 1

    @respx.mock
    def test_timeout_wrapped(self, client, ba):
        route = respx.get(FORECAST_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))
        with patch("quemepongo.ingest.open_meteo_client.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(OpenMeteoError) as exc:
                asyncio.run(client.get_forecast(ba, forecast_days=1))
        assert exc.value.status_code is None
        assert route.call_count == 2


    @respx.mock
    def test_non_json_body_is_client_error(self, client, ba):
        respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, text="<html>gateway hiccup</html>")
        )
        with pytest.raises(OpenMeteoError, match="Invalid JSON") as exc:
            asyncio.run(client.get_forecast(ba, forecast_days=1))
        assert exc.value.status_code == 200

    @respx.mock
    def test_non_object_body_is_client_error(self, client, ba):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=[1, 2, 3]))
        with pytest.raises(OpenMeteoError, match="Unexpected list"):
            asyncio.run(client.get_forecast(ba, forecast_days=1))

    @respx.mock
    def test_timeout_bounds_retries(self, ba):
        slow = OpenMeteoClient(
            OpenMeteoConfig(
                forecast_url=FORECAST_URL,
                forecast_timeout=0.2,
                max_retries=5,
                retry_base_delay=10.0,
            )
        )
        route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(503))
        with pytest.raises(OpenMeteoError, match="within"):
            asyncio.run(slow.get_forecast(ba, forecast_days=1))
        assert route.call_count == 1


class TestGetArchive:
    @respx.mock
    def test_single_day(self, client, ba, hourly_payload):
        route = respx.get(ARCHIVE_URL).mock(
            return_value=httpx.Response(200, json=hourly_payload(date(2024, 10, 19)))
        )
        result = asyncio.run(client.get_archive_day(ba, date(2024, 10, 19)))
        assert result["hourly"]["time"][0] == "2024-10-19T00:00"
        params = route.calls[0].request.url.params
        assert params["start_date"] == "2024-10-19"
        assert params["end_date"] == "2024-10-19"
        assert params["timezone"] == "America/Argentina/Buenos_Aires"

    @respx.mock
    def test_raw_range_passthrough(self, client):
        route = respx.get(ARCHIVE_URL).mock(return_value=httpx.Response(200, json={"hourly": {}}))
        asyncio.run(
            client.get_archive("-34.6", "-58.4", "2024-01-01", "2024-01-07", "temperature_2m")
        )
        params = route.calls[0].request.url.params
        assert params["end_date"] == "2024-01-07"
        assert params["hourly"] == "temperature_2m"
