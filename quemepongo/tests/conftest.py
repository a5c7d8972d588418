"""Shared test fixtures."""

from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
import yaml

from quemepongo.config.schema import AppConfig, OpenMeteoConfig
from quemepongo.models.weather import Coordinates, WeatherDataPoint


@pytest.fixture
def config() -> AppConfig:
    """Default AppConfig with test endpoints and no retries."""
    return AppConfig(
        openmeteo=OpenMeteoConfig(
            forecast_url="https://forecast.test/v1/forecast",
            archive_url="https://archive.test/v1/archive",
            max_retries=0,
            retry_base_delay=0.0,
        )
    )


@pytest.fixture
def coords() -> Coordinates:
    return Coordinates(latitude=-34.6, longitude=-58.4)


@pytest.fixture
def now() -> datetime:
    """Pinned local wall clock: 2026-10-19 15:30."""
    return datetime(2026, 10, 19, 15, 30)


@pytest.fixture
def hourly_payload():
    """Factory for Open-Meteo style ``hourly`` payloads covering whole days.

    ``temperature`` maps the hour index (counted from the first midnight)
    to a value; the other variables are constant.
    """

    def _make(start: date, days: int = 1, temperature=lambda i: float(i % 24)) -> dict:
        n = 24 * days
        base = datetime(start.year, start.month, start.day)
        return {
            "latitude": -34.6,
            "longitude": -58.4,
            "hourly": {
                "time": [
                    (base + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M")
                    for i in range(n)
                ],
                "temperature_2m": [temperature(i) for i in range(n)],
                "relative_humidity_2m": [60.0] * n,
                "precipitation": [0.0] * n,
                "wind_speed_10m": [10.0] * n,
            },
        }

    return _make


@pytest.fixture
def make_point():
    """Factory for WeatherDataPoint from an ISO time and variable values."""

    def _make(iso_time: str, **values) -> WeatherDataPoint:
        return WeatherDataPoint(time=datetime.fromisoformat(iso_time), values=values)

    return _make


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "projection": {"years": 3, "concurrent": False},
        "dashboard": {"default_hours": 12},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
