"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from quemepongo.config.defaults import (
    ARCHIVE_URL,
    DEFAULT_HOURLY_VARIABLES,
    DEFAULT_TIMEZONE,
    FORECAST_URL,
    GEOCODING_URL,
    GEOCODING_USER_AGENT,
)


class ProjectionFallback(StrEnum):
    RAW_SERIES = "raw_series"  # First hours_ahead + 2 averaged points, uncalendared
    NONE = "none"


class MatchStrategy(StrEnum):
    EXACT = "exact"
    NEAREST_HOUR = "nearest_hour"
    POSITIONAL = "positional"


class OpenMeteoConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast_url: str = FORECAST_URL
    archive_url: str = ARCHIVE_URL
    timezone: str = DEFAULT_TIMEZONE
    hourly_variables: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HOURLY_VARIABLES), min_length=1
    )
    forecast_timeout: float = Field(default=10.0, gt=0.0)
    archive_timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class GeocodingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    url: str = GEOCODING_URL
    user_agent: str = GEOCODING_USER_AGENT
    max_results: int = Field(default=5, ge=1, le=5)
    timeout: float = Field(default=15.0, gt=0.0)


class ProjectionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    years: int = Field(default=10, ge=1, le=10)
    concurrent: bool = True
    fallback: ProjectionFallback = ProjectionFallback.RAW_SERIES


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast_days: int = Field(default=2, ge=1, le=16)


class AlignmentConfig(BaseModel):
    model_config = {"extra": "forbid"}

    strategies: list[MatchStrategy] = Field(
        default_factory=lambda: [
            MatchStrategy.EXACT,
            MatchStrategy.NEAREST_HOUR,
            MatchStrategy.POSITIONAL,
        ]
    )

    @field_validator("strategies")
    @classmethod
    def _unique_strategies(cls, value: list[MatchStrategy]) -> list[MatchStrategy]:
        if len(set(value)) != len(value):
            raise ValueError("alignment strategies must not repeat")
        return value


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    hours_options: list[int] = Field(default_factory=lambda: [3, 6, 12, 24])
    default_hours: int = Field(default=6, ge=1)
    summary_hours: int = Field(default=6, ge=1)
    variable: str = "temperature_2m"


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    openmeteo: OpenMeteoConfig = OpenMeteoConfig()
    geocoding: GeocodingConfig = GeocodingConfig()
    projection: ProjectionConfig = ProjectionConfig()
    forecast: ForecastConfig = ForecastConfig()
    alignment: AlignmentConfig = AlignmentConfig()
    dashboard: DashboardConfig = DashboardConfig()
