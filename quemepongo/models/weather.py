"""Weather series data models."""

from dataclasses import dataclass, field
from datetime import date, datetime

from quemepongo.models.common import format_hour


class MissingCoordinatesError(ValueError):
    """Raised before any network call when latitude or longitude is absent."""


class OutlookError(Exception):
    """A pipeline produced no usable data. The message is user-facing."""


class ForecastUnavailableError(OutlookError):
    pass


class ProjectionUnavailableError(OutlookError):
    pass


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    @classmethod
    def require(cls, latitude: float | None, longitude: float | None) -> "Coordinates":
        if latitude is None or longitude is None:
            raise MissingCoordinatesError("Missing coordinates")
        return cls(float(latitude), float(longitude))


@dataclass(frozen=True)
class WeatherDataPoint:
    time: datetime  # naive local wall clock
    values: dict[str, float | None] = field(default_factory=dict)

    @property
    def hour(self) -> int:
        return self.time.hour

    def get(self, variable: str) -> float | None:
        return self.values.get(variable)

    def at(self, time: datetime) -> "WeatherDataPoint":
        """Same values, re-dated to ``time``."""
        return WeatherDataPoint(time=time, values=dict(self.values))

    def to_dict(self) -> dict:
        return {"time": format_hour(self.time), **self.values}


@dataclass(frozen=True)
class HistoricalYearSample:
    year: int
    target_date: date
    points: list[WeatherDataPoint]


@dataclass(frozen=True)
class GeoLocation:
    id: int
    name: str
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "lat": self.lat, "lon": self.lon}
