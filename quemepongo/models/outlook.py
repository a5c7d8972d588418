"""Outlook models: aligned chart series, summary rows and recommendations."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from quemepongo.models.common import format_hour
from quemepongo.models.weather import WeatherDataPoint


class DiffBadge(StrEnum):
    WARMER = "warmer"
    COOLER = "cooler"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class AlignedSeries:
    variable: str
    labels: list[datetime]
    forecast: list[float | None]
    projection: list[float | None]

    def to_dict(self) -> dict:
        return {
            "variable": self.variable,
            "labels": [format_hour(t) for t in self.labels],
            "forecast": self.forecast,
            "projection": self.projection,
        }


@dataclass(frozen=True)
class SummaryRow:
    time: datetime
    forecast: float | None
    projection: float | None
    diff: float | None
    badge: DiffBadge | None

    def to_dict(self) -> dict:
        return {
            "time": format_hour(self.time),
            "forecast": self.forecast,
            "projection": self.projection,
            "diff": self.diff,
            "badge": self.badge.value if self.badge else None,
        }


@dataclass(frozen=True)
class Recommendation:
    condition: str
    clothing: str
    detail: str

    def to_dict(self) -> dict:
        return {"condition": self.condition, "clothing": self.clothing, "detail": self.detail}


@dataclass
class Outlook:
    generated_at: datetime
    hours_ahead: int
    forecast: list[WeatherDataPoint] | None = None
    projection: list[WeatherDataPoint] | None = None
    aligned: AlignedSeries | None = None
    summary: list[SummaryRow] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "generated_at": format_hour(self.generated_at),
            "hours_ahead": self.hours_ahead,
            "forecast": [p.to_dict() for p in self.forecast] if self.forecast is not None else None,
            "projection": (
                [p.to_dict() for p in self.projection] if self.projection is not None else None
            ),
            "aligned": self.aligned.to_dict() if self.aligned else None,
            "summary": [r.to_dict() for r in self.summary],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "errors": dict(self.errors),
        }
