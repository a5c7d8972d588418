"""Align forecast and projection series on one shared hourly label axis."""

import logging
from datetime import datetime, timedelta

from quemepongo.config.schema import MatchStrategy
from quemepongo.models.common import floor_hour
from quemepongo.models.outlook import AlignedSeries
from quemepongo.models.weather import WeatherDataPoint
from quemepongo.projection.calendar import window_offsets

logger = logging.getLogger(__name__)

DEFAULT_STRATEGIES = (
    MatchStrategy.EXACT,
    MatchStrategy.NEAREST_HOUR,
    MatchStrategy.POSITIONAL,
)


def build_labels(now: datetime, hours_ahead: int) -> list[datetime]:
    base = floor_hour(now)
    return [base + timedelta(hours=offset) for offset in window_offsets(hours_ahead)]


def find_exact(points: list[WeatherDataPoint], label: datetime) -> WeatherDataPoint | None:
    for p in points:
        if p.time == label:
            return p
    return None


def find_nearest_same_hour(
    points: list[WeatherDataPoint], label: datetime
) -> WeatherDataPoint | None:
    """Closest point in time that shares the label's hour of day."""
    candidates = [p for p in points if p.hour == label.hour]
    if not candidates:
        return None
    return min(candidates, key=lambda p: abs((p.time - label).total_seconds()))


def match_values(
    points: list[WeatherDataPoint],
    labels: list[datetime],
    variable: str,
    strategies: tuple[MatchStrategy, ...] | list[MatchStrategy] = DEFAULT_STRATEGIES,
) -> list[float | None]:
    """Pick one value per label from ``points``.

    Exact and nearest-hour matching are tried per label in the configured
    order. Positional pairing applies to the whole series, and only when no
    label found a point any other way.
    """
    values: list[float | None] = [None] * len(labels)
    matched = 0
    for i, label in enumerate(labels):
        point = None
        for strategy in strategies:
            if strategy == MatchStrategy.EXACT:
                point = find_exact(points, label)
            elif strategy == MatchStrategy.NEAREST_HOUR:
                point = find_nearest_same_hour(points, label)
            if point is not None:
                break
        if point is not None:
            matched += 1
            values[i] = point.get(variable)

    if matched == 0 and points and MatchStrategy.POSITIONAL in strategies:
        logger.info("No hour-of-day matches for %s, pairing by position", variable)
        for i in range(min(len(points), len(labels))):
            values[i] = points[i].get(variable)
    return values


def align_series(
    forecast: list[WeatherDataPoint] | None,
    projection: list[WeatherDataPoint] | None,
    variable: str,
    now: datetime,
    hours_ahead: int,
    strategies: tuple[MatchStrategy, ...] | list[MatchStrategy] = DEFAULT_STRATEGIES,
) -> AlignedSeries:
    """Position both series against labels ``now - 1h .. now + hours_ahead``.

    A missing series (None) yields an all-None column so the other one can
    still be drawn.
    """
    labels = build_labels(now, hours_ahead)
    return AlignedSeries(
        variable=variable,
        labels=labels,
        forecast=match_values(forecast or [], labels, variable, strategies),
        projection=match_values(projection or [], labels, variable, strategies),
    )
