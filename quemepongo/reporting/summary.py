"""Per-hour summary table: forecast vs. projection with a difference badge."""

from quemepongo.alignment.aligner import find_exact, find_nearest_same_hour
from quemepongo.models.outlook import DiffBadge, SummaryRow
from quemepongo.models.weather import WeatherDataPoint

BADGE_THRESHOLD = 0.5
VISIBLE_THRESHOLD = 0.1


def diff_badge(diff: float | None) -> DiffBadge | None:
    if diff is None or abs(diff) <= VISIBLE_THRESHOLD:
        return None
    if diff > BADGE_THRESHOLD:
        return DiffBadge.WARMER
    if diff < -BADGE_THRESHOLD:
        return DiffBadge.COOLER
    return DiffBadge.NEUTRAL


def build_summary(
    projection: list[WeatherDataPoint],
    forecast: list[WeatherDataPoint] | None,
    variable: str,
    hours: int,
) -> list[SummaryRow]:
    """One row per projection hour, first ``hours`` rows only."""
    rows: list[SummaryRow] = []
    for point in projection[:hours]:
        forecast_value = None
        if forecast:
            match = find_exact(forecast, point.time) or find_nearest_same_hour(
                forecast, point.time
            )
            if match is not None:
                forecast_value = match.get(variable)
        projected = point.get(variable)
        diff = None
        if projected is not None and forecast_value is not None:
            diff = round(projected - forecast_value, 2)
        rows.append(
            SummaryRow(
                time=point.time,
                forecast=forecast_value,
                projection=projected,
                diff=diff,
                badge=diff_badge(diff),
            )
        )
    return rows
