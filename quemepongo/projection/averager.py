"""Same-hour averaging of archived samples across years."""

from quemepongo.models.weather import (
    HistoricalYearSample,
    ProjectionUnavailableError,
    WeatherDataPoint,
)


def mean_of_present(values: list[float | None]) -> float | None:
    """Arithmetic mean of the non-None entries, rounded to 2 decimals.

    Returns None (never 0) when nothing is present.
    """
    present = [v for v in values if v is not None]
    if not present:
        return None
    return round(sum(present) / len(present), 2)


def average_samples(
    samples: list[HistoricalYearSample], variables: list[str]
) -> list[WeatherDataPoint]:
    """Average each position of the hourly series across the given years.

    The first sample is the template: it fixes the number of positions and
    the time of each output point. Those times still carry the template
    year; real dates are assigned by the calendar reconstructor.
    """
    if not samples:
        raise ProjectionUnavailableError("no historical data available")

    template = samples[0].points
    averaged: list[WeatherDataPoint] = []
    for idx, ref in enumerate(template):
        values = {
            variable: mean_of_present(
                [s.points[idx].get(variable) for s in samples if idx < len(s.points)]
            )
            for variable in variables
        }
        averaged.append(WeatherDataPoint(time=ref.time, values=values))
    return averaged
