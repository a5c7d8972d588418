"""Turn Open-Meteo ``hourly`` column arrays into WeatherDataPoint rows."""

import logging
import math

from quemepongo.models.common import parse_hour
from quemepongo.models.weather import WeatherDataPoint

logger = logging.getLogger(__name__)


def parse_hourly(payload: dict, variables: list[str]) -> list[WeatherDataPoint]:
    """Parse ``{"hourly": {"time": [...], <variable>: [...]}}``.

    Columns shorter than ``time`` and non-numeric cells become None.
    Rows with an unparseable time are dropped.
    """
    hourly = payload.get("hourly") if isinstance(payload, dict) else None
    if not isinstance(hourly, dict):
        logger.warning("Payload has no hourly block: %.80r", payload)
        return []
    times = hourly.get("time") or []
    points: list[WeatherDataPoint] = []
    for idx, raw_time in enumerate(times):
        time = parse_hour(raw_time)
        if time is None:
            logger.warning("Skipping hourly row with bad time %r", raw_time)
            continue
        values = {v: _safe_value(hourly.get(v), idx) for v in variables}
        points.append(WeatherDataPoint(time=time, values=values))
    return points


def _safe_value(column: list | None, idx: int) -> float | None:
    if not column or idx >= len(column):
        return None
    value = column[idx]
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number
