"""Common clock and timestamp helpers shared across models."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

HOUR_FORMAT = "%Y-%m-%dT%H:%M"


def utc_now() -> datetime:
    return datetime.now(UTC)


def local_now(timezone: str, now: datetime | None = None) -> datetime:
    """Return "now" as a naive wall-clock datetime in the given timezone.

    Open-Meteo reports hourly times as naive local strings for the requested
    timezone, so every comparison happens in that frame. An aware ``now`` is
    converted; a naive one is assumed to already be local.
    """
    if now is None:
        now = utc_now()
    if now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)
    return now


def floor_hour(dt: datetime) -> datetime:
    return dt.replace(minute=0, second=0, microsecond=0)


def parse_hour(iso_str: str) -> datetime | None:
    """Parse an ISO timestamp into a naive local datetime."""
    try:
        dt = datetime.fromisoformat(iso_str)
    except (ValueError, TypeError):
        return None
    if dt.tzinfo is not None:
        dt = dt.replace(tzinfo=None)
    return dt


def format_hour(dt: datetime) -> str:
    return dt.strftime(HOUR_FORMAT)
