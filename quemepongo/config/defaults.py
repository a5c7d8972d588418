"""Default upstream endpoints and hourly variables."""

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"
GEOCODING_URL = "https://nominatim.openstreetmap.org/search"

# Nominatim rejects requests without an identifying agent
GEOCODING_USER_AGENT = "QueMePongoApp/1.0"

DEFAULT_TIMEZONE = "America/Argentina/Buenos_Aires"

DEFAULT_HOURLY_VARIABLES: tuple[str, ...] = (
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "wind_speed_10m",
)

VARIABLE_UNITS: dict[str, str] = {
    "temperature_2m": "°C",
    "relative_humidity_2m": "%",
    "precipitation": "mm",
    "wind_speed_10m": "km/h",
}
