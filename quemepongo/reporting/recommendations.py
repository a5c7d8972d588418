"""Clothing recommendations from simple weather threshold rules."""

from quemepongo.models.outlook import Recommendation
from quemepongo.models.weather import WeatherDataPoint

MILD = "Mild temperature"
NORMAL = "Normal conditions"

_DETAILS: dict[str, tuple[str, str]] = {
    "Very hot": (
        "Light clothing, sunscreen",
        "Temperatures are very high. Wear light, breathable clothes, "
        "protect yourself from the sun and stay hydrated.",
    ),
    "Hot": (
        "Light clothing",
        "It is warm. Light, comfortable clothes and something for the sun are a good idea.",
    ),
    MILD: (
        "Comfortable mid-season clothing",
        "The weather is pleasant. Dress comfortably without worrying about cold or heat.",
    ),
    "Cold": (
        "Jacket or coat",
        "Temperatures are low. Bring a coat or jacket to stay comfortable.",
    ),
    "Very cold": (
        "Heavy coat, gloves",
        "Temperatures are very low. Wear several layers, gloves and a hat.",
    ),
    "Heavy rain": (
        "Raincoat, boots",
        "A lot of rain is expected. A raincoat and waterproof shoes are essential.",
    ),
    "Moderate rain": (
        "Umbrella, waterproof shoes",
        "Moderate rain is expected. You will need an umbrella or a raincoat.",
    ),
    "Light rain": (
        "Umbrella or light raincoat",
        "Light rain is possible. Keep something at hand to cover yourself.",
    ),
    "Clear sky": (
        "Normal clothing, maybe sunglasses",
        "The sky looks clear. Enjoy it, and consider sun protection outdoors.",
    ),
    "High humidity": (
        "Breathable clothing",
        "Humidity is high. Breathable fabrics will keep you more comfortable.",
    ),
    "Dry air": (
        "Stay hydrated, light clothing",
        "The air is dry. Drink water and consider moisturizer for your skin.",
    ),
    "Strong wind": (
        "Windbreaker",
        "Strong wind is expected. A windbreaker will protect you from the gusts.",
    ),
    "Moderate wind": (
        "Light outer layer",
        "It is somewhat windy. A light jacket or outer layer will help.",
    ),
    NORMAL: (
        "Comfortable clothing for the day",
        "Weather conditions are normal. Dress comfortably for the season.",
    ),
}


def weather_conditions(
    temperature: float | None = None,
    precipitation: float | None = None,
    humidity: float | None = None,
    wind_speed: float | None = None,
) -> list[str]:
    """Condition names that apply to the given values, in display order."""
    conditions: list[str] = []

    if temperature is not None:
        if temperature > 30:
            conditions.append("Very hot")
        elif temperature > 25:
            conditions.append("Hot")
        elif temperature < 5:
            conditions.append("Very cold")
        elif temperature < 15:
            conditions.append("Cold")
        else:
            conditions.append(MILD)

    if precipitation is not None:
        if precipitation > 7:
            conditions.append("Heavy rain")
        elif precipitation > 2:
            conditions.append("Moderate rain")
        elif precipitation > 0.1:
            conditions.append("Light rain")
        elif not conditions or conditions == [MILD]:
            conditions.append("Clear sky")

    if humidity is not None:
        if humidity > 80:
            conditions.append("High humidity")
        elif humidity < 30:
            conditions.append("Dry air")

    if wind_speed is not None:
        if wind_speed > 30:
            conditions.append("Strong wind")
        elif wind_speed > 15:
            conditions.append("Moderate wind")

    if not conditions:
        conditions.append(NORMAL)
    return conditions


def _present(points: list[WeatherDataPoint], variable: str) -> list[float]:
    return [v for v in (p.get(variable) for p in points) if v is not None]


def _reduce(points: list[WeatherDataPoint], reducer) -> dict[str, float | None]:
    out = {}
    for variable in ("temperature_2m", "precipitation", "relative_humidity_2m", "wind_speed_10m"):
        values = _present(points, variable)
        out[variable] = reducer(values) if values else None
    return out


def _conditions_for(stats: dict[str, float | None]) -> list[str]:
    return weather_conditions(
        temperature=stats["temperature_2m"],
        precipitation=stats["precipitation"],
        humidity=stats["relative_humidity_2m"],
        wind_speed=stats["wind_speed_10m"],
    )


def recommend(points: list[WeatherDataPoint]) -> list[Recommendation]:
    """Recommendations for the upcoming hours.

    Peaks are checked first so extreme hours are not averaged away. If the
    peaks give at most one condition and the averages give more, the
    averages are used instead.
    """
    conditions = _conditions_for(_reduce(points, max))
    if len(conditions) <= 1:
        avg_conditions = _conditions_for(_reduce(points, lambda v: sum(v) / len(v)))
        if len(avg_conditions) > len(conditions):
            conditions = avg_conditions
    return [Recommendation(c, *_DETAILS[c]) for c in conditions]
