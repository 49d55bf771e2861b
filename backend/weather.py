"""Current weather lookup and its presentation helpers.

Fetching and validating the provider's ``current_weather`` block lives
here, along with the pure derivations the card needs (emoji, compass
label, observation time).  The derivations carry no state.
"""

import math
from datetime import datetime

from errors import UpstreamError
from meteo_client import fetch_current_weather
from models import CurrentWeather

# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------


def _number(raw: dict, key: str) -> float:
    value = raw.get(key)
    # bool is an int subclass; the provider never sends one for these fields.
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise UpstreamError(f"current_weather.{key} is missing or not a number: {value!r}")
    return float(value)


def parse_current_weather(raw: dict) -> CurrentWeather:
    """Validate a raw ``current_weather`` block.

    Raises ``UpstreamError`` when a field is missing or ill-typed.
    """
    try:
        observed_at = datetime.fromisoformat(raw["time"])
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamError(f"current_weather.time is missing or malformed: {raw.get('time')!r}") from e

    return CurrentWeather(
        temperature_c=_number(raw, "temperature"),
        wind_speed_kmh=_number(raw, "windspeed"),
        wind_direction_deg=math.floor(_number(raw, "winddirection") + 0.5) % 360,
        weather_code=int(_number(raw, "weathercode")),
        observed_at=observed_at,
    )


def get_current_weather(latitude: float, longitude: float) -> CurrentWeather:
    return parse_current_weather(fetch_current_weather(latitude, longitude))


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------

# WMO weather interpretation codes
WEATHER_EMOJI = {
    0: "☀️",    # Clear sky
    1: "🌤️",   # Mainly clear
    2: "⛅",    # Partly cloudy
    3: "☁️",    # Overcast
    45: "🌫️",  # Fog
    48: "🌫️",  # Depositing rime fog
    51: "🌦️",  # Light drizzle
    53: "🌦️",  # Moderate drizzle
    55: "🌦️",  # Dense drizzle
    61: "🌧️",  # Slight rain
    63: "🌧️",  # Moderate rain
    65: "🌧️",  # Heavy rain
    71: "🌨️",  # Slight snow
    73: "🌨️",  # Moderate snow
    75: "❄️",   # Heavy snow
    77: "🌨️",  # Snow grains
    80: "🌦️",  # Slight rain showers
    81: "🌧️",  # Moderate rain showers
    82: "⛈️",   # Violent rain showers
    85: "🌨️",  # Slight snow showers
    86: "❄️",   # Heavy snow showers
    95: "⛈️",   # Thunderstorm
    96: "⛈️",   # Thunderstorm with slight hail
    99: "⛈️",   # Thunderstorm with heavy hail
}
DEFAULT_EMOJI = "🌤️"

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
]


def weather_emoji(code: int) -> str:
    return WEATHER_EMOJI.get(code, DEFAULT_EMOJI)


def compass_label(degrees: float) -> str:
    """16-point compass label for a wind direction in degrees."""
    # Halves round up, as on the browser card.
    idx = math.floor(degrees / 22.5 + 0.5) % 16
    return COMPASS_POINTS[idx]


def format_observed_time(observed_at: datetime) -> str:
    """``"03:15 PM"`` style, the single supported locale format."""
    return observed_at.strftime("%I:%M %p")
