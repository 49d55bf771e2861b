"""Open-Meteo data access layer.

Handles all HTTP communication with the Open-Meteo geocoding and forecast
APIs.  Every transport or decoding problem is turned into ``UpstreamError``
here so callers only deal with one failure type.  No business logic lives
here.
"""

import requests

import config
from errors import UpstreamError

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def fetch_json(url: str, params: dict) -> dict:
    """GET *url* with *params* and return the decoded JSON object."""
    try:
        resp = requests.get(url, params=params, timeout=config.METEO_HTTP_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        raise UpstreamError(f"Request to {url} failed: {e}") from e
    except ValueError as e:
        raise UpstreamError(f"Invalid JSON from {url}: {e}") from e

    if not isinstance(data, dict):
        raise UpstreamError(f"Unexpected payload from {url}: {type(data).__name__}")
    return data


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


def _results(data: dict) -> list[dict]:
    # The geocoding API omits "results" entirely when nothing matches.
    results = data.get("results") or []
    if not isinstance(results, list):
        raise UpstreamError("Geocoding 'results' is not a list")
    return results


def search_places(name: str, count: int) -> list[dict]:
    """Forward geocoding: up to *count* raw matches for a free-text name."""
    data = fetch_json(
        config.GEOCODING_URL,
        {"name": name, "count": count, "language": "en", "format": "json"},
    )
    return _results(data)


def reverse_places(latitude: float, longitude: float, count: int = 1) -> list[dict]:
    """Reverse geocoding: raw matches for a pair of coordinates."""
    data = fetch_json(
        config.GEOCODING_URL,
        {"latitude": latitude, "longitude": longitude, "count": count},
    )
    return _results(data)


def fetch_current_weather(latitude: float, longitude: float) -> dict:
    """Return the raw ``current_weather`` block for the coordinates."""
    data = fetch_json(
        config.FORECAST_URL,
        {"latitude": latitude, "longitude": longitude, "current_weather": "true"},
    )
    current = data.get("current_weather")
    if not isinstance(current, dict):
        raise UpstreamError("Forecast response has no 'current_weather' block")
    return current
