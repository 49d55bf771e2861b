"""Configuration: loads from .env, provides defaults."""

import os

from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


# Open-Meteo endpoints
GEOCODING_URL = os.getenv("GEOCODING_URL", "https://geocoding-api.open-meteo.com/v1/search")
FORECAST_URL = os.getenv("FORECAST_URL", "https://api.open-meteo.com/v1/forecast")

# Provider calls have no timeout unless one is configured.
METEO_HTTP_TIMEOUT = _optional_float("METEO_HTTP_TIMEOUT")

# Suggestions
SUGGESTION_DEBOUNCE_SECONDS = float(os.getenv("SUGGESTION_DEBOUNCE_SECONDS", "0.3"))
SUGGESTION_LIMIT = int(os.getenv("SUGGESTION_LIMIT", "5"))
MIN_QUERY_LENGTH = int(os.getenv("MIN_QUERY_LENGTH", "2"))
BLUR_GRACE_SECONDS = float(os.getenv("BLUR_GRACE_SECONDS", "0.15"))

# Geolocation
GEOLOCATION_TIMEOUT_SECONDS = float(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "10"))
GEOLOCATION_MAX_AGE_SECONDS = float(os.getenv("GEOLOCATION_MAX_AGE_SECONDS", "300"))  # 5 minutes
DEFAULT_LATITUDE = _optional_float("DEFAULT_LATITUDE")
DEFAULT_LONGITUDE = _optional_float("DEFAULT_LONGITUDE")

# API server
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
