"""Shared fixtures and helpers for backend tests.

All tests run against synthetic provider payloads — no network calls.
"""

import asyncio
import sys
import time
from datetime import datetime
from pathlib import Path

import pytest

# Ensure the backend modules are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


# ---------------------------------------------------------------------------
# Synthetic provider payloads
# ---------------------------------------------------------------------------

PARIS_HIT = {
    "name": "Paris", "country": "France", "admin1": "Île-de-France", "admin2": "Paris",
    "latitude": 48.85341, "longitude": 2.3488,
}
PARIS_TX_HIT = {
    "name": "Paris", "country": "United States", "admin1": "Texas", "admin2": "Lamar",
    "latitude": 33.66094, "longitude": -95.55551,
}
NAMELESS_HIT = {"country": "Norway", "admin1": "", "admin2": "Svalbard", "latitude": 78.2, "longitude": 15.6}

CURRENT_WEATHER = {
    "temperature": 18.4,
    "windspeed": 11.2,
    "winddirection": 225,
    "weathercode": 2,
    "time": "2024-06-01T14:45",
}


def make_place(name="Paris", country="France", lat=48.85341, lon=2.3488):
    from models import Coordinates, PlaceName
    return PlaceName(name=name, coordinates=Coordinates(lat, lon), country=country)


def make_weather(temperature=18.4, code=2):
    from models import CurrentWeather
    return CurrentWeather(
        temperature_c=temperature,
        wind_speed_kmh=11.2,
        wind_direction_deg=225,
        weather_code=code,
        observed_at=datetime(2024, 6, 1, 14, 45),
    )


def make_suggestions(*names):
    from models import SuggestionItem
    return [SuggestionItem(place=make_place(name=n)) for n in names]


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class RecordingLookup:
    """Suggestion lookup that records queries and answers from a table."""

    def __init__(self, table=None, error=None):
        self.table = table or {}
        self.error = error
        self.calls = []

    def __call__(self, query, limit):
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.table.get(query, [])


class FakeResolver:
    """Resolver stand-in whose answers (or errors) are set per call."""

    def __init__(self, by_name=None, by_coordinates=None):
        self.by_name = by_name or {}
        self.by_coordinates = by_coordinates
        self.name_calls = []
        self.coordinate_calls = []

    async def resolve_by_name(self, city):
        self.name_calls.append(city)
        outcome = self.by_name.get(city)
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return await outcome()
        return outcome

    async def resolve_by_coordinates(self, latitude, longitude):
        self.coordinate_calls.append((latitude, longitude))
        if isinstance(self.by_coordinates, BaseException):
            raise self.by_coordinates
        return self.by_coordinates


async def wait_until(predicate, timeout=2.0):
    """Poll *predicate* on the loop until it holds or *timeout* passes."""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


@pytest.fixture
def paris_resolution():
    from models import Resolution
    return Resolution(weather=make_weather(), location=make_place())
