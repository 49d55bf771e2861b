"""Tests for one-shot position reads."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest


class CountingProvider:
    def __init__(self, delay=0.0):
        self.delay = delay
        self.calls = 0

    async def current_position(self, high_accuracy=True):
        from geolocation import Position
        from models import Coordinates

        self.calls += 1
        await asyncio.sleep(self.delay)
        return Position(Coordinates(59.33, 18.07), datetime.now(timezone.utc))


# ---------------------------------------------------------------------------
# Geolocator
# ---------------------------------------------------------------------------

def test_fixed_provider_without_position_denies():
    from errors import PermissionDenied
    from geolocation import FixedPositionProvider, Geolocator

    provider = FixedPositionProvider()
    provider.latitude = provider.longitude = None
    with pytest.raises(PermissionDenied):
        asyncio.run(Geolocator(provider).locate())


def test_fixed_provider_reports_configured_position():
    from geolocation import FixedPositionProvider, Geolocator

    position = asyncio.run(Geolocator(FixedPositionProvider(51.5, -0.12)).locate())
    assert (position.coordinates.latitude, position.coordinates.longitude) == (51.5, -0.12)


def test_slow_provider_times_out():
    from errors import GeolocationTimeout
    from geolocation import Geolocator

    with pytest.raises(GeolocationTimeout):
        asyncio.run(Geolocator(CountingProvider(delay=1.0)).locate(timeout=0.01))


def test_recent_position_is_reused_within_maximum_age():
    from geolocation import Geolocator

    provider = CountingProvider()
    geolocator = Geolocator(provider)

    async def scenario():
        first = await geolocator.locate(maximum_age=300)
        second = await geolocator.locate(maximum_age=300)
        return first, second

    first, second = asyncio.run(scenario())
    assert first is second
    assert provider.calls == 1


def test_stale_position_is_read_again():
    from geolocation import Geolocator, Position
    from models import Coordinates

    provider = CountingProvider()
    geolocator = Geolocator(provider)
    old = datetime.now(timezone.utc) - timedelta(minutes=6)
    geolocator._last = Position(Coordinates(0.0, 0.0), old)

    position = asyncio.run(geolocator.locate(maximum_age=300))
    assert provider.calls == 1
    assert position.coordinates.latitude == 59.33


def test_position_provider_requires_current_position():
    """The provider base class cannot be used without an implementation."""
    from geolocation import PositionProvider

    with pytest.raises(TypeError):
        PositionProvider()
