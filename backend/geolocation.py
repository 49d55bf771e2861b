"""Device position: a one-shot read with a timeout and a staleness allowance.

A server has no GPS, so the stock provider hands out a position taken from
configuration.  Anything with an async ``current_position()`` can stand in
(e.g. a position forwarded from the browser).
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone

import config
from errors import GeolocationTimeout, PermissionDenied
from models import Coordinates


@dataclass(frozen=True)
class Position:
    coordinates: Coordinates
    acquired_at: datetime

    def age_seconds(self, now: datetime | None = None) -> float:
        now = now or datetime.now(timezone.utc)
        return (now - self.acquired_at).total_seconds()


class PositionProvider(ABC):
    """Source of device positions."""

    @abstractmethod
    async def current_position(self, high_accuracy: bool = True) -> Position:
        """Return a fresh position or raise ``PermissionDenied``."""
        ...


class FixedPositionProvider(PositionProvider):
    """Reports a preconfigured position; denies access when there is none."""

    def __init__(self, latitude: float | None = None, longitude: float | None = None):
        self.latitude = config.DEFAULT_LATITUDE if latitude is None else latitude
        self.longitude = config.DEFAULT_LONGITUDE if longitude is None else longitude

    async def current_position(self, high_accuracy: bool = True) -> Position:
        if self.latitude is None or self.longitude is None:
            raise PermissionDenied("No device position configured")
        return Position(
            coordinates=Coordinates(self.latitude, self.longitude),
            acquired_at=datetime.now(timezone.utc),
        )


class Geolocator:
    """One-shot position reads on top of a provider.

    A previously read position is reused while it is younger than the
    caller's ``maximum_age``.
    """

    def __init__(self, provider: PositionProvider | None = None):
        self.provider = provider or FixedPositionProvider()
        self._last: Position | None = None

    async def locate(
        self,
        timeout: float = config.GEOLOCATION_TIMEOUT_SECONDS,
        maximum_age: float = config.GEOLOCATION_MAX_AGE_SECONDS,
        high_accuracy: bool = True,
    ) -> Position:
        if self._last is not None and self._last.age_seconds() <= maximum_age:
            return self._last
        try:
            position = await asyncio.wait_for(
                self.provider.current_position(high_accuracy=high_accuracy), timeout
            )
        except asyncio.TimeoutError as e:
            raise GeolocationTimeout(f"No position within {timeout:g}s") from e
        self._last = position
        return position
