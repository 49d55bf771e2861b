"""LocationResolver: turns a city name or a coordinate pair into weather + place.

The provider calls are blocking ``requests`` calls; they run on the default
executor via ``asyncio.to_thread`` so the event loop only suspends at network
boundaries.
"""

import asyncio
import logging

from errors import UpstreamError
from geocoding import geocode_city, reverse_geocode
from models import Coordinates, PlaceName, Resolution
from weather import get_current_weather

logger = logging.getLogger(__name__)


class LocationResolver:
    """Composite lookups over forward geocoding, weather and reverse geocoding.

    Stateless: every call goes to the provider, nothing is cached.  The three
    collaborators can be swapped out (tests pass fakes).
    """

    def __init__(self, geocode=None, fetch_weather=None, reverse=None):
        self._geocode = geocode or geocode_city
        self._fetch_weather = fetch_weather or get_current_weather
        self._reverse = reverse or reverse_geocode

    async def resolve_by_name(self, city: str) -> Resolution:
        """First geocoding match for *city*, then its current weather.

        Raises ``NotFound`` on zero matches and ``UpstreamError`` when either
        call fails or returns a malformed payload.
        """
        place = await asyncio.to_thread(self._geocode, city)
        coords = place.coordinates
        weather = await asyncio.to_thread(self._fetch_weather, coords.latitude, coords.longitude)
        logger.info("Resolved %r to %s (%s)", city, place.name, place.country or "-")
        return Resolution(weather=weather, location=place)

    async def resolve_by_coordinates(self, latitude: float, longitude: float) -> Resolution:
        """Weather and a display name for a coordinate pair.

        Reverse geocoding is a soft failure (it falls back to a placeholder
        name); only a weather failure raises ``UpstreamError``.
        """
        weather, place = await asyncio.gather(
            asyncio.to_thread(self._fetch_weather, latitude, longitude),
            asyncio.to_thread(self._name_or_placeholder, latitude, longitude),
        )
        logger.info("Resolved %.4f,%.4f to %s", latitude, longitude, place.name)
        return Resolution(weather=weather, location=place)

    def _name_or_placeholder(self, latitude: float, longitude: float) -> PlaceName:
        try:
            return self._reverse(latitude, longitude)
        except UpstreamError as e:
            logger.warning("Reverse geocoding failed, using placeholder: %s", e)
            return PlaceName.placeholder(Coordinates(latitude, longitude))
