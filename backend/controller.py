"""AppController: top-level orchestration of weather lookups.

Owns ``AppState`` and routes committed searches (typed text, suggestion
click, coordinates, geolocation) to the ``LocationResolver``.

Every attempt gets an id.  Starting an attempt clears the state at once,
and an attempt's outcome is applied only if no newer attempt has started
since, so a slow earlier search never overwrites a newer one.
"""

import logging

from errors import GeolocationError, NotFound, UpstreamError
from geolocation import Geolocator
from models import AppState
from resolver import LocationResolver
from search import SearchController
from suggestions import SuggestionEngine

logger = logging.getLogger(__name__)

NAME_SEARCH_FAILED = "City not found, try again."
COORDINATE_SEARCH_FAILED = "Could not get weather for your location."


class AppController:

    def __init__(
        self,
        resolver: LocationResolver | None = None,
        geolocator: Geolocator | None = None,
        engine: SuggestionEngine | None = None,
    ):
        self.resolver = resolver or LocationResolver()
        self.geolocator = geolocator or Geolocator()
        self.state = AppState()
        self.search = SearchController(submit=self.search_by_name, engine=engine)
        self._attempt = 0

    # ── Searches ────────────────────────────────────────────────

    async def search_by_name(self, city: str) -> AppState:
        attempt = self._begin()
        try:
            resolution = await self.resolver.resolve_by_name(city)
        except (NotFound, UpstreamError) as e:
            logger.info("Search for %r failed: %s", city, e)
            self._apply(attempt, AppState.failed(NAME_SEARCH_FAILED))
        else:
            self._apply(attempt, AppState.resolved(resolution))
        return self.state

    async def search_by_coordinates(self, latitude: float, longitude: float) -> AppState:
        attempt = self._begin()
        try:
            resolution = await self.resolver.resolve_by_coordinates(latitude, longitude)
        except UpstreamError as e:
            logger.info("Weather for %.4f,%.4f failed: %s", latitude, longitude, e)
            self._apply(attempt, AppState.failed(COORDINATE_SEARCH_FAILED))
        else:
            self._apply(attempt, AppState.resolved(resolution))
        return self.state

    async def bootstrap(self) -> AppState:
        """Try the device position once; show its weather if we get one.

        Denial or timeout is an optional convenience failing, so it is only
        logged and the state is left alone.
        """
        try:
            position = await self.geolocator.locate()
        except GeolocationError as e:
            logger.info("Location access denied or unavailable: %s", e)
            return self.state
        coords = position.coordinates
        return await self.search_by_coordinates(coords.latitude, coords.longitude)

    # ── Attempt bookkeeping ─────────────────────────────────────

    def _begin(self) -> int:
        self._attempt += 1
        self.state = AppState()
        return self._attempt

    def _apply(self, attempt: int, state: AppState) -> None:
        if attempt != self._attempt:
            logger.debug("Dropping result of superseded attempt %d", attempt)
            return
        self.state = state
