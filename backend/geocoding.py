"""Place lookup via Open-Meteo geocoding.

Forward geocoding (name -> coordinates), autocomplete suggestions and
reverse geocoding (coordinates -> display name).
"""

import logging

import config
from errors import NotFound, UpstreamError
from meteo_client import reverse_places, search_places
from models import PLACEHOLDER_NAME, Coordinates, PlaceName, SuggestionItem

logger = logging.getLogger(__name__)

# Tried in order when picking a display name for a match.
_NAME_FIELDS = ("name", "admin1", "admin2")


def _coordinates(hit: dict) -> Coordinates:
    try:
        return Coordinates(float(hit["latitude"]), float(hit["longitude"]))
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamError(f"Geocoding match without usable coordinates: {hit!r}") from e


def display_name(hit: dict) -> str:
    """First non-empty administrative name of *hit*, else the placeholder."""
    for key in _NAME_FIELDS:
        value = hit.get(key)
        if value:
            return value
    return PLACEHOLDER_NAME


def place_from_hit(hit: dict, coordinates: Coordinates | None = None) -> PlaceName:
    """Build a ``PlaceName`` from a raw match.

    *coordinates* overrides the match's own position (reverse geocoding
    keeps the coordinates that were asked about).
    """
    if not isinstance(hit, dict):
        raise UpstreamError(f"Geocoding match is not an object: {hit!r}")
    return PlaceName(
        name=display_name(hit),
        coordinates=coordinates or _coordinates(hit),
        country=hit.get("country") or "",
    )


def geocode_city(city: str) -> PlaceName:
    """Resolve *city* to its first match.

    Raises ``NotFound`` on zero matches, ``UpstreamError`` on provider failure.
    """
    results = search_places(city, count=1)
    if not results:
        raise NotFound(f"City not found: {city}")
    return place_from_hit(results[0])


def autocomplete_city(query: str, limit: int = config.SUGGESTION_LIMIT) -> list[SuggestionItem]:
    """Return up to *limit* suggestions for a partial city name."""
    return [
        SuggestionItem(
            place=place_from_hit(hit),
            admin1=hit.get("admin1") or "",
            admin2=hit.get("admin2") or "",
        )
        for hit in search_places(query, count=limit)[:limit]
    ]


def reverse_geocode(latitude: float, longitude: float) -> PlaceName:
    """Name the place at the coordinates.

    Never raises for provider trouble: a failed or empty lookup yields the
    "Your Location" placeholder with an empty country.
    """
    coords = Coordinates(latitude, longitude)
    try:
        results = reverse_places(latitude, longitude, count=1)
        if results:
            return place_from_hit(results[0], coordinates=coords)
        logger.info("Reverse geocoding found nothing at %.4f,%.4f", latitude, longitude)
    except UpstreamError as e:
        logger.warning("Reverse geocoding failed at %.4f,%.4f: %s", latitude, longitude, e)
    return PlaceName.placeholder(coords)
