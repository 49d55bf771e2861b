"""Data model: places, weather readings and the two state containers.

Places and readings are immutable once produced.  ``SearchState`` is
mutated in place by ``SearchController``; ``AppState`` is frozen and
replaced wholesale by ``AppController``.
"""

from dataclasses import dataclass, field
from datetime import datetime

PLACEHOLDER_NAME = "Your Location"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class PlaceName:
    """A display name for a pair of coordinates."""

    name: str
    coordinates: Coordinates
    country: str = ""

    @classmethod
    def placeholder(cls, coordinates: Coordinates) -> "PlaceName":
        return cls(name=PLACEHOLDER_NAME, coordinates=coordinates, country="")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "country": self.country,
            "lat": self.coordinates.latitude,
            "lon": self.coordinates.longitude,
        }


@dataclass(frozen=True)
class CurrentWeather:
    temperature_c: float
    wind_speed_kmh: float
    wind_direction_deg: int  # [0, 360)
    weather_code: int
    observed_at: datetime

    def to_dict(self) -> dict:
        return {
            "temperature_c": self.temperature_c,
            "wind_speed_kmh": self.wind_speed_kmh,
            "wind_direction_deg": self.wind_direction_deg,
            "weather_code": self.weather_code,
            "observed_at": self.observed_at.isoformat(),
        }


@dataclass(frozen=True)
class SuggestionItem:
    """A candidate place plus the admin regions shown next to it."""

    place: PlaceName
    admin1: str = ""
    admin2: str = ""

    @property
    def name(self) -> str:
        return self.place.name

    @property
    def label(self) -> str:
        """Secondary line of a suggestion, e.g. ``"Île-de-France, France"``."""
        parts = [p for p in (self.admin1, self.place.country) if p]
        return ", ".join(parts)

    def to_dict(self) -> dict:
        d = self.place.to_dict()
        d["admin1"] = self.admin1
        d["admin2"] = self.admin2
        d["label"] = self.label
        return d


@dataclass(frozen=True)
class Resolution:
    """Weather and location for one successful lookup."""

    weather: CurrentWeather
    location: PlaceName

    def to_dict(self) -> dict:
        return {"weather": self.weather.to_dict(), "location": self.location.to_dict()}


@dataclass
class SearchState:
    query_text: str = ""
    suggestions: list[SuggestionItem] = field(default_factory=list)
    selected_index: int = -1  # -1 = none
    visible: bool = False
    submitting: bool = False

    @property
    def selected(self) -> SuggestionItem | None:
        if 0 <= self.selected_index < len(self.suggestions):
            return self.suggestions[self.selected_index]
        return None


@dataclass(frozen=True)
class AppState:
    """What the renderer shows.  Weather and location travel together."""

    weather: CurrentWeather | None = None
    location: PlaceName | None = None
    error_message: str | None = None

    @classmethod
    def resolved(cls, resolution: Resolution) -> "AppState":
        return cls(weather=resolution.weather, location=resolution.location)

    @classmethod
    def failed(cls, message: str) -> "AppState":
        return cls(error_message=message)

    def to_dict(self) -> dict:
        return {
            "weather": self.weather.to_dict() if self.weather else None,
            "location": self.location.to_dict() if self.location else None,
            "error": self.error_message,
        }
