"""Error kinds raised by the lookup pipeline.

Soft failures (reverse geocoding, suggestions) never surface as one of
these; they are absorbed where they happen.
"""


class WeatherLookupError(Exception):
    """Base class for every lookup failure."""


class NotFound(WeatherLookupError):
    """Forward geocoding returned zero matches."""


class UpstreamError(WeatherLookupError):
    """Network failure or malformed response from the provider."""


class GeolocationError(WeatherLookupError):
    """The device position could not be read."""


class PermissionDenied(GeolocationError):
    pass


class GeolocationTimeout(GeolocationError):
    pass
