"""Error taxonomy shared by the resolver, orchestrator and outer surfaces.

Every error carries a ``message`` that is safe to show to the user as is.
"""
from __future__ import annotations

from typing import Optional


GEOLOCATION_UNAVAILABLE_MESSAGE = "Geolocation is not supported by your browser."
GEOLOCATION_DENIED_MESSAGE = "Unable to retrieve your location. Try searching for a city instead."
SERVICE_ERROR_MESSAGE = "The weather service is unavailable right now. Please try again."
PARSE_ERROR_MESSAGE = "Could not parse weather data for this location."
NOT_FOUND_MESSAGE = "We couldn't find weather for that location. Check the spelling and try again."
INPUT_ERROR_MESSAGE = "Please enter a location to search for."


class SkyCastError(Exception):
    """Base error with a user-presentable message."""

    default_message = SERVICE_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InputError(SkyCastError, ValueError):
    """Blank location text."""

    default_message = INPUT_ERROR_MESSAGE


class GeolocationError(SkyCastError):
    """Base class for geolocation failures."""


class GeolocationUnavailable(GeolocationError):
    default_message = GEOLOCATION_UNAVAILABLE_MESSAGE


class GeolocationDenied(GeolocationError):
    default_message = GEOLOCATION_DENIED_MESSAGE


class ResolutionError(SkyCastError):
    """Raised when a location cannot be resolved into weather."""

    kind = "resolution"


class ServiceError(ResolutionError):
    """The AI call itself failed (network, auth, quota)."""

    kind = "service"
    default_message = SERVICE_ERROR_MESSAGE


class QuotaExceeded(ServiceError):
    """Raised when the AI service reports a quota/usage limit issue."""

    kind = "quota"


class ParseError(ResolutionError):
    kind = "parse"
    default_message = PARSE_ERROR_MESSAGE


class NotFound(ResolutionError):
    kind = "not_found"
    default_message = NOT_FOUND_MESSAGE


__all__ = [
    "GEOLOCATION_DENIED_MESSAGE",
    "GEOLOCATION_UNAVAILABLE_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "PARSE_ERROR_MESSAGE",
    "SERVICE_ERROR_MESSAGE",
    "GeolocationDenied",
    "GeolocationError",
    "GeolocationUnavailable",
    "InputError",
    "NotFound",
    "ParseError",
    "QuotaExceeded",
    "ResolutionError",
    "ServiceError",
    "SkyCastError",
]
