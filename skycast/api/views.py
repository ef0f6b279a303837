"""REST API views for AI-backed weather lookups."""
from __future__ import annotations

import math
from functools import lru_cache
from typing import Optional

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from skycast.core.abstractions import Coordinates, GeolocationProvider
from skycast.core.errors import NotFound, ParseError, QuotaExceeded, ResolutionError
from skycast.core.geolocation import build_geolocation_provider
from skycast.core.providers import GeminiWeatherProvider, RequestConfig
from skycast.core.services import WeatherResolver
from skycast.core.theme import background_class


@lru_cache(maxsize=1)
def get_weather_resolver() -> WeatherResolver:
    if not settings.GEMINI_API_KEY:
        raise ImproperlyConfigured("Environment variable GEMINI_API_KEY is required")
    provider = GeminiWeatherProvider(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        request_config=RequestConfig(timeout=settings.GEMINI_TIMEOUT or 30.0),
    )
    return WeatherResolver(provider)


def get_geolocation_provider(client_ip: Optional[str] = None) -> Optional[GeolocationProvider]:
    return build_geolocation_provider(
        settings.GEOLOCATION_BACKEND,
        ip_address=client_ip,
        latitude=settings.GEOLOCATION_LATITUDE,
        longitude=settings.GEOLOCATION_LONGITUDE,
        base_url=settings.GEOLOCATION_URL,
    )


def _parse_coordinates(raw_lat: str, raw_lon: str) -> Coordinates:
    try:
        latitude, longitude = float(raw_lat), float(raw_lon)
    except ValueError as exc:
        raise ValueError("lat and lon must be valid floating point numbers") from exc
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValueError("lat and lon must be finite numbers")
    if not -90.0 <= latitude <= 90.0:
        raise ValueError("Latitude must be between -90 and 90")
    if not -180.0 <= longitude <= 180.0:
        raise ValueError("Longitude must be between -180 and 180")
    return Coordinates(latitude=latitude, longitude=longitude)


def error_status(exc: ResolutionError) -> int:
    if isinstance(exc, NotFound):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ParseError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, QuotaExceeded):
        return status.HTTP_429_TOO_MANY_REQUESTS
    return status.HTTP_503_SERVICE_UNAVAILABLE


class WeatherView(APIView):
    """Resolve a location description into an AI weather summary."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather summary for ``location`` or ``lat``/``lon``."""
        location = (request.query_params.get("location") or "").strip()
        if not location:
            lat, lon = request.query_params.get("lat"), request.query_params.get("lon")
            if lat is None or lon is None:
                return Response(
                    {"detail": "location or lat and lon query parameters are required"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            try:
                location = _parse_coordinates(lat, lon).as_location_text()
            except ValueError as exc:
                return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = async_to_sync(get_weather_resolver().resolve)(location)
        except ResolutionError as exc:
            return Response({"detail": exc.message}, status=error_status(exc))

        payload = result.as_dict()
        payload["theme"] = background_class(result)
        return Response(payload, status=status.HTTP_200_OK)
