"""Geolocation capabilities used for the startup lookup."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import requests

from .abstractions import Coordinates, GeolocationProvider
from .errors import GeolocationDenied


logger = logging.getLogger(__name__)


class IPGeolocationProvider(GeolocationProvider):
    """Approximate the position from an IP address via ipapi.co.

    Without ``ip_address`` the lookup resolves the caller's own public
    address. Private or reserved addresses cannot be located.
    """

    base_url = "https://ipapi.co"

    def __init__(
        self,
        ip_address: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.ip_address = ip_address
        self.base_url = (base_url or self.base_url).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        if self.ip_address:
            return f"{self.base_url}/{self.ip_address}/json/"
        return f"{self.base_url}/json/"

    async def current_position(self) -> Coordinates:
        return await asyncio.to_thread(self._lookup)

    def _lookup(self) -> Coordinates:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("IP geolocation failed for %s: %s", self.ip_address or "self", exc)
            raise GeolocationDenied() from exc

        if not isinstance(data, dict) or data.get("error"):
            reason = data.get("reason") if isinstance(data, dict) else None
            logger.info("IP geolocation refused for %s: %s", self.ip_address or "self", reason)
            raise GeolocationDenied()
        try:
            return Coordinates(latitude=float(data["latitude"]), longitude=float(data["longitude"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise GeolocationDenied() from exc


class StaticGeolocationProvider(GeolocationProvider):
    """Always report the configured position."""

    def __init__(self, coordinates: Coordinates) -> None:
        self.coordinates = coordinates

    async def current_position(self) -> Coordinates:
        return self.coordinates


def build_geolocation_provider(
    backend: str,
    *,
    ip_address: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    base_url: Optional[str] = None,
) -> Optional[GeolocationProvider]:
    """Return the configured capability, or ``None`` when there is none."""
    backend = (backend or "none").strip().lower()
    if backend == "ip":
        return IPGeolocationProvider(ip_address, base_url=base_url)
    if backend == "static":
        if latitude is None or longitude is None:
            raise ValueError("static geolocation requires latitude and longitude")
        return StaticGeolocationProvider(Coordinates(latitude=latitude, longitude=longitude))
    if backend == "none":
        return None
    raise ValueError(f"Unknown geolocation backend: {backend}")


__all__ = [
    "IPGeolocationProvider",
    "StaticGeolocationProvider",
    "build_geolocation_provider",
]
