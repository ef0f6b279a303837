"""Weather resolution: location text in, :class:`WeatherResult` out."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..abstractions import WeatherProvider, WeatherResult
from ..errors import InputError, ResolutionError, ServiceError


class WeatherResolver:
    """Resolve a location description through a single AI provider.

    Each call resolves or fails exactly once. Nothing is cached and failed
    calls are not retried; only :class:`ResolutionError` subclasses escape.
    """

    def __init__(self, provider: WeatherProvider, logger: Optional[logging.Logger] = None) -> None:
        self.provider = provider
        self._log = logger or logging.getLogger(self.__class__.__name__)

    async def resolve(self, location_text: str) -> WeatherResult:
        location = (location_text or "").strip()
        if not location:
            raise InputError()

        # Providers are blocking HTTP clients; keep the event loop free.
        try:
            return await asyncio.to_thread(self.provider.fetch, location)
        except ResolutionError as exc:
            self._log.warning("Provider %s could not resolve %r: %s", self.provider.name, location, exc.message)
            raise
        except Exception as exc:  # noqa: BLE001 - surfaced to the user as a service failure
            self._log.error("Provider %s crashed resolving %r", self.provider.name, location, exc_info=exc)
            raise ServiceError() from exc


__all__ = ["WeatherResolver"]
