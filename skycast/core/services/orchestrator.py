"""Query orchestrator: the single writer of :class:`ApplicationState`."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional

from ..abstractions import ApplicationState, GeolocationProvider, WeatherResult
from ..errors import GEOLOCATION_UNAVAILABLE_MESSAGE, GeolocationError, ResolutionError, SERVICE_ERROR_MESSAGE
from .resolution import WeatherResolver


Listener = Callable[[ApplicationState], None]


class QueryOrchestrator:
    """Sequence manual searches and the startup location lookup.

    Overlapping resolutions are not fenced: whichever completes last
    decides the final state. There is no cancellation either, so a
    resolution started before teardown still lands on ``state``.
    """

    def __init__(
        self,
        resolver: WeatherResolver,
        geolocation: Optional[GeolocationProvider] = None,
        *,
        state: Optional[ApplicationState] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.resolver = resolver
        self.geolocation = geolocation
        self._state = state or ApplicationState()
        self._listeners: List[Listener] = []
        self._started = False
        self._log = logger or logging.getLogger(self.__class__.__name__)

    @property
    def state(self) -> ApplicationState:
        return self._state

    @property
    def started(self) -> bool:
        return self._started

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Public API ---------------------------------------------------------
    async def start(self) -> None:
        """Run the automatic location lookup, once per session."""
        if self._started:
            return
        self._started = True
        await self.use_current_location()

    async def submit_query(self, text: str) -> None:
        location = (text or "").strip()
        if not location:
            return
        await self._resolve(location)

    async def use_current_location(self) -> None:
        if self.geolocation is None:
            self._update(error=GEOLOCATION_UNAVAILABLE_MESSAGE)
            return

        self._update(loading=True)
        try:
            position = await self.geolocation.current_position()
        except GeolocationError as exc:
            self._log.info("Geolocation failed: %s", exc.message)
            self._update(loading=False, error=exc.message)
            return
        await self._resolve(position.as_location_text())

    def dismiss_error(self) -> None:
        self._update(error=None)

    # Helpers ------------------------------------------------------------
    async def _resolve(self, location: str) -> None:
        self._update(loading=True, error=None)
        try:
            result: WeatherResult = await self.resolver.resolve(location)
        except ResolutionError as exc:
            self._set(ApplicationState(weather=None, loading=False, error=exc.message))
            return
        except Exception as exc:  # noqa: BLE001 - no failure may leave the session loading
            self._log.error("Unexpected failure resolving %r", location, exc_info=exc)
            self._set(ApplicationState(weather=None, loading=False, error=str(exc) or SERVICE_ERROR_MESSAGE))
            return
        self._set(ApplicationState(weather=result, loading=False, error=None))

    def _update(self, **changes: Any) -> None:
        self._set(replace(self._state, **changes))

    def _set(self, state: ApplicationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)


__all__ = ["QueryOrchestrator"]
