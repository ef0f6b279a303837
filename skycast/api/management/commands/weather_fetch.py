"""Management command to look up the weather using the same stack as the web UI."""
from __future__ import annotations

import asyncio
import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from skycast.api.views import get_geolocation_provider, get_weather_resolver
from skycast.core.abstractions import ApplicationState, Coordinates
from skycast.core.services import QueryOrchestrator
from skycast.core.theme import background_class


class Command(BaseCommand):
    help = "Fetch the current weather for a location, coordinates or the current position"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--location", type=str, help="City, address or postal code")
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        self.verbosity = options.get("verbosity", 1)
        location = options.get("location")
        latitude = options.get("lat")
        longitude = options.get("lon")
        if (latitude is None) != (longitude is None):
            raise CommandError("--lat and --lon must be given together")

        orchestrator = QueryOrchestrator(get_weather_resolver(), get_geolocation_provider())
        orchestrator.subscribe(self._report)

        if location is not None:
            if not location.strip():
                raise CommandError("--location must not be blank")
            asyncio.run(orchestrator.submit_query(location))
        elif latitude is not None:
            text = Coordinates(latitude=latitude, longitude=longitude).as_location_text()
            asyncio.run(orchestrator.submit_query(text))
        else:
            asyncio.run(orchestrator.start())

        state = orchestrator.state
        if state.error:
            raise CommandError(state.error)
        if state.weather is None:
            raise CommandError("No weather data was returned")

        payload = state.weather.as_dict()
        payload["theme"] = background_class(state.weather)
        self.stdout.write(json.dumps(payload, ensure_ascii=False))

    def _report(self, state: ApplicationState) -> None:
        if state.loading and self.verbosity >= 2:
            self.stderr.write("Consulting the AI weather service...")
