"""Core abstractions for the weather lookup domain."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple


@dataclass(frozen=True, slots=True)
class WeatherSource:
    """A citation returned by the grounded AI answer."""

    title: str
    uri: str

    def as_dict(self) -> Dict[str, str]:
        return {"title": self.title, "uri": self.uri}


@dataclass(frozen=True, slots=True)
class WeatherResult:
    """Fully-formed weather summary for a single location.

    Measurements are human-readable strings exactly as the AI service
    phrased them (units embedded), not normalized numbers.
    """

    city: str
    temperature: str
    condition: str
    humidity: str
    wind_speed: str
    description: str
    ai_advice: str
    sources: Tuple[WeatherSource, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "temperature": self.temperature,
            "condition": self.condition,
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
            "description": self.description,
            "aiAdvice": self.ai_advice,
            "sources": [source.as_dict() for source in self.sources],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "WeatherResult":
        return cls(
            city=payload["city"],
            temperature=payload["temperature"],
            condition=payload["condition"],
            humidity=payload["humidity"],
            wind_speed=payload["windSpeed"],
            description=payload["description"],
            ai_advice=payload["aiAdvice"],
            sources=tuple(
                WeatherSource(title=item["title"], uri=item["uri"])
                for item in payload.get("sources") or ()
            ),
        )


def _format_degrees(value: float) -> str:
    text = repr(float(value))
    if "e" in text:
        # Browser style exponent: 1e-7, not 1e-07.
        mantissa, exponent = text.split("e")
        power = int(exponent)
        return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
    if text.endswith(".0"):
        return text[:-2]
    return text


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float

    def as_location_text(self) -> str:
        """Render the position as ``"<lat>, <lon>"`` for the resolver."""
        return f"{_format_degrees(self.latitude)}, {_format_degrees(self.longitude)}"


@dataclass(frozen=True)
class ApplicationState:
    """Snapshot of the lookup session.

    ``weather`` and ``error`` describe the most recent completed
    resolution; ``loading`` is only true while a resolution is in flight.
    """

    weather: Optional[WeatherResult] = None
    loading: bool = False
    error: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "weather": self.weather.as_dict() if self.weather else None,
            "loading": self.loading,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "ApplicationState":
        if not payload:
            return cls()
        weather = payload.get("weather")
        return cls(
            weather=WeatherResult.from_dict(weather) if weather else None,
            loading=bool(payload.get("loading", False)),
            error=payload.get("error"),
        )


class WeatherProvider(Protocol):
    """A blocking client that turns a location description into weather."""

    name: str

    def fetch(self, location: str) -> WeatherResult:
        """Return the weather for ``location`` or raise a ResolutionError."""
        ...


class GeolocationProvider(Protocol):
    """Single-shot source of the user's current position."""

    async def current_position(self) -> Coordinates:
        """Return the current position or raise GeolocationDenied."""
        ...


__all__ = [
    "ApplicationState",
    "Coordinates",
    "GeolocationProvider",
    "WeatherProvider",
    "WeatherResult",
    "WeatherSource",
]
