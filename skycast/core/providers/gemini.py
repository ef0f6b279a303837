"""Gemini-backed weather provider with Google Search grounding."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import requests

from ..abstractions import WeatherProvider, WeatherResult
from ..errors import ParseError, ServiceError
from ..parsing import NOT_FOUND_MARKER, parse_weather_answer
from .base import AIServiceProvider, RequestConfig


PROMPT_TEMPLATE = """\
Find the current weather for this location: "{location}".
The location may be a city, an address, a postal code or a "latitude, longitude" pair.
Use Google Search to get up-to-date conditions.

Answer with a single JSON object and nothing else, using exactly these keys:
  "city": the resolved place name, e.g. "Paris, France"
  "temperature": the current temperature with its unit, e.g. "18°C"
  "condition": a short label such as "Sunny", "Light rain" or "Overcast"
  "humidity": relative humidity, e.g. "65%"
  "windSpeed": wind speed with its unit, e.g. "12 km/h"
  "description": one sentence summarising today's weather
  "aiAdvice": one or two sentences of practical advice (clothing, activities)

If the location cannot be identified, answer with {{"error": "{marker}"}}.
"""


class GeminiWeatherProvider(AIServiceProvider, WeatherProvider):
    """Integration with the Gemini ``generateContent`` REST endpoint."""

    name = "gemini"
    base_url = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gemini-3-flash-preview",
        base_url: Optional[str] = None,
        temperature: float = 0.2,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        super().__init__(session=session, request_config=request_config)
        self.api_key = api_key
        self.model = model
        self.base_url = (base_url or self.base_url).rstrip("/")
        self.temperature = temperature

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_prompt(self, location: str) -> str:
        return PROMPT_TEMPLATE.format(location=location, marker=NOT_FOUND_MARKER)

    def build_payload(self, location: str) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": self.build_prompt(location)}]}],
            "tools": [{"google_search": {}}],
            "generationConfig": {"temperature": self.temperature},
        }

    def fetch(self, location: str) -> WeatherResult:  # noqa: D401
        """Ask Gemini for the weather at ``location``."""
        response = self._request(
            "POST",
            self.endpoint,
            headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
            json=self.build_payload(location),
        )
        data = self._json(response)
        text, sources = self._extract_answer(data)
        result = parse_weather_answer(text, sources)
        self._log.info("Resolved %r to %s (%d sources)", location, result.city, len(result.sources))
        return result

    # helpers ------------------------------------------------------------
    def _json(self, response: requests.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise ServiceError() from exc
        if not isinstance(data, dict):
            raise ServiceError()
        return data

    def _extract_answer(self, data: Dict[str, Any]) -> Tuple[str, List[Dict[str, Any]]]:
        feedback = data.get("promptFeedback") or {}
        if feedback.get("blockReason"):
            self._log.warning("Prompt blocked: %s", feedback["blockReason"])
            raise ParseError()

        candidates = data.get("candidates") or []
        if not candidates:
            raise ParseError()
        candidate = candidates[0] or {}

        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))

        metadata = candidate.get("groundingMetadata") or {}
        sources: List[Dict[str, Any]] = []
        for chunk in metadata.get("groundingChunks") or []:
            web = chunk.get("web") if isinstance(chunk, dict) else None
            if isinstance(web, dict):
                sources.append({"title": web.get("title"), "uri": web.get("uri")})
        return text, sources


__all__ = ["GeminiWeatherProvider", "PROMPT_TEMPLATE"]
