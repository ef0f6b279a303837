"""Turn the AI service's free-form answer into a :class:`WeatherResult`.

The grounded model cannot be forced into a JSON response mode, so the
answer is treated as text that *contains* a JSON object, possibly inside
a fenced code block or surrounded by prose.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .abstractions import WeatherResult, WeatherSource
from .errors import NotFound, ParseError


logger = logging.getLogger(__name__)

NOT_FOUND_MARKER = "LOCATION_NOT_FOUND"

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)


class WeatherPayload(BaseModel):
    """Shape the AI service is asked to answer with."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    city: str = Field(min_length=1)
    temperature: str = ""
    condition: str = Field(min_length=1)
    humidity: str = ""
    wind_speed: str = Field("", alias="windSpeed")
    description: str = ""
    ai_advice: str = Field("", alias="aiAdvice")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


def extract_json_object(text: str) -> Dict[str, Any]:
    """Return the first JSON object embedded in ``text``."""
    if not text or not text.strip():
        raise ParseError()

    candidates: List[str] = [match.group(1) for match in _FENCED_BLOCK.finditer(text)]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(data, dict):
            return data

    if NOT_FOUND_MARKER in text.upper():
        raise NotFound()
    logger.warning("No JSON object in AI answer: %s", text[:200])
    raise ParseError()


def _is_not_found(data: Mapping[str, Any]) -> bool:
    error = data.get("error")
    if isinstance(error, str) and error.strip().upper() == NOT_FOUND_MARKER:
        return True
    return data.get("found") is False


def normalize_sources(raw_sources: Optional[Iterable[Mapping[str, Any]]]) -> Tuple[WeatherSource, ...]:
    """Keep well-formed citations in upstream order, without duplicates."""
    sources: List[WeatherSource] = []
    seen = set()
    for item in raw_sources or ():
        if not isinstance(item, Mapping):
            continue
        uri = str(item.get("uri") or "").strip()
        parsed = urlparse(uri)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            continue
        if uri in seen:
            continue
        seen.add(uri)
        title = str(item.get("title") or "").strip() or parsed.netloc
        sources.append(WeatherSource(title=title, uri=uri))
    return tuple(sources)


def parse_weather_answer(
    text: str,
    sources: Optional[Iterable[Mapping[str, Any]]] = None,
) -> WeatherResult:
    data = extract_json_object(text)
    if _is_not_found(data):
        raise NotFound()
    try:
        payload = WeatherPayload.model_validate(data)
    except ValidationError as exc:
        logger.warning("AI answer failed validation: %s", exc.errors(include_url=False))
        raise ParseError() from exc

    return WeatherResult(
        city=payload.city,
        temperature=payload.temperature,
        condition=payload.condition,
        humidity=payload.humidity,
        wind_speed=payload.wind_speed,
        description=payload.description,
        ai_advice=payload.ai_advice,
        sources=normalize_sources(sources),
    )


__all__ = [
    "NOT_FOUND_MARKER",
    "WeatherPayload",
    "extract_json_object",
    "normalize_sources",
    "parse_weather_answer",
]
