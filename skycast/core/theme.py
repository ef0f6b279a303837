"""Background theme derived from the current weather condition."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .abstractions import WeatherResult


DEFAULT_THEME = "weather-gradient-default"

# Checked in order; the first matching keyword wins.
THEME_RULES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("sun", "clear"), "weather-gradient-sunny"),
    (("rain", "drizzle", "storm"), "weather-gradient-rainy"),
    (("cloud", "overcast"), "weather-gradient-cloudy"),
)


def background_class(weather: Optional[WeatherResult]) -> str:
    if weather is None:
        return DEFAULT_THEME
    return classify_condition(weather.condition)


def classify_condition(condition: str) -> str:
    label = (condition or "").lower()
    for keywords, theme in THEME_RULES:
        if any(keyword in label for keyword in keywords):
            return theme
    return DEFAULT_THEME


__all__ = ["DEFAULT_THEME", "THEME_RULES", "background_class", "classify_condition"]
