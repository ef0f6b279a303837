from __future__ import annotations

import pytest

from skycast.core.theme import DEFAULT_THEME, background_class, classify_condition
from tests.fakes import make_result


def test_no_weather_uses_default_theme() -> None:
    assert background_class(None) == DEFAULT_THEME


@pytest.mark.parametrize(
    "condition, expected",
    [
        ("Sunny", "weather-gradient-sunny"),
        ("Clear sky", "weather-gradient-sunny"),
        ("Light Drizzle", "weather-gradient-rainy"),
        ("Thunderstorm", "weather-gradient-rainy"),
        ("Partly cloudy", "weather-gradient-cloudy"),
        ("OVERCAST", "weather-gradient-cloudy"),
        ("Fog", DEFAULT_THEME),
        ("", DEFAULT_THEME),
    ],
)
def test_condition_keywords(condition: str, expected: str) -> None:
    assert background_class(make_result(condition=condition)) == expected


def test_first_matching_rule_wins() -> None:
    # "sun" is checked before "rain" and "cloud".
    assert classify_condition("Sun and rain showers") == "weather-gradient-sunny"
    assert classify_condition("Rain clearing later") == "weather-gradient-sunny"
    assert classify_condition("Cloudy with rain") == "weather-gradient-rainy"
