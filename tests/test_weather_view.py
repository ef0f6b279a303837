from __future__ import annotations

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.test import Client, override_settings

from skycast.api import views
from skycast.core.errors import NotFound, ParseError, QuotaExceeded, ServiceError
from skycast.core.services import WeatherResolver
from tests.fakes import FakeProvider


@pytest.fixture
def provider(monkeypatch) -> FakeProvider:
    provider = FakeProvider()
    monkeypatch.setattr(views, "get_weather_resolver", lambda: WeatherResolver(provider))
    return provider


def test_weather_endpoint_returns_payload(provider: FakeProvider) -> None:
    response = Client().get("/api/weather", {"location": " Paris "})

    assert response.status_code == 200
    payload = response.json()
    assert payload["city"] == "Paris"
    assert payload["windSpeed"] == "10 km/h"
    assert payload["sources"][0]["uri"] == "https://meteofrance.com/paris"
    assert payload["theme"] == "weather-gradient-sunny"
    assert provider.calls == ["Paris"]


def test_weather_endpoint_accepts_coordinates(provider: FakeProvider) -> None:
    response = Client().get("/api/weather", {"lat": "40.7128", "lon": "-74.006"})

    assert response.status_code == 200
    assert provider.calls == ["40.7128, -74.006"]


@pytest.mark.parametrize(
    "params",
    [{}, {"location": "   "}, {"lat": "55.75"}, {"lat": "abc", "lon": "37.61"}],
)
def test_weather_endpoint_validates_params(provider: FakeProvider, params) -> None:
    response = Client().get("/api/weather", params)

    assert response.status_code == 400
    assert "detail" in response.json()
    assert provider.calls == []


@pytest.mark.parametrize(
    "error, status_code",
    [
        (NotFound(), 404),
        (ParseError(), 502),
        (QuotaExceeded("quota exhausted"), 429),
        (ServiceError("API key not valid"), 503),
    ],
)
def test_weather_endpoint_maps_errors(provider: FakeProvider, error, status_code) -> None:
    provider.answers["Atlantis"] = error

    response = Client().get("/api/weather", {"location": "Atlantis"})

    assert response.status_code == status_code
    assert response.json() == {"detail": error.message}


def test_resolver_requires_api_key() -> None:
    views.get_weather_resolver.cache_clear()
    try:
        with override_settings(GEMINI_API_KEY=""):
            with pytest.raises(ImproperlyConfigured):
                views.get_weather_resolver()
        resolver = views.get_weather_resolver()
        assert resolver.provider.name == "gemini"
        assert resolver.provider.endpoint == "https://gemini.test/v1beta/models/test-model:generateContent"
    finally:
        views.get_weather_resolver.cache_clear()


@pytest.mark.parametrize(
    "lat, lon",
    [("nan", "nan"), ("inf", "0"), ("0", "-inf"), ("999", "-500"), ("90.5", "0"), ("0", "180.01")],
)
def test_weather_endpoint_rejects_impossible_coordinates(provider: FakeProvider, lat: str, lon: str) -> None:
    response = Client().get("/api/weather", {"lat": lat, "lon": lon})

    assert response.status_code == 400
    assert "detail" in response.json()
    assert provider.calls == []


def test_weather_endpoint_accepts_boundary_coordinates(provider: FakeProvider) -> None:
    response = Client().get("/api/weather", {"lat": "-90", "lon": "180"})

    assert response.status_code == 200
    assert provider.calls == ["-90, 180"]
