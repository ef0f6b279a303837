from __future__ import annotations

import json

import pytest
import requests

from skycast.core.errors import NotFound, ParseError, QuotaExceeded, ServiceError, SERVICE_ERROR_MESSAGE
from skycast.core.providers import GeminiWeatherProvider


ENDPOINT = "https://gemini.test/v1beta/models/test-model:generateContent"


def make_provider() -> GeminiWeatherProvider:
    return GeminiWeatherProvider(api_key="secret", model="test-model", base_url="https://gemini.test/v1beta/")


def gemini_answer(text: str, chunks=None) -> dict:
    candidate = {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}
    if chunks is not None:
        candidate["groundingMetadata"] = {"groundingChunks": chunks}
    return {"candidates": [candidate]}


PARIS_TEXT = "```json\n" + json.dumps(
    {
        "city": "Paris, France",
        "temperature": "18°C",
        "condition": "Sunny",
        "humidity": "55%",
        "windSpeed": "9 km/h",
        "description": "Clear skies all day.",
        "aiAdvice": "Perfect for a walk along the Seine.",
    }
) + "\n```"


def test_gemini_fetch_parses_answer_and_sources(requests_mock):
    requests_mock.post(
        ENDPOINT,
        json=gemini_answer(
            PARIS_TEXT,
            chunks=[
                {"web": {"title": "meteofrance.com", "uri": "https://vertexaisearch.cloud.google.com/grounding/a"}},
                {"web": {"title": "weather.com", "uri": "https://vertexaisearch.cloud.google.com/grounding/b"}},
                {"retrievedContext": {"title": "ignored"}},
            ],
        ),
    )

    result = make_provider().fetch("Paris")

    assert "paris" in result.city.lower()
    assert result.condition == "Sunny"
    assert [source.title for source in result.sources] == ["meteofrance.com", "weather.com"]
    assert all(source.uri.startswith("https://") for source in result.sources)


def test_gemini_request_shape(requests_mock):
    requests_mock.post(ENDPOINT, json=gemini_answer(PARIS_TEXT))

    make_provider().fetch("75001")

    request = requests_mock.last_request
    assert request.headers["x-goog-api-key"] == "secret"
    body = request.json()
    assert body["tools"] == [{"google_search": {}}]
    prompt = body["contents"][0]["parts"][0]["text"]
    assert '"75001"' in prompt
    assert "LOCATION_NOT_FOUND" in prompt


def test_gemini_location_not_found(requests_mock):
    requests_mock.post(ENDPOINT, json=gemini_answer('{"error": "LOCATION_NOT_FOUND"}'))

    with pytest.raises(NotFound):
        make_provider().fetch("Atlantis")


def test_gemini_empty_candidates_is_parse_error(requests_mock):
    requests_mock.post(ENDPOINT, json={"candidates": []})

    with pytest.raises(ParseError):
        make_provider().fetch("Paris")


def test_gemini_blocked_prompt_is_parse_error(requests_mock):
    requests_mock.post(ENDPOINT, json={"promptFeedback": {"blockReason": "SAFETY"}})

    with pytest.raises(ParseError):
        make_provider().fetch("Paris")


def test_gemini_quota_exceeded(requests_mock):
    requests_mock.post(
        ENDPOINT,
        status_code=429,
        json={"error": {"code": 429, "message": "Resource has been exhausted (e.g. check quota).", "status": "RESOURCE_EXHAUSTED"}},
    )

    with pytest.raises(QuotaExceeded) as excinfo:
        make_provider().fetch("Paris")
    assert excinfo.value.message == "Resource has been exhausted (e.g. check quota)."


def test_gemini_auth_failure_surfaces_upstream_message(requests_mock):
    requests_mock.post(
        ENDPOINT,
        status_code=400,
        json={"error": {"code": 400, "message": "API key not valid. Please pass a valid API key."}},
    )

    with pytest.raises(ServiceError) as excinfo:
        make_provider().fetch("Paris")
    assert excinfo.value.message == "API key not valid. Please pass a valid API key."


def test_gemini_server_error_without_body_uses_generic_message(requests_mock):
    requests_mock.post(ENDPOINT, status_code=502, text="bad gateway")

    with pytest.raises(ServiceError) as excinfo:
        make_provider().fetch("Paris")
    assert excinfo.value.message == SERVICE_ERROR_MESSAGE


def test_gemini_transport_failure(requests_mock):
    requests_mock.post(ENDPOINT, exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(ServiceError):
        make_provider().fetch("Paris")
    assert requests_mock.call_count == 1


def test_gemini_non_json_body(requests_mock):
    requests_mock.post(ENDPOINT, text="<html>oops</html>")

    with pytest.raises(ServiceError):
        make_provider().fetch("Paris")
