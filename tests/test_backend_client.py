"""Backend client tests for two-tier mode."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from city_weather.client import BackendWeatherClient
from city_weather.exceptions import BackendClientError, ConfigError

WEATHER_BODY: dict[str, Any] = {
    "city": "Lisbon",
    "country": "Portugal",
    "coordinates": {"latitude": 38.7167, "longitude": -9.1333},
    "current": {
        "temperature": 18.2,
        "windSpeed": 9.4,
        "humidity": 72,
        "weatherCode": 3,
        "time": "2024-03-01T09:00",
    },
    "condition": {"description": "Overcast", "icon": "☁️"},
    "timezone": "Europe/Lisbon",
    "units": {"temperature": "°C", "windSpeed": "km/h", "humidity": "%"},
}


def _client(handler: Any) -> BackendWeatherClient:
    settings = SimpleNamespace(
        backend_api_url="http://backend.test",
        client_timeout_seconds=10.0,
    )
    client = BackendWeatherClient(settings=settings, logger=logging.getLogger("test_client"))  # type: ignore[arg-type]
    client._client.close()
    client._client = httpx.Client(
        base_url="http://backend.test", transport=httpx.MockTransport(handler)
    )
    return client


def test_get_weather_parses_backend_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=WEATHER_BODY)

    result = _client(handler).get_weather_by_city("Lisbon")

    assert seen[0].url.path == "/weather"
    assert seen[0].url.params["city"] == "Lisbon"
    assert result.city == "Lisbon"
    assert result.current.wind_speed == 9.4
    assert result.condition.description == "Overcast"


def test_error_response_message_is_surfaced() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={
                "statusCode": 404,
                "timestamp": "2024-01-15T14:30:00Z",
                "path": "/weather?city=Atlantis",
                "message": 'City "Atlantis" not found. Check the name and try again.',
                "error": "Not Found",
            },
        )

    with pytest.raises(BackendClientError) as exc_info:
        _client(handler).get_weather_by_city("Atlantis")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message.startswith('City "Atlantis" not found')


def test_error_response_without_json_uses_fallback() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="Internal Server Error")

    with pytest.raises(BackendClientError, match="Failed to fetch weather data"):
        _client(handler).get_weather_by_city("Lisbon")


def test_timeout_has_distinct_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(BackendClientError, match="took too long"):
        _client(handler).get_weather_by_city("Lisbon")


def test_connection_failure_has_distinct_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(BackendClientError, match="Could not connect"):
        _client(handler).get_weather_by_city("Lisbon")


def test_malformed_success_body_is_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"city": "Lisbon"})

    with pytest.raises(BackendClientError, match="unexpected error"):
        _client(handler).get_weather_by_city("Lisbon")


def test_check_health() -> None:
    def healthy(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "ok", "timestamp": "2024-01-15T14:30:00Z"})

    def down(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    assert _client(healthy).check_health() is True
    assert _client(down).check_health() is False


def test_missing_backend_url_is_config_error() -> None:
    settings = SimpleNamespace(backend_api_url=None, client_timeout_seconds=10.0)
    with pytest.raises(ConfigError, match="BACKEND_API_URL"):
        BackendWeatherClient(settings=settings, logger=logging.getLogger("test_client"))  # type: ignore[arg-type]
