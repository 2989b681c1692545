"""HTTP client for the city weather backend (two-tier mode)."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .config import Settings
from .exceptions import BackendClientError, ConfigError
from .weather.models import WeatherResult


class BackendWeatherClient:
    """Calls `GET /weather` on the backend and surfaces its error messages."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        base_url: str | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        configured = base_url or settings.backend_api_url
        if not configured:
            raise ConfigError(
                "No backend URL configured; set BACKEND_API_URL or pass --backend-url."
            )
        self.base_url = str(configured)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=settings.client_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> BackendWeatherClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_weather_by_city(self, city: str) -> WeatherResult:
        try:
            response = self._client.get("/weather", params={"city": city})
        except httpx.TimeoutException as exc:
            raise BackendClientError(
                "The request took too long. Check your connection and try again."
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.error("Backend request to %s failed: %s", self.base_url, exc)
            raise BackendClientError(
                "Could not connect to the weather server. Check your connection."
            ) from exc

        if response.is_error:
            raise BackendClientError(
                self._error_message(response), status_code=response.status_code
            )

        try:
            return WeatherResult.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            self.logger.error("Backend returned an unreadable weather payload: %s", exc)
            raise BackendClientError(
                "An unexpected error occurred. Please try again later.",
                status_code=response.status_code,
            ) from exc

    def check_health(self) -> bool:
        """Return True when the backend liveness probe answers 2xx."""
        try:
            response = self._client.get("/weather/health")
        except httpx.HTTPError:
            return False
        return response.is_success

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        fallback = "Failed to fetch weather data."
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
            return body["message"]
        return fallback
