"""Open-Meteo geocoding and forecast provider implementations."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import (
    CityNotFoundError,
    UnexpectedWeatherError,
    UpstreamError,
    UpstreamTimeoutError,
)
from .base import ConditionsProvider, GeocodingProvider
from .models import Coordinates, ForecastResponse, GeocodedLocation, GeocodingResponse

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "wind_speed_10m",
    "weather_code",
)


class _OpenMeteoHTTP:
    """Shared httpx plumbing and failure classification for Open-Meteo calls."""

    service_label = "Open-Meteo"

    def __init__(self, settings: Settings, logger: logging.Logger) -> None:
        self.settings = settings
        self.logger = logger
        self._client = httpx.Client(
            timeout=settings.api_timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": "city-weather/0.1",
            },
        )

    def __enter__(self) -> _OpenMeteoHTTP:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request_json(self, url: str, params: dict[str, Any], context: str) -> dict[str, Any]:
        """GET `url` and decode a JSON object within one overall deadline.

        httpx timeouts bound each connect/read step separately, so a server
        trickling bytes could outlive them; the body is streamed and the
        deadline checked after every chunk.
        """
        deadline = time.monotonic() + self.settings.api_timeout_seconds
        try:
            with self._client.stream("GET", url, params=params) as response:
                body = bytearray()
                self._check_deadline(deadline, response.request)
                for chunk in response.iter_bytes():
                    body.extend(chunk)
                    self._check_deadline(deadline, response.request)
                status = response.status_code
        except httpx.TimeoutException as exc:
            self.logger.error(
                "%s %s timed out after %sms",
                self.service_label, context, self.settings.api_timeout_ms,
                extra={"upstream": self.service_label, "kind": UpstreamTimeoutError.kind},
            )
            raise UpstreamTimeoutError(
                f"The {self.service_label} {context} took too long. Please try again."
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.error(
                "%s %s request failed (%s): %s",
                self.service_label, context, type(exc).__name__, exc,
                extra={"upstream": self.service_label, "kind": UpstreamError.kind},
            )
            raise UpstreamError(
                f"Could not reach the {self.service_label} {context}. Please try again."
            ) from exc

        if not 200 <= status < 300:
            self.logger.error(
                "%s %s failed with status %d: %s",
                self.service_label, context, status,
                bytes(body[:300]).decode("utf-8", errors="replace"),
                extra={"upstream": self.service_label, "status_code": status},
            )
            raise UpstreamError(
                f"The {self.service_label} {context} failed. Please try again."
            )

        try:
            payload = json.loads(body)
        except ValueError as exc:
            self.logger.error("%s %s returned non-JSON response", self.service_label, context)
            raise UnexpectedWeatherError(
                "Failed to process weather data. Please try again later."
            ) from exc

        if not isinstance(payload, dict):
            self.logger.error(
                "%s %s returned unexpected payload type %s",
                self.service_label, context, type(payload).__name__,
            )
            raise UnexpectedWeatherError(
                "Failed to process weather data. Please try again later."
            )
        return payload

    def _check_deadline(self, deadline: float, request: httpx.Request) -> None:
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout(
                f"exceeded {self.settings.api_timeout_ms}ms overall deadline", request=request
            )


class OpenMeteoGeocoder(_OpenMeteoHTTP, GeocodingProvider):
    """Resolves city names through the Open-Meteo geocoding search API."""

    service_label = "geocoding service"

    def geocode(self, city: str) -> GeocodedLocation:
        """Return the first match for `city`; ambiguous names resolve silently."""
        self.logger.debug("Resolving coordinates for %s", city)
        payload = self._request_json(
            str(self.settings.geocoding_api_url),
            params={
                "name": city,
                "count": 1,
                "language": self.settings.geocoding_language,
                "format": "json",
            },
            context="lookup",
        )
        parsed = GeocodingResponse.model_validate(payload)
        if not parsed.results:
            self.logger.warning("City not found: %s", city)
            raise CityNotFoundError(
                f'City "{city}" not found. Check the name and try again.'
            )

        match = parsed.results[0]
        self.logger.debug(
            "Resolved %s to lat=%s lon=%s", city, match.latitude, match.longitude
        )
        return GeocodedLocation(
            name=match.name,
            country=match.country,
            coordinates=Coordinates(latitude=match.latitude, longitude=match.longitude),
        )


class OpenMeteoWeatherProvider(_OpenMeteoHTTP, ConditionsProvider):
    """Fetches current conditions from the Open-Meteo forecast API."""

    service_label = "weather service"

    def fetch_current(self, coordinates: Coordinates) -> ForecastResponse:
        """Fetch current temperature, humidity, wind speed and weather code."""
        self.logger.debug(
            "Fetching current conditions for lat=%s lon=%s",
            coordinates.latitude, coordinates.longitude,
        )
        payload = self._request_json(
            str(self.settings.weather_api_url),
            params={
                "latitude": coordinates.latitude,
                "longitude": coordinates.longitude,
                "current": ",".join(CURRENT_FIELDS),
                "timezone": "auto",
            },
            context="forecast request",
        )
        forecast = ForecastResponse.model_validate(payload)
        if forecast.current is None:
            self.logger.warning(
                "Forecast response had no current conditions for lat=%s lon=%s",
                coordinates.latitude, coordinates.longitude,
            )
            raise CityNotFoundError(
                "Current weather data is not available for this location."
            )
        return forecast
