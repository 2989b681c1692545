"""Application exception classes."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherLookupError(Exception):
    """Base class for classified city weather lookup failures."""

    kind = "unexpected"
    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidCityError(WeatherLookupError):
    """Raised when the city name is missing or outside the allowed length."""

    kind = "invalid_input"
    status_code = 400


class CityNotFoundError(WeatherLookupError):
    """Raised when geocoding finds no match or the forecast has no current data."""

    kind = "not_found"
    status_code = 404


class UpstreamTimeoutError(WeatherLookupError):
    """Raised when an upstream call exceeds its configured deadline."""

    kind = "timeout"
    status_code = 408


class UpstreamError(WeatherLookupError):
    """Raised for transport failures and non-2xx upstream responses."""

    kind = "upstream_failure"
    status_code = 502


class UnexpectedWeatherError(WeatherLookupError):
    """Raised when an unclassified failure escapes the lookup flow."""

    kind = "unexpected"
    status_code = 502


class BackendClientError(Exception):
    """Raised when the weather backend cannot serve a client request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
