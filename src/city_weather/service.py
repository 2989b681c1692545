"""City weather lookup: geocode, fetch current conditions, format."""

from __future__ import annotations

import logging
from typing import Any

from .config import Settings
from .exceptions import InvalidCityError, UnexpectedWeatherError, WeatherLookupError
from .weather.base import ConditionsProvider, GeocodingProvider
from .weather.formatter import build_weather_result
from .weather.models import WeatherResult
from .weather.open_meteo import OpenMeteoGeocoder, OpenMeteoWeatherProvider

CITY_NAME_MIN_LENGTH = 2
CITY_NAME_MAX_LENGTH = 100


def validate_city_name(city: str | None) -> str:
    """Trim a city name and enforce the accepted length bounds."""
    if city is None or not isinstance(city, str):
        raise InvalidCityError("City name is required.")
    trimmed = city.strip()
    if not trimmed:
        raise InvalidCityError("City name is required.")
    if len(trimmed) < CITY_NAME_MIN_LENGTH:
        raise InvalidCityError(
            f"City name must be at least {CITY_NAME_MIN_LENGTH} characters long."
        )
    if len(trimmed) > CITY_NAME_MAX_LENGTH:
        raise InvalidCityError(
            f"City name must be at most {CITY_NAME_MAX_LENGTH} characters long."
        )
    return trimmed


class WeatherService:
    """Runs one sequential geocode -> forecast -> format lookup per call.

    Holds no per-request state; each call builds its own values and either
    returns a complete WeatherResult or raises a WeatherLookupError.
    """

    def __init__(
        self,
        geocoder: GeocodingProvider,
        conditions: ConditionsProvider,
        logger: logging.Logger,
    ) -> None:
        self.geocoder = geocoder
        self.conditions = conditions
        self.logger = logger

    def __enter__(self) -> WeatherService:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self.geocoder.close()
        self.conditions.close()

    def get_weather_by_city(self, city: str | None) -> WeatherResult:
        """Resolve `city` and return its current weather.

        Raises:
            InvalidCityError: name missing or outside 2..100 characters.
            CityNotFoundError: no geocoding match or no current data.
            UpstreamTimeoutError: either upstream call exceeded its timeout.
            UpstreamError: transport failure or non-2xx upstream response.
            UnexpectedWeatherError: anything else, with a user-safe message.
        """
        city_name = validate_city_name(city)
        context = {"city": city_name}
        self.logger.info("Weather lookup started for %s", city_name, extra=context)

        try:
            location = self.geocoder.geocode(city_name)
            forecast = self.conditions.fetch_current(location.coordinates)
            result = build_weather_result(location, forecast)
        except WeatherLookupError as exc:
            self.logger.warning(
                "Weather lookup for %s failed (%s): %s", city_name, exc.kind, exc.message,
                extra={**context, "kind": exc.kind, "status_code": exc.status_code},
            )
            raise
        except Exception as exc:
            self.logger.exception(
                "Unexpected failure looking up weather for %s", city_name,
                extra={**context, "kind": UnexpectedWeatherError.kind},
            )
            raise UnexpectedWeatherError(
                "Failed to process weather data. Please try again later."
            ) from exc

        self.logger.info(
            "Weather lookup succeeded for %s: %g%s",
            city_name, result.current.temperature, result.units.temperature,
            extra=context,
        )
        return result


def build_weather_service(settings: Settings, logger: logging.Logger) -> WeatherService:
    """Wire the Open-Meteo providers into a WeatherService."""
    return WeatherService(
        geocoder=OpenMeteoGeocoder(settings=settings, logger=logger),
        conditions=OpenMeteoWeatherProvider(settings=settings, logger=logger),
        logger=logger,
    )
