"""Geocoding and current-conditions integrations."""

from .base import ConditionsProvider, GeocodingProvider
from .codes import UNKNOWN_CONDITION, WEATHER_CODES, describe_weather_code
from .formatter import build_weather_result, format_observation_time, format_weather_summary
from .models import (
    Coordinates,
    CurrentConditions,
    ForecastResponse,
    GeocodedLocation,
    WeatherCondition,
    WeatherResult,
    WeatherUnits,
)
from .open_meteo import OpenMeteoGeocoder, OpenMeteoWeatherProvider

__all__ = [
    "UNKNOWN_CONDITION",
    "WEATHER_CODES",
    "ConditionsProvider",
    "Coordinates",
    "CurrentConditions",
    "ForecastResponse",
    "GeocodedLocation",
    "GeocodingProvider",
    "OpenMeteoGeocoder",
    "OpenMeteoWeatherProvider",
    "WeatherCondition",
    "WeatherResult",
    "WeatherUnits",
    "build_weather_result",
    "describe_weather_code",
    "format_observation_time",
    "format_weather_summary",
]
