"""Maps upstream Open-Meteo payloads onto the public weather result."""

from __future__ import annotations

from datetime import datetime

from ..exceptions import CityNotFoundError
from .codes import describe_weather_code
from .models import (
    CurrentConditions,
    ForecastResponse,
    ForecastUnits,
    GeocodedLocation,
    WeatherResult,
    WeatherUnits,
)


def build_weather_result(location: GeocodedLocation, forecast: ForecastResponse) -> WeatherResult:
    """Assemble a WeatherResult from a geocoded location and a forecast response.

    Coordinates come from the geocoding match rather than the forecast grid
    cell. Unit strings are copied as reported; a missing unit becomes "".
    """
    current = forecast.current
    if current is None:
        raise CityNotFoundError("Current weather data is not available for this location.")
    units = forecast.current_units or ForecastUnits()

    return WeatherResult(
        city=location.name,
        country=location.country,
        coordinates=location.coordinates,
        current=CurrentConditions(
            temperature=current.temperature_2m,
            wind_speed=current.wind_speed_10m,
            humidity=current.relative_humidity_2m,
            weather_code=current.weather_code,
            time=current.time,
        ),
        condition=describe_weather_code(current.weather_code),
        timezone=forecast.timezone,
        units=WeatherUnits(
            temperature=units.temperature_2m or "",
            wind_speed=units.wind_speed_10m or "",
            humidity=units.relative_humidity_2m or "",
        ),
    )


def format_city_label(result: WeatherResult) -> str:
    if result.country:
        return f"{result.city}, {result.country}"
    return result.city


def format_observation_time(value: str) -> str:
    """Render an ISO local timestamp such as `2024-01-15T14:30` for display.

    Anything that does not parse is returned unchanged.
    """
    try:
        observed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return value
    return observed.strftime("%b %d, %Y %H:%M")


def format_weather_summary(result: WeatherResult) -> str:
    """One-line human-readable summary of a weather result."""
    current = result.current
    units = result.units
    return (
        f"{format_city_label(result)}: {current.temperature:g}{units.temperature} "
        f"{result.condition.description}, humidity {current.humidity:g}{units.humidity}, "
        f"wind {current.wind_speed:g} {units.wind_speed}"
    )
