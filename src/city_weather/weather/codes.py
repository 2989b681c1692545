"""WMO weather interpretation codes as reported by Open-Meteo."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from .models import WeatherCondition

UNKNOWN_CONDITION = WeatherCondition(description="Unknown condition", icon="❓")

WEATHER_CODES: MappingProxyType[int, WeatherCondition] = MappingProxyType(
    {
        0: WeatherCondition(description="Clear sky", icon="☀️"),
        1: WeatherCondition(description="Mainly clear", icon="🌤️"),
        2: WeatherCondition(description="Partly cloudy", icon="⛅"),
        3: WeatherCondition(description="Overcast", icon="☁️"),
        45: WeatherCondition(description="Fog", icon="🌫️"),
        48: WeatherCondition(description="Depositing rime fog", icon="🌫️"),
        51: WeatherCondition(description="Light drizzle", icon="🌦️"),
        53: WeatherCondition(description="Moderate drizzle", icon="🌦️"),
        55: WeatherCondition(description="Dense drizzle", icon="🌧️"),
        56: WeatherCondition(description="Light freezing drizzle", icon="🌧️"),
        57: WeatherCondition(description="Dense freezing drizzle", icon="🌧️"),
        61: WeatherCondition(description="Slight rain", icon="🌧️"),
        63: WeatherCondition(description="Moderate rain", icon="🌧️"),
        65: WeatherCondition(description="Heavy rain", icon="⛈️"),
        66: WeatherCondition(description="Light freezing rain", icon="🌧️"),
        67: WeatherCondition(description="Heavy freezing rain", icon="🌧️"),
        71: WeatherCondition(description="Slight snowfall", icon="🌨️"),
        73: WeatherCondition(description="Moderate snowfall", icon="🌨️"),
        75: WeatherCondition(description="Heavy snowfall", icon="❄️"),
        77: WeatherCondition(description="Snow grains", icon="🧊"),
        80: WeatherCondition(description="Slight rain showers", icon="🌦️"),
        81: WeatherCondition(description="Moderate rain showers", icon="🌧️"),
        82: WeatherCondition(description="Violent rain showers", icon="⛈️"),
        85: WeatherCondition(description="Slight snow showers", icon="🌨️"),
        86: WeatherCondition(description="Heavy snow showers", icon="❄️"),
        95: WeatherCondition(description="Thunderstorm", icon="⛈️"),
        96: WeatherCondition(description="Thunderstorm with slight hail", icon="⛈️"),
        99: WeatherCondition(description="Thunderstorm with heavy hail", icon="⛈️"),
    }
)


def describe_weather_code(code: Any) -> WeatherCondition:
    """Return the condition for a WMO code, or UNKNOWN_CONDITION if unmapped."""
    # bool is an int subclass; True must not resolve to code 1.
    if isinstance(code, bool) or not isinstance(code, int):
        return UNKNOWN_CONDITION
    return WEATHER_CODES.get(code, UNKNOWN_CONDITION)
