"""Typed models for upstream Open-Meteo payloads and the public weather schema."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Upstream payloads
# ---------------------------------------------------------------------------


class GeocodingCandidate(BaseModel):
    """One match from the geocoding search endpoint."""

    name: str
    latitude: float
    longitude: float
    country: str | None = None
    country_code: str | None = None
    admin1: str | None = None
    timezone: str | None = None


class GeocodingResponse(BaseModel):
    """Geocoding search response; `results` is absent when nothing matched."""

    results: list[GeocodingCandidate] | None = None


class ForecastCurrent(BaseModel):
    """Current-conditions block of the forecast response."""

    time: str
    temperature_2m: float
    relative_humidity_2m: float
    wind_speed_10m: float
    weather_code: int


class ForecastUnits(BaseModel):
    """Unit strings reported alongside the current-conditions block."""

    time: str | None = None
    temperature_2m: str | None = None
    relative_humidity_2m: str | None = None
    wind_speed_10m: str | None = None
    weather_code: str | None = None


class ForecastResponse(BaseModel):
    """Forecast endpoint response restricted to the fields this service reads."""

    latitude: float
    longitude: float
    timezone: str
    timezone_abbreviation: str | None = None
    current_units: ForecastUnits | None = None
    current: ForecastCurrent | None = None


# ---------------------------------------------------------------------------
# Domain / public schema
# ---------------------------------------------------------------------------


class Coordinates(BaseModel):
    """Geographic coordinates in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)


class GeocodedLocation(BaseModel):
    """First geocoding match resolved for a city name."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str | None = None
    coordinates: Coordinates


class CurrentConditions(BaseModel):
    """Current reading in the public response shape."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float
    wind_speed: float = Field(alias="windSpeed")
    humidity: float
    weather_code: int = Field(alias="weatherCode")
    time: str


class WeatherUnits(BaseModel):
    """Unit labels copied verbatim from the forecast response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: str
    wind_speed: str = Field(alias="windSpeed")
    humidity: str


class WeatherCondition(BaseModel):
    """Human-readable description and icon for a WMO weather code."""

    model_config = ConfigDict(frozen=True)

    description: str
    icon: str


class WeatherResult(BaseModel):
    """Formatted weather lookup result returned to callers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    country: str | None = None
    coordinates: Coordinates
    current: CurrentConditions
    condition: WeatherCondition
    timezone: str
    units: WeatherUnits


class ErrorResponse(BaseModel):
    """JSON body of every error response from the backend."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    timestamp: datetime
    path: str
    message: str
    error: str


class HealthStatus(BaseModel):
    """Liveness probe payload."""

    status: str = "ok"
    timestamp: datetime
