"""Response formatter tests: field mapping, unit pass-through, idempotence."""

from __future__ import annotations

from typing import Any

import pytest

from city_weather.exceptions import CityNotFoundError
from city_weather.weather.codes import UNKNOWN_CONDITION
from city_weather.weather.formatter import (
    build_weather_result,
    format_observation_time,
    format_weather_summary,
)
from city_weather.weather.models import (
    Coordinates,
    ForecastResponse,
    GeocodedLocation,
)


def _location(**overrides: Any) -> GeocodedLocation:
    payload: dict[str, Any] = {
        "name": "São Paulo",
        "country": "Brazil",
        "coordinates": {"latitude": -23.5505, "longitude": -46.6333},
    }
    payload.update(overrides)
    return GeocodedLocation.model_validate(payload)


def _forecast_payload(**current_overrides: Any) -> dict[str, Any]:
    current = {
        "time": "2024-01-15T14:30",
        "interval": 900,
        "temperature_2m": 25.5,
        "relative_humidity_2m": 65,
        "wind_speed_10m": 12.3,
        "weather_code": 0,
    }
    current.update(current_overrides)
    return {
        "latitude": -23.5,
        "longitude": -46.625,
        "timezone": "America/Sao_Paulo",
        "timezone_abbreviation": "BRT",
        "current_units": {
            "time": "iso8601",
            "temperature_2m": "°C",
            "relative_humidity_2m": "%",
            "wind_speed_10m": "km/h",
            "weather_code": "wmo code",
        },
        "current": current,
    }


def test_sao_paulo_round_trip() -> None:
    forecast = ForecastResponse.model_validate(_forecast_payload())
    result = build_weather_result(_location(), forecast)

    assert result.city == "São Paulo"
    assert result.country == "Brazil"
    assert result.coordinates == Coordinates(latitude=-23.5505, longitude=-46.6333)
    assert result.current.temperature == 25.5
    assert result.current.humidity == 65
    assert result.current.wind_speed == 12.3
    assert result.current.weather_code == 0
    assert result.current.time == "2024-01-15T14:30"
    assert result.condition.description == "Clear sky"
    assert result.timezone == "America/Sao_Paulo"


def test_public_schema_uses_camel_case_keys() -> None:
    forecast = ForecastResponse.model_validate(_forecast_payload())
    body = build_weather_result(_location(), forecast).model_dump(mode="json", by_alias=True)

    assert body["current"] == {
        "temperature": 25.5,
        "windSpeed": 12.3,
        "humidity": 65.0,
        "weatherCode": 0,
        "time": "2024-01-15T14:30",
    }
    assert body["units"] == {"temperature": "°C", "windSpeed": "km/h", "humidity": "%"}
    assert body["coordinates"] == {"latitude": -23.5505, "longitude": -46.6333}


def test_units_are_copied_verbatim() -> None:
    payload = _forecast_payload()
    payload["current_units"].update(
        {"temperature_2m": "°F", "wind_speed_10m": "mp/h", "relative_humidity_2m": "pct"}
    )
    result = build_weather_result(_location(), ForecastResponse.model_validate(payload))
    assert result.units.temperature == "°F"
    assert result.units.wind_speed == "mp/h"
    assert result.units.humidity == "pct"
    # Values are not converted along with the unit label.
    assert result.current.temperature == 25.5


def test_missing_units_become_empty_strings() -> None:
    payload = _forecast_payload()
    del payload["current_units"]
    result = build_weather_result(_location(), ForecastResponse.model_validate(payload))
    assert result.units.temperature == ""
    assert result.units.wind_speed == ""
    assert result.units.humidity == ""


def test_unknown_weather_code_maps_to_unknown_condition() -> None:
    forecast = ForecastResponse.model_validate(_forecast_payload(weather_code=42))
    result = build_weather_result(_location(), forecast)
    assert result.condition == UNKNOWN_CONDITION
    assert result.current.weather_code == 42


def test_formatting_is_idempotent() -> None:
    payload = _forecast_payload()
    first = build_weather_result(_location(), ForecastResponse.model_validate(payload))
    second = build_weather_result(_location(), ForecastResponse.model_validate(payload))
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_missing_current_block_is_not_found() -> None:
    payload = _forecast_payload()
    del payload["current"]
    with pytest.raises(CityNotFoundError):
        build_weather_result(_location(), ForecastResponse.model_validate(payload))


def test_summary_line() -> None:
    forecast = ForecastResponse.model_validate(_forecast_payload())
    summary = format_weather_summary(build_weather_result(_location(), forecast))
    assert summary == (
        "São Paulo, Brazil: 25.5°C Clear sky, humidity 65%, wind 12.3 km/h"
    )


def test_summary_without_country() -> None:
    forecast = ForecastResponse.model_validate(_forecast_payload())
    result = build_weather_result(_location(country=None), forecast)
    assert format_weather_summary(result).startswith("São Paulo: 25.5°C")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-15T14:30", "Jan 15, 2024 14:30"),
        ("2024-07-04T09:05:00", "Jul 04, 2024 09:05"),
        ("2024-01-15T14:30+02:00", "Jan 15, 2024 14:30"),
    ],
)
def test_observation_time_is_human_readable(raw: str, expected: str) -> None:
    assert format_observation_time(raw) == expected


@pytest.mark.parametrize("raw", ["", "yesterday afternoon", "2024-13-45T99:99"])
def test_unparseable_observation_time_is_shown_as_is(raw: str) -> None:
    assert format_observation_time(raw) == raw
