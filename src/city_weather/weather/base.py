"""Provider-agnostic geocoding and current-conditions interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import Coordinates, ForecastResponse, GeocodedLocation


class GeocodingProvider(ABC):
    """Resolves a free-text city name to a single location."""

    @abstractmethod
    def geocode(self, city: str) -> GeocodedLocation:
        """Return the best match for `city` or raise CityNotFoundError."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""


class ConditionsProvider(ABC):
    """Fetches the current-conditions reading for a coordinate pair."""

    @abstractmethod
    def fetch_current(self, coordinates: Coordinates) -> ForecastResponse:
        """Return a forecast response whose `current` block is populated."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
