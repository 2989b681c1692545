"""Typed settings loader for the city weather backend and client."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, HttpUrl, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`.

    Upstream endpoints have no built-in values and must come from the
    environment; only the timeouts and server bind carry defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")

    geocoding_api_url: HttpUrl = Field(alias="GEOCODING_API_URL")
    weather_api_url: HttpUrl = Field(alias="WEATHER_API_URL")
    api_timeout_ms: int = Field(default=5000, alias="API_TIMEOUT")
    geocoding_language: str = Field(default="en", alias="GEOCODING_LANGUAGE")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")
    cors_origins: str = Field(default="", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    backend_api_url: HttpUrl | None = Field(default=None, alias="BACKEND_API_URL")
    client_timeout_seconds: float = Field(default=10.0, alias="CLIENT_TIMEOUT_SECONDS")

    @field_validator("geocoding_language", "log_level", mode="before")
    @classmethod
    def empty_string_to_default(cls, value: Any, info: Any) -> Any:
        """Treat empty env-string values as unset."""
        if isinstance(value, str) and value.strip() == "":
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("backend_api_url", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_values(self) -> Settings:
        """Validate timeouts, server options and log level."""
        if self.api_timeout_ms <= 0:
            raise ValueError("API_TIMEOUT must be > 0 (milliseconds).")
        if self.client_timeout_seconds <= 0:
            raise ValueError("CLIENT_TIMEOUT_SECONDS must be > 0.")
        if not (1 <= self.port <= 65535):
            raise ValueError("PORT must be between 1 and 65535.")
        self.log_level = self.log_level.strip().upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}.")
        return self

    @property
    def api_timeout_seconds(self) -> float:
        return self.api_timeout_ms / 1000.0

    @property
    def cors_origin_list(self) -> list[str]:
        """Allowed browser origins; empty means cross-origin requests are refused."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def safe_summary(self) -> dict[str, Any]:
        """Return a config summary safe for logging."""
        return {
            "app_env": self.app_env,
            "geocoding_api_url": str(self.geocoding_api_url),
            "weather_api_url": str(self.weather_api_url),
            "api_timeout_ms": self.api_timeout_ms,
            "geocoding_language": self.geocoding_language,
            "cors_origins": self.cors_origin_list,
            "port": self.port,
            "backend_api_url": str(self.backend_api_url) if self.backend_api_url else None,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
