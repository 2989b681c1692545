"""FastAPI backend exposing the city weather lookup over HTTP."""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from http import HTTPStatus

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .exceptions import ConfigError, WeatherLookupError
from .log_setup import setup_logger
from .service import WeatherService, build_weather_service
from .weather.models import ErrorResponse, HealthStatus, WeatherResult


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _request_path(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    """Build the uniform JSON error body used for every failed request."""
    body = ErrorResponse(
        status_code=status_code,
        timestamp=datetime.now(UTC),
        path=_request_path(request),
        message=message,
        error=_status_phrase(status_code),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
    )


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = error.get("loc", ())
        field = location[-1] if location else "request"
        if error.get("type") == "missing" and field == "city":
            messages.append("City name is required.")
        else:
            messages.append(f"{field}: {error.get('msg', 'invalid value')}")
    return ", ".join(messages) or "Invalid request."


def create_app(
    service: WeatherService | None = None,
    *,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
) -> FastAPI:
    """Build the FastAPI app; tests inject a stub service and settings."""
    app_settings = settings or load_settings()
    app_logger = logger or setup_logger(level=app_settings.log_level)
    weather_service = service or build_weather_service(app_settings, app_logger)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        app_logger.info("Weather backend starting: %s", app_settings.safe_summary())
        yield
        weather_service.close()
        app_logger.info("Weather backend stopped")

    app = FastAPI(title="City Weather", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    @app.exception_handler(WeatherLookupError)
    async def _lookup_error_handler(request: Request, exc: WeatherLookupError) -> JSONResponse:
        app_logger.error(
            "HTTP %d error on %s: %s", exc.status_code, request.url.path, exc.message,
            extra={"path": request.url.path, "status_code": exc.status_code, "kind": exc.kind},
        )
        return error_response(request, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _validation_message(exc)
        app_logger.error(
            "HTTP 400 error on %s: %s", request.url.path, message,
            extra={"path": request.url.path, "status_code": 400, "kind": "invalid_input"},
        )
        return error_response(request, 400, message)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else _status_phrase(exc.status_code)
        app_logger.error(
            "HTTP %d error on %s: %s", exc.status_code, request.url.path, message,
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
        return error_response(request, exc.status_code, message)

    @app.get("/weather", response_model=WeatherResult)
    def get_weather(city: str = Query(...)) -> WeatherResult:
        app_logger.info(
            "Weather request received for city=%s", city, extra={"city": city, "path": "/weather"}
        )
        result = weather_service.get_weather_by_city(city)
        app_logger.info(
            "Weather response sent for city=%s", result.city,
            extra={"city": result.city, "path": "/weather", "status_code": 200},
        )
        return result

    @app.get("/weather/health", response_model=HealthStatus)
    def health() -> HealthStatus:
        return HealthStatus(status="ok", timestamp=datetime.now(UTC))

    app.state.settings = app_settings
    app.state.weather_service = weather_service
    return app


def main() -> int:
    """Run the weather backend under uvicorn."""
    logger = setup_logger()
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    logger.setLevel(settings.log_level)
    app = create_app(settings=settings, logger=logger)
    if settings.cors_origin_list:
        logger.info("CORS enabled for: %s", ", ".join(settings.cors_origin_list))
    else:
        logger.warning("CORS_ORIGINS is empty; cross-origin browser requests will be refused")
    logger.info("Endpoint available at http://localhost:%d/weather?city=London", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
