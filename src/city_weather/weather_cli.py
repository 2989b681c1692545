"""Command-line weather lookup: direct Open-Meteo mode or through the backend."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.table import Table

from .client import BackendWeatherClient
from .config import load_settings
from .exceptions import BackendClientError, ConfigError, InvalidCityError, WeatherLookupError
from .log_setup import setup_logger
from .service import build_weather_service, validate_city_name
from .weather.formatter import format_city_label, format_observation_time
from .weather.models import WeatherResult


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse weather CLI arguments."""
    parser = argparse.ArgumentParser(description="Show current weather for a city.")
    parser.add_argument("city", help="City name, e.g. 'São Paulo'.")
    parser.add_argument(
        "--backend-url",
        type=str,
        default=None,
        help="Query a running weather backend instead of calling Open-Meteo directly.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw result as JSON instead of a table.",
    )
    return parser.parse_args(argv)


def render_weather(console: Console, result: WeatherResult) -> None:
    current = result.current
    units = result.units
    table = Table(title=f"{result.condition.icon}  {format_city_label(result)}")
    table.add_column("Field")
    table.add_column("Value", overflow="fold")
    table.add_row("Conditions", result.condition.description)
    table.add_row("Temperature", f"{current.temperature:.1f}{units.temperature}")
    table.add_row("Humidity", f"{current.humidity:g}{units.humidity}")
    table.add_row("Wind speed", f"{current.wind_speed:.1f} {units.wind_speed}")
    table.add_row(
        "Coordinates",
        f"{result.coordinates.latitude:.4f}°, {result.coordinates.longitude:.4f}°",
    )
    table.add_row("Timezone", result.timezone)
    table.add_row("Observed", format_observation_time(current.time))
    console.print(table)


def render_error(console: Console, message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")


def main(argv: list[str] | None = None) -> int:
    """Run a single weather lookup and render the outcome."""
    args = parse_args(argv)
    logger = setup_logger("city_weather.cli")
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level)

    try:
        city = validate_city_name(args.city)
    except InvalidCityError as exc:
        render_error(console, exc.message)
        return 3

    try:
        with console.status(f"Fetching weather for {city}..."):
            if args.backend_url:
                with BackendWeatherClient(settings, logger, base_url=args.backend_url) as client:
                    result = client.get_weather_by_city(city)
            else:
                with build_weather_service(settings, logger) as service:
                    result = service.get_weather_by_city(city)
    except WeatherLookupError as exc:
        render_error(console, exc.message)
        return 4
    except BackendClientError as exc:
        render_error(console, exc.message)
        return 4
    except Exception as exc:  # pragma: no cover - last-resort guard for CLI runtime
        logger.exception("Unexpected weather CLI failure: %s", exc)
        render_error(console, "An unexpected error occurred. Please try again later.")
        return 99

    if args.json:
        console.print_json(result.model_dump_json(by_alias=True))
    else:
        render_weather(console, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
