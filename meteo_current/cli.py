from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

from meteo_current.models import ZERO_TIME, WeatherSnapshot
from meteo_current.providers.open_meteo import OpenMeteoClient
from meteo_current.providers.types import ErrorKind, WeatherError
from meteo_current.settings import ClientSettings, load_client_settings


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="meteo-current",
        description="Print current weather conditions from Open-Meteo",
    )
    parser.add_argument("--latitude", type=float, required=True, help="Latitude in degrees (-90 to 90)")
    parser.add_argument("--longitude", type=float, required=True, help="Longitude in degrees (-180 to 180)")
    parser.add_argument("--verbose", action="store_true", help="Log HTTP activity at DEBUG level")
    return parser.parse_args(argv)


async def fetch_snapshot(settings: ClientSettings, latitude: float, longitude: float) -> WeatherSnapshot:
    async with OpenMeteoClient(settings) as client:
        return await client.fetch_current_weather(latitude, longitude)


def render_snapshot(snapshot: WeatherSnapshot) -> str:
    observed = "unknown" if snapshot.time == ZERO_TIME else snapshot.time.strftime("%Y-%m-%d %H:%M UTC")
    lines = [
        f"Weather for {snapshot.latitude:.2f}, {snapshot.longitude:.2f}",
        f"Time: {observed}",
        f"Day/Night: {'Day' if snapshot.is_day else 'Night'}",
        f"Weather code: {snapshot.weather_code}",
    ]
    for name, value in snapshot.quantities().items():
        label = name.replace("_", " ").capitalize()
        lines.append(f"- {label}: {value}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    load_dotenv(Path.cwd() / ".env")

    args = _parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = load_client_settings()
    except ValueError as exc:
        print(f"error: config: {exc}", file=sys.stderr)
        return 2

    try:
        snapshot = asyncio.run(fetch_snapshot(settings, args.latitude, args.longitude))
    except WeatherError as error:
        print(f"error: {error.kind}: {error.message}", file=sys.stderr)
        return 2 if error.kind == ErrorKind.VALIDATION else 1

    print(render_snapshot(snapshot))
    return 0
