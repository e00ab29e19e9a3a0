"""Wire and domain shapes for the Open-Meteo ``current`` block.

``WireResponse`` mirrors the JSON payload, where any measurement may be
``null``. ``WeatherSnapshot`` is what callers get back: every field holds a
value, and measurements the API did not report read as zero. A reported
``0.0 mm`` of rain and an unreported rain field look the same.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, UTC
import math
from typing import Any


CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "cloud_cover",
    "pressure_msl",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
)

_INTEGER_FIELDS = {"is_day", "weather_code"}

TIME_LAYOUT = "%Y-%m-%dT%H:%M"

# Returned when the API sends no usable timestamp. Year 1 never occurs in real data.
ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)


def _finite_float(value: int | float, label: str) -> float:
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError(f"{label} is out of range") from exc
    if not math.isfinite(number):
        raise ValueError(f"{label} must be finite, got {number}")
    return number


def _optional_number(payload: dict[str, Any], key: str) -> float | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"current.{key} must be a number, got {type(value).__name__}")
    return _finite_float(value, f"current.{key}")


def _optional_integer(payload: dict[str, Any], key: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"current.{key} must be an integer, got {type(value).__name__}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"current.{key} must be an integer, got {value}")
        return int(value)
    return value


def _required_number(payload: dict[str, Any], key: str) -> float:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number")
    return _finite_float(value, key)


@dataclass(slots=True)
class WireCurrent:
    time: str | None = None
    temperature_2m: float | None = None
    relative_humidity_2m: float | None = None
    apparent_temperature: float | None = None
    is_day: int | None = None
    precipitation: float | None = None
    rain: float | None = None
    showers: float | None = None
    snowfall: float | None = None
    weather_code: int | None = None
    cloud_cover: float | None = None
    pressure_msl: float | None = None
    surface_pressure: float | None = None
    wind_speed_10m: float | None = None
    wind_direction_10m: float | None = None
    wind_gusts_10m: float | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> WireCurrent:
        raw_time = payload.get("time")
        if raw_time is not None and not isinstance(raw_time, str):
            raise ValueError(f"current.time must be a string, got {type(raw_time).__name__}")

        values: dict[str, Any] = {"time": raw_time}
        for key in CURRENT_FIELDS:
            if key in _INTEGER_FIELDS:
                values[key] = _optional_integer(payload, key)
            else:
                values[key] = _optional_number(payload, key)
        return cls(**values)


@dataclass(slots=True)
class WireResponse:
    latitude: float
    longitude: float
    current: WireCurrent

    @classmethod
    def from_payload(cls, payload: Any) -> WireResponse:
        if not isinstance(payload, dict):
            raise ValueError("Unexpected response shape")

        current = payload.get("current")
        if current is None:
            current = {}
        if not isinstance(current, dict):
            raise ValueError("current must be an object")

        return cls(
            latitude=_required_number(payload, "latitude"),
            longitude=_required_number(payload, "longitude"),
            current=WireCurrent.from_payload(current),
        )


_QUANTITY_FORMATS = {
    "temperature": "{:.1f}°C",
    "apparent_temperature": "{:.1f}°C",
    "relative_humidity": "{:.0f}%",
    "precipitation": "{:.1f} mm",
    "rain": "{:.1f} mm",
    "showers": "{:.1f} mm",
    "snowfall": "{:.1f} mm",
    "cloud_cover": "{:.0f}%",
    "sea_level_pressure": "{:.1f} hPa",
    "surface_pressure": "{:.1f} hPa",
    "wind_speed": "{:.1f} m/s",
    "wind_direction": "{:.0f}°",
    "wind_gusts": "{:.1f} m/s",
}


@dataclass(frozen=True, slots=True)
class WeatherSnapshot:
    """Current conditions at one location, in celsius, mm, hPa and m/s.

    ``time`` is UTC, or ``ZERO_TIME`` when the API gave none.
    """

    latitude: float
    longitude: float
    time: datetime = ZERO_TIME
    temperature: float = 0.0
    apparent_temperature: float = 0.0
    relative_humidity: float = 0.0
    is_day: bool = False
    precipitation: float = 0.0
    rain: float = 0.0
    showers: float = 0.0
    snowfall: float = 0.0
    weather_code: int = 0
    cloud_cover: float = 0.0
    sea_level_pressure: float = 0.0
    surface_pressure: float = 0.0
    wind_speed: float = 0.0
    wind_direction: float = 0.0
    wind_gusts: float = 0.0

    def quantity(self, name: str) -> str:
        """Render one measurement with its unit, e.g. ``quantity("temperature") == "15.3°C"``."""
        try:
            template = _QUANTITY_FORMATS[name]
        except KeyError:
            raise KeyError(f"Unknown quantity: {name}") from None
        return template.format(getattr(self, name))

    def quantities(self) -> dict[str, str]:
        return {
            field.name: self.quantity(field.name)
            for field in fields(self)
            if field.name in _QUANTITY_FORMATS
        }


def _parse_time(value: str | None) -> datetime:
    if value is None:
        return ZERO_TIME
    try:
        return datetime.strptime(value, TIME_LAYOUT).replace(tzinfo=UTC)
    except ValueError:
        return ZERO_TIME


def _or_zero(value: float | None) -> float:
    return value if value is not None else 0.0


def normalize(wire: WireResponse) -> WeatherSnapshot:
    current = wire.current
    return WeatherSnapshot(
        latitude=wire.latitude,
        longitude=wire.longitude,
        time=_parse_time(current.time),
        temperature=_or_zero(current.temperature_2m),
        apparent_temperature=_or_zero(current.apparent_temperature),
        relative_humidity=_or_zero(current.relative_humidity_2m),
        is_day=current.is_day == 1,
        precipitation=_or_zero(current.precipitation),
        rain=_or_zero(current.rain),
        showers=_or_zero(current.showers),
        snowfall=_or_zero(current.snowfall),
        weather_code=current.weather_code if current.weather_code is not None else 0,
        cloud_cover=_or_zero(current.cloud_cover),
        sea_level_pressure=_or_zero(current.pressure_msl),
        surface_pressure=_or_zero(current.surface_pressure),
        wind_speed=_or_zero(current.wind_speed_10m),
        wind_direction=_or_zero(current.wind_direction_10m),
        wind_gusts=_or_zero(current.wind_gusts_10m),
    )
