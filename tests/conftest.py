from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv


SAMPLE_PAYLOAD: dict[str, Any] = {
    "latitude": 52.52,
    "longitude": 13.41,
    "current": {
        "time": "2025-12-29T10:00",
        "temperature_2m": 15.3,
        "relative_humidity_2m": 65.0,
        "apparent_temperature": 14.1,
        "is_day": 1,
        "precipitation": 0.5,
        "rain": 0.3,
        "showers": 0.2,
        "snowfall": 0.0,
        "weather_code": 3,
        "cloud_cover": 75.0,
        "pressure_msl": 1013.25,
        "surface_pressure": 1010.0,
        "wind_speed_10m": 12.5,
        "wind_direction_10m": 270.0,
        "wind_gusts_10m": 18.0,
    },
}


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    dotenv_path = repo_root / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path, override=False)


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_PAYLOAD)
