from __future__ import annotations

import functools
from typing import Any

import httpx
import pytest

from meteo_current import cli
from meteo_current.models import WeatherSnapshot
from meteo_current.providers.open_meteo import OpenMeteoClient


def _use_transport(monkeypatch: pytest.MonkeyPatch, handler: Any) -> None:
    monkeypatch.setenv("OPEN_METEO_BASE_URL", "https://weather.test/v1")
    monkeypatch.setattr(
        cli,
        "OpenMeteoClient",
        functools.partial(OpenMeteoClient, transport=httpx.MockTransport(handler)),
    )


def test_cli_prints_snapshot(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], sample_payload: dict[str, Any]
) -> None:
    _use_transport(monkeypatch, lambda request: httpx.Response(200, json=sample_payload))

    exit_code = cli.main(["--latitude", "52.52", "--longitude", "13.41"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Weather for 52.52, 13.41" in output
    assert "Time: 2025-12-29 10:00 UTC" in output
    assert "Day/Night: Day" in output
    assert "- Temperature: 15.3°C" in output
    assert "- Sea level pressure: 1013.2 hPa" in output
    assert "- Wind speed: 12.5 m/s" in output


def test_cli_invalid_coordinates_exit_with_usage_status(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    _use_transport(monkeypatch, handler)

    exit_code = cli.main(["--latitude", "95", "--longitude", "0"])

    assert exit_code == 2
    assert "error: validation: invalid latitude: 95.00" in capsys.readouterr().err


def test_cli_upstream_failure_exits_with_one(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _use_transport(monkeypatch, lambda request: httpx.Response(503, text="maintenance"))

    exit_code = cli.main(["--latitude", "52.52", "--longitude", "13.41"])

    assert exit_code == 1
    assert "error: upstream: API returned status 503: maintenance" in capsys.readouterr().err


def test_render_snapshot_marks_unknown_time_and_night() -> None:
    rendered = cli.render_snapshot(WeatherSnapshot(latitude=-33.87, longitude=151.21))

    assert "Time: unknown" in rendered
    assert "Day/Night: Night" in rendered
    assert "- Relative humidity: 0%" in rendered


def test_cli_bad_timeout_setting_is_reported_without_traceback(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("OPEN_METEO_TIMEOUT_SECONDS", "soon")

    exit_code = cli.main(["--latitude", "52.52", "--longitude", "13.41"])

    assert exit_code == 2
    assert "error: config: OPEN_METEO_TIMEOUT_SECONDS must be a number" in capsys.readouterr().err
