from __future__ import annotations

from dataclasses import dataclass
import os


DEFAULT_BASE_URL = "https://api.open-meteo.com/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0
MAX_CONCURRENT_REQUESTS = 10


@dataclass(frozen=True)
class ClientSettings:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        base_url = self.base_url.strip().rstrip("/")
        if not base_url:
            raise ValueError("base_url must not be empty")
        if not self.timeout_seconds > 0:
            raise ValueError("timeout_seconds must be greater than zero")
        object.__setattr__(self, "base_url", base_url)


def _read_float(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw_value!r}") from exc


def load_client_settings() -> ClientSettings:
    return ClientSettings(
        base_url=os.getenv("OPEN_METEO_BASE_URL") or DEFAULT_BASE_URL,
        timeout_seconds=_read_float("OPEN_METEO_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
    )
