from .models import ZERO_TIME, WeatherSnapshot, WireCurrent, WireResponse, normalize
from .providers import ErrorKind, OpenMeteoClient, WeatherError
from .settings import MAX_CONCURRENT_REQUESTS, ClientSettings, load_client_settings

__all__ = [
    "ClientSettings",
    "ErrorKind",
    "MAX_CONCURRENT_REQUESTS",
    "OpenMeteoClient",
    "WeatherError",
    "WeatherSnapshot",
    "WireCurrent",
    "WireResponse",
    "ZERO_TIME",
    "load_client_settings",
    "normalize",
]
