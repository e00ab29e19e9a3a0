from .admission import AdmissionGate
from .open_meteo import OpenMeteoClient, build_request_params, validate_coordinates
from .types import ErrorKind, WeatherError

__all__ = [
    "AdmissionGate",
    "ErrorKind",
    "OpenMeteoClient",
    "WeatherError",
    "build_request_params",
    "validate_coordinates",
]
