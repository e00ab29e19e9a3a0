from __future__ import annotations

import asyncio
from decimal import Decimal
import logging
import math
from types import TracebackType

import httpx

from meteo_current.models import CURRENT_FIELDS, WeatherSnapshot, WireResponse, normalize
from meteo_current.providers.admission import AdmissionGate
from meteo_current.providers.types import ErrorKind, WeatherError, raise_for_response
from meteo_current.settings import MAX_CONCURRENT_REQUESTS, ClientSettings


LOGGER = logging.getLogger(__name__)


def _format_degrees(value: float) -> str:
    return format(Decimal(repr(float(value))).normalize(), "f")


def validate_coordinates(latitude: float, longitude: float) -> None:
    if math.isnan(latitude) or not -90 <= latitude <= 90:
        raise WeatherError(
            ErrorKind.VALIDATION,
            f"invalid latitude: {latitude:.2f} (must be between -90 and 90)",
        )
    if math.isnan(longitude) or not -180 <= longitude <= 180:
        raise WeatherError(
            ErrorKind.VALIDATION,
            f"invalid longitude: {longitude:.2f} (must be between -180 and 180)",
        )


def build_request_params(latitude: float, longitude: float) -> dict[str, str]:
    return {
        "latitude": _format_degrees(latitude),
        "longitude": _format_degrees(longitude),
        "current": ",".join(CURRENT_FIELDS),
        "temperature_unit": "celsius",
        "wind_speed_unit": "ms",
        "precipitation_unit": "mm",
    }


def _cancellation_requested() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class OpenMeteoClient:
    """Fetches current conditions from the Open-Meteo forecast endpoint.

    One instance can be shared by any number of tasks on the same event
    loop. At most ``MAX_CONCURRENT_REQUESTS`` calls are in flight at once;
    further calls fail immediately instead of waiting.

    ``settings.timeout_seconds`` caps each whole round trip. Pass
    ``http_client`` to reuse an existing ``httpx.AsyncClient`` (its own
    per-step timeouts and transport apply too, and it is never closed
    here), or ``transport`` to swap the transport of the client built from
    ``settings``.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._base_url = self._settings.base_url
        self._transport = transport
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._gate = AdmissionGate(MAX_CONCURRENT_REQUESTS)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    async def __aenter__(self) -> OpenMeteoClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch_current_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        validate_coordinates(latitude, longitude)

        if not self._gate.available:
            # A caller that is already being cancelled gets the cancellation, not the limit error.
            if _cancellation_requested():
                raise asyncio.CancelledError()
            LOGGER.debug("All %d request slots in use, rejecting %s,%s", self._gate.capacity, latitude, longitude)

        with self._gate.slot():
            wire = await self._get_current(latitude, longitude)

        return normalize(wire)

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            )
        return self._http_client

    async def _get_current(self, latitude: float, longitude: float) -> WireResponse:
        url = f"{self._base_url}/forecast"
        params = build_request_params(latitude, longitude)

        # httpx applies its timeout per connect/read/write step; this bounds the whole round trip.
        deadline = asyncio.timeout(self._settings.timeout_seconds)
        try:
            LOGGER.debug("GET %s latitude=%s longitude=%s", url, params["latitude"], params["longitude"])
            async with deadline:
                response = await self._client().get(url, params=params)
        except TimeoutError as exc:
            if not deadline.expired():
                raise
            raise WeatherError(ErrorKind.NETWORK, "failed to execute HTTP request") from exc
        except httpx.InvalidURL as exc:
            raise WeatherError(ErrorKind.VALIDATION, "failed to build request URL") from exc
        except httpx.RequestError as exc:
            raise WeatherError(ErrorKind.NETWORK, "failed to execute HTTP request") from exc

        LOGGER.debug("Open-Meteo responded with status %s", response.status_code)
        raise_for_response(response)

        try:
            return WireResponse.from_payload(response.json())
        except (ValueError, RecursionError) as exc:
            raise WeatherError(ErrorKind.UPSTREAM, "failed to parse JSON response") from exc
