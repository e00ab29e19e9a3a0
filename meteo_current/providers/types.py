from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import httpx


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    NETWORK = "network"
    UPSTREAM = "upstream"


@dataclass(slots=True)
class WeatherError(Exception):
    kind: ErrorKind
    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        status_text = f" (status={self.status_code})" if self.status_code is not None else ""
        cause_text = f": {self.__cause__}" if self.__cause__ is not None else ""
        return f"{self.kind}{status_text} {self.message}{cause_text}"

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    @property
    def is_timeout(self) -> bool:
        """True when a timeout appears anywhere in the cause chain."""
        error = self.__cause__
        seen: set[int] = set()
        while error is not None and id(error) not in seen:
            if isinstance(error, (httpx.TimeoutException, TimeoutError)):
                return True
            seen.add(id(error))
            error = error.__cause__ or error.__context__
        return False


def classify_http_failure(status_code: int) -> ErrorKind:
    if 200 <= status_code < 300:
        raise ValueError(f"status {status_code} is not a failure")
    return ErrorKind.UPSTREAM


def raise_for_response(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise WeatherError(
        kind=classify_http_failure(response.status_code),
        message=f"API returned status {response.status_code}: {response.text[:300]}",
        status_code=response.status_code,
    )
