from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from meteo_current.providers.types import ErrorKind, WeatherError


class AdmissionGate:
    """Fixed pool of in-flight request slots.

    Acquisition never waits: a caller either gets a slot right away or is
    turned away with a validation error.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._in_use = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        return self._in_use

    @property
    def available(self) -> int:
        return self._capacity - self._in_use

    def try_acquire(self) -> bool:
        if self._in_use >= self._capacity:
            return False
        self._in_use += 1
        return True

    def release(self) -> None:
        if self._in_use == 0:
            raise RuntimeError("release() called without a matching acquire")
        self._in_use -= 1

    @contextmanager
    def slot(self) -> Iterator[None]:
        if not self.try_acquire():
            raise WeatherError(
                ErrorKind.VALIDATION,
                f"concurrent request limit exceeded ({self._capacity})",
            )
        try:
            yield
        finally:
            self.release()
