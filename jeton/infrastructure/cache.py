# jeton/infrastructure/cache.py
#
# Single-slot TTL cache for the strategic company valuation.
#
# Design decisions:
#   - One slot: the valuation has no key, there is exactly one company.
#   - The clock is injectable so tests can advance time without sleeping.
#     Defaults to time.time (wall clock), matching the TTL semantics of the
#     settings value VALUATION_CACHE_TTL_SECONDS.
#   - The instance is owned by the app (see dependencies.get_valuation_cache)
#     and injected into ValuationBridge. NullValuationCache turns caching off.
#   - Process-local: several server processes each hold their own slot, so a
#     value may be up to one TTL stale across instances.
from __future__ import annotations

import time
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")


class ValuationCache(Protocol[T]):
    def get(self) -> T | None: ...
    def set(self, value: T) -> None: ...
    def invalidate(self) -> None: ...


class TTLValuationCache(Generic[T]):
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds cannot be negative")
        self._ttl = ttl_seconds
        self._clock = clock
        self._value: T | None = None
        self._stored_at = 0.0

    def get(self) -> T | None:
        if self._value is None:
            return None
        if self._clock() - self._stored_at >= self._ttl:
            return None
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._stored_at = self._clock()

    def invalidate(self) -> None:
        self._value = None
        self._stored_at = 0.0


class NullValuationCache(Generic[T]):
    """Never stores anything. Used in tests and when the TTL is 0."""

    def get(self) -> T | None:
        return None

    def set(self, value: T) -> None:
        return None

    def invalidate(self) -> None:
        return None
