"""Time-to-live cache value object for fetched network data."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, Optional, TypeVar


T = TypeVar("T")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TTLCache(Generic[T]):
    """
    Holds a single value together with the time it was stored.

    The clock is injected so expiry can be tested without waiting.
    An expired value is still returned by get(), which lets callers fall
    back to stale data when a refresh fails.
    """

    def __init__(self, ttl_seconds: float, clock: Clock = utc_now):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._value: Optional[T] = None
        self._updated_at: Optional[datetime] = None

    @property
    def updated_at(self) -> Optional[datetime]:
        return self._updated_at

    def now(self) -> datetime:
        return self._clock()

    def get(self) -> Optional[T]:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._updated_at = self._clock()

    def is_expired(self) -> bool:
        """True when nothing is cached or the value is older than the TTL."""
        if self._value is None or self._updated_at is None:
            return True
        return self._clock() - self._updated_at >= self.ttl

    def clear(self) -> None:
        self._value = None
        self._updated_at = None
