"""Per-key token bucket rate limiters."""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable

_EXPIRY_SECONDS = 60.0
_CLEAN_INTERVAL = 60.0


class Limiter:
    """A token bucket filled at ``rate`` tokens a second, holding at most ``burst``."""

    def __init__(
        self,
        rate: float,
        burst: int,
        key: str,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.rate = rate
        self.burst = burst
        self.key = key
        self._clock = clock
        self._lock = threading.Lock()
        now = clock()
        self._tokens = float(burst)
        self._updated = now
        self.last_get = now

    def allow(self) -> bool:
        """Take one token if one is available."""
        with self._lock:
            now = self._clock()
            self.last_get = now
            if math.isinf(self.rate):
                return True
            elapsed = max(0.0, now - self._updated)
            self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
            self._updated = now
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False


class Limiters:
    """A registry of limiters by key, dropping those unused for a minute."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._limiters: dict[str, Limiter] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._limiters)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._limiters

    def get(self, rate: float, burst: int, key: str) -> Limiter:
        """Return the limiter for ``key``, creating it if needed."""
        with self._lock:
            limiter = self._limiters.get(key)
            if limiter is None:
                limiter = Limiter(rate, burst, key, self._clock)
                self._limiters[key] = limiter
            return limiter

    def clear_expired(self) -> None:
        """Drop limiters not used for more than a minute."""
        now = self._clock()
        with self._lock:
            stale = [k for k, lim in self._limiters.items() if now - lim.last_get > _EXPIRY_SECONDS]
            for key in stale:
                del self._limiters[key]


GLOBAL_LIMITERS = Limiters()

_cleaner_lock = threading.Lock()
_cleaner_started = False


def _clean_forever() -> None:
    while True:
        time.sleep(_CLEAN_INTERVAL)
        GLOBAL_LIMITERS.clear_expired()


def _start_cleaner() -> None:
    global _cleaner_started
    with _cleaner_lock:
        if _cleaner_started:
            return
        threading.Thread(target=_clean_forever, name="limiter-cleaner", daemon=True).start()
        _cleaner_started = True


def new_limiter(rate: float, burst: int, key: str) -> Limiter:
    """Return the shared limiter for ``key``, starting the cleaner on first use."""
    _start_cleaner()
    return GLOBAL_LIMITERS.get(rate, burst, key)