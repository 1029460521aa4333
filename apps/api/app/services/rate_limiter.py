"""Fixed-window request counter keyed by route and client."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import threading
import time
from typing import Callable

from app.core.logging_safety import safe_log_identifier
from app.errors import RateLimitedError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RateWindow:
    key: str
    count: int
    window_start: float


class RateLimiter:
    """Counts requests per key inside a fixed window and rejects the excess.

    Windows are created on first sight of a key and reclaimed by ``sweep`` once
    no request for the key has opened a window within ``stale_after_windows``
    windows. ``hit`` runs a sweep at most once per window so the map stays
    bounded even if nobody calls ``sweep`` explicitly.
    """

    def __init__(
        self,
        *,
        max_requests: int,
        window_seconds: float = 60.0,
        stale_after_windows: int = 5,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if stale_after_windows < 1:
            raise ValueError("stale_after_windows must be at least 1")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.stale_after_windows = stale_after_windows
        self.name = name
        self._clock = clock
        self._windows: dict[str, RateWindow] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def hit(self, key: str) -> RateWindow:
        """Count one request for ``key``; raise ``RateLimitedError`` above the limit."""
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self.window_seconds:
                self._sweep_locked(now)

            window = self._windows.get(key)
            if window is None:
                window = RateWindow(key=key, count=0, window_start=now)
                self._windows[key] = window
            elif now - window.window_start >= self.window_seconds:
                window.count = 0
                window.window_start = now

            window.count += 1
            if window.count <= self.max_requests:
                return RateWindow(key=window.key, count=window.count, window_start=window.window_start)

            retry_after = max(1, math.ceil(window.window_start + self.window_seconds - now))

        logger.warning(
            "ratelimit.rejected limiter=%s key=%s limit=%s retry_after=%s",
            self.name,
            safe_log_identifier(key, prefix="rlk"),
            self.max_requests,
            retry_after,
        )
        raise RateLimitedError(
            limit=self.max_requests,
            window_seconds=self.window_seconds,
            retry_after=retry_after,
        )

    def sweep(self, now: float | None = None) -> int:
        """Drop stale windows and return how many were removed."""
        with self._lock:
            return self._sweep_locked(self._clock() if now is None else now)

    def _sweep_locked(self, now: float) -> int:
        horizon = self.window_seconds * self.stale_after_windows
        stale_keys = [key for key, window in self._windows.items() if now - window.window_start >= horizon]
        for key in stale_keys:
            del self._windows[key]
        self._last_sweep = now
        if stale_keys:
            logger.debug("ratelimit.swept limiter=%s removed=%s remaining=%s", self.name, len(stale_keys), len(self._windows))
        return len(stale_keys)

    def count_for(self, key: str) -> int:
        with self._lock:
            window = self._windows.get(key)
            return window.count if window else 0

    @property
    def active_keys(self) -> int:
        with self._lock:
            return len(self._windows)


__all__ = ["RateLimiter", "RateWindow"]
