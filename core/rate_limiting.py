"""Per-key sliding window rate limiting.

The limiter is process local and resets on restart. Callers depend on the
:class:`RateLimiter` protocol so a shared store can replace it later.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Any, Callable, Dict, Protocol

logger = logging.getLogger(__name__)

SWEEP_INTERVAL_SECONDS = 300.0


class RateLimiter(Protocol):
    def allows(self, key: str, window_seconds: float, max_requests: int) -> bool:
        """Return ``False`` when ``key`` already used its allowance; records nothing."""

    def hit(self, key: str, window_seconds: float) -> None:
        """Count one request against ``key``."""

    def check(self, key: str, window_seconds: float, max_requests: int) -> bool:
        """``allows`` followed by ``hit`` when allowed."""


class InMemoryRateLimiter:
    """Sliding window limiter keeping a deque of hit timestamps per key.

    Keys whose window has emptied are dropped on access and by a periodic
    sweep, so one-off callers do not accumulate.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._hits: Dict[str, deque[float]] = {}
        self._windows: Dict[str, float] = {}
        self._next_sweep = clock() + sweep_interval

    def __len__(self) -> int:
        return len(self._hits)

    def _prune(self, key: str, window_seconds: float, now: float) -> deque[float] | None:
        hits = self._hits.get(key)
        if hits is None:
            return None
        while hits and hits[0] <= now - window_seconds:
            hits.popleft()
        if not hits:
            del self._hits[key]
            self._windows.pop(key, None)
            return None
        return hits

    def _sweep(self, now: float) -> None:
        if now < self._next_sweep:
            return
        self._next_sweep = now + self._sweep_interval
        before = len(self._hits)
        for key in list(self._hits):
            self._prune(key, self._windows.get(key, 0.0), now)
        if before != len(self._hits):
            logger.debug("Rate limiter dropped %s idle keys", before - len(self._hits))

    def allows(self, key: str, window_seconds: float, max_requests: int) -> bool:
        now = self._clock()
        self._sweep(now)
        hits = self._prune(key, window_seconds, now)
        if hits is not None and len(hits) >= max_requests:
            logger.warning(
                "Rate limit exceeded for %s: %s requests in %.1fs",
                key,
                len(hits),
                window_seconds,
            )
            return False
        return True

    def hit(self, key: str, window_seconds: float) -> None:
        self._hits.setdefault(key, deque()).append(self._clock())
        self._windows[key] = max(window_seconds, self._windows.get(key, 0.0))

    def check(self, key: str, window_seconds: float, max_requests: int) -> bool:
        if not self.allows(key, window_seconds, max_requests):
            return False
        self.hit(key, window_seconds)
        return True

    def get_stats(self, key: str, window_seconds: float) -> dict[str, Any]:
        """Expose current limiter statistics for ``key``."""

        now = self._clock()
        hits = self._hits.get(key, ())
        recent = sum(1 for ts in hits if ts > now - window_seconds)
        return {"key": key, "recent_requests": recent, "window_seconds": window_seconds}

    def reset(self) -> None:
        self._hits.clear()
        self._windows.clear()


def rate_limit_key(scope: str, client_ip: str | None) -> str:
    """Return the limiter key for ``scope`` (``llm`` or ``tts``) and caller IP."""

    return f"{scope}:{client_ip or 'unknown'}"


_rate_limiter: InMemoryRateLimiter | None = None


def get_rate_limiter() -> InMemoryRateLimiter:
    """Return the process-wide limiter singleton."""

    global _rate_limiter

    if _rate_limiter is None:
        _rate_limiter = InMemoryRateLimiter()

    return _rate_limiter


__all__ = ["InMemoryRateLimiter", "RateLimiter", "get_rate_limiter", "rate_limit_key"]
