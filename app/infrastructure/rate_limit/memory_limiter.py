from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable

from app.domain.entities import RateLimitDecision
from app.domain.ports.rate_limiter import RateLimiterPort


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryRateLimiter(RateLimiterPort):
    """
    Fixed-window counter per key, local to this process.
    A key's window opens on its first hit and lasts `window_seconds`.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._next_sweep = clock() + window_seconds

    async def hit(self, key: str) -> RateLimitDecision:
        # no awaits below: read-modify-write is atomic on the event loop
        now = self._clock()
        if now >= self._next_sweep:
            self._sweep(now)

        window = self._windows.get(key)
        if window is None or window.reset_at <= now:
            window = _Window(count=0, reset_at=now + self._window)
            self._windows[key] = window
        window.count += 1

        return RateLimitDecision(
            allowed=window.count <= self._limit,
            limit=self._limit,
            remaining=max(0, self._limit - window.count),
            reset_after_seconds=max(0, math.ceil(window.reset_at - now)),
        )

    def _sweep(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if w.reset_at <= now]
        for k in expired:
            del self._windows[k]
        self._next_sweep = now + self._window
