from typing import Protocol

from app.domain.entities import RateLimitDecision


class RateLimiterPort(Protocol):
    async def hit(self, key: str) -> RateLimitDecision:
        """Count one request for `key` in the current window and decide."""
