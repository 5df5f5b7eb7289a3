from __future__ import annotations

import math

from redis.asyncio import Redis

from app.domain.entities import RateLimitDecision
from app.domain.ports.rate_limiter import RateLimiterPort


_LUA_HIT = """
-- KEYS[1]: counter key
-- ARGV[1]: window length (ms)
local count = redis.call('INCR', KEYS[1])
if count == 1 then
  redis.call('PEXPIRE', KEYS[1], ARGV[1])
end
local ttl = redis.call('PTTL', KEYS[1])
return {count, ttl}
"""


class RedisRateLimiter(RateLimiterPort):
    """Fixed-window counter shared by every process pointing at the same Redis."""

    def __init__(
        self,
        redis: Redis,
        *,
        limit: int,
        window_seconds: int,
        key_prefix: str = "rl:",
    ) -> None:
        self._redis = redis
        self._limit = limit
        self._window_ms = int(window_seconds * 1000)
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def hit(self, key: str) -> RateLimitDecision:
        count, ttl_ms = await self._redis.eval(
            _LUA_HIT, 1, self._key(key), self._window_ms
        )
        count = int(count)
        ttl_ms = int(ttl_ms)
        # -1/-2 would mean the expiry was lost; report a full window
        if ttl_ms < 0:
            ttl_ms = self._window_ms

        return RateLimitDecision(
            allowed=count <= self._limit,
            limit=self._limit,
            remaining=max(0, self._limit - count),
            reset_after_seconds=math.ceil(ttl_ms / 1000),
        )
