"""In-memory token-bucket throttling for tool calls (per process, best-effort)."""

from __future__ import annotations

import asyncio
import time
from typing import Dict, Mapping, Optional


class TokenBucket:
    def __init__(self, rate: float, capacity: float) -> None:
        self.rate = rate
        self.capacity = capacity
        self.tokens = capacity
        self.timestamp = time.monotonic()
        self._lock = asyncio.Lock()

    async def consume(self, amount: float = 1.0) -> bool:
        async with self._lock:
            now = time.monotonic()
            self.tokens = min(self.capacity, self.tokens + (now - self.timestamp) * self.rate)
            self.timestamp = now
            if self.tokens < amount:
                return False
            self.tokens -= amount
            return True


class PerKeyRateLimiter:
    """
    One bucket per key (tool name), created lazily.

    Keys listed in ``per_tool`` get their own rate; the burst is never smaller
    than one token so a slow tool can still be called once. A rate of 0 or
    below, global or per tool, lets every call for that key through.
    """

    def __init__(
        self,
        rate_per_sec: float,
        burst: Optional[float] = None,
        *,
        per_tool: Optional[Mapping[str, float]] = None,
    ) -> None:
        self.rate = rate_per_sec
        self.burst = burst if burst is not None else rate_per_sec
        self.per_tool = dict(per_tool or {})
        self._buckets: Dict[str, TokenBucket] = {}
        self._lock = asyncio.Lock()

    def rate_for(self, key: str) -> float:
        return self.per_tool.get(key, self.rate)

    def _new_bucket(self, key: str) -> TokenBucket:
        rate = self.rate_for(key)
        burst = self.burst if key not in self.per_tool else rate
        return TokenBucket(rate, max(burst, 1.0))

    async def allow(self, key: str) -> bool:
        if self.rate_for(key) <= 0:
            return True
        async with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = self._new_bucket(key)
                self._buckets[key] = bucket
        return await bucket.consume()
