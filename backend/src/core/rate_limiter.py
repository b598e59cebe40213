"""Fixed-window request counters, one per caller key.

A window opens on the first request for a key and lasts ``window_ms``.
Expiry is evaluated lazily on the next call, there is no background
eviction. Limits here are advisory: a caller can issue ``max_requests``
just before a reset and another ``max_requests`` right after it.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class RateLimitEntry:
    count: int
    reset_time: int  # ms since epoch


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    time_until_reset: int  # ms


@dataclass
class RateLimiter(Generic[K]):
    max_requests: int = 5
    window_ms: int = 60_000
    limits: dict[K, RateLimitEntry] = field(default_factory=dict)

    def is_allowed(self, key: K) -> bool:
        now = now_ms()
        entry = self.limits.get(key)

        if entry is None or now > entry.reset_time:
            self.limits[key] = RateLimitEntry(count=1, reset_time=now + self.window_ms)
            return True

        if entry.count >= self.max_requests:
            return False

        entry.count += 1
        return True

    def get_time_until_reset(self, key: K) -> int:
        entry = self.limits.get(key)
        if entry is None:
            return 0
        return max(0, entry.reset_time - now_ms())

    def clear(self, key: K) -> None:
        self.limits.pop(key, None)


def check_rate_limit(limiter: RateLimiter[K], key: K) -> RateLimitResult:
    """Count a request against ``limiter`` and report the remaining cooldown.

    The two reads are not atomic with respect to each other.
    """
    allowed = limiter.is_allowed(key)
    return RateLimitResult(allowed=allowed, time_until_reset=limiter.get_time_until_reset(key))
