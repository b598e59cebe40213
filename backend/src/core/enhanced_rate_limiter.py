"""Fixed-window limiter that escalates repeated violations into a block."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable

from core.rate_limiter import now_ms

VIOLATION_THRESHOLD = 3


@dataclass
class EnhancedRateLimitEntry:
    count: int
    reset_time: int
    violations: int = 0
    blocked_until: int | None = None


@dataclass(frozen=True)
class EnhancedRateLimitResult:
    allowed: bool
    time_until_reset: int
    remaining_requests: int
    is_blocked: bool


@dataclass
class EnhancedRateLimiter:
    max_requests: int
    window_ms: int
    block_ms: int = 15 * 60 * 1000
    # identity -> (max_requests, window_ms)
    overrides: dict[str, tuple[int, int]] = field(default_factory=dict)
    limits: dict[Hashable, EnhancedRateLimitEntry] = field(default_factory=dict)

    def check(self, key: Hashable, identity: str | None = None) -> EnhancedRateLimitResult:
        now = now_ms()
        entry = self.limits.get(key)

        if entry and entry.blocked_until and now < entry.blocked_until:
            return EnhancedRateLimitResult(
                allowed=False,
                time_until_reset=entry.blocked_until - now,
                remaining_requests=0,
                is_blocked=True,
            )

        max_requests, window_ms = self._limits_for(identity)

        if entry is None or now > entry.reset_time:
            # Violations survive the rollover, an expired block does not
            self.limits[key] = EnhancedRateLimitEntry(
                count=1,
                reset_time=now + window_ms,
                violations=entry.violations if entry else 0,
            )
            return EnhancedRateLimitResult(
                allowed=True,
                time_until_reset=window_ms,
                remaining_requests=max_requests - 1,
                is_blocked=False,
            )

        if entry.count >= max_requests:
            entry.violations += 1
            if entry.violations >= VIOLATION_THRESHOLD:
                entry.blocked_until = now + self.block_ms
                return EnhancedRateLimitResult(
                    allowed=False,
                    time_until_reset=self.block_ms,
                    remaining_requests=0,
                    is_blocked=True,
                )
            return EnhancedRateLimitResult(
                allowed=False,
                time_until_reset=max(0, entry.reset_time - now),
                remaining_requests=0,
                is_blocked=False,
            )

        entry.count += 1
        return EnhancedRateLimitResult(
            allowed=True,
            time_until_reset=max(0, entry.reset_time - now),
            remaining_requests=max_requests - entry.count,
            is_blocked=False,
        )

    def clear_violations(self, key: Hashable) -> None:
        entry = self.limits.get(key)
        if entry:
            entry.violations = 0
            entry.blocked_until = None

    def get_time_until_reset(self, key: Hashable) -> int:
        entry = self.limits.get(key)
        if entry is None:
            return 0
        return max(0, max(entry.reset_time, entry.blocked_until or 0) - now_ms())

    def get_stats(self, key: Hashable) -> EnhancedRateLimitEntry | None:
        return self.limits.get(key)

    def clear(self, key: Hashable) -> None:
        self.limits.pop(key, None)

    def _limits_for(self, identity: str | None) -> tuple[int, int]:
        if identity and identity in self.overrides:
            return self.overrides[identity]
        return self.max_requests, self.window_ms
