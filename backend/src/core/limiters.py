import logging
from dataclasses import dataclass

from core.enhanced_rate_limiter import EnhancedRateLimiter
from core.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@dataclass
class RateLimiters:
    admin_sync: RateLimiter[str]
    league_create: RateLimiter[str]
    league_join: RateLimiter[str]
    auth: EnhancedRateLimiter

    def get(self, name: str) -> RateLimiter | EnhancedRateLimiter | None:
        if name not in {"admin_sync", "league_create", "league_join", "auth"}:
            return None
        return getattr(self, name)


def build_rate_limiters(settings) -> RateLimiters:
    limiters = RateLimiters(
        admin_sync=RateLimiter(settings.ADMIN_SYNC_MAX_REQUESTS, settings.ADMIN_SYNC_WINDOW_MS),
        league_create=RateLimiter(
            settings.LEAGUE_CREATE_MAX_REQUESTS, settings.LEAGUE_CREATE_WINDOW_MS
        ),
        league_join=RateLimiter(settings.LEAGUE_JOIN_MAX_REQUESTS, settings.LEAGUE_JOIN_WINDOW_MS),
        auth=EnhancedRateLimiter(
            max_requests=settings.AUTH_MAX_REQUESTS,
            window_ms=settings.AUTH_WINDOW_MS,
            block_ms=settings.AUTH_BLOCK_MS,
        ),
    )
    logger.info(
        "Rate limiters ready: admin_sync=%d/%dms league_create=%d/%dms league_join=%d/%dms",
        settings.ADMIN_SYNC_MAX_REQUESTS,
        settings.ADMIN_SYNC_WINDOW_MS,
        settings.LEAGUE_CREATE_MAX_REQUESTS,
        settings.LEAGUE_CREATE_WINDOW_MS,
        settings.LEAGUE_JOIN_MAX_REQUESTS,
        settings.LEAGUE_JOIN_WINDOW_MS,
    )
    return limiters
