import logging

from fastapi import Depends, Header, HTTPException, Request

from config import settings
from core.limiters import RateLimiters
from core.rate_limiter import RateLimiter, RateLimitResult, check_rate_limit, now_ms

logger = logging.getLogger(__name__)


def get_rate_limiters(request: Request) -> RateLimiters:
    return request.app.state.rate_limiters


async def get_current_user_id(x_user_id: str = Header(..., min_length=1)) -> str:
    return x_user_id


async def verify_admin_secret(
    request: Request,
    x_admin_secret: str = Header(...),
    limiters: RateLimiters = Depends(get_rate_limiters),
) -> None:
    client = request.client.host if request.client else "unknown"

    stats = limiters.auth.get_stats(client)
    if stats and stats.blocked_until and now_ms() < stats.blocked_until:
        raise _too_many_requests(stats.blocked_until - now_ms(), "authenticate")

    if x_admin_secret == settings.ADMIN_SECRET:
        return

    # Only failed attempts count against the auth limiter
    result = limiters.auth.check(client)
    if not result.allowed:
        logger.warning("Admin auth throttled for %s (blocked=%s)", client, result.is_blocked)
        raise _too_many_requests(result.time_until_reset, "authenticate")
    raise HTTPException(status_code=401, detail="Invalid admin secret")


def enforce_rate_limit(limiter: RateLimiter, key: str, action: str) -> RateLimitResult:
    result = check_rate_limit(limiter, key)
    if not result.allowed:
        logger.warning("Rate limit hit: key=%s action=%s", key, action)
        raise _too_many_requests(result.time_until_reset, action)
    return result


def _too_many_requests(time_until_reset: int, action: str) -> HTTPException:
    seconds = max(1, -(-time_until_reset // 1000))
    return HTTPException(
        status_code=429,
        detail=f"Rate limit exceeded. Please wait {seconds} seconds before trying to {action} again.",
        headers={"Retry-After": str(seconds)},
    )
