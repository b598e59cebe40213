from config import settings
from core.enhanced_rate_limiter import EnhancedRateLimiter
from core.limiters import build_rate_limiters
from core.rate_limiter import RateLimiter


def test_default_policies():
    limiters = build_rate_limiters(settings)

    assert (limiters.admin_sync.max_requests, limiters.admin_sync.window_ms) == (3, 300_000)
    assert (limiters.league_create.max_requests, limiters.league_create.window_ms) == (5, 600_000)
    assert (limiters.league_join.max_requests, limiters.league_join.window_ms) == (10, 60_000)
    assert isinstance(limiters.auth, EnhancedRateLimiter)
    assert limiters.auth.block_ms == 3_600_000


def test_limiters_have_separate_key_spaces():
    limiters = build_rate_limiters(settings)
    for _ in range(3):
        limiters.admin_sync.is_allowed("u1")

    assert limiters.admin_sync.is_allowed("u1") is False
    assert limiters.league_create.is_allowed("u1") is True
    assert limiters.league_join.is_allowed("u1") is True


def test_each_build_is_fresh():
    first = build_rate_limiters(settings)
    first.admin_sync.is_allowed("u1")
    second = build_rate_limiters(settings)
    assert second.admin_sync.limits == {}


def test_get_by_name():
    limiters = build_rate_limiters(settings)
    assert isinstance(limiters.get("league_join"), RateLimiter)
    assert limiters.get("auth") is limiters.auth
    assert limiters.get("limits") is None
