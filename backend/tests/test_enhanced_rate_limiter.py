from unittest.mock import patch

from core.enhanced_rate_limiter import EnhancedRateLimiter

BASE = 1_700_000_000.0


def _limiter(**kwargs) -> EnhancedRateLimiter:
    params = {"max_requests": 2, "window_ms": 1000, "block_ms": 5000}
    params.update(kwargs)
    return EnhancedRateLimiter(**params)


def test_remaining_requests_decrease():
    rl = _limiter(max_requests=3)
    assert [rl.check("k").remaining_requests for _ in range(3)] == [2, 1, 0]


def test_blocks_after_three_violations():
    rl = _limiter()

    with patch("core.rate_limiter.time") as mock_time:
        mock_time.time.return_value = BASE
        rl.check("k")
        rl.check("k")

        first = rl.check("k")
        assert first.allowed is False
        assert first.is_blocked is False

        rl.check("k")
        third = rl.check("k")
        assert third.is_blocked is True
        assert third.time_until_reset == 5000
        assert rl.get_stats("k").violations == 3

        # Blocked even after the counting window has rolled over
        mock_time.time.return_value = BASE + 2
        blocked = rl.check("k")
        assert blocked.allowed is False
        assert blocked.is_blocked is True
        assert blocked.time_until_reset == 3000


def test_violations_survive_window_rollover():
    rl = _limiter()

    with patch("core.rate_limiter.time") as mock_time:
        mock_time.time.return_value = BASE
        for _ in range(5):
            rl.check("k")

        mock_time.time.return_value = BASE + 6
        assert rl.check("k").allowed is True
        assert rl.get_stats("k").violations == 3
        assert rl.get_stats("k").blocked_until is None

        rl.check("k")
        # Next violation re-blocks straight away
        assert rl.check("k").is_blocked is True


def test_clear_violations_lifts_block():
    rl = _limiter()

    with patch("core.rate_limiter.time") as mock_time:
        mock_time.time.return_value = BASE
        for _ in range(5):
            rl.check("k")
        rl.clear_violations("k")

        stats = rl.get_stats("k")
        assert stats.violations == 0
        assert stats.blocked_until is None

        mock_time.time.return_value = BASE + 1.5
        assert rl.check("k").allowed is True


def test_identity_override():
    rl = _limiter(overrides={"super_admin": (10, 1000)})
    assert all(rl.check("a", identity="super_admin").allowed for _ in range(10))
    assert rl.check("b", identity="someone").allowed is True
    assert rl.check("b", identity="someone").allowed is True
    assert rl.check("b", identity="someone").allowed is False


def test_time_until_reset_includes_block():
    rl = _limiter()
    assert rl.get_time_until_reset("k") == 0

    with patch("core.rate_limiter.time") as mock_time:
        mock_time.time.return_value = BASE
        for _ in range(5):
            rl.check("k")
        assert rl.get_time_until_reset("k") == 5000


def test_clear_and_stats():
    rl = _limiter()
    rl.check("k")
    assert rl.get_stats("k").count == 1
    rl.clear("k")
    assert rl.get_stats("k") is None
