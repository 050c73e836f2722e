"""Tests for the fixed-window RateLimiter."""

from api.rate_limit import RateLimiter


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class TestRateLimiter:
    def test_allows_up_to_limit(self):
        limiter = RateLimiter(limit=3, window_seconds=60, clock=FakeClock())
        assert [limiter.hit("1.2.3.4")[0] for _ in range(3)] == [True, True, True]

    def test_blocks_over_limit_with_retry_after(self):
        clock = FakeClock()
        limiter = RateLimiter(limit=2, window_seconds=60, clock=clock)
        limiter.hit("ip")
        limiter.hit("ip")
        clock.now = 15.5
        assert limiter.hit("ip") == (False, 45)

    def test_clients_are_independent(self):
        limiter = RateLimiter(limit=1, window_seconds=60, clock=FakeClock())
        assert limiter.hit("a")[0]
        assert not limiter.hit("a")[0]
        assert limiter.hit("b")[0]

    def test_window_resets(self):
        clock = FakeClock()
        limiter = RateLimiter(limit=1, window_seconds=60, clock=clock)
        limiter.hit("ip")
        clock.now = 60.5
        assert limiter.hit("ip") == (True, 0)

    def test_prune_drops_expired(self):
        clock = FakeClock()
        limiter = RateLimiter(limit=5, window_seconds=60, clock=clock)
        limiter.hit("old")
        clock.now = 30
        limiter.hit("new")
        clock.now = 61
        assert limiter.prune() == 1
        assert list(limiter.clients) == ["new"]

    def test_periodic_prune_on_hit(self):
        clock = FakeClock()
        limiter = RateLimiter(limit=5, window_seconds=60, prune_every=300, clock=clock)
        limiter.hit("old")
        clock.now = 301
        limiter.hit("new")
        assert list(limiter.clients) == ["new"]

    def test_reset(self):
        limiter = RateLimiter(limit=1, clock=FakeClock())
        limiter.hit("ip")
        limiter.reset()
        assert limiter.hit("ip")[0]
