import math

from lagrange_sdk.limiter import Limiter, Limiters, new_limiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_burst_is_exhausted():
    clock = FakeClock()
    lim = Limiter(1.0, 3, "k", clock)
    results = [lim.allow() for _ in range(4)]
    assert results == [True, True, True, False]


def test_tokens_refill_over_time():
    clock = FakeClock()
    lim = Limiter(2.0, 1, "k", clock)
    assert lim.allow() is True
    assert lim.allow() is False
    clock.now += 0.5
    assert lim.allow() is True
    assert lim.allow() is False


def test_refill_capped_at_burst():
    clock = FakeClock()
    lim = Limiter(10.0, 2, "k", clock)
    lim.allow()
    lim.allow()
    clock.now += 100
    assert [lim.allow() for _ in range(3)] == [True, True, False]


def test_zero_burst_never_allows():
    lim = Limiter(5.0, 0, "k", FakeClock())
    assert lim.allow() is False


def test_infinite_rate_always_allows():
    lim = Limiter(math.inf, 0, "k", FakeClock())
    assert all(lim.allow() for _ in range(10))


def test_allow_updates_last_get():
    clock = FakeClock()
    lim = Limiter(1.0, 1, "k", clock)
    clock.now += 30
    lim.allow()
    assert lim.last_get == clock.now


def test_registry_returns_same_limiter_for_key():
    reg = Limiters(FakeClock())
    first = reg.get(1.0, 1, "user")
    assert reg.get(9.0, 9, "user") is first
    assert reg.get(1.0, 1, "other") is not first
    assert len(reg) == 2


def test_clear_expired_drops_stale_only():
    clock = FakeClock()
    reg = Limiters(clock)
    reg.get(1.0, 1, "old")
    clock.now += 45
    fresh = reg.get(1.0, 1, "fresh")
    clock.now += 30
    reg.clear_expired()
    assert "old" not in reg
    assert "fresh" in reg
    fresh.allow()
    clock.now += 60
    reg.clear_expired()
    assert "fresh" in reg


def test_new_limiter_is_shared():
    a = new_limiter(1.0, 2, "shared-key-for-test")
    b = new_limiter(1.0, 2, "shared-key-for-test")
    assert a is b
    assert a.key == "shared-key-for-test"