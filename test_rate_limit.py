#!/usr/bin/env python3
"""
Tests for the token bucket rate limiters.
"""

import pytest

from src.axiom.rate_limit import RateLimiter, create_rate_limiters


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_bucket_starts_full_and_denies_when_empty():
    clock = FakeClock()
    limiter = RateLimiter(rate=1, burst=2, clock=clock)

    assert limiter.try_remove_tokens(1)
    assert limiter.try_remove_tokens(1)
    assert not limiter.try_remove_tokens(1)


def test_bucket_refills_over_time():
    clock = FakeClock()
    limiter = RateLimiter(rate=2, burst=1, clock=clock)

    assert limiter.try_remove_tokens()
    assert not limiter.try_remove_tokens()

    clock.now += 0.25
    assert not limiter.try_remove_tokens()

    clock.now += 0.25
    assert limiter.try_remove_tokens()


def test_refill_capped_at_burst():
    clock = FakeClock()
    limiter = RateLimiter(rate=10, burst=3, clock=clock)

    clock.now += 60
    assert limiter.tokens == 3


def test_refused_call_removes_nothing():
    clock = FakeClock()
    limiter = RateLimiter(rate=1, burst=2, clock=clock)

    assert not limiter.try_remove_tokens(3)
    assert limiter.tokens == 2


def test_invalid_settings_rejected():
    with pytest.raises(ValueError):
        RateLimiter(rate=0, burst=1)
    with pytest.raises(ValueError):
        RateLimiter(rate=1, burst=0)


def test_create_rate_limiters_from_environment(axiom_env):
    axiom_env.setenv("AXIOM_QUERY_RATE", "0.5")
    axiom_env.setenv("AXIOM_QUERY_BURST", "3")

    limiters = create_rate_limiters()

    assert set(limiters) == {"query", "datasets"}
    assert limiters["query"].rate == 0.5
    assert limiters["query"].burst == 3
    assert limiters["datasets"].burst == 1


def test_non_finite_rate_rejected():
    for rate in (float("nan"), float("inf")):
        with pytest.raises(ValueError):
            RateLimiter(rate=rate, burst=1)
