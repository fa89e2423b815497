"""
Token bucket rate limiting for MCP tool calls.

Queries and dataset operations each get their own bucket so a burst of
queries cannot starve schema lookups.
"""

import math
import time
from typing import Callable, Dict, Optional

from src.logging import get_logger

from .config import get_rate_limit_config

logger = get_logger('RATE_LIMIT')


class RateLimiter:
    """Token bucket that holds up to ``burst`` tokens and refills at ``rate`` tokens per second."""

    def __init__(self, rate: float, burst: int, name: str = "default", clock: Callable[[], float] = time.monotonic):
        if not math.isfinite(rate) or rate <= 0 or burst <= 0:
            raise ValueError("rate must be finite and rate and burst must be positive")
        self.rate = rate
        self.burst = burst
        self.name = name
        self._clock = clock
        self._tokens = float(burst)
        self._last_refill = clock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last_refill)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._last_refill = now

    @property
    def tokens(self) -> float:
        """Tokens currently available."""
        self._refill()
        return self._tokens

    def try_remove_tokens(self, count: int = 1) -> bool:
        """
        Remove ``count`` tokens if they are available.

        Returns:
            True if the tokens were removed, False if the bucket is short. A
            refused call removes nothing.
        """
        self._refill()
        if self._tokens < count:
            logger.warning(f"rate limit exceeded | limiter:{self.name} | available:{self._tokens:.2f}")
            return False
        self._tokens -= count
        return True


def create_rate_limiters(limits: Optional[Dict[str, Dict[str, float]]] = None) -> Dict[str, RateLimiter]:
    """
    Create the query and datasets limiters.

    Args:
        limits: Parsed limits as returned by get_rate_limit_config. Read from
            the environment when omitted.

    Returns:
        ``{"query": RateLimiter, "datasets": RateLimiter}``
    """
    if limits is None:
        limits = get_rate_limit_config()

    limiters = {}
    for name, settings in limits.items():
        limiters[name] = RateLimiter(rate=settings["rate"], burst=int(settings["burst"]), name=name)
        logger.debug(f"rate limiter ready | limiter:{name} | rate:{settings['rate']}/s | burst:{settings['burst']}")

    return limiters
