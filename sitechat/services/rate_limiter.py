from __future__ import annotations

import logging
import math
import uuid
from typing import Awaitable, Callable

from sitechat.core.config import settings
from sitechat.core.errors import RateLimitStoreError
from sitechat.schemas.chat import RateLimitDecision
from sitechat.services import redis_service

logger = logging.getLogger(__name__)

WindowHit = Callable[..., Awaitable[tuple[bool, int, int]]]


class RateLimiter:
    """Sliding-window quota per identifier.

    The limiter holds no counters itself; every decision is delegated to
    ``hit`` (the Redis script by default) so that all server instances share
    the same window for a given identifier.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_sec: int,
        prefix: str = "ratelimit",
        hit: WindowHit | None = None,
    ) -> None:
        self.limit_per_window = limit
        self.window_ms = window_sec * 1000
        self.prefix = prefix
        self._hit = hit or redis_service.hit_sliding_window

    async def limit(self, identifier: str, now_ms: int | None = None) -> RateLimitDecision:
        """Count one request for ``identifier``.

        ``now_ms`` defaults to the Redis server clock so every instance shares
        one time base. Any failure of the quota check is raised as
        ``RateLimitStoreError``.
        """
        key = redis_service.build_rate_limit_key(self.prefix, identifier)
        try:
            allowed, remaining, reset_ms = await self._hit(
                key=key,
                member=uuid.uuid4().hex,
                now_ms=now_ms,
                window_ms=self.window_ms,
                limit=self.limit_per_window,
            )
        except Exception as exc:
            raise RateLimitStoreError(f"rate limit store unavailable key={key}") from exc

        decision = RateLimitDecision(
            allowed=allowed,
            limit=self.limit_per_window,
            remaining=remaining,
            reset=math.ceil(reset_ms / 1000),
        )
        if not decision.allowed:
            logger.info(
                "[RateLimitExceeded] key=%s limit=%d reset=%d",
                key,
                decision.limit,
                decision.reset,
            )
        return decision


_rate_limiter: RateLimiter | None = None


def get_rate_limiter() -> RateLimiter:
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimiter(
            limit=settings.RATE_LIMIT_REQUESTS,
            window_sec=settings.RATE_LIMIT_WINDOW_SEC,
            prefix=settings.RATE_LIMIT_PREFIX,
        )
    return _rate_limiter
