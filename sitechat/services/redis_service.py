from __future__ import annotations

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from sitechat.core.config import settings

logger = logging.getLogger(__name__)

_redis_client: Redis | None = None

# Sliding log: one sorted set per key, scored by request time in ms.
SLIDING_WINDOW_SCRIPT = """
local key = KEYS[1]
local now = tonumber(ARGV[1])
if not now then
  local t = redis.call('TIME')
  now = tonumber(t[1]) * 1000 + math.floor(tonumber(t[2]) / 1000)
end
local window = tonumber(ARGV[2])
local limit = tonumber(ARGV[3])
local member = ARGV[4]

redis.call('ZREMRANGEBYSCORE', key, '-inf', now - window)
local count = redis.call('ZCARD', key)
local allowed = 0
if count < limit then
  redis.call('ZADD', key, now, member)
  count = count + 1
  allowed = 1
end
redis.call('PEXPIRE', key, window)

local reset = now + window
local oldest = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
if oldest[2] then
  reset = tonumber(oldest[2]) + window
end

return {allowed, limit - count, reset}
"""


def get_redis_client() -> Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_CONNECT_TIMEOUT_SEC,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT_SEC,
        )
    return _redis_client


async def close_redis_client() -> None:
    global _redis_client
    if _redis_client is None:
        return
    try:
        await _redis_client.aclose()
    except RedisError:
        logger.exception("[RedisCloseError]")
    finally:
        _redis_client = None


def build_rate_limit_key(prefix: str, identifier: str) -> str:
    return f"{prefix}:{identifier}"


async def hit_sliding_window(
    *,
    key: str,
    member: str,
    now_ms: int | None,
    window_ms: int,
    limit: int,
) -> tuple[bool, int, int]:
    """
    Record one request in the window for ``key`` if the quota allows it.

    Returns:
      (allowed, remaining, reset_ms)

    ``now_ms=None`` uses the Redis server clock (TIME).

    Raises:
      RedisError when the store is unreachable or the script fails.
    """
    result = await get_redis_client().eval(
        SLIDING_WINDOW_SCRIPT,
        1,
        key,
        "" if now_ms is None else str(now_ms),
        str(window_ms),
        str(limit),
        member,
    )
    allowed, remaining, reset_ms = (int(value) for value in result)
    return bool(allowed), max(remaining, 0), reset_ms
