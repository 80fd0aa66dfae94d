from __future__ import annotations

import logging
import re

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from sitechat.core.config import settings
from sitechat.core.errors import RateLimitStoreError
from sitechat.services.rate_limiter import get_rate_limiter

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_IP = "127.0.0.1"


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip()
    return ip or DEFAULT_CLIENT_IP


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject clients that exceed the sliding-window quota with a 429."""

    def __init__(self, app, exclude_pattern: str | None = None) -> None:
        super().__init__(app)
        self.exclude_re = re.compile(exclude_pattern or settings.RATE_LIMIT_EXCLUDE_PATTERN)

    async def dispatch(self, request: Request, call_next):
        if not settings.RATE_LIMIT_ENABLED or self.exclude_re.match(request.url.path):
            return await call_next(request)

        ip = get_client_ip(request)
        try:
            decision = await get_rate_limiter().limit(ip)
        except RateLimitStoreError:
            logger.exception("[RateLimitError] ip=%s fail_open=%s", ip, settings.RATE_LIMIT_FAIL_OPEN)
            if settings.RATE_LIMIT_FAIL_OPEN:
                return await call_next(request)
            return JSONResponse(
                {"error": "Rate limiter unavailable", "code": "rate_limiter_unavailable"},
                status_code=503,
            )

        if not decision.allowed:
            return JSONResponse(
                {"error": "Too many requests"},
                status_code=429,
                headers={
                    "X-RateLimit-Limit": str(decision.limit),
                    "X-RateLimit-Remaining": str(decision.remaining),
                    "X-RateLimit-Reset": str(decision.reset),
                },
            )

        return await call_next(request)
