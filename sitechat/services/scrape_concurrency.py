from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

from sitechat.core.config import settings

_scrape_semaphore: asyncio.Semaphore | None = None


def _get_scrape_semaphore() -> asyncio.Semaphore:
    global _scrape_semaphore
    if _scrape_semaphore is None:
        max_concurrency = max(1, int(settings.SCRAPE_MAX_CONCURRENCY))
        _scrape_semaphore = asyncio.Semaphore(max_concurrency)
    return _scrape_semaphore


def reset_scrape_semaphore() -> None:
    global _scrape_semaphore
    _scrape_semaphore = None


@asynccontextmanager
async def scrape_slot():
    # queue for a free slot instead of failing fast
    semaphore = _get_scrape_semaphore()
    await semaphore.acquire()
    try:
        yield
    finally:
        semaphore.release()
