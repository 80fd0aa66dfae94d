import os, sys, time
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

os.environ.setdefault("GROQ_API_KEY", "test-groq")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

from sitechat.services import scrape_concurrency


class FakeWindowStore:
    """In-memory stand-in for the Redis sliding-window script."""

    def __init__(self):
        self.entries = {}
        self.calls = []

    async def hit(self, *, key, member, now_ms, window_ms, limit):
        self.calls.append(key)
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        entries = [ts for ts in self.entries.get(key, []) if ts > now_ms - window_ms]
        allowed = len(entries) < limit
        if allowed:
            entries.append(now_ms)
        self.entries[key] = entries
        reset_ms = (entries[0] if entries else now_ms) + window_ms
        return allowed, limit - len(entries), reset_ms


@pytest.fixture
def window_store():
    return FakeWindowStore()


@pytest.fixture(autouse=True)
def _fresh_scrape_semaphore():
    # semaphores bind to the loop that first waits on them
    scrape_concurrency.reset_scrape_semaphore()
    yield
    scrape_concurrency.reset_scrape_semaphore()
