from __future__ import annotations

import asyncio
import logging

from playwright.async_api import Browser, Playwright, async_playwright

from sitechat.core.config import settings

logger = logging.getLogger(__name__)

_playwright: Playwright | None = None
_browser: Browser | None = None
_browser_lock = asyncio.Lock()


async def get_browser() -> Browser:
    """Return (or lazily launch) the process-wide headless Chromium."""
    global _playwright, _browser
    async with _browser_lock:
        if _browser is not None and _browser.is_connected():
            return _browser

        if _playwright is None:
            _playwright = await async_playwright().start()
        _browser = await _playwright.chromium.launch(
            headless=settings.BROWSER_HEADLESS,
            args=["--no-sandbox", "--disable-setuid-sandbox"],
        )
        logger.info("[BrowserLaunch] headless=%s", settings.BROWSER_HEADLESS)
        return _browser


async def close_browser() -> None:
    global _playwright, _browser
    async with _browser_lock:
        try:
            if _browser is not None:
                await _browser.close()
            if _playwright is not None:
                await _playwright.stop()
        except Exception:
            logger.exception("[BrowserCloseError]")
        finally:
            _browser = None
            _playwright = None
